"""Tests for constants."""
from dependency_exporter.constants import (
    EXIT_ERROR,
    EXIT_ISSUES,
    EXIT_SUCCESS,
    EXPORT_KIND_DIR,
    TOOL_NAMESPACE_DIR,
    UNRESOLVED_MARKER,
)


def test_exit_codes_are_distinct() -> None:
    """Exit codes are 0, 1 and 2."""
    assert (EXIT_SUCCESS, EXIT_ISSUES, EXIT_ERROR) == (0, 1, 2)


def test_output_location_segments() -> None:
    """Output directory segments match what IDE plugins read."""
    assert TOOL_NAMESPACE_DIR == ".jfrog-ide-plugins"
    assert EXPORT_KIND_DIR == "gradle-dependencies"


def test_unresolved_marker_is_string() -> None:
    """The unresolved flag is the string 'true', not a boolean."""
    assert UNRESOLVED_MARKER == "true"
    assert isinstance(UNRESOLVED_MARKER, str)
