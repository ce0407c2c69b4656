"""Parser for the text report printed by Gradle's `dependencies` task.

The report groups dependency trees per configuration, optionally under
one or more project headers:

    ------------------------------------------------------------
    Project ':app'
    ------------------------------------------------------------

    compileClasspath - Compile classpath for source set 'main'.
    +--- org.foo:bar:2.0
    |    \\--- org.foo:baz:1.0 -> 1.1
    +--- org.foo:missing:1.0 FAILED
    \\--- project :lib

    implementation - Implementation only dependencies. (n)
    \\--- org.foo:bar:2.0 (n)

Each configuration section becomes a `StaticConfiguration`; configurations
Gradle marks as not meant to be resolved become failing configurations.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from dependency_exporter.constants import UNSPECIFIED
from dependency_exporter.exceptions import ReportParseError
from dependency_exporter.models.graph import (
    Coordinates,
    LenientResolution,
    ResolvedDependency,
    UnresolvedDependency,
)
from dependency_exporter.models.project import StaticConfiguration

logger = logging.getLogger(__name__)

NOT_RESOLVABLE_REASON = "configuration is not meant to be resolved"
FAILED_REASON = "FAILED"

# Tree drawing is five columns per level
_INDENT_WIDTH = 5

_PROJECT_HEADER_RE = re.compile(
    r"^(?:Root project(?: '(?P<root>[^']*)')?|Project '(?P<path>[^']+)')"
)
_CONFIGURATION_HEADER_RE = re.compile(
    r"^(?P<name>[A-Za-z_][\w.-]*)(?: - (?P<description>.*))?$"
)
_ENTRY_RE = re.compile(r"^(?P<prefix>(?:[| ]    )*)(?:\+|\\)--- (?P<text>.+)$")
_RICH_VERSION_RE = re.compile(r"^\{(?:[a-z]+ )?(?P<version>[^};]+)[^}]*\}$")

_MARKERS = ("(*)", "(c)", "(n)", "FAILED")

# Lines that look like configuration headers but are not
_NON_CONFIGURATION_LINES = {"No dependencies"}


class ProjectReport(BaseModel):
    """Configurations parsed from one project section of a report."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    path: Optional[str] = Field(
        default=None,
        description="Project path (':app'), None for the root project",
    )
    name: Optional[str] = Field(
        default=None,
        description="Project name when the header carries one",
    )
    configurations: list[StaticConfiguration] = Field(default_factory=list)


class ReportEntry:
    """A parsed tree line."""

    def __init__(
        self,
        depth: int,
        coordinates: Coordinates,
        markers: set[str],
        requested: Coordinates,
    ) -> None:
        self.depth = depth
        self.coordinates = coordinates
        self.markers = markers
        self.requested = requested


class _ConfigurationBuilder:
    """Accumulates the tree lines of one configuration section."""

    def __init__(self, name: str, not_resolvable: bool) -> None:
        self.name = name
        self.not_resolvable = not_resolvable
        self.resolved: list[ResolvedDependency] = []
        self.unresolved: list[UnresolvedDependency] = []
        # (depth, node) of the open branch; None marks a dropped subtree
        self._stack: list[tuple[int, Optional[ResolvedDependency]]] = []
        self._completed: dict[str, ResolvedDependency] = {}

    def add(self, entry: ReportEntry) -> None:
        self._close(entry.depth)
        parent = self._stack[-1][1] if self._stack else None
        inside_dropped = bool(self._stack) and parent is None

        if "(n)" in entry.markers:
            self.not_resolvable = True
        if inside_dropped or "(c)" in entry.markers:
            self._stack.append((entry.depth, None))
            return
        if "FAILED" in entry.markers:
            self.unresolved.append(
                UnresolvedDependency(
                    selector=entry.requested,
                    configuration=self.name,
                    reason=FAILED_REASON,
                )
            )
            self._stack.append((entry.depth, None))
            return

        node = ResolvedDependency(coordinates=entry.coordinates, configuration=self.name)
        if "(*)" in entry.markers:
            previous = self._completed.get(str(entry.coordinates))
            if previous is not None:
                node.children = list(previous.children)
        if parent is None:
            self.resolved.append(node)
        else:
            parent.children.append(node)
        self._stack.append((entry.depth, node))

    def drop(self, depth: int) -> None:
        """Open a dropped branch so the entries below it are skipped too."""
        self._close(depth)
        self._stack.append((depth, None))

    def _close(self, depth: int) -> None:
        """Pop every open branch at or below the given depth."""
        while self._stack and self._stack[-1][0] >= depth:
            _, node = self._stack.pop()
            if node is not None:
                self._completed.setdefault(node.name, node)

    def build(self) -> StaticConfiguration:
        self._close(0)
        if self.not_resolvable:
            return StaticConfiguration(self.name, error=NOT_RESOLVABLE_REASON)
        return StaticConfiguration(
            self.name,
            resolution=LenientResolution(
                resolved=self.resolved, unresolved=self.unresolved
            ),
        )


def _parse_version(text: str) -> str:
    """Reduce rich version selectors like `{strictly 1.0}` to their version."""
    text = text.strip()
    match = _RICH_VERSION_RE.match(text)
    if match:
        return match.group("version").strip()
    return text or UNSPECIFIED


def parse_entry_text(
    text: str,
    depth: int = 0,
    project_group: str = UNSPECIFIED,
    project_version: str = UNSPECIFIED,
) -> ReportEntry:
    """Parse the text of a tree line after its connector.

    Args:
        text: Entry text such as `org.foo:bar:1.0 -> 1.1 (*)`.
        depth: Tree depth of the entry.
        project_group: Group used for `project :x` entries.
        project_version: Version used for `project :x` entries.

    Returns:
        Parsed entry.

    Raises:
        ValueError: If the text is not a module or project notation.
    """
    markers: set[str] = set()
    text = text.strip()
    stripped = True
    while stripped:
        stripped = False
        for marker in _MARKERS:
            if text.endswith(" " + marker) or text == marker:
                markers.add(marker)
                text = text[: -len(marker)].rstrip()
                stripped = True

    requested_text, _, selected_text = text.partition(" -> ")

    if requested_text.startswith("project "):
        path = requested_text[len("project "):].strip()
        artifact = path.rsplit(":", 1)[-1] or path
        coordinates = Coordinates(
            group=project_group, artifact=artifact, version=project_version
        )
        return ReportEntry(depth, coordinates, markers, coordinates)

    parts = requested_text.split(":", 2)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Invalid dependency entry: '{text}'")
    requested_version = _parse_version(parts[2]) if len(parts) > 2 else UNSPECIFIED
    requested = Coordinates(group=parts[0], artifact=parts[1], version=requested_version)

    if not selected_text:
        return ReportEntry(depth, requested, markers, requested)

    # `a:b:1.0 -> 1.1` selects a version; `a:b:1.0 -> c:d:2.0` substitutes a module
    selected_parts = selected_text.strip().split(":")
    if len(selected_parts) >= 3:
        coordinates = Coordinates.parse(selected_text.strip())
    elif len(selected_parts) == 2:
        coordinates = Coordinates(
            group=selected_parts[0],
            artifact=selected_parts[1],
            version=requested_version,
        )
    else:
        coordinates = requested.model_copy(
            update={"version": _parse_version(selected_text)}
        )
    return ReportEntry(depth, coordinates, markers, requested)


def parse_report(
    content: str,
    project_group: str = UNSPECIFIED,
    project_version: str = UNSPECIFIED,
) -> list[ProjectReport]:
    """Parse a `dependencies` task report.

    Args:
        content: Report text.
        project_group: Group assigned to `project :x` entries.
        project_version: Version assigned to `project :x` entries.

    Returns:
        One ProjectReport per project section, in report order.
        Text before any project header forms an anonymous section.
    """
    reports: list[ProjectReport] = []
    current: Optional[ProjectReport] = None
    builder: Optional[_ConfigurationBuilder] = None

    def finish_configuration() -> None:
        nonlocal builder
        if builder is not None and current is not None:
            current.configurations.append(builder.build())
        builder = None

    for raw_line in content.splitlines():
        line = raw_line.rstrip()
        if not line.strip():
            continue

        header = _PROJECT_HEADER_RE.match(line)
        if header:
            finish_configuration()
            path = header.group("path")
            name = header.group("root")
            if path is not None:
                name = path.rsplit(":", 1)[-1] or None
            current = ProjectReport(path=path, name=name)
            reports.append(current)
            continue

        entry_match = _ENTRY_RE.match(line)
        if entry_match:
            if builder is None:
                logger.debug("Ignoring tree line outside a configuration: %s", line)
                continue
            depth = len(entry_match.group("prefix")) // _INDENT_WIDTH
            try:
                entry = parse_entry_text(
                    entry_match.group("text"),
                    depth=depth,
                    project_group=project_group,
                    project_version=project_version,
                )
            except ValueError as e:
                logger.debug("Ignoring unparseable entry in %s: %s", builder.name, e)
                builder.drop(depth)
                continue
            builder.add(entry)
            continue

        if line in _NON_CONFIGURATION_LINES:
            continue

        config_match = _CONFIGURATION_HEADER_RE.match(line)
        if config_match:
            finish_configuration()
            if current is None:
                current = ProjectReport()
                reports.append(current)
            description = config_match.group("description") or ""
            builder = _ConfigurationBuilder(
                config_match.group("name"),
                not_resolvable=description.endswith("(n)"),
            )
            continue

        # Legend, footer, dashes and task banners end the current section
        finish_configuration()

    finish_configuration()
    return reports


def load_report(
    path: Path,
    project_group: str = UNSPECIFIED,
    project_version: str = UNSPECIFIED,
) -> list[ProjectReport]:
    """Read and parse a `dependencies` report file.

    Raises:
        ReportParseError: If the file cannot be read.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ReportParseError(f"Cannot read report '{path}': {e}") from e
    return parse_report(content, project_group, project_version)


def select_project_report(
    reports: list[ProjectReport],
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> ProjectReport:
    """Pick the section describing one project.

    Matches on path first, then name; a report with a single section
    matches any project.

    Raises:
        ReportParseError: If no section matches.
    """
    if path is not None:
        for report in reports:
            if report.path == path:
                return report
    if name is not None:
        for report in reports:
            if report.name == name:
                return report
    if len(reports) == 1:
        return reports[0]
    if not reports:
        raise ReportParseError("Report contains no configurations")
    raise ReportParseError(
        f"Report contains {len(reports)} project sections; "
        f"none matches project '{path or name}'"
    )
