"""Read YAML files into validated pydantic models.

Configuration files and build manifests share the same failure modes:
unreadable file, YAML syntax errors, a root that is not a mapping, and
schema violations. Each caller picks the exception type and the wording
used to name the file in messages.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from dependency_exporter.exceptions import DependencyExporterError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(error: ValidationError) -> str:
    """Join pydantic errors as `location: message` pairs.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        messages.append(f"{loc}: {err['msg']}")
    return "; ".join(messages)


def load_yaml_mapping(
    path: Path, error_cls: type[DependencyExporterError], kind: str
) -> dict[str, Any]:
    """Read a YAML file whose root must be a mapping.

    Empty and comment-only files read as an empty mapping.

    Args:
        path: File to read.
        error_cls: Exception raised on any failure.
        kind: How the file is named in messages ("manifest", ...).

    Raises:
        error_cls: If the file cannot be read, is not valid YAML, or its
            root is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise error_cls(f"Cannot read {kind} '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise error_cls(f"Invalid YAML syntax in '{path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise error_cls(
            f"Invalid {kind} '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )
    return data


def load_yaml_model(
    path: Path,
    model_cls: type[ModelT],
    error_cls: type[DependencyExporterError],
    kind: str,
) -> ModelT:
    """Read a YAML file and validate it into `model_cls`.

    Raises:
        error_cls: On any read, syntax or validation failure.
    """
    data = load_yaml_mapping(path, error_cls, kind)
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise error_cls(f"Invalid {kind} '{path}': {format_validation_errors(e)}") from e
