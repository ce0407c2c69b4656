"""Build manifest loading for dependency-exporter.

A manifest describes a multi-project build: the root directory name and,
per project, its coordinates plus either inline configurations or the path
of a `dependencies` report produced by Gradle.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from dependency_exporter.config.yaml_loader import load_yaml_model
from dependency_exporter.exceptions import DependencyExporterError, ManifestError
from dependency_exporter.models.graph import (
    Coordinates,
    LenientResolution,
    ResolvedDependency,
    UnresolvedDependency,
)
from dependency_exporter.models.project import (
    BaseConfiguration,
    Build,
    Project,
    StaticConfiguration,
)
from dependency_exporter.sources.report import load_report, select_project_report

logger = logging.getLogger(__name__)


class ResolvedEntry(BaseModel):
    """A resolved dependency as written in a manifest."""

    model_config = {"extra": "forbid"}

    coordinates: str = Field(description="group:artifact:version")
    dependencies: List["ResolvedEntry"] = Field(default_factory=list)

    @field_validator("coordinates")
    @classmethod
    def _check_coordinates(cls, value: str) -> str:
        Coordinates.parse(value)
        return value

    def to_dependency(self, configuration: str) -> ResolvedDependency:
        return ResolvedDependency(
            coordinates=Coordinates.parse(self.coordinates),
            configuration=configuration,
            children=[child.to_dependency(configuration) for child in self.dependencies],
        )


class ConfigurationEntry(BaseModel):
    """A configuration as written in a manifest."""

    model_config = {"extra": "forbid"}

    resolved: List[ResolvedEntry] = Field(default_factory=list)
    unresolved: List[str] = Field(default_factory=list)
    error: Optional[str] = Field(
        default=None,
        description="Resolution failure; the configuration is skipped on export",
    )

    @field_validator("unresolved")
    @classmethod
    def _check_unresolved(cls, values: List[str]) -> List[str]:
        for value in values:
            Coordinates.parse(value)
        return values

    def to_configuration(self, name: str) -> StaticConfiguration:
        if self.error is not None:
            return StaticConfiguration(name, error=self.error)
        return StaticConfiguration(
            name,
            resolution=LenientResolution(
                resolved=[entry.to_dependency(name) for entry in self.resolved],
                unresolved=[
                    UnresolvedDependency(
                        selector=Coordinates.parse(selector), configuration=name
                    )
                    for selector in self.unresolved
                ],
            ),
        )


class ProjectEntry(BaseModel):
    """A project as written in a manifest."""

    model_config = {"extra": "forbid"}

    group: str
    name: str
    version: str
    path: Optional[str] = Field(
        default=None,
        description="Gradle project path used to pick the report section",
    )
    report: Optional[str] = Field(
        default=None,
        description="`dependencies` report path, relative to the manifest",
    )
    configurations: Optional[Dict[str, ConfigurationEntry]] = None

    @field_validator("group", "name", "version", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: object) -> object:
        # YAML reads `version: 1.0` as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("name")
    @classmethod
    def _check_file_name(cls, value: str) -> str:
        # The name becomes `<name>.json` inside the build's export directory
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"'{value}' cannot be used as an export file name")
        return value

    @model_validator(mode="after")
    def _check_single_source(self) -> "ProjectEntry":
        if self.report is not None and self.configurations is not None:
            raise ValueError("set either 'report' or 'configurations', not both")
        return self


class BuildManifest(BaseModel):
    """Root of a build manifest file."""

    model_config = {"extra": "forbid"}

    root_dir: Optional[str] = Field(
        default=None,
        description="Root build directory name; defaults to the manifest's directory",
    )
    projects: List[ProjectEntry] = Field(default_factory=list)


def _project_configurations(entry: ProjectEntry, base_dir: Path) -> list[BaseConfiguration]:
    if entry.report is not None:
        reports = load_report(
            base_dir / entry.report,
            project_group=entry.group,
            project_version=entry.version,
        )
        return list(select_project_report(reports, entry.name, entry.path).configurations)
    if entry.configurations is not None:
        return [
            configuration.to_configuration(name)
            for name, configuration in entry.configurations.items()
        ]
    return []


def build_from_manifest(manifest: BuildManifest, base_dir: Path) -> Build:
    """Turn a validated manifest into a Build.

    Args:
        manifest: Validated manifest.
        base_dir: Directory report paths are relative to.

    Returns:
        Build with one Project per manifest entry.

    Raises:
        ManifestError: If a referenced report is unusable.
    """
    projects: list[Project] = []
    for entry in manifest.projects:
        try:
            configurations = _project_configurations(entry, base_dir)
        except DependencyExporterError as e:
            raise ManifestError(f"Project '{entry.name}': {e}") from e
        logger.debug(
            "Loaded project %s with %d configurations", entry.name, len(configurations)
        )
        projects.append(
            Project(
                group=entry.group,
                name=entry.name,
                version=entry.version,
                configurations=configurations,
            )
        )
    root_dir = manifest.root_dir or base_dir.resolve().name
    return Build(root_dir=root_dir, projects=projects)


def load_manifest(path: Path) -> Build:
    """Load a build manifest from a YAML file.

    Args:
        path: Manifest file path.

    Returns:
        The described Build.

    Raises:
        ManifestError: If the file cannot be read, is not valid YAML,
            or fails validation.
    """
    manifest = load_yaml_model(path, BuildManifest, ManifestError, "manifest")
    return build_from_manifest(manifest, path.parent)
