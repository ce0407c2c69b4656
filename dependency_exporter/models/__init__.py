"""Pydantic data models for dependency-exporter."""

from dependency_exporter.models.config import ExporterConfig
from dependency_exporter.models.export import (
    BuildExportResult,
    ConfigurationOutcome,
    DependencyNode,
    ExportResult,
    OutcomeStatus,
    ProjectNode,
    Verbosity,
)
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

__all__ = [
    "BaseConfiguration",
    "Build",
    "BuildExportResult",
    "ConfigurationOutcome",
    "Coordinates",
    "DependencyNode",
    "ExportResult",
    "ExporterConfig",
    "LenientResolution",
    "OutcomeStatus",
    "Project",
    "ProjectNode",
    "ResolvedDependency",
    "StaticConfiguration",
    "UnresolvedDependency",
    "Verbosity",
]
