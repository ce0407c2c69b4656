"""Input adapters turning build tool output into projects."""

from dependency_exporter.sources.manifest import (
    BuildManifest,
    build_from_manifest,
    load_manifest,
)
from dependency_exporter.sources.report import (
    ProjectReport,
    load_report,
    parse_report,
    select_project_report,
)

__all__ = [
    "BuildManifest",
    "ProjectReport",
    "build_from_manifest",
    "load_manifest",
    "load_report",
    "parse_report",
    "select_project_report",
]
