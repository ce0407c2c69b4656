"""Exporter module: build per-project documents and write them to disk.

Each project is exported independently to
`<home>/.jfrog-ide-plugins/gradle-dependencies/<base64(root dir name)>/<project>.json`.
The encoded root directory name keeps checkouts with the same project
names apart.
"""
import base64
import logging
from pathlib import Path
from typing import Optional, Sequence

from dependency_exporter.analysis.merging import (
    collect_resolutions,
    dedupe_unresolved,
    merge_resolved,
)
from dependency_exporter.constants import (
    EXPORT_KIND_DIR,
    OUTPUT_SUFFIX,
    TOOL_NAMESPACE_DIR,
)
from dependency_exporter.exceptions import ExportError
from dependency_exporter.models.export import (
    BuildExportResult,
    ConfigurationOutcome,
    ExportResult,
    ProjectNode,
)
from dependency_exporter.models.project import Build, Project
from dependency_exporter.output.document_json import DocumentJsonFormatter

logger = logging.getLogger(__name__)


def encode_root_dir(root_dir_name: str) -> str:
    """Base64-encode the root build directory name (UTF-8, standard alphabet)."""
    return base64.b64encode(root_dir_name.encode("utf-8")).decode("ascii")


def output_directory(root_dir_name: str, output_root: Optional[Path] = None) -> Path:
    """Compute the directory a build's export files go to.

    Args:
        root_dir_name: Name of the root build directory.
        output_root: Base directory; defaults to the user's home directory.

    Returns:
        Directory path (not created).
    """
    base = output_root if output_root is not None else Path.home()
    return base / TOOL_NAMESPACE_DIR / EXPORT_KIND_DIR / encode_root_dir(root_dir_name)


def output_path(
    root_dir_name: str, project_name: str, output_root: Optional[Path] = None
) -> Path:
    """Compute the export file path of one project."""
    return output_directory(root_dir_name, output_root) / f"{project_name}{OUTPUT_SUFFIX}"


def build_project_node(
    project: Project,
    ignored_configurations: Sequence[str] = (),
) -> tuple[ProjectNode, list[ConfigurationOutcome]]:
    """Build the export document of a project.

    Args:
        project: Project whose configurations are read.
        ignored_configurations: fnmatch patterns of configurations to skip.

    Returns:
        Tuple of the document and the per-configuration outcomes.
    """
    resolution, outcomes = collect_resolutions(
        project.configurations, ignored=ignored_configurations
    )
    document = ProjectNode(
        group_id=project.group,
        artifact_id=project.name,
        version=project.version,
        dependencies=merge_resolved(resolution.resolved)
        + dedupe_unresolved(resolution.unresolved),
    )
    return document, outcomes


def write_document(path: Path, content: str) -> None:
    """Write export text, creating parent directories and overwriting the file.

    Raises:
        ExportError: If the directory or file cannot be written.
    """
    try:
        # exist_ok tolerates sibling projects creating the directory concurrently
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Cannot write export file '{path}': {e}") from e


def export_project(
    project: Project,
    root_dir_name: str,
    output_root: Optional[Path] = None,
    ignored_configurations: Sequence[str] = (),
    indent: Optional[int] = None,
) -> ExportResult:
    """Export one project's dependency graph to its JSON file.

    Args:
        project: Project to export.
        root_dir_name: Name of the root build directory.
        output_root: Base directory; defaults to the user's home directory.
        ignored_configurations: fnmatch patterns of configurations to skip.
        indent: JSON indentation; None writes compact JSON.

    Returns:
        ExportResult with the written path, document and outcomes.

    Raises:
        ExportError: If the file cannot be written.
    """
    document, outcomes = build_project_node(project, ignored_configurations)
    path = output_path(root_dir_name, project.name, output_root)
    write_document(path, DocumentJsonFormatter(indent=indent).format_document(document))
    logger.info("Wrote %s", path)
    return ExportResult(
        project=project.name, path=path, document=document, outcomes=outcomes
    )


def export_build(
    build: Build,
    output_root: Optional[Path] = None,
    ignored_configurations: Sequence[str] = (),
    indent: Optional[int] = None,
    projects: Optional[Sequence[str]] = None,
) -> BuildExportResult:
    """Export every project of a build.

    A project that fails to export is recorded and does not stop the
    remaining projects.

    Args:
        build: Build to export.
        output_root: Base directory; defaults to the user's home directory.
        ignored_configurations: fnmatch patterns of configurations to skip.
        indent: JSON indentation; None writes compact JSON.
        projects: Names of the projects to export; None exports all.

    Returns:
        BuildExportResult with per-project results and failures.
    """
    result = BuildExportResult()
    for project in build.projects:
        if projects is not None and project.name not in projects:
            continue
        try:
            result.results.append(
                export_project(
                    project,
                    build.root_dir,
                    output_root=output_root,
                    ignored_configurations=ignored_configurations,
                    indent=indent,
                )
            )
        except ExportError as e:
            logger.error("Export of %s failed: %s", project.name, e)
            result.failures[project.name] = str(e)
    return result
