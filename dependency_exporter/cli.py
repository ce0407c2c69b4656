"""CLI entry point for dependency-exporter."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from dependency_exporter import __version__
from dependency_exporter.config import ExporterConfig, load_config
from dependency_exporter.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from dependency_exporter.exceptions import DependencyExporterError, ManifestError
from dependency_exporter.exporter import (
    build_project_node,
    export_build,
    output_directory,
    output_path,
)
from dependency_exporter.log import setup_logging
from dependency_exporter.models.export import BuildExportResult, Verbosity
from dependency_exporter.models.project import Build, Project
from dependency_exporter.output.document_json import DocumentJsonFormatter
from dependency_exporter.output.terminal import ExportSummaryFormatter
from dependency_exporter.output.tree import DocumentTreeFormatter
from dependency_exporter.sources.manifest import load_manifest
from dependency_exporter.sources.report import load_report, select_project_report

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)


def _verbosity_options(func):  # type: ignore[no-untyped-def]
    func = click.option(
        "--quiet",
        "-q",
        "quiet_flag",
        is_flag=True,
        default=False,
        help="Print only a one-line status.",
    )(func)
    func = click.option(
        "--verbose",
        "-v",
        "verbose_flag",
        is_flag=True,
        default=False,
        help="List skipped configurations and log every written file.",
    )(func)
    return func


def _config_options(func):  # type: ignore[no-untyped-def]
    func = click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="Path to configuration file.",
    )(func)
    func = click.option(
        "--output-root",
        "output_root",
        type=click.Path(file_okay=False),
        default=None,
        help="Base directory to use instead of the home directory.",
    )(func)
    return func


def _resolve_verbosity(verbose_flag: bool, quiet_flag: bool) -> Verbosity:
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")
    if quiet_flag:
        return Verbosity.QUIET
    if verbose_flag:
        return Verbosity.VERBOSE
    return Verbosity.NORMAL


def _setup_logging(verbosity: Verbosity) -> None:
    # Without a flag the environment variable decides
    if verbosity == Verbosity.VERBOSE:
        setup_logging("INFO")
    elif verbosity == Verbosity.QUIET:
        setup_logging("ERROR")
    else:
        setup_logging()


def _effective_output_root(
    output_root: str | None, config: ExporterConfig
) -> Optional[Path]:
    """CLI flag first, then the config file, then None (home directory)."""
    if output_root is not None:
        return Path(output_root)
    if config.output_root is not None:
        return Path(config.output_root).expanduser()
    return None


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Dependency Exporter - Write Gradle dependency graphs as JSON.

    Exports one JSON document per project to
    ~/.jfrog-ide-plugins/gradle-dependencies/<base64(root dir)>/<project>.json
    from a build manifest or a `gradle dependencies` report.

    \b
    Examples:
        dependency-exporter export build.yaml
        dependency-exporter export build.yaml --project app
        dependency-exporter export-report deps.txt --group com.acme --name app --version 1.0
        dependency-exporter show build.yaml --project app
        dependency-exporter path my-build app
    """
    pass


@main.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--project",
    "-p",
    "projects",
    multiple=True,
    help="Export only this project (repeatable).",
)
@_config_options
@_verbosity_options
def export(
    manifest: str,
    projects: tuple[str, ...],
    output_root: str | None,
    config_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Export every project of a build manifest.

    Configurations that cannot be resolved are skipped; a project whose
    file cannot be written is reported and the others are still exported.

    \b
    Examples:
        dependency-exporter export build.yaml
        dependency-exporter export build.yaml -p app -p lib
        dependency-exporter export build.yaml --output-root /tmp/exports
        dependency-exporter export build.yaml --verbose
    """
    verbosity = _resolve_verbosity(verbose_flag, quiet_flag)

    try:
        _setup_logging(verbosity)
        config = load_config(config_path)
        build = load_manifest(Path(manifest))

        if projects:
            unknown = [name for name in projects if build.get_project(name) is None]
            if unknown:
                raise ManifestError(f"Unknown project(s): {', '.join(unknown)}")

        result = export_build(
            build,
            output_root=_effective_output_root(output_root, config),
            ignored_configurations=config.ignored_configurations or (),
            indent=config.indent,
            projects=list(projects) if projects else None,
        )
        _display_build_result(result, verbosity)

        if result.has_failures:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except DependencyExporterError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


@main.command("export-report")
@click.argument("report", type=click.Path(exists=True, dir_okay=False))
@click.option("--group", "group", required=True, help="Project group.")
@click.option("--name", "name", required=True, help="Project name.")
@click.option("--version", "version", required=True, help="Project version.")
@click.option(
    "--root-dir",
    "root_dir",
    default=None,
    help="Root build directory name (default: current directory name).",
)
@click.option(
    "--project-path",
    "project_path",
    default=None,
    help="Gradle project path (':app') when the report has several projects.",
)
@_config_options
@_verbosity_options
def export_report(
    report: str,
    group: str,
    name: str,
    version: str,
    root_dir: str | None,
    project_path: str | None,
    output_root: str | None,
    config_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Export one project straight from a `gradle dependencies` report.

    \b
    Examples:
        gradle -q :app:dependencies > deps.txt
        dependency-exporter export-report deps.txt --group com.acme --name app --version 1.0
        dependency-exporter export-report deps.txt --group com.acme --name app \\
            --version 1.0 --root-dir my-build
    """
    verbosity = _resolve_verbosity(verbose_flag, quiet_flag)

    try:
        _setup_logging(verbosity)
        config = load_config(config_path)
        reports = load_report(Path(report), project_group=group, project_version=version)
        section = select_project_report(reports, name, project_path)
        project = Project(
            group=group,
            name=name,
            version=version,
            configurations=list(section.configurations),
        )
        build = Build(root_dir=root_dir or Path.cwd().name, projects=[project])

        result = export_build(
            build,
            output_root=_effective_output_root(output_root, config),
            ignored_configurations=config.ignored_configurations or (),
            indent=config.indent,
        )
        _display_build_result(result, verbosity)

        if result.has_failures:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except DependencyExporterError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("--project", "-p", "project_name", required=True, help="Project to show.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format (default: terminal).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@_verbosity_options
def show(
    manifest: str,
    project_name: str,
    output_format: str,
    config_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Show a project's export document without writing it.

    \b
    Examples:
        dependency-exporter show build.yaml --project app
        dependency-exporter show build.yaml --project app --format json
        dependency-exporter show build.yaml --project app --verbose
    """
    verbosity = _resolve_verbosity(verbose_flag, quiet_flag)
    format_value = output_format.lower()

    try:
        _setup_logging(verbosity)
        config = load_config(config_path)
        build = load_manifest(Path(manifest))
        project = build.get_project(project_name)
        if project is None:
            raise ManifestError(f"Unknown project: {project_name}")

        document, outcomes = build_project_node(
            project, config.ignored_configurations or ()
        )

        if format_value == "json":
            click.echo(DocumentJsonFormatter(indent=config.indent).format_document(document))
        else:
            DocumentTreeFormatter(console=_console, verbosity=verbosity).format_document(
                document
            )
            if verbosity == Verbosity.VERBOSE:
                for outcome in outcomes:
                    if outcome.skipped:
                        _console.print(
                            f"[dim]skipped {escape(outcome.configuration)} "
                            f"({escape(outcome.reason or '')})[/dim]"
                        )
        sys.exit(EXIT_SUCCESS)

    except DependencyExporterError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("root_dir")
@click.argument("project", required=False)
@_config_options
def path(
    root_dir: str,
    project: str | None,
    output_root: str | None,
    config_path: str | None,
) -> None:
    """Print where a build's (or one project's) export is written.

    The base directory is resolved like `export` does: --output-root,
    then `output_root` from the configuration file, then the home directory.

    \b
    Examples:
        dependency-exporter path my-build
        dependency-exporter path my-build app
        dependency-exporter path my-build app -c exporter.yaml
    """
    try:
        config = load_config(config_path)
    except DependencyExporterError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    base = _effective_output_root(output_root, config)
    if project is None:
        click.echo(str(output_directory(root_dir, base)))
    else:
        click.echo(str(output_path(root_dir, project, base)))


def _display_build_result(result: BuildExportResult, verbosity: Verbosity) -> None:
    """Display build export results on the terminal.

    Args:
        result: The build export result to display.
        verbosity: Output verbosity level.
    """
    ExportSummaryFormatter(console=_console, verbosity=verbosity).format_build_result(
        result
    )


def _display_error(error: DependencyExporterError) -> None:
    """Display error message to user on stderr.

    Args:
        error: The exception that occurred.
    """
    error_type = type(error).__name__
    _error_console.print(f"[red bold]Error: {error_type}: {escape(str(error))}[/red bold]")


if __name__ == "__main__":
    main()
