"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dependency_exporter.models.export import BuildExportResult, Verbosity


class ExportSummaryFormatter:
    """Format build export results as a Rich table.

    One row per exported project, followed by failures. Verbose mode
    lists every skipped configuration with its reason.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_build_result(self, result: BuildExportResult) -> None:
        """Format and display build export results.

        Args:
            result: The build export result to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(result)
            return

        if not result.results and not result.failures:
            self._console.print("[yellow]No projects exported[/yellow]")
            return

        if result.results:
            table = Table(title="Exported Dependency Graphs")
            table.add_column("Project", style="cyan", no_wrap=True)
            table.add_column("Dependencies", justify="right")
            table.add_column("Unresolved", justify="right")
            table.add_column("Skipped", justify="right")
            table.add_column("File", style="green")

            for export in result.results:
                unresolved = export.document.unresolved_count
                table.add_row(
                    export.project,
                    str(len(export.document.dependencies) - unresolved),
                    f"[red]{unresolved}[/red]" if unresolved else "0",
                    str(len(export.skipped_configurations)),
                    escape(str(export.path)),
                )
            self._console.print(table)

        if self._verbosity == Verbosity.VERBOSE:
            self._print_skipped(result)

        for project, message in sorted(result.failures.items()):
            self._console.print(
                f"[red bold]✗ {escape(project)}:[/red bold] {escape(message)}"
            )

    def _print_skipped(self, result: BuildExportResult) -> None:
        for export in result.results:
            for outcome in export.skipped_configurations:
                self._console.print(
                    f"[dim]{escape(export.project)}: skipped "
                    f"{escape(outcome.configuration)} ({escape(outcome.reason or '')})[/dim]"
                )

    def _print_quiet_output(self, result: BuildExportResult) -> None:
        exported = len(result.results)
        if result.has_failures:
            self._console.print(
                f"[red]FAILED[/red] - {exported} exported, "
                f"{len(result.failures)} failed"
            )
        else:
            self._console.print(f"[green]OK[/green] - {exported} exported")
