"""Tree output formatter for export documents."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from dependency_exporter.models.export import DependencyNode, ProjectNode, Verbosity


class DocumentTreeFormatter:
    """Format an export document for terminal display using Rich.

    Resolved entries are shown with their scopes; unresolved entries
    are flagged in red.
    """

    UNRESOLVED_MARKER = " [red]✗ unresolved[/red]"

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level. Quiet mode prints only
                the summary line; verbose mode adds scopes to every node.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_document(self, document: ProjectNode) -> None:
        """Format and display an export document.

        Args:
            document: The project document to display.
        """
        if self._verbosity != Verbosity.QUIET:
            title = escape(
                f"{document.group_id}:{document.artifact_id}:{document.version}"
            )
            rich_tree = Tree(f"[bold]{title}[/bold]")
            for node in document.dependencies:
                self._add_node_to_tree(rich_tree, node, top_level=True)
            if not document.dependencies:
                rich_tree.add("[yellow]No dependencies found[/yellow]")
            self._console.print(rich_tree)

        self._print_summary(document)

    def _add_node_to_tree(
        self, parent: Tree, node: DependencyNode, top_level: bool = False
    ) -> None:
        """Recursively add a node and its children to the tree.

        Args:
            parent: Parent Rich Tree node.
            node: DependencyNode to add.
            top_level: True for direct dependencies, which always show scopes.
        """
        branch = parent.add(self._format_node_label(node, top_level))
        for child in node.dependencies:
            self._add_node_to_tree(branch, child)

    def _format_node_label(self, node: DependencyNode, top_level: bool) -> str:
        label = f"[cyan]{escape(node.group_id)}:{escape(node.artifact_id)}[/cyan]"
        label += f" [magenta]{escape(node.version)}[/magenta]"
        if node.scopes and (top_level or self._verbosity == Verbosity.VERBOSE):
            label += f" [dim]({escape(', '.join(node.scopes))})[/dim]"
        if node.is_unresolved:
            label += self.UNRESOLVED_MARKER
        return label

    def _print_summary(self, document: ProjectNode) -> None:
        unresolved = document.unresolved_count
        direct = len(document.dependencies) - unresolved
        color = "red" if unresolved else "green"
        self._console.print(
            f"[bold]{escape(document.artifact_id)}:[/bold] "
            f"{direct} direct, {document.total_count - unresolved} resolved in total, "
            f"[{color}]{unresolved} unresolved[/{color}]"
        )
