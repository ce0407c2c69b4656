"""JSON output formatter for export documents."""

import json
from typing import Optional

from dependency_exporter.models.export import ProjectNode


class DocumentJsonFormatter:
    """Format an export document as the JSON text written to disk.

    Keys appear in wire order (groupId, artifactId, version, scopes,
    unresolved, dependencies); `unresolved` is only present on
    unresolved entries.
    """

    def __init__(self, indent: Optional[int] = None) -> None:
        """Initialize the formatter.

        Args:
            indent: JSON indentation. None produces compact output.
        """
        self._indent = indent

    def format_document(self, document: ProjectNode) -> str:
        """Format an export document as a JSON string.

        Args:
            document: The project document to format.

        Returns:
            JSON text.
        """
        data = document.model_dump(by_alias=True, exclude_none=True)
        if self._indent is None:
            return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        return json.dumps(data, indent=self._indent, ensure_ascii=False)

    @staticmethod
    def parse_document(content: str) -> ProjectNode:
        """Parse JSON text previously produced by format_document."""
        return ProjectNode.model_validate_json(content)
