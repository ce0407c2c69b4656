"""Output formatters for dependency-exporter."""

from dependency_exporter.output.document_json import DocumentJsonFormatter
from dependency_exporter.output.terminal import ExportSummaryFormatter
from dependency_exporter.output.tree import DocumentTreeFormatter

__all__ = [
    "DocumentJsonFormatter",
    "DocumentTreeFormatter",
    "ExportSummaryFormatter",
]
