"""Dependency merging logic for dependency-exporter."""
from dependency_exporter.analysis.merging import (
    IGNORED_REASON,
    collect_resolutions,
    dedupe_unresolved,
    is_ignored,
    merge_resolved,
)

__all__ = [
    "IGNORED_REASON",
    "collect_resolutions",
    "dedupe_unresolved",
    "is_ignored",
    "merge_resolved",
]
