"""Collect and merge dependency data across configurations.

Resolved dependencies are merged by sorting on their `group:artifact:version`
name and folding adjacent equal entries into one node whose scopes are the
union of the requesting configurations. Children of every folded entry are
merged the same way, so two equal entries reached through different paths
keep all their transitive children.
"""

import logging
from fnmatch import fnmatchcase
from itertools import groupby
from typing import Iterable, Sequence

from dependency_exporter.constants import UNRESOLVED_MARKER
from dependency_exporter.models.export import (
    ConfigurationOutcome,
    DependencyNode,
    OutcomeStatus,
)
from dependency_exporter.models.graph import (
    LenientResolution,
    ResolvedDependency,
    UnresolvedDependency,
)
from dependency_exporter.models.project import BaseConfiguration

logger = logging.getLogger(__name__)

IGNORED_REASON = "ignored by configuration"


def is_ignored(name: str, patterns: Iterable[str]) -> bool:
    """Check whether a configuration name matches any ignore pattern."""
    return any(fnmatchcase(name, pattern) for pattern in patterns)


def collect_resolutions(
    configurations: Sequence[BaseConfiguration],
    ignored: Sequence[str] = (),
) -> tuple[LenientResolution, list[ConfigurationOutcome]]:
    """Read every configuration's lenient result and pool them.

    A configuration that raises while resolving is skipped and recorded;
    it never aborts the collection.

    Args:
        configurations: Configurations in declaration order.
        ignored: fnmatch patterns of configuration names to skip.

    Returns:
        Tuple of the pooled resolution and one outcome per configuration.
    """
    resolved: list[ResolvedDependency] = []
    unresolved: list[UnresolvedDependency] = []
    outcomes: list[ConfigurationOutcome] = []

    for configuration in configurations:
        if is_ignored(configuration.name, ignored):
            outcomes.append(
                ConfigurationOutcome(
                    configuration=configuration.name,
                    status=OutcomeStatus.SKIPPED,
                    reason=IGNORED_REASON,
                )
            )
            continue
        try:
            resolution = configuration.resolve()
        except Exception as e:  # noqa: BLE001
            logger.debug("Skipping configuration %s: %s", configuration.name, e)
            outcomes.append(
                ConfigurationOutcome(
                    configuration=configuration.name,
                    status=OutcomeStatus.SKIPPED,
                    reason=str(e) or type(e).__name__,
                )
            )
            continue

        resolved.extend(resolution.resolved)
        unresolved.extend(resolution.unresolved)
        outcomes.append(
            ConfigurationOutcome(
                configuration=configuration.name, status=OutcomeStatus.RESOLVED
            )
        )

    return LenientResolution(resolved=resolved, unresolved=unresolved), outcomes


def merge_resolved(dependencies: Iterable[ResolvedDependency]) -> list[DependencyNode]:
    """Merge resolved dependencies into document nodes.

    Args:
        dependencies: Resolved dependencies, possibly with duplicates.

    Returns:
        Nodes sorted by name, one per distinct coordinates.
    """
    ordered = sorted(dependencies, key=lambda dep: dep.name)
    nodes: list[DependencyNode] = []
    for _, run in groupby(ordered, key=lambda dep: dep.name):
        equal = list(run)
        coordinates = equal[0].coordinates
        nodes.append(
            DependencyNode(
                group_id=coordinates.group,
                artifact_id=coordinates.artifact,
                version=coordinates.version,
                scopes=sorted({dep.configuration for dep in equal}),
                dependencies=merge_resolved(
                    child for dep in equal for child in dep.children
                ),
            )
        )
    return nodes


def dedupe_unresolved(
    dependencies: Iterable[UnresolvedDependency],
) -> list[DependencyNode]:
    """Emit each unresolved selector once.

    The first occurrence fixes the position; the last occurrence fixes
    the scope.

    Args:
        dependencies: Unresolved dependencies in discovery order.

    Returns:
        One unresolved node per distinct selector string.
    """
    unique: dict[str, UnresolvedDependency] = {}
    for dependency in dependencies:
        unique[str(dependency)] = dependency

    return [
        DependencyNode(
            group_id=dependency.selector.group,
            artifact_id=dependency.selector.artifact,
            version=dependency.selector.version,
            scopes=[dependency.configuration],
            unresolved=UNRESOLVED_MARKER,
        )
        for dependency in unique.values()
    ]
