"""Export document and result models.

The document tree mirrors the JSON written to disk. Field declaration
order is the wire order, so reordering fields changes the output.
"""

from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DependencyNode(BaseModel):
    """A resolved or unresolved dependency in the export document."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    group_id: str = Field(alias="groupId")
    artifact_id: str = Field(alias="artifactId")
    version: str
    scopes: list[str] = Field(default_factory=list)
    unresolved: Optional[Literal["true"]] = Field(
        default=None,
        description="Serialized as the string 'true' on unresolved entries only",
    )
    dependencies: list["DependencyNode"] = Field(default_factory=list)

    @property
    def is_unresolved(self) -> bool:
        """True if this entry failed to resolve."""
        return self.unresolved is not None

    def get_all_descendants(self) -> list["DependencyNode"]:
        """Get all nodes below this one (flattened, depth first)."""
        result: list[DependencyNode] = []
        for child in self.dependencies:
            result.append(child)
            result.extend(child.get_all_descendants())
        return result


class ProjectNode(BaseModel):
    """Root of the export document: the project itself."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    group_id: str = Field(alias="groupId")
    artifact_id: str = Field(alias="artifactId")
    version: str
    scopes: list[str] = Field(default_factory=list)
    dependencies: list[DependencyNode] = Field(default_factory=list)

    @property
    def total_count(self) -> int:
        """Total number of dependency nodes in the document."""
        return sum(1 + len(node.get_all_descendants()) for node in self.dependencies)

    @property
    def unresolved_count(self) -> int:
        """Number of unresolved entries."""
        return sum(1 for node in self.dependencies if node.is_unresolved)


class OutcomeStatus(Enum):
    """What happened to a configuration during collection."""

    RESOLVED = "resolved"
    SKIPPED = "skipped"


class ConfigurationOutcome(BaseModel):
    """Per-configuration collection result."""

    model_config = {"extra": "forbid"}

    configuration: str = Field(description="Configuration name")
    status: OutcomeStatus = Field(description="Resolved or skipped")
    reason: Optional[str] = Field(
        default=None,
        description="Why the configuration was skipped",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def skipped(self) -> bool:
        """True if the configuration did not contribute to the export."""
        return self.status == OutcomeStatus.SKIPPED


class ExportResult(BaseModel):
    """Result of exporting a single project."""

    model_config = {"extra": "forbid"}

    project: str = Field(description="Project name")
    path: Path = Field(description="Written export file")
    document: ProjectNode = Field(description="Exported document")
    outcomes: list[ConfigurationOutcome] = Field(default_factory=list)

    @property
    def skipped_configurations(self) -> list[ConfigurationOutcome]:
        """Outcomes of configurations that were skipped."""
        return [outcome for outcome in self.outcomes if outcome.skipped]


class BuildExportResult(BaseModel):
    """Result of exporting every project of a build."""

    model_config = {"extra": "forbid"}

    results: list[ExportResult] = Field(default_factory=list)
    failures: dict[str, str] = Field(
        default_factory=dict,
        description="Error message by project name for failed exports",
    )

    @property
    def has_failures(self) -> bool:
        """True if at least one project failed to export."""
        return len(self.failures) > 0


class Verbosity(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"
