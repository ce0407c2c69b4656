"""Dependency graph models for dependency-exporter.

Represents the host build tool's live resolution state: coordinates,
resolved dependencies with their transitive children, unresolved
selectors, and the lenient resolution result of a single configuration.
"""

from typing import Optional

from pydantic import BaseModel, Field

from dependency_exporter.constants import UNSPECIFIED


class Coordinates(BaseModel):
    """Module coordinates identifying a dependency node."""

    group: str = Field(description="Group ID")
    artifact: str = Field(description="Artifact ID")
    version: str = Field(description="Version or unresolved placeholder")

    model_config = {"extra": "forbid", "frozen": True}

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"

    @classmethod
    def parse(cls, notation: str) -> "Coordinates":
        """Parse a `group:artifact[:version]` notation.

        Args:
            notation: Module notation string.

        Returns:
            Coordinates with the version defaulting to the
            unspecified placeholder.

        Raises:
            ValueError: If the notation has fewer than two segments.
        """
        parts = notation.strip().split(":")
        if len(parts) < 2 or not parts[0] or not parts[1]:
            raise ValueError(f"Invalid module notation: '{notation}'")
        version = ":".join(parts[2:]) or UNSPECIFIED
        return cls(group=parts[0], artifact=parts[1], version=version)


class ResolvedDependency(BaseModel):
    """A dependency matched to a concrete module version.

    Carries the configuration that requested it and its transitive
    children, which share the same configuration.
    """

    coordinates: Coordinates = Field(description="Resolved module coordinates")
    configuration: str = Field(description="Requesting configuration name")
    children: list["ResolvedDependency"] = Field(
        default_factory=list,
        description="Transitive dependencies",
    )

    model_config = {"extra": "forbid"}

    @property
    def name(self) -> str:
        """Sort key, `group:artifact:version`."""
        return str(self.coordinates)


class UnresolvedDependency(BaseModel):
    """A dependency request the build tool could not satisfy."""

    selector: Coordinates = Field(description="Requested module coordinates")
    configuration: str = Field(description="Requesting configuration name")
    reason: Optional[str] = Field(
        default=None,
        description="Why resolution failed, when known",
    )

    model_config = {"extra": "forbid"}

    def __str__(self) -> str:
        return str(self.selector)


class LenientResolution(BaseModel):
    """Best-effort resolution result of one configuration."""

    resolved: list[ResolvedDependency] = Field(
        default_factory=list,
        description="First-level resolved dependencies",
    )
    unresolved: list[UnresolvedDependency] = Field(
        default_factory=list,
        description="Dependency requests that failed to resolve",
    )

    model_config = {"extra": "forbid"}
