"""Project, build and configuration models.

A configuration is the host build tool's named request context. It is
modelled as an abstract class so adapters and tests can supply their own
resolution behavior; `StaticConfiguration` covers the common case of a
resolution result captured ahead of time.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from dependency_exporter.exceptions import ResolutionError
from dependency_exporter.models.graph import LenientResolution


class BaseConfiguration(ABC):
    """Abstract base class for dependency configurations."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def resolve(self) -> LenientResolution:
        """Read the configuration's lenient resolution result.

        Returns:
            Resolved and unresolved dependencies of this configuration.

        Raises:
            ResolutionError: If the configuration cannot be resolved.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class StaticConfiguration(BaseConfiguration):
    """Configuration backed by a captured resolution or a failure message."""

    def __init__(
        self,
        name: str,
        resolution: Optional[LenientResolution] = None,
        error: Optional[str] = None,
    ) -> None:
        super().__init__(name)
        self.resolution = resolution if resolution is not None else LenientResolution()
        self.error = error

    def resolve(self) -> LenientResolution:
        if self.error is not None:
            raise ResolutionError(self.error)
        return self.resolution


class Project(BaseModel):
    """A project of a (multi-project) build."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    group: str = Field(description="Project group")
    name: str = Field(description="Project name, also the output file name")
    version: str = Field(description="Project version")
    configurations: list[BaseConfiguration] = Field(
        default_factory=list,
        description="Configurations in declaration order",
    )


class Build(BaseModel):
    """A build: its root directory name and its projects."""

    model_config = {"extra": "forbid"}

    root_dir: str = Field(description="Name of the root build directory")
    projects: list[Project] = Field(default_factory=list)

    def get_project(self, name: str) -> Optional[Project]:
        """Look up a project by name."""
        for project in self.projects:
            if project.name == name:
                return project
        return None
