"""Shared fixtures for dependency-exporter tests."""

from typing import Callable

import pytest
from click.testing import CliRunner

from dependency_exporter.models.graph import (
    Coordinates,
    LenientResolution,
    ResolvedDependency,
    UnresolvedDependency,
)
from dependency_exporter.models.project import BaseConfiguration, Project, StaticConfiguration


class BrokenConfiguration(BaseConfiguration):
    """Configuration that raises like a detached Gradle configuration."""

    def __init__(self, name: str, error: Exception) -> None:
        super().__init__(name)
        self.error = error

    def resolve(self) -> LenientResolution:
        raise self.error


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_project() -> Project:
    """com.acme:app:1.0 with a resolved compile and an unresolved testCompile dependency."""
    return Project(
        group="com.acme",
        name="app",
        version="1.0",
        configurations=[
            StaticConfiguration(
                "compile",
                resolution=LenientResolution(
                    resolved=[
                        ResolvedDependency(
                            coordinates=Coordinates.parse("org.foo:bar:2.0"),
                            configuration="compile",
                        )
                    ]
                ),
            ),
            StaticConfiguration(
                "testCompile",
                resolution=LenientResolution(
                    unresolved=[
                        UnresolvedDependency(
                            selector=Coordinates.parse("org.baz:qux:3.0"),
                            configuration="testCompile",
                        )
                    ]
                ),
            ),
        ],
    )


@pytest.fixture
def make_broken() -> Callable[[str, Exception], BaseConfiguration]:
    """Factory for configurations that fail to resolve."""
    return BrokenConfiguration
