"""Default configuration values for dependency-exporter."""

from __future__ import annotations

from dependency_exporter.models.config import ExporterConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".dependency-exporter.yaml", ".dependency-exporter.yml"]


def get_default_config() -> ExporterConfig:
    """Get the default configuration.

    Returns:
        ExporterConfig with all defaults (all fields None).
    """
    return ExporterConfig()
