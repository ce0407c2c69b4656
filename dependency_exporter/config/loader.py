"""Configuration file discovery and loading for dependency-exporter."""
from __future__ import annotations

from pathlib import Path

from dependency_exporter.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from dependency_exporter.config.yaml_loader import load_yaml_model
from dependency_exporter.exceptions import ConfigurationError
from dependency_exporter.models.config import ExporterConfig


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the first `.dependency-exporter.yaml`/`.yml` in `start_dir` (default: cwd)."""
    search_dir = start_dir or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        config_path = search_dir / name
        if config_path.exists():
            return config_path
    return None


def load_config_file(path: Path) -> ExporterConfig:
    """Load and validate an exporter configuration file.

    Empty files give the defaults.

    Raises:
        ConfigurationError: If the file is unreadable, not YAML, or invalid.
    """
    return load_yaml_model(path, ExporterConfig, ConfigurationError, "configuration file")


def load_config(config_path: str | None = None) -> ExporterConfig:
    """Load the explicit config file, else the one found in the working directory.

    Without either, the defaults apply.

    Raises:
        ConfigurationError: If the chosen file is invalid.
    """
    if config_path is not None:
        return load_config_file(Path(config_path))

    discovered = find_config_file()
    if discovered is None:
        return get_default_config()
    return load_config_file(discovered)
