"""Configuration handling for dependency-exporter."""
from __future__ import annotations

from dependency_exporter.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from dependency_exporter.config.loader import find_config_file, load_config, load_config_file
from dependency_exporter.config.yaml_loader import (
    format_validation_errors,
    load_yaml_mapping,
    load_yaml_model,
)
from dependency_exporter.models.config import ExporterConfig

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "ExporterConfig",
    "find_config_file",
    "format_validation_errors",
    "get_default_config",
    "load_config",
    "load_config_file",
    "load_yaml_mapping",
    "load_yaml_model",
]
