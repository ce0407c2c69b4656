"""Logging setup for dependency-exporter."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from dependency_exporter.constants import LOG_LEVEL_ENV_VAR
from dependency_exporter.exceptions import ConfigurationError

DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """Route the package logger through a Rich handler on stderr.

    Args:
        level: Log level name or number. Falls back to the
            DEPENDENCY_EXPORTER_LOG_LEVEL environment variable, then WARNING.

    Returns:
        The configured package logger.

    Raises:
        ConfigurationError: If the level name is unknown.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()

    logger = logging.getLogger("dependency_exporter")
    try:
        logger.setLevel(level)
    except ValueError as e:
        raise ConfigurationError(f"Invalid log level '{level}'") from e

    # Repeated setup must not stack handlers
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.propagate = False
    return logger
