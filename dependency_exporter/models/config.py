"""Configuration Pydantic models for dependency-exporter."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ExporterConfig(BaseModel):
    """Configuration for dependency-exporter.

    All fields are optional with None defaults to allow partial configuration.
    """

    model_config = {"extra": "forbid"}

    output_root: Optional[str] = Field(
        default=None,
        description="Base directory used instead of the user's home directory.",
    )
    ignored_configurations: Optional[List[str]] = Field(
        default=None,
        description="Configuration name patterns (fnmatch) to skip.",
    )
    indent: Optional[int] = Field(
        default=None,
        ge=0,
        description="JSON indentation for written files. None writes compact JSON.",
    )
