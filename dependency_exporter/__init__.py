"""Export Gradle dependency graphs as per-project JSON documents."""

__version__ = "0.1.0"
