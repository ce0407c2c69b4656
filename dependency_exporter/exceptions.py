"""Custom exceptions for dependency-exporter."""


class DependencyExporterError(Exception):
    """Base exception for all dependency-exporter errors."""

    pass


class ConfigurationError(DependencyExporterError):
    """Exception raised when configuration is invalid."""

    pass


class ManifestError(DependencyExporterError):
    """Exception raised when a build manifest cannot be loaded."""

    pass


class ReportParseError(DependencyExporterError):
    """Exception raised when a dependencies report cannot be read."""

    pass


class ResolutionError(DependencyExporterError):
    """Exception raised when a configuration cannot be resolved.

    Recovered by the exporter: the configuration is skipped.
    """

    pass


class ExportError(DependencyExporterError):
    """Exception raised when an export file cannot be written."""

    pass
