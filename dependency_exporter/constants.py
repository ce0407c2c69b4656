"""Constants for dependency-exporter."""

# Exit codes
EXIT_SUCCESS = 0  # Every project exported
EXIT_ISSUES = 1  # At least one project failed to export
EXIT_ERROR = 2  # Invalid config, manifest or report

# Output location: <home>/<namespace>/<kind>/<base64(root dir name)>/<project>.json
TOOL_NAMESPACE_DIR = ".jfrog-ide-plugins"
EXPORT_KIND_DIR = "gradle-dependencies"
OUTPUT_SUFFIX = ".json"

# Wire value of the "unresolved" field; consumers expect a string, not a bool
UNRESOLVED_MARKER = "true"

# Placeholder for a missing version (or group of a project entry)
UNSPECIFIED = "unspecified"

# Environment variable read by setup_logging()
LOG_LEVEL_ENV_VAR = "DEPENDENCY_EXPORTER_LOG_LEVEL"
