"""Package-wide constants."""

PACKAGE_VERSION = "0.1.0"
SCHEMA_VERSION = "1.0.0"

DEFAULT_METADATA_FIELD = "metadata"
DEFAULT_ERROR_SEPARATOR = "\n"
