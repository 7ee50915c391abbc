"""Error types raised by the map build."""


class MapError(Exception):
    """Base class for failures surfaced to the user."""

    error_code = "MAP_ERROR"


class SchemaError(MapError):
    """Raised when uploaded data lacks a required column."""

    error_code = "SCHEMA_ERROR"


class ValidationError(MapError):
    """Raised when the attribute selection cannot be displayed."""

    error_code = "VALIDATION_ERROR"


class ConfigurationError(MapError):
    """Raised for malformed built-in data or config files."""

    error_code = "CONFIG_ERROR"


class InputError(MapError):
    """Raised when an uploaded file cannot be read."""

    error_code = "INPUT_ERROR"
