"""Core utilities for the UAS map project."""

from .errors import ConfigurationError, InputError, MapError, SchemaError, ValidationError
from .logging import configure_logging, logger, ProgressReporter
from .io import setup_logging, read_any_csv, strip_bom, require_columns
from .normalization import normalize_city, normalize_cities

__all__ = [
    "MapError",
    "SchemaError",
    "InputError",
    "ValidationError",
    "ConfigurationError",
    "configure_logging",
    "logger",
    "ProgressReporter",
    "setup_logging",
    "read_any_csv",
    "strip_bom",
    "require_columns",
    "normalize_city",
    "normalize_cities",
]
