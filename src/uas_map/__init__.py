"""Plot city-keyed statistics onto a map of Albanian cities."""

from .core import ConfigurationError, InputError, MapError, SchemaError, ValidationError, normalize_city
from .data import (
    DEFAULT_GAZETTEER,
    MarkerRecord,
    build_gazetteer,
    build_markers,
    reconcile,
    run_pipeline,
)

__all__ = [
    "MapError",
    "SchemaError",
    "InputError",
    "ValidationError",
    "ConfigurationError",
    "normalize_city",
    "DEFAULT_GAZETTEER",
    "MarkerRecord",
    "build_gazetteer",
    "build_markers",
    "reconcile",
    "run_pipeline",
]

__version__ = "0.1.0"
