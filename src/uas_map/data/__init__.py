"""Reconciliation and marker generation for the UAS map."""

from .gazetteer import (
    ALBANIAN_CITIES,
    DEFAULT_GAZETTEER,
    Gazetteer,
    GazetteerEntry,
    build_gazetteer,
)
from .reconcile import (
    CITY_COLUMN,
    EnrichedRow,
    ReconciliationResult,
    reconcile,
    reconcile_rows,
)
from .markers import (
    LABEL_SEPARATOR,
    MISSING_VALUE,
    MarkerRecord,
    build_markers,
    format_value,
    marker_label,
)
from .pipeline import (
    RESERVED_COLUMNS,
    PipelineResult,
    check_selection,
    load_table,
    run_pipeline,
    selectable_attributes,
)

__all__ = [
    "ALBANIAN_CITIES",
    "DEFAULT_GAZETTEER",
    "Gazetteer",
    "GazetteerEntry",
    "build_gazetteer",
    "CITY_COLUMN",
    "EnrichedRow",
    "ReconciliationResult",
    "reconcile",
    "reconcile_rows",
    "LABEL_SEPARATOR",
    "MISSING_VALUE",
    "MarkerRecord",
    "build_markers",
    "format_value",
    "marker_label",
    "RESERVED_COLUMNS",
    "PipelineResult",
    "check_selection",
    "load_table",
    "run_pipeline",
    "selectable_attributes",
]
