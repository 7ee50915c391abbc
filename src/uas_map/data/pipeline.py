"""Pipeline orchestration: uploaded table in, map markers out."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import pandas as pd

from ..core import ValidationError, logger, normalize_cities, read_any_csv, require_columns, strip_bom
from .gazetteer import DEFAULT_GAZETTEER, Gazetteer
from .markers import MarkerRecord, build_markers
from .reconcile import CITY_COLUMN, reconcile_rows

# Columns the user may not pick for display.
RESERVED_COLUMNS = frozenset({CITY_COLUMN, "lat", "lon", "latitude", "longitude"})

DataSource = Union[pd.DataFrame, str, Path]


@dataclass(frozen=True)
class PipelineResult:
    markers: list[MarkerRecord]
    attributes: list[str]
    rows_in: int
    rows_matched: int
    unmatched_cities: list[str] = field(default_factory=list)

    @property
    def unmatched_count(self) -> int:
        return self.rows_in - self.rows_matched

    def summary(self) -> dict[str, Any]:
        return {
            "rows_in": self.rows_in,
            "rows_matched": self.rows_matched,
            "unmatched_count": self.unmatched_count,
            "markers": len(self.markers),
            "attributes": list(self.attributes),
        }


def load_table(source: DataSource) -> pd.DataFrame:
    """Read the uploaded table and check it carries a city column."""
    # Column labels are strings from here on so selections match row keys.
    df = strip_bom(source) if isinstance(source, pd.DataFrame) else read_any_csv(source)
    require_columns(df.columns, {CITY_COLUMN}, "Uploaded data")
    return df


def selectable_attributes(columns) -> list[str]:
    """Columns a user may choose to display, in table order."""
    return [str(col) for col in columns if str(col) not in RESERVED_COLUMNS]


def check_selection(selected_attributes: Sequence[str], columns) -> list[str]:
    if isinstance(selected_attributes, str):
        selected_attributes = [selected_attributes]
    attributes = [] if selected_attributes is None else [str(name) for name in selected_attributes]
    if not attributes:
        raise ValidationError("Select at least one variable to show on the map.")
    reserved = [name for name in attributes if name in RESERVED_COLUMNS]
    if reserved:
        raise ValidationError(f"Cannot display reserved columns: {reserved}")
    available = {str(col) for col in columns}
    unknown = [name for name in attributes if name not in available]
    if unknown:
        logger.warning("Selected variables not in uploaded data, shown as missing: %s", unknown)
    return attributes


def run_pipeline(
    source: DataSource,
    selected_attributes: Sequence[str],
    gazetteer: Gazetteer = DEFAULT_GAZETTEER,
) -> PipelineResult:
    """Reconcile an uploaded table with the gazetteer and build its markers.

    SchemaError and ValidationError abort the run; rows with unknown cities
    are dropped and only counted.
    """
    df = load_table(source)
    attributes = check_selection(selected_attributes, df.columns)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Uploaded cities: %s", sorted(normalize_cities(df[CITY_COLUMN]).unique().tolist()))
        logger.debug("Predefined cities: %s", gazetteer.keys())

    reconciled = reconcile_rows(df.to_dict(orient="records"), gazetteer)
    markers = build_markers(reconciled.rows, attributes)
    return PipelineResult(
        markers=markers,
        attributes=attributes,
        rows_in=reconciled.rows_in,
        rows_matched=reconciled.rows_matched,
        unmatched_cities=reconciled.unmatched_cities,
    )
