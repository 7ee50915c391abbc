"""Turn reconciled rows into labelled map markers."""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from ..core import ValidationError
from .reconcile import EnrichedRow

LABEL_SEPARATOR = "\n"
MISSING_VALUE = "(missing)"
CITY_PREFIX = "City: "


@dataclass(frozen=True)
class MarkerRecord:
    latitude: float
    longitude: float
    label: str
    city: str = ""


_ABSENT = object()


def one_line(text: str) -> str:
    """Join the lines of a value so it cannot split a label."""
    return " ".join(part.strip() for part in text.splitlines() if part.strip())


def format_value(value: Any) -> str:
    if value is _ABSENT or value is None:
        return MISSING_VALUE
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        f = float(value)
        if math.isnan(f):
            return MISSING_VALUE
        if f.is_integer() and abs(f) < 1e15:
            return str(int(f))
        return str(f)
    try:
        if pd.isna(value):  # type: ignore[arg-type]
            return MISSING_VALUE
    except (TypeError, ValueError):
        pass
    s = one_line(str(value))
    return s or MISSING_VALUE


def marker_label(row: EnrichedRow, selected_attributes: Sequence[str]) -> str:
    parts = [f"{CITY_PREFIX}{row.display_name}"]
    parts.extend(f"{one_line(str(name))}: {format_value(row.get(name, _ABSENT))}" for name in selected_attributes)
    return LABEL_SEPARATOR.join(parts)


def build_markers(enriched_rows: Iterable[EnrichedRow], selected_attributes: Sequence[str]) -> list[MarkerRecord]:
    """Build one marker per enriched row, labelled with the selected attributes in order."""
    if isinstance(selected_attributes, str):
        selected_attributes = [selected_attributes]
    attributes = [] if selected_attributes is None else list(selected_attributes)
    if not attributes:
        raise ValidationError("Select at least one variable to show on the map.")
    return [
        MarkerRecord(
            latitude=row.latitude,
            longitude=row.longitude,
            label=marker_label(row, attributes),
            city=row.display_name,
        )
        for row in enriched_rows
    ]
