"""Join uploaded rows to the gazetteer by canonical city key."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..core import SchemaError, logger, normalize_city
from .gazetteer import Gazetteer

CITY_COLUMN = "city"


@dataclass(frozen=True)
class EnrichedRow:
    """An uploaded row that matched a gazetteer entry."""

    attributes: Mapping[str, Any]
    canonical_key: str
    display_name: str
    latitude: float
    longitude: float

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)


@dataclass(frozen=True)
class ReconciliationResult:
    rows: list[EnrichedRow]
    rows_in: int
    unmatched_cities: list[str] = field(default_factory=list)

    @property
    def rows_matched(self) -> int:
        return len(self.rows)

    @property
    def unmatched_count(self) -> int:
        return self.rows_in - self.rows_matched


def _check_schema(rows: list[Mapping[str, Any]]) -> None:
    for position, row in enumerate(rows):
        if CITY_COLUMN not in row:
            raise SchemaError(
                f"The uploaded data must contain a '{CITY_COLUMN}' column (missing from row {position + 1})."
            )


def reconcile_rows(rows: Iterable[Mapping[str, Any]], gazetteer: Gazetteer) -> ReconciliationResult:
    """Match rows against the gazetteer, keeping counts of what was dropped."""
    rows = list(rows)
    _check_schema(rows)

    matched: list[EnrichedRow] = []
    unmatched: set[str] = set()
    for row in rows:
        raw_city = row[CITY_COLUMN]
        key = normalize_city(raw_city)
        entry = gazetteer.lookup(key)
        if entry is None:
            unmatched.add(key or "(blank)")
            continue
        matched.append(
            EnrichedRow(
                attributes=MappingProxyType(dict(row)),
                canonical_key=entry.canonical_key,
                display_name=entry.display_name,
                latitude=entry.latitude,
                longitude=entry.longitude,
            )
        )

    result = ReconciliationResult(rows=matched, rows_in=len(rows), unmatched_cities=sorted(unmatched))
    logger.info("Matched rows: %d of %d", result.rows_matched, result.rows_in)
    if result.unmatched_count:
        logger.warning(
            "Dropped %d rows with unknown cities (first %d): %s",
            result.unmatched_count,
            min(len(result.unmatched_cities), 10),
            result.unmatched_cities[:10],
        )
    return result


def reconcile(rows: Iterable[Mapping[str, Any]], gazetteer: Gazetteer) -> list[EnrichedRow]:
    """Return the rows whose city is in the gazetteer, in input order."""
    return reconcile_rows(rows, gazetteer).rows
