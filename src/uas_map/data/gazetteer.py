"""Fixed reference table of known cities and their coordinates."""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..core import ConfigurationError, logger, normalize_city


# (display name, latitude, longitude)
ALBANIAN_CITIES: tuple[tuple[str, float, float], ...] = (
    ("Tirana", 41.3275, 19.8189),
    ("Durrës", 41.3231, 19.4414),
    ("Shkodër", 42.0683, 19.5126),
    ("Vlorë", 40.4667, 19.4908),
    ("Fier", 40.7239, 19.5561),
    ("Berat", 40.7058, 19.9520),
    ("Korçë", 40.6186, 20.7808),
    ("Gjirokastër", 40.0833, 20.1431),
    ("Elbasan", 41.1139, 20.0833),
    ("Lushnjë", 40.9920, 19.7275),
    ("Përmet", 40.2372, 19.5742),
    ("Sarandë", 39.8739, 20.0032),
    ("Vau i Dejës", 39.8643, 20.0013),
    ("Kamëz", 41.1833, 19.6639),
    ("Kavajë", 41.3133, 19.5636),
    ("Peqin", 41.0750, 19.7972),
    ("Mirditë", 41.5281, 19.6544),
    ("Sukth", 41.3075, 19.6896),
)


@dataclass(frozen=True)
class GazetteerEntry:
    canonical_key: str
    display_name: str
    latitude: float
    longitude: float


def _coordinate(value: Any, name: str, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"Gazetteer entry {name!r}: {label} must be a number (got {value!r})")
    coord = float(value)
    if math.isnan(coord) or math.isinf(coord):
        raise ConfigurationError(f"Gazetteer entry {name!r}: {label} is missing")
    return coord


def _entry(raw: Any) -> GazetteerEntry:
    try:
        name, lat, lon = raw
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Gazetteer entries must be (name, latitude, longitude) triples (got {raw!r})"
        ) from exc
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(f"Gazetteer entry has no city name: {raw!r}")
    key = normalize_city(name)
    if not key:
        raise ConfigurationError(f"Gazetteer entry {name!r} normalises to an empty key")
    return GazetteerEntry(
        canonical_key=key,
        display_name=name.strip(),
        latitude=_coordinate(lat, name, "latitude"),
        longitude=_coordinate(lon, name, "longitude"),
    )


class Gazetteer:
    """Read-only index of gazetteer entries keyed by canonical city name."""

    def __init__(self, entries: Mapping[str, GazetteerEntry]) -> None:
        self._index = MappingProxyType(dict(entries))

    def lookup(self, canonical_key: str) -> Optional[GazetteerEntry]:
        return self._index.get(canonical_key)

    def display_names(self) -> list[str]:
        return [entry.display_name for entry in self]

    def keys(self) -> list[str]:
        return list(self._index)

    def bounds(self) -> Optional[tuple[tuple[float, float], tuple[float, float]]]:
        """South-west and north-east corners covering every entry."""
        if not self._index:
            return None
        lats = [entry.latitude for entry in self]
        lons = [entry.longitude for entry in self]
        return (min(lats), min(lons)), (max(lats), max(lons))

    def __contains__(self, canonical_key: object) -> bool:
        return canonical_key in self._index

    def __iter__(self) -> Iterator[GazetteerEntry]:
        return iter(self._index.values())

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Gazetteer({len(self)} entries)"


def build_gazetteer(entries: Iterable[tuple[str, float, float]]) -> Gazetteer:
    """Validate raw triples and index them by canonical key.

    Raises ConfigurationError for a malformed entry or when two names
    normalise to the same key.
    """
    index: dict[str, GazetteerEntry] = {}
    for raw in entries:
        entry = _entry(raw)
        existing = index.get(entry.canonical_key)
        if existing is not None:
            raise ConfigurationError(
                f"Gazetteer entries {existing.display_name!r} and {entry.display_name!r} "
                f"share the key {entry.canonical_key!r}"
            )
        index[entry.canonical_key] = entry
    logger.debug("Built gazetteer with %d entries", len(index))
    return Gazetteer(index)


DEFAULT_GAZETTEER = build_gazetteer(ALBANIAN_CITIES)
