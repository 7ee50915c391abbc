"""IO helper utilities."""

from __future__ import annotations

import csv
from collections.abc import Iterable

import pandas as pd

from .errors import InputError, SchemaError
from .logging import configure_logging, logger


def setup_logging(verbose: bool) -> None:
    """Initialise project logging."""
    configure_logging(verbose)


SNIFF_DELIMITERS = ",;\t|"
SNIFF_BYTES = 65536


def _sample(path) -> str:
    if hasattr(path, "read"):
        raw = path.read(SNIFF_BYTES)
        path.seek(0)
        return raw.decode("utf-8-sig") if isinstance(raw, bytes) else raw
    with open(path, encoding="utf-8-sig", newline="") as handle:
        return handle.read(SNIFF_BYTES)


def sniff_delimiter(path) -> str:
    """Guess the delimiter from a sample, defaulting to a comma."""
    try:
        return csv.Sniffer().sniff(_sample(path), delimiters=SNIFF_DELIMITERS).delimiter
    except csv.Error:
        return ","
    except UnicodeDecodeError as exc:
        raise InputError(f"CSV file is not UTF-8 encoded: {path}") from exc
    except OSError as exc:
        raise InputError(f"Cannot open CSV file: {path}") from exc


def read_any_csv(path) -> pd.DataFrame:
    """Read a UTF-8 CSV file, trying a few delimiter heuristics."""
    last_exc: Exception | None = None
    for kwargs in (dict(sep=sniff_delimiter(path)), dict(sep=";"), dict()):
        if hasattr(path, "seek"):
            path.seek(0)
        try:
            df = pd.read_csv(path, encoding="utf-8-sig", **kwargs)
            logger.debug("Loaded CSV %s with %s", path, kwargs)
            return strip_bom(df)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, ValueError) as exc:
            logger.debug("CSV read failed for %s with %s: %s", path, kwargs, exc)
            last_exc = exc
    raise InputError(f"Failed to parse CSV: {path}") from last_exc


def strip_bom(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with string column labels, stripped of byte-order marks and padding.

    Column case is preserved: ``city`` is matched case-sensitively.
    """
    df = df.copy()
    df.columns = [str(col).replace("\ufeff", "").strip() for col in df.columns]
    return df


def require_columns(columns: Iterable[str], cols: set[str], label: str) -> None:
    """Ensure the expected columns are available."""
    missing = set(cols) - set(columns)
    if missing:
        raise SchemaError(f"{label} missing columns: {sorted(missing)}")
