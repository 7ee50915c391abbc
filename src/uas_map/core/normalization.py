"""Utilities for normalising free-text city names into comparison keys."""

from __future__ import annotations

import re
import unicodedata
from typing import Any

import pandas as pd


# Letters that NFKD leaves intact but that have a conventional ASCII spelling.
LATIN_ASCII = str.maketrans({
    "æ": "ae",
    "œ": "oe",
    "ß": "ss",
    "ø": "o",
    "đ": "d",
    "ħ": "h",
    "ł": "l",
    "ŀ": "l",
    "þ": "th",
    "ð": "d",
    "ı": "i",
    "ŋ": "n",
    "ſ": "s",
})

# Cyrillic and Greek letters that are visually identical to Latin ones and
# turn up in copy-pasted spreadsheets.
CONFUSABLES = str.maketrans({
    "а": "a",
    "в": "b",
    "е": "e",
    "ѐ": "e",
    "ё": "e",
    "к": "k",
    "м": "m",
    "н": "h",
    "о": "o",
    "р": "p",
    "с": "c",
    "т": "t",
    "у": "y",
    "х": "x",
    "ѕ": "s",
    "і": "i",
    "ї": "i",
    "ј": "j",
    "ԁ": "d",
    "ο": "o",
    "α": "a",
    "ε": "e",
    "ι": "i",
    "κ": "k",
    "ν": "v",
    "τ": "t",
})

PUNCTUATION_ASCII = str.maketrans({
    "‘": "'",
    "’": "'",
    "ʼ": "'",
    "ʻ": "'",
    "`": "'",
    "´": "'",
    "“": '"',
    "”": '"',
    "‐": "-",
    "‑": "-",
    "–": "-",
    "—": "-",
})


def _is_blank(text: Any) -> bool:
    if text is None:
        return True
    try:
        return bool(pd.isna(text))
    except (TypeError, ValueError):
        return False


def _strip_marks(s: str) -> str:
    return "".join(ch for ch in s if not unicodedata.combining(ch))


def normalize_city(text: Any) -> str:
    """Return the canonical matching key for a city name.

    Diacritics are stripped, ligatures and look-alike letters are folded to
    ASCII, the result is lowercased and whitespace collapsed. Missing values
    give an empty key.
    """
    if _is_blank(text):
        return ""
    s = unicodedata.normalize("NFKD", str(text)).lower()
    s = unicodedata.normalize("NFKD", s)
    s = s.translate(LATIN_ASCII).translate(CONFUSABLES).translate(PUNCTUATION_ASCII)
    s = _strip_marks(s)
    return re.sub(r"\s+", " ", s).strip()


def normalize_cities(values: pd.Series) -> pd.Series:
    """Vectorised helper returning the canonical key for each value."""
    return values.map(normalize_city)
