"""
Text normalization utilities.

Folds customer messages and keyword tables into one canonical form so the
rest of the engine can rely on plain substring matching.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, Optional


def normalize_text(text: Optional[str]) -> str:
    """
    Lowercase, strip diacritics and trim a piece of text.

    Examples:
        "  Chcem KÁVU bez kofeínu " -> "chcem kavu bez kofeinu"
        None -> ""
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", str(text).lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.strip()


def contains_any(normalized: str, keywords: Iterable[str]) -> bool:
    """True if any keyword (normalized on the fly) occurs in the normalized text."""
    if not normalized:
        return False
    for keyword in keywords:
        needle = normalize_text(keyword)
        if needle and needle in normalized:
            return True
    return False


def contains_word(normalized: str, tokens: Iterable[str]) -> bool:
    """Word-boundary variant of contains_any for short tokens like 'vat' or 'moq'."""
    if not normalized:
        return False
    for token in tokens:
        needle = normalize_text(token)
        if needle and re.search(rf"\b{re.escape(needle)}\b", normalized):
            return True
    return False
