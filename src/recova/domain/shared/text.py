"""Canonical text form shared by rule validation and matching."""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

_SEPARATORS = re.compile(r"['’‘`´\-_/]")
_NON_ALPHANUMERIC = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def canonicalize(text: Optional[str]) -> str:
    """Return the canonical form of ``text`` (uncached)."""
    if text is None or not text.strip():
        return ""

    result = unicodedata.normalize("NFD", text.lower())
    result = "".join(ch for ch in result if not unicodedata.category(ch).startswith("M"))
    result = _SEPARATORS.sub(" ", result)
    result = _NON_ALPHANUMERIC.sub("", result)
    return _WHITESPACE.sub(" ", result).strip()
