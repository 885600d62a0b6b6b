"""Label normalization and bullet extraction shared by every import stage."""

from __future__ import annotations

import math
import re
import unicodedata
from collections.abc import Iterable

_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_EDGE_HYPHENS_RE = re.compile(r"(^-|-$)")
_BULLET_PREFIX_RE = re.compile("^[-*\u2022]\\s*")

STAT_MIN = 0
STAT_MAX = 100


def _fold(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value.lower())
    return _COMBINING_MARKS_RE.sub("", decomposed)


def normalize_token(value: str) -> str:
    """Return a comparison key: case-folded, diacritic-free, alphanumerics only."""

    return _NON_ALNUM_RE.sub("", _fold(value))


def slugify(value: str) -> str:
    """Return a hyphenated identifier built from ``value``."""

    return _EDGE_HYPHENS_RE.sub("", _NON_ALNUM_RE.sub("-", _fold(value)))


def clamp_stat(value: float) -> int:
    """Round half-up and clamp to the stat range; non-finite input maps to 0."""

    if not math.isfinite(value):
        return STAT_MIN
    return max(STAT_MIN, min(STAT_MAX, math.floor(value + 0.5)))


def extract_bullet(line: str) -> str:
    return _BULLET_PREFIX_RE.sub("", line.strip()).strip()


def parse_bullet_items(lines: Iterable[str]) -> list[str]:
    """Strip bullet markers and drop lines left empty."""

    items: list[str] = []
    for line in lines:
        item = extract_bullet(line)
        if item:
            items.append(item)
    return items
