"""Field resolution inside template blocks."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from core.importer.models import FighterFact
from core.importer.tokens import normalize_token, parse_bullet_items

_KEY_VALUE_RE = re.compile(r"^([^:=]+)\s*[:=]\s*(.+)$")
_CURVE_SPLIT_RE = re.compile(r"[,;|\s]+")


def parse_template_field_map(lines: Iterable[str]) -> dict[str, str]:
    """Map normalized keys to values for ``key: value`` / ``key = value`` lines.

    The last occurrence of a key wins.
    """

    fields: dict[str, str] = {}
    for item in parse_bullet_items(lines):
        match = _KEY_VALUE_RE.match(item)
        if match is None:
            continue
        key = normalize_token(match.group(1))
        value = match.group(2).strip()
        if not key or not value:
            continue
        fields[key] = value
    return fields


def plain_template_lines(lines: Iterable[str]) -> list[str]:
    """Return bullet items that are not ``key: value`` shaped, in order."""

    return [item for item in parse_bullet_items(lines) if not _KEY_VALUE_RE.match(item)]


def pick_template_field(fields: dict[str, str], keys: Iterable[str], default: str = "") -> str:
    """Return the value of the first alias present, else ``default``."""

    for key in keys:
        value = fields.get(normalize_token(key))
        if value:
            return value
    return default


@dataclass(frozen=True)
class TemplateFields:
    """Resolved view of one template block."""

    fields: dict[str, str] = field(default_factory=dict)
    plain_lines: list[str] = field(default_factory=list)

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> TemplateFields:
        return cls(fields=parse_template_field_map(lines), plain_lines=plain_template_lines(lines))

    def pick(self, keys: Iterable[str], default: str = "") -> str:
        return pick_template_field(self.fields, keys, default)

    def line(self, position: int, keys: Iterable[str], default: str = "") -> str:
        """Named field first, then the ordinal plain line, then ``default``."""

        value = self.pick(keys)
        if value:
            return value
        if 0 <= position < len(self.plain_lines):
            return self.plain_lines[position]
        return default


def _scale_percent(value: float) -> float:
    scaled = value * 100 if value <= 1 else value
    return max(0.0, min(100.0, scaled))


def parse_curve_values(raw: str, fallback: Sequence[float]) -> list[float]:
    """Parse ``"20, 45%, 0.8"`` style curves into 0..100 values.

    Values at or below 1 are read as fractions.
    """

    values: list[float] = []
    for token in _CURVE_SPLIT_RE.split(raw):
        token = token.strip().replace("%", "")
        if not token:
            continue
        try:
            number = float(token)
        except ValueError:
            continue
        if math.isfinite(number):
            values.append(_scale_percent(number))
    return values if values else list(fallback)


def parse_percent_value(raw: str, fallback: float) -> float:
    try:
        number = float(raw.replace("%", "").strip())
    except ValueError:
        return fallback
    if not math.isfinite(number):
        return fallback
    return _scale_percent(number)


def build_card_facts(
    fallback_facts: Sequence[FighterFact], fields: dict[str, str]
) -> list[FighterFact]:
    """Character-card facts: block fields override the imported facts."""

    def fallback_text(index: int) -> str:
        if index < len(fallback_facts) and fallback_facts[index].text:
            return fallback_facts[index].text
        return "-"

    return [
        FighterFact(title="Style", text=pick_template_field(fields, ["style"], fallback_text(0))),
        FighterFact(
            title="Advantage",
            text=pick_template_field(fields, ["atut", "advantage"], fallback_text(1)),
        ),
        FighterFact(
            title="Mentality",
            text=pick_template_field(fields, ["mentalnosc", "mentality"], fallback_text(2)),
        ),
    ]
