"""Stat and fact line parsing for section bodies."""

from __future__ import annotations

import re
from collections.abc import Iterable

from core.importer.models import FighterFact, ParsedStat
from core.importer.tokens import clamp_stat, parse_bullet_items

_DIRECT_STAT_RE = re.compile(r"^(.+?)\s*[:=]\s*(-?\d+(?:\.\d+)?)$")
_SPACED_STAT_RE = re.compile(r"^(.+?)\s+(-?\d+(?:\.\d+)?)$")

FACT_DEFAULT_TITLES: tuple[str, ...] = ("Style", "Advantage", "Mentality")


def parse_stat_items(lines: Iterable[str]) -> list[ParsedStat]:
    """Parse ``label: 96`` / ``label = 96`` / ``label 96`` bullets.

    Lines matching neither grammar are skipped.
    """

    stats: list[ParsedStat] = []
    for item in parse_bullet_items(lines):
        match = _DIRECT_STAT_RE.match(item) or _SPACED_STAT_RE.match(item)
        if match is None:
            continue
        label = match.group(1).strip()
        if not label:
            continue
        stats.append(ParsedStat(label=label, value=clamp_stat(float(match.group(2)))))
    return stats


def default_fact_title(index: int) -> str:
    if index < len(FACT_DEFAULT_TITLES):
        return FACT_DEFAULT_TITLES[index]
    return f"Feat {index + 1}"


def parse_fact_items(lines: Iterable[str]) -> list[FighterFact]:
    """Parse ``title: text`` bullets; untitled items get positional titles."""

    facts: list[FighterFact] = []
    for index, item in enumerate(parse_bullet_items(lines)):
        title, separator, text = item.partition(":")
        if not separator:
            facts.append(FighterFact(title=default_fact_title(index), text=item))
            continue
        facts.append(
            FighterFact(
                title=title.strip() or default_fact_title(index),
                text=text.strip() or "-",
            )
        )
    return facts
