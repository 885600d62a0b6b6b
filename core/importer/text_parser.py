"""Versus import document parser.

Expected layout (CRLF-agnostic):

1. Combatant A name       5. Combatant B name
2. Combatant A stats      6. Combatant B stats
3. Combatant A facts      7. Combatant B facts
4. Defeated by A          8. Defeated by B (+ optional template order tail)
9. Template order (optional)

``Template <Name>:`` blocks may appear anywhere in the document.
"""

from __future__ import annotations

import logging
import re

from core.importer.line_parsers import parse_fact_items, parse_stat_items
from core.importer.models import (
    ImportFailure,
    ImportResult,
    ImportSuccess,
    InsufficientStats,
    MissingSection,
    ParsedImport,
)
from core.importer.sections import (
    TEMPLATE_ORDER_SECTION,
    Section,
    first_missing_section,
    pick_name_from_section,
    sanitize_text,
    split_sections,
)
from core.importer.tokens import parse_bullet_items
from core.templates.blocks import parse_template_blocks
from core.templates.order import parse_template_order

logger = logging.getLogger("versus.importer")

_TEMPLATE_MARKER_RE = re.compile(r"template|uklad|kolejnosc", re.IGNORECASE)

FIGHTER_A_FALLBACK_NAME = "Fighter A"
FIGHTER_B_FALLBACK_NAME = "Fighter B"


def parse_vs_import_text(raw: str) -> ImportResult:
    """Parse a raw versus document into a ``ParsedImport`` or a tagged failure."""

    sanitized = sanitize_text(raw)
    sections = split_sections(sanitized)

    missing = first_missing_section(sections)
    if missing is not None:
        logger.info("Import rejected: missing section %d", missing)
        return ImportFailure(error=MissingSection(section=missing))

    stats_a = parse_stat_items(sections[2].lines)
    stats_b = parse_stat_items(sections[6].lines)
    if not stats_a or not stats_b:
        logger.info(
            "Import rejected: stat lines a=%d b=%d", len(stats_a), len(stats_b)
        )
        return ImportFailure(error=InsufficientStats())

    wins_b_lines, order_lines = _split_wins_and_order(sections[8])
    optional = sections.get(TEMPLATE_ORDER_SECTION)
    if optional is not None:
        order_lines = [*order_lines, *optional.lines]

    data = ParsedImport(
        fighter_a_name=pick_name_from_section(sections[1], FIGHTER_A_FALLBACK_NAME),
        fighter_b_name=pick_name_from_section(sections[5], FIGHTER_B_FALLBACK_NAME),
        stats_a=stats_a,
        stats_b=stats_b,
        facts_a=parse_fact_items(sections[3].lines),
        facts_b=parse_fact_items(sections[7].lines),
        wins_a=parse_bullet_items(sections[4].lines),
        wins_b=parse_bullet_items(wins_b_lines),
        template_order=parse_template_order(order_lines),
        template_blocks=parse_template_blocks(sanitized),
    )
    logger.debug(
        "Parsed import %s vs %s: %d/%d stats, %d templates, %d blocks",
        data.fighter_a_name,
        data.fighter_b_name,
        len(stats_a),
        len(stats_b),
        len(data.template_order),
        len(data.template_blocks),
    )
    return ImportSuccess(data=data)


def _split_wins_and_order(section: Section) -> tuple[list[str], list[str]]:
    """Split section 8 at a template/order marker line, if present."""

    for index, line in enumerate(section.lines):
        if _TEMPLATE_MARKER_RE.search(line.strip()):
            return section.lines[:index], section.lines[index + 1 :]
    return section.lines, []
