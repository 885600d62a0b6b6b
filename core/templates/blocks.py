"""``Template <Name>:`` block scanning over a whole import document.

Blocks are keyed by their heading exactly as authored; matching a heading to
a canonical template happens later through loose alias comparison.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from core.importer.sections import sanitize_text
from core.importer.tokens import extract_bullet, normalize_token
from core.templates.catalog import TEMPLATE_BLOCK_ALIASES

_BLOCK_HEADING_RE = re.compile(r"^template\s+(.+?)\s*:?$", re.IGNORECASE)
_SECTION_MARKER_RE = re.compile(r"^\d+\.\s*")


def parse_template_blocks(raw: str) -> dict[str, list[str]]:
    """Collect bullet lines under each ``Template <Name>:`` heading.

    Rules:
    - A heading opens a block (or reopens one with the same literal name).
    - A numbered section marker closes the active block.
    - Lines outside any block are ignored; blank lines are dropped.
    """

    blocks: dict[str, list[str]] = {}
    active: str | None = None

    for line in sanitize_text(raw).split("\n"):
        trimmed = line.strip()
        heading = _BLOCK_HEADING_RE.match(trimmed)
        if heading:
            active = heading.group(1).strip()
            blocks.setdefault(active, [])
            continue
        if active is None:
            continue
        if _SECTION_MARKER_RE.match(trimmed):
            active = None
            continue
        item = extract_bullet(trimmed)
        if item:
            blocks[active].append(item)

    return blocks


def find_template_block_lines(
    blocks: Mapping[str, list[str]], aliases: Iterable[str]
) -> list[str]:
    """Return the first block whose heading loosely matches any alias.

    A heading matches when its normalized form equals, contains, or is
    contained in a normalized alias.
    """

    normalized_aliases = [token for token in (normalize_token(a) for a in aliases) if token]
    for heading, lines in blocks.items():
        normalized_heading = normalize_token(heading)
        if not normalized_heading:
            continue
        for alias in normalized_aliases:
            if (
                normalized_heading == alias
                or alias in normalized_heading
                or normalized_heading in alias
            ):
                return list(lines)
    return []


def find_template_block(blocks: Mapping[str, list[str]], template_id: str) -> list[str]:
    """Return the block lines for a canonical template id, if any."""

    return find_template_block_lines(blocks, TEMPLATE_BLOCK_ALIASES.get(template_id, ()))
