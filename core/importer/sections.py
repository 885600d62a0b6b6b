"""Numbered-section splitting for versus import documents."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from core.importer.tokens import normalize_token, parse_bullet_items

_SECTION_HEADING_RE = re.compile(r"^\s*(\d+)\.\s*(.*)\s*$")
_WRAPPING_PARENS_RE = re.compile(r"^\((.*)\)$")

REQUIRED_SECTIONS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8)
TEMPLATE_ORDER_SECTION = 9

_NAME_PLACEHOLDER_TOKENS = ("nazwapostaci", "name", "fighter", "character")


@dataclass
class Section:
    """One ``N. title`` block with its raw body lines."""

    number: int
    title: str
    lines: list[str] = field(default_factory=list)


def sanitize_text(raw: str) -> str:
    return raw.replace("\r", "")


def split_sections(raw: str) -> dict[int, Section]:
    """Split a document into sections keyed by their number.

    Rules:
    - A line ``N. title`` opens section N; a repeated N replaces the earlier one.
    - Body lines are kept verbatim, blank lines included.
    - Lines before the first heading belong to no section.
    """

    sections: dict[int, Section] = {}
    active: Section | None = None

    for line in sanitize_text(raw).split("\n"):
        heading = _SECTION_HEADING_RE.match(line)
        if heading:
            number = int(heading.group(1))
            active = Section(number=number, title=heading.group(2).strip())
            sections[number] = active
            continue
        if active is not None:
            active.lines.append(line)

    return sections


def first_missing_section(sections: Mapping[int, Section]) -> int | None:
    for number in REQUIRED_SECTIONS:
        if number not in sections:
            return number
    return None


def pick_name_from_section(section: Section, fallback: str) -> str:
    """Resolve a combatant name from a name section.

    A heading that only repeats a placeholder word ("name", "fighter",
    "character") defers to the first bullet, then the first non-blank line.
    """

    title = section.title.strip()
    wrapped = _WRAPPING_PARENS_RE.match(title)
    if wrapped:
        title = wrapped.group(1).strip()

    token = normalize_token(title)
    looks_like_placeholder = not token or any(
        placeholder in token for placeholder in _NAME_PLACEHOLDER_TOKENS
    )
    if title and not looks_like_placeholder:
        return title

    bullets = parse_bullet_items(section.lines)
    if bullets:
        return bullets[0]

    for line in section.lines:
        if line.strip():
            return line.strip()
    return fallback
