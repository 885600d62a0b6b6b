"""Filename-declared matchup parsing and side-order enforcement."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from core.importer.models import ParsedImport
from core.importer.tokens import normalize_token

logger = logging.getLogger("versus.importer")

_FILE_EXTENSION_RE = re.compile(r"\.[^.]+$")
_UNDERSCORES_RE = re.compile(r"_+")
_MATCHUP_RE = re.compile(r"^\s*(.+?)\s+(?:vs\.?|versus|kontra|v)\s+(.+?)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class Matchup:
    """Left/right combatant names declared by a filename."""

    left_name: str
    right_name: str


def strip_file_extension(value: str) -> str:
    return _FILE_EXTENSION_RE.sub("", value).strip()


def parse_matchup_from_file_name(file_name: str) -> Matchup | None:
    """Parse ``"<A> vs <B>.txt"`` (also ``versus``, ``kontra``, ``v``)."""

    base = _UNDERSCORES_RE.sub(" ", strip_file_extension(file_name)).strip()
    match = _MATCHUP_RE.match(base)
    if match is None:
        return None
    left_name = match.group(1).strip()
    right_name = match.group(2).strip()
    if not left_name or not right_name:
        return None
    return Matchup(left_name=left_name, right_name=right_name)


def swap_import_sides(payload: ParsedImport) -> ParsedImport:
    """Return a copy with every A/B paired field exchanged."""

    return payload.model_copy(
        update={
            "fighter_a_name": payload.fighter_b_name,
            "fighter_b_name": payload.fighter_a_name,
            "stats_a": list(payload.stats_b),
            "stats_b": list(payload.stats_a),
            "facts_a": list(payload.facts_b),
            "facts_b": list(payload.facts_a),
            "wins_a": list(payload.wins_b),
            "wins_b": list(payload.wins_a),
        },
        deep=True,
    )


def enforce_file_name_side_order(payload: ParsedImport, file_name: str) -> ParsedImport:
    """Align combatant sides and display names with the filename.

    When the filename declares the two names in the reverse order of the
    document, all paired fields are swapped. Whenever the filename matches the
    matchup pattern its names replace the document's names.
    """

    matchup = parse_matchup_from_file_name(file_name)
    if matchup is None:
        return payload

    left_token = normalize_token(matchup.left_name)
    right_token = normalize_token(matchup.right_name)
    a_token = normalize_token(payload.fighter_a_name)
    b_token = normalize_token(payload.fighter_b_name)

    ordered = payload
    if left_token and right_token and left_token == b_token and right_token == a_token:
        logger.debug("Swapping sides to match filename order: %s", file_name)
        ordered = swap_import_sides(payload)

    return ordered.model_copy(
        update={
            "fighter_a_name": matchup.left_name,
            "fighter_b_name": matchup.right_name,
        },
        deep=True,
    )
