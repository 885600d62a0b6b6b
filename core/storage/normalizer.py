"""Reconstruction of imports and fight records from stored data.

Nothing here raises on malformed input: each field is filtered on its own and
bad array elements are dropped. A record that cannot satisfy its
invariants is returned as ``None`` so sibling records still load.
"""

from __future__ import annotations

import logging
import math
import secrets
import string
import time
from collections.abc import Mapping
from typing import Any

from core.importer.models import FighterFact, FightRecord, ParsedImport, ParsedStat
from core.importer.tokens import clamp_stat
from core.templates.order import parse_template_order_tokens

logger = logging.getLogger("versus.storage")

_ID_ALPHABET = string.digits + string.ascii_lowercase


def now_ms() -> int:
    return int(time.time() * 1000)


def random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def _to_string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _to_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _string_field(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else ""


def _to_fact_list(value: object) -> list[FighterFact]:
    if not isinstance(value, list):
        return []
    facts: list[FighterFact] = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        title = _string_field(item, "title")
        text = _string_field(item, "text")
        if not title and not text:
            continue
        facts.append(FighterFact(title=title or "Fact", text=text or "-"))
    return facts


def _to_stat_list(value: object) -> list[ParsedStat]:
    if not isinstance(value, list):
        return []
    stats: list[ParsedStat] = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        label = _string_field(item, "label")
        number = _to_number(item.get("value"))
        if not label or number is None:
            continue
        stats.append(ParsedStat(label=label, value=clamp_stat(number)))
    return stats


def _to_template_blocks(value: object) -> dict[str, list[str]]:
    if not isinstance(value, Mapping):
        return {}
    blocks: dict[str, list[str]] = {}
    for key, entry in value.items():
        if not isinstance(key, str) or not key.strip():
            continue
        blocks[key] = _to_string_list(entry)
    return blocks


def normalize_persisted_import(value: object) -> ParsedImport | None:
    """Rebuild a ``ParsedImport`` from untyped data, or ``None`` if unusable.

    Both combatant names must be non-empty strings; every other field is
    filtered independently. Template order is resolved through the alias
    table and may end up empty.
    """

    if not isinstance(value, Mapping):
        return None

    fighter_a_name = _string_field(value, "fighterAName")
    fighter_b_name = _string_field(value, "fighterBName")
    if not fighter_a_name or not fighter_b_name:
        return None

    return ParsedImport(
        fighter_a_name=fighter_a_name,
        fighter_b_name=fighter_b_name,
        stats_a=_to_stat_list(value.get("statsA")),
        stats_b=_to_stat_list(value.get("statsB")),
        facts_a=_to_fact_list(value.get("factsA")),
        facts_b=_to_fact_list(value.get("factsB")),
        wins_a=_to_string_list(value.get("winsA")),
        wins_b=_to_string_list(value.get("winsB")),
        template_order=parse_template_order_tokens(_to_string_list(value.get("templateOrder"))),
        template_blocks=_to_template_blocks(value.get("templateBlocks")),
    )


def normalize_persisted_fight(value: object, index: int = 0) -> FightRecord | None:
    """Rebuild a ``FightRecord``; requires a valid payload and both portraits.

    Missing identity fields are regenerated: id, display name
    (``"A vs B"``), file name (``"<name>.txt"``) and creation time.
    """

    if not isinstance(value, Mapping):
        return None
    payload = normalize_persisted_import(value.get("payload"))
    if payload is None:
        return None

    portrait_a = _string_field(value, "portraitADataUrl")
    portrait_b = _string_field(value, "portraitBDataUrl")
    if not portrait_a or not portrait_b:
        return None

    fight_id = _string_field(value, "id")
    if not fight_id.strip():
        fight_id = f"fight-{now_ms()}-{index}-{random_suffix()}"

    name = _string_field(value, "name")
    if not name.strip():
        name = f"{payload.fighter_a_name} vs {payload.fighter_b_name}"

    file_name = _string_field(value, "fileName")
    if not file_name.strip():
        file_name = f"{name}.txt"

    created_at = _to_number(value.get("createdAt"))

    return FightRecord(
        id=fight_id,
        name=name,
        file_name=file_name,
        created_at=int(created_at) if created_at is not None else now_ms(),
        payload=payload,
        portrait_a=portrait_a,
        portrait_b=portrait_b,
    )


def normalize_fight_collection(value: object) -> list[FightRecord]:
    """Normalize stored records element-wise, newest first.

    Invalid elements are dropped and logged; they never affect siblings.
    """

    if not isinstance(value, list):
        if value is not None:
            logger.warning("Ignoring stored fight collection of type %s", type(value).__name__)
        return []

    fights: list[FightRecord] = []
    for index, item in enumerate(value):
        fight = normalize_persisted_fight(item, index)
        if fight is None:
            logger.warning("Dropping invalid persisted fight record at index %d", index)
            continue
        fights.append(fight)

    fights.sort(key=lambda fight: fight.created_at, reverse=True)
    return fights
