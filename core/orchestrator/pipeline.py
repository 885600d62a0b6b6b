"""Orchestration: document import and active-fight derivation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from core.config.models import EngineSettings
from core.importer.categories import DEFAULT_STAT_VALUE, build_category_payload
from core.importer.defaults import (
    DEFAULT_CATEGORIES,
    DEFAULT_FACTS_A,
    DEFAULT_FACTS_B,
    DEFAULT_FIGHTER_A_NAME,
    DEFAULT_FIGHTER_A_STATS,
    DEFAULT_FIGHTER_A_SUBTITLE,
    DEFAULT_FIGHTER_B_NAME,
    DEFAULT_FIGHTER_B_STATS,
    DEFAULT_FIGHTER_B_SUBTITLE,
    DEFAULT_WINS_A,
    DEFAULT_WINS_B,
    FIGHTER_A_COLOR,
    FIGHTER_B_COLOR,
)
from core.importer.matchup import enforce_file_name_side_order
from core.importer.models import (
    Category,
    FightRecord,
    ImportResult,
    ImportSuccess,
    ParsedImport,
)
from core.importer.text_parser import parse_vs_import_text
from core.importer.tokens import clamp_stat
from core.orchestrator.models import ActiveFight, FighterView, ImportPreview, ScoreRow
from core.orchestrator.template_views import resolve_template_views
from core.templates.catalog import DEFAULT_TEMPLATE_ORDER
from core.utils.errors import ImportFailedError

DEFAULT_MAX_FACTS = 5
DEFAULT_MAX_WINS = 12


def import_document(raw: str, file_name: str) -> ImportResult:
    """Parse a document and align its sides with the filename."""

    result = parse_vs_import_text(raw)
    if not isinstance(result, ImportSuccess):
        return result
    return ImportSuccess(data=enforce_file_name_side_order(result.data, file_name))


def build_active_fight(
    fight: FightRecord, settings: EngineSettings | None = None
) -> ActiveFight:
    """Derive an independent render model from a stored record.

    Empty facts/wins fall back to the built-in defaults for that side; an
    empty template order falls back to the default order.
    """

    max_facts = settings.max_facts if settings is not None else DEFAULT_MAX_FACTS
    max_wins = settings.max_wins if settings is not None else DEFAULT_MAX_WINS
    default_stat = settings.default_stat if settings is not None else DEFAULT_STAT_VALUE

    payload = enforce_file_name_side_order(
        fight.payload.model_copy(deep=True), fight.file_name or fight.name
    )
    category_payload = build_category_payload(payload.stats_a, payload.stats_b, default_stat)
    template_order = list(payload.template_order) or list(DEFAULT_TEMPLATE_ORDER)

    return ActiveFight(
        fight_id=fight.id,
        file_name=fight.file_name,
        categories=category_payload.categories,
        fighter_a=FighterView(
            name=payload.fighter_a_name,
            subtitle=DEFAULT_FIGHTER_A_SUBTITLE,
            color=FIGHTER_A_COLOR,
            portrait=fight.portrait_a,
            stats=category_payload.stats_a,
        ),
        fighter_b=FighterView(
            name=payload.fighter_b_name,
            subtitle=DEFAULT_FIGHTER_B_SUBTITLE,
            color=FIGHTER_B_COLOR,
            portrait=fight.portrait_b,
            stats=category_payload.stats_b,
        ),
        facts_a=payload.facts_a[:max_facts] or list(DEFAULT_FACTS_A),
        facts_b=payload.facts_b[:max_facts] or list(DEFAULT_FACTS_B),
        wins_a=payload.wins_a[:max_wins] or list(DEFAULT_WINS_A),
        wins_b=payload.wins_b[:max_wins] or list(DEFAULT_WINS_B),
        template_order=template_order,
        active_template_id=template_order[0],
        template_blocks={key: list(lines) for key, lines in payload.template_blocks.items()},
    )


def build_default_fight() -> ActiveFight:
    """The built-in matchup shown before anything is imported."""

    return ActiveFight(
        categories=list(DEFAULT_CATEGORIES),
        fighter_a=FighterView(
            name=DEFAULT_FIGHTER_A_NAME,
            subtitle=DEFAULT_FIGHTER_A_SUBTITLE,
            color=FIGHTER_A_COLOR,
            stats=dict(DEFAULT_FIGHTER_A_STATS),
        ),
        fighter_b=FighterView(
            name=DEFAULT_FIGHTER_B_NAME,
            subtitle=DEFAULT_FIGHTER_B_SUBTITLE,
            color=FIGHTER_B_COLOR,
            stats=dict(DEFAULT_FIGHTER_B_STATS),
        ),
        facts_a=list(DEFAULT_FACTS_A),
        facts_b=list(DEFAULT_FACTS_B),
        wins_a=list(DEFAULT_WINS_A),
        wins_b=list(DEFAULT_WINS_B),
        template_order=list(DEFAULT_TEMPLATE_ORDER),
        active_template_id=DEFAULT_TEMPLATE_ORDER[0],
    )


def build_score_rows(
    categories: Sequence[Category], stats_a: dict[str, int], stats_b: dict[str, int]
) -> list[ScoreRow]:
    rows: list[ScoreRow] = []
    for category in categories:
        a = clamp_stat(stats_a.get(category.id, 0))
        b = clamp_stat(stats_b.get(category.id, 0))
        delta = a - b
        winner: Literal["a", "b", "draw"] = "draw" if delta == 0 else ("a" if delta > 0 else "b")
        rows.append(ScoreRow(id=category.id, label=category.label, a=a, b=b, delta=delta, winner=winner))
    return rows


def score_rows_for(fight: ActiveFight) -> list[ScoreRow]:
    return build_score_rows(fight.categories, fight.fighter_a.stats, fight.fighter_b.stats)


def fight_view_payload(fight: ActiveFight) -> dict[str, Any]:
    """JSON view of an active fight with its score rows and resolved templates."""

    rows = score_rows_for(fight)
    payload = fight.model_dump(mode="json")
    payload["score_rows"] = [row.model_dump(mode="json") for row in rows]
    payload["template_views"] = [
        view.model_dump(mode="json") for view in resolve_template_views(fight, rows)
    ]
    return payload


def average(rows: Sequence[ScoreRow], side: Literal["a", "b"]) -> float:
    if not rows:
        return 0.0
    return sum(row.a if side == "a" else row.b for row in rows) / len(rows)


def build_import_preview(
    parsed: ParsedImport, settings: EngineSettings | None = None
) -> ImportPreview:
    default_stat = settings.default_stat if settings is not None else DEFAULT_STAT_VALUE
    category_payload = build_category_payload(parsed.stats_a, parsed.stats_b, default_stat)
    rows = build_score_rows(
        category_payload.categories, category_payload.stats_a, category_payload.stats_b
    )
    return ImportPreview(
        parsed=parsed,
        categories=category_payload.categories,
        stats_a=category_payload.stats_a,
        stats_b=category_payload.stats_b,
        score_rows=rows,
        average_a=average(rows, "a"),
        average_b=average(rows, "b"),
    )


def require_import(raw: str, file_name: str) -> ParsedImport:
    """Like ``import_document`` but raises ``ImportFailedError`` on rejection."""

    result = import_document(raw, file_name)
    if isinstance(result, ImportSuccess):
        return result.data
    raise ImportFailedError(result.error.message, issue=result.error, file_name=file_name)
