"""Per-template resolution of ``Template <Name>:`` blocks for an active fight.

Every template in the fight's order gets a ``TemplateView``: the block's
``key: value`` fields and plain lines, plus the headline and subtitle with
the preset as fallback. Character cards, battle dynamics and fight
simulation also get their structured content.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from core.importer.models import FighterFact
from core.importer.tokens import normalize_token
from core.orchestrator.models import (
    ActiveFight,
    CardView,
    FighterView,
    ScoreRow,
    SimulationPhase,
    TemplateView,
)
from core.templates.blocks import find_template_block
from core.templates.catalog import TemplateId, get_preset
from core.templates.fields import (
    TemplateFields,
    build_card_facts,
    parse_curve_values,
    parse_percent_value,
)
from core.templates.scenarios import (
    FightScenarioId,
    FightScenarioLead,
    resolve_fight_scenario_id,
    resolve_fight_scenario_lead,
)

PhaseMode = Literal["bars", "split", "animation"]

CARD_QUOTE_A = "Fighter who controls pace and distance."
CARD_QUOTE_B = "He does not seek a clean fight. He seeks destruction."

CURVE_A_DEFAULT: tuple[float, ...] = (78, 64, 50, 32, 20)
CURVE_B_DEFAULT: tuple[float, ...] = (35, 35, 35, 35, 35)
WAVE_DEFAULT: tuple[float, ...] = (34, 36, 33, 35, 34, 36, 33, 35)

# (mode, animation, lead, fallback label, fallback a, fallback b) per phase.
_PhaseDefault = tuple[PhaseMode, FightScenarioId, FightScenarioLead, str, float, float]
_PHASE_DEFAULTS: tuple[_PhaseDefault, ...] = (
    ("bars", "orbit-harass", "a", "Strength", 96, 84),
    ("split", "clash-lock", "a", "Speed", 92, 88),
    ("bars", "regen-attrition", "a", "Stamina", 90, 93),
)
_PHASE_TITLES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("opening",), "Opening: fast range control."),
    (("mid_fight", "midfight"), "Mid fight: pressure and recovery loops."),
    (("late_fight", "latefight"), "Late fight: attrition checks."),
)


def resolve_template_views(
    fight: ActiveFight, rows: Sequence[ScoreRow]
) -> list[TemplateView]:
    """Resolve every template in ``fight.template_order``, in that order."""

    return [_resolve_view(fight, rows, template_id) for template_id in fight.template_order]


def _resolve_view(
    fight: ActiveFight, rows: Sequence[ScoreRow], template_id: TemplateId
) -> TemplateView:
    preset = get_preset(template_id)
    block = TemplateFields.from_lines(find_template_block(fight.template_blocks, template_id))
    view = TemplateView(
        template_id=template_id,
        headline=block.pick(["headline", "header", "title"], preset.title),
        subtitle=block.pick(["subtitle", "purpose", "note"], preset.subtitle),
        fields=dict(block.fields),
        plain_lines=list(block.plain_lines),
    )

    if template_id == "character-card-a":
        view.card = _card(block, fight.fighter_a, fight.facts_a, preset.title, CARD_QUOTE_A)
    elif template_id == "character-card-b":
        view.card = _card(block, fight.fighter_b, fight.facts_b, preset.title, CARD_QUOTE_B)
    elif template_id == "battle-dynamics":
        view.curves = _curves(block)
    elif template_id == "fight-simulation":
        view.phases = _phases(block, rows)
    return view


def _card(
    block: TemplateFields,
    fighter: FighterView,
    facts: Sequence[FighterFact],
    title: str,
    quote: str,
) -> CardView:
    return CardView(
        title=block.pick(["header", "title", "headline"], title),
        subtitle=block.pick(["world", "swiat", "version"], fighter.subtitle),
        facts=build_card_facts(facts, block.fields),
        quote=block.pick(["quote", "cytat"], quote),
    )


def _curves(block: TemplateFields) -> dict[str, list[float]]:
    return {
        "a": parse_curve_values(
            block.pick(["a_curve", "curve_a", "blue_curve", "left_curve"]), CURVE_A_DEFAULT
        ),
        "b": parse_curve_values(
            block.pick(["b_curve", "curve_b", "red_curve", "right_curve"]), CURVE_B_DEFAULT
        ),
        "wave": parse_curve_values(
            block.pick(["yellow_wave", "wave", "chaos_wave"]), WAVE_DEFAULT
        ),
    }


def _phase_mode(token: str, fallback: PhaseMode) -> PhaseMode:
    if not token:
        return fallback
    if any(marker in token for marker in ("anim", "scenario", "preset")):
        return "animation"
    if any(marker in token for marker in ("split", "branch", "turn", "pivot")):
        return "split"
    return "bars"


def _phase_keys(index: int, *suffixes: str) -> list[str]:
    keys: list[str] = []
    for suffix in suffixes:
        keys.append(f"phase_{index}_{suffix}")
        keys.append(f"phase{index}{suffix.replace('_', '')}")
    return keys


def _phases(block: TemplateFields, rows: Sequence[ScoreRow]) -> list[SimulationPhase]:
    """Three simulation phases; per-phase fields win over block-wide ones.

    Phase bars fall back to the first, second and sixth (else third) score
    rows, skipping rows the fight does not have.
    """

    candidates = (_row_at(rows, 0), _row_at(rows, 1), _row_at(rows, 5) or _row_at(rows, 2))
    fallback_rows = [row for row in candidates if row is not None]
    global_mode = normalize_token(
        block.pick(["phase_mode", "phasemode", "mode", "simulation_mode", "simulationmode"])
    )
    global_animation = block.pick(
        [
            "phase_animation",
            "phaseanimation",
            "animation",
            "scenario",
            "preset",
            "simulation_animation",
            "simulationanimation",
        ]
    )
    global_lead = block.pick(["phase_actor", "phaseactor", "actor", "lead", "aggressor", "attacker"])

    phases: list[SimulationPhase] = []
    for position, (mode, animation, lead, label, a_value, b_value) in enumerate(_PHASE_DEFAULTS):
        index = position + 1
        row = _row_at(fallback_rows, position)
        title_keys, title_default = _PHASE_TITLES[position]
        default_label = row.label if row is not None else label
        mode_token = normalize_token(block.pick(_phase_keys(index, "mode", "type")))
        phases.append(
            SimulationPhase(
                index=index,
                mode=_phase_mode(mode_token or global_mode, mode),
                animation=resolve_fight_scenario_id(
                    block.pick(_phase_keys(index, "animation", "scenario", "preset"))
                    or global_animation,
                    animation,
                ),
                lead=resolve_fight_scenario_lead(
                    block.pick(_phase_keys(index, "actor", "lead", "aggressor", "attacker"))
                    or global_lead,
                    lead,
                ),
                title=block.pick(
                    _phase_keys(index, "title", "headline"),
                    block.line(position, title_keys, title_default),
                ),
                a_label=block.pick(_phase_keys(index, "a_label", "left_label"), default_label),
                b_label=block.pick(_phase_keys(index, "b_label", "right_label"), default_label),
                a_value=parse_percent_value(
                    block.pick(_phase_keys(index, "a_value", "left_value")),
                    float(row.a) if row is not None else a_value,
                ),
                b_value=parse_percent_value(
                    block.pick(_phase_keys(index, "b_value", "right_value")),
                    float(row.b) if row is not None else b_value,
                ),
            )
        )
    return phases


def _row_at(rows: Sequence[ScoreRow], index: int) -> ScoreRow | None:
    return rows[index] if index < len(rows) else None
