"""Static template catalog: canonical ids, presets and alias tables."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, get_args

TemplateId = Literal[
    "tactical-board",
    "character-card-a",
    "character-card-b",
    "hud-bars",
    "radar-brief",
    "winner-cv",
    "summary",
    "battle-dynamics",
    "x-factor",
    "interpretation",
    "fight-simulation",
    "stat-trap",
    "verdict-matrix",
    "blank-template",
]

LayoutMode = Literal[
    "tacticalBoard",
    "characterCardA",
    "characterCardB",
    "hudBars",
    "radarBrief",
    "winnerCv",
    "blankTemplate",
]


@dataclass(frozen=True)
class TemplatePreset:
    """Display defaults for one canonical template."""

    id: TemplateId
    name: str
    description: str
    layout: LayoutMode
    frame: Literal["neon", "gold", "tech"]
    theme: Literal["cosmic", "ember", "steel"]
    title: str
    subtitle: str


@dataclass(frozen=True)
class TemplateBlockRequirement:
    """Documented field alias groups for one ``Template <Name>:`` block."""

    template_id: TemplateId
    block: str
    purpose: str
    fields: tuple[str, ...]


TEMPLATE_PRESETS: tuple[TemplatePreset, ...] = (
    TemplatePreset(
        id="tactical-board",
        name="Tactical Board / Methodology",
        description="Half category board, half combat-reality lightning screen.",
        layout="tacticalBoard",
        frame="gold",
        theme="steel",
        title="TACTICAL BOARD // METHODOLOGY",
        subtitle="Category table and non-linear combat reality",
    ),
    TemplatePreset(
        id="character-card-a",
        name="Character Card A",
        description="Single full card for fighter A (more portrait space).",
        layout="characterCardA",
        frame="neon",
        theme="cosmic",
        title="CHARACTER DOSSIER // BLUE",
        subtitle="Archetype, style and tactical profile",
    ),
    TemplatePreset(
        id="character-card-b",
        name="Character Card B",
        description="Single full card for fighter B (more portrait space).",
        layout="characterCardB",
        frame="neon",
        theme="cosmic",
        title="CHARACTER DOSSIER // RED",
        subtitle="Archetype, style and tactical profile",
    ),
    TemplatePreset(
        id="hud-bars",
        name="HUD Bars",
        description="Military HUD look with long horizontal bars.",
        layout="hudBars",
        frame="tech",
        theme="cosmic",
        title="HIGH-END COMBAT ANALYTICS",
        subtitle="SUBJECTS: FIGHTER A // FIGHTER B",
    ),
    TemplatePreset(
        id="radar-brief",
        name="Radar Brief",
        description="Center radar, side winner notes, bottom score strip.",
        layout="radarBrief",
        frame="neon",
        theme="cosmic",
        title="PARAMETER COMPARISON",
        subtitle="Tactical summary with radial profile",
    ),
    TemplatePreset(
        id="winner-cv",
        name="Winner CV",
        description="List of top beaten opponents for both fighters.",
        layout="winnerCv",
        frame="tech",
        theme="cosmic",
        title="WINNERS CV REPORT",
        subtitle="Defeated opponents archive",
    ),
    TemplatePreset(
        id="summary",
        name="Summary",
        description="Summary card placeholder from imported template block.",
        layout="blankTemplate",
        frame="tech",
        theme="cosmic",
        title="SUMMARY",
        subtitle="Final summary block",
    ),
    TemplatePreset(
        id="battle-dynamics",
        name="Battle Dynamics",
        description="Battle dynamics placeholder for custom data.",
        layout="blankTemplate",
        frame="tech",
        theme="steel",
        title="BATTLE DYNAMICS",
        subtitle="Tempo, momentum and pressure",
    ),
    TemplatePreset(
        id="x-factor",
        name="X-Factor",
        description="Critical variable placeholder panel.",
        layout="blankTemplate",
        frame="tech",
        theme="cosmic",
        title="X-FACTOR",
        subtitle="Single variable with highest impact",
    ),
    TemplatePreset(
        id="interpretation",
        name="Interpretation",
        description="Interpretation placeholder for narrative readout.",
        layout="blankTemplate",
        frame="tech",
        theme="steel",
        title="INTERPRETATION",
        subtitle="Meaning behind raw stats",
    ),
    TemplatePreset(
        id="fight-simulation",
        name="Fight Simulation",
        description="Simulation placeholder for phase-by-phase scenario.",
        layout="blankTemplate",
        frame="tech",
        theme="cosmic",
        title="FIGHT SIMULATION",
        subtitle="Scenario timeline",
    ),
    TemplatePreset(
        id="stat-trap",
        name="Stat Trap",
        description="Non-linear trap placeholder.",
        layout="blankTemplate",
        frame="tech",
        theme="steel",
        title="STAT TRAP",
        subtitle="Why numbers can mislead",
    ),
    TemplatePreset(
        id="verdict-matrix",
        name="Verdict Matrix",
        description="Decision matrix placeholder.",
        layout="blankTemplate",
        frame="tech",
        theme="cosmic",
        title="VERDICT MATRIX",
        subtitle="Condition-based verdict grid",
    ),
    TemplatePreset(
        id="blank-template",
        name="New Template",
        description="Empty placeholder field for the next layout.",
        layout="blankTemplate",
        frame="tech",
        theme="cosmic",
        title="NEW TEMPLATE",
        subtitle="Placeholder area",
    ),
)

TEMPLATE_IDS: frozenset[str] = frozenset(get_args(TemplateId))
DEFAULT_TEMPLATE_ORDER: tuple[TemplateId, ...] = tuple(preset.id for preset in TEMPLATE_PRESETS)

_PRESETS_BY_ID: Mapping[str, TemplatePreset] = MappingProxyType(
    {preset.id: preset for preset in TEMPLATE_PRESETS}
)

# Keys are normalized tokens (see core.importer.tokens.normalize_token).
TEMPLATE_TOKEN_MAP: Mapping[str, TemplateId] = MappingProxyType(
    {
        "hudbars": "hud-bars",
        "hudbar": "hud-bars",
        "paskihud": "hud-bars",
        "parametercomparison": "radar-brief",
        "radarbrief": "radar-brief",
        "tacticalboard": "tactical-board",
        "tacticalboardmethodology": "tactical-board",
        "methodology": "tactical-board",
        "metodologia": "tactical-board",
        "winnercv": "winner-cv",
        "cvwinners": "winner-cv",
        "cvzwyciezcow": "winner-cv",
        "charactercarda": "character-card-a",
        "charactera": "character-card-a",
        "carda": "character-card-a",
        "charactercardb": "character-card-b",
        "characterb": "character-card-b",
        "cardb": "character-card-b",
        "podsumowanie": "summary",
        "summary": "summary",
        "dynamikastarcia": "battle-dynamics",
        "battledynamics": "battle-dynamics",
        "xfactor": "x-factor",
        "interpretacja": "interpretation",
        "interpretation": "interpretation",
        "symulacjawalki": "fight-simulation",
        "fightsimulation": "fight-simulation",
        "pulapkastatystyk": "stat-trap",
        "stattrap": "stat-trap",
        "matrycawerdyktu": "verdict-matrix",
        "verdictmatrix": "verdict-matrix",
        "newtemplate": "blank-template",
        "blanktemplate": "blank-template",
        "emptyfield": "blank-template",
    }
)

# Heading aliases matched loosely against ``Template <Name>:`` block headings.
TEMPLATE_BLOCK_ALIASES: Mapping[TemplateId, tuple[str, ...]] = MappingProxyType(
    {
        "character-card-a": (
            "character a",
            "character card a",
            "card a",
            "postac a",
            "karta postaci a",
        ),
        "character-card-b": (
            "character b",
            "character card b",
            "card b",
            "postac b",
            "karta postaci b",
        ),
        "tactical-board": ("tactical board", "methodology", "tablica taktyczna", "metodologia"),
        "hud-bars": ("hud bars", "paski hud"),
        "radar-brief": (
            "radar brief",
            "parameter comparison",
            "raport radarowy",
            "porownanie parametrow",
        ),
        "winner-cv": ("winner cv", "cv zwyciezcow", "zwyciezcy cv"),
        "summary": ("podsumowanie", "summary"),
        "battle-dynamics": ("dynamika starcia", "battle dynamics"),
        "x-factor": ("x-factor", "xfactor"),
        "interpretation": ("interpretacja", "interpretation"),
        "fight-simulation": ("symulacja walki", "fight simulation"),
        "stat-trap": ("pulapka statystyk", "stat trap"),
        "verdict-matrix": ("matryca werdyktu", "verdict matrix"),
        "blank-template": ("new template", "blank template", "nowy template"),
    }
)

_HEADLINE = "headline | header | title"
_SUBTITLE = "subtitle | purpose | note"
_PHASE_FIELDS = (
    "phase_<N>_mode | phase<N>mode | phase_<N>_type | phase<N>type",
    "phase_<N>_animation | phase<N>animation | phase_<N>_scenario | phase<N>scenario"
    " | phase_<N>_preset | phase<N>preset",
    "phase_<N>_actor | phase<N>actor | phase_<N>_lead | phase<N>lead"
    " | phase_<N>_aggressor | phase<N>aggressor | phase_<N>_attacker | phase<N>attacker",
    "phase_<N>_title | phase<N>title | phase_<N>_headline | phase<N>headline",
    "phase_<N>_a_label | phase<N>alabel | phase_<N>_left_label | phase<N>leftlabel",
    "phase_<N>_b_label | phase<N>blabel | phase_<N>_right_label | phase<N>rightlabel",
    "phase_<N>_a_value | phase<N>avalue | phase_<N>_left_value | phase<N>leftvalue",
    "phase_<N>_b_value | phase<N>bvalue | phase_<N>_right_value | phase<N>rightvalue",
    "phase_<N>_event | phase<N>event | phase_<N>_turn | phase<N>turn"
    " | phase_<N>_pivot | phase<N>pivot",
    "phase_<N>_branch_a | phase<N>brancha | phase_<N>_option_a | phase<N>optiona"
    " | phase_<N>_left_option | phase<N>leftoption",
    "phase_<N>_branch_b | phase<N>branchb | phase_<N>_option_b | phase<N>optionb"
    " | phase_<N>_right_option | phase<N>rightoption",
)
_CARD_FIELDS = (
    "header | title | headline",
    "world | swiat | version",
    "style",
    "atut | advantage",
    "mentalnosc | mentality",
    "quote | cytat",
)

TEMPLATE_BLOCK_REQUIREMENTS: tuple[TemplateBlockRequirement, ...] = (
    TemplateBlockRequirement(
        template_id="character-card-a",
        block="Character A",
        purpose="Card for the left fighter (blue corner).",
        fields=_CARD_FIELDS,
    ),
    TemplateBlockRequirement(
        template_id="character-card-b",
        block="Character B",
        purpose="Card for the right fighter (red corner).",
        fields=_CARD_FIELDS,
    ),
    TemplateBlockRequirement(
        template_id="tactical-board",
        block="Tactical Board",
        purpose="Category board + chaos panel.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "left_header | categories_header",
            "right_header | reality_header",
            "linear_label",
            "chaos_label",
            "lane | line_1 | line1",
        ),
    ),
    TemplateBlockRequirement(
        template_id="hud-bars",
        block="HUD Bars",
        purpose="Long horizontal statistics panel.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "threat_level",
            "integrity | data_integrity",
            "profile_mode",
            "scale",
        ),
    ),
    TemplateBlockRequirement(
        template_id="radar-brief",
        block="Radar Brief",
        purpose="Radar + left/right side advantages.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "left_header",
            "right_header",
            "draw_header",
            "favorite_label | favorite",
        ),
    ),
    TemplateBlockRequirement(
        template_id="winner-cv",
        block="Winner CV",
        purpose="List of defeated opponents.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "archive_label",
            "avg_label",
            "left_title",
            "right_title",
            "win_badge",
        ),
    ),
    TemplateBlockRequirement(
        template_id="summary",
        block="Summary",
        purpose="Final fight summary.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "winner | verdict",
            "line_1 | line1",
            "line_2 | line2",
            "line_3 | line3",
        ),
    ),
    TemplateBlockRequirement(
        template_id="battle-dynamics",
        block="Battle Dynamics",
        purpose="Fight tempo and pressure over time.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "a_curve | curve_a | blue_curve | left_curve",
            "b_curve | curve_b | red_curve | right_curve",
            "yellow_wave | wave | chaos_wave",
            "phase_1 | phase1",
            "phase_2 | phase2",
            "phase_3 | phase3",
            "analysis | note | line_4 | line4",
        ),
    ),
    TemplateBlockRequirement(
        template_id="x-factor",
        block="X-Factor",
        purpose="Most decisive variable.",
        fields=(
            _HEADLINE,
            "subtitle | note",
            "factor | headline",
            "a_value | left_value",
            "a_bonus | left_bonus",
            "a_bonus_label | left_bonus_label",
            "b_value | right_value",
            "b_bonus | right_bonus",
            "regen | regen_label",
            "mechanika | mechanics",
            "implikacja | implication",
            "psychologia | psychology",
        ),
    ),
    TemplateBlockRequirement(
        template_id="interpretation",
        block="Interpretation",
        purpose="Expert readout of the data.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "line_1 | line1 | thesis",
            "line_2 | line2 | antithesis",
            "line_3 | line3 | conclusion",
            "quote | line_4 | line4",
        ),
    ),
    TemplateBlockRequirement(
        template_id="fight-simulation",
        block="Fight Simulation",
        purpose="Three-phase simulation board.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "opening",
            "mid_fight | midfight",
            "late_fight | latefight",
            "end_condition | endcondition",
            "phase_mode | phasemode | mode | simulation_mode | simulationmode",
            "phase_animation | phaseanimation | animation | scenario | preset"
            " | simulation_animation | simulationanimation",
            "phase_actor | phaseactor | actor | lead | aggressor | attacker",
            *_PHASE_FIELDS,
        ),
    ),
    TemplateBlockRequirement(
        template_id="stat-trap",
        block="Stat Trap",
        purpose="Explains non-linear outcome mechanics.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "trap_top | top | line_1",
            "trap_bottom | bottom | line_2",
            "example | line_3",
            "question | line_4 | trap",
        ),
    ),
    TemplateBlockRequirement(
        template_id="verdict-matrix",
        block="Verdict Matrix",
        purpose="Condition-based verdict matrix.",
        fields=(
            _HEADLINE,
            _SUBTITLE,
            "col_left",
            "col_right",
            "row_top | standard | standard_ko",
            "row_bottom | deathmatch | kill_only",
            "case_1 | case1",
            "case_2 | case2",
            "case_3 | case3",
            "case_4 | case4",
        ),
    ),
    TemplateBlockRequirement(
        template_id="blank-template",
        block="Blank Template",
        purpose="Working blank field for the next layout.",
        fields=(_HEADLINE, _SUBTITLE, "line_1 | line1", "line_2 | line2", "line_3 | line3"),
    ),
)


def get_preset(template_id: str) -> TemplatePreset:
    """Return the preset for a canonical template id."""

    try:
        return _PRESETS_BY_ID[template_id]
    except KeyError as exc:
        raise ValueError(f"Unknown template id: {template_id}") from exc


def is_template_id(value: str) -> bool:
    return value in TEMPLATE_IDS


def _assert_catalog_alignment() -> None:
    """Fail fast when presets, aliases and requirements drift from the id set."""

    preset_ids = set(_PRESETS_BY_ID)
    alias_ids = set(TEMPLATE_BLOCK_ALIASES)
    requirement_ids = {item.template_id for item in TEMPLATE_BLOCK_REQUIREMENTS}
    token_targets = set(TEMPLATE_TOKEN_MAP.values())
    if (
        preset_ids != TEMPLATE_IDS
        or alias_ids != TEMPLATE_IDS
        or requirement_ids != TEMPLATE_IDS
        or not token_targets <= TEMPLATE_IDS
        or len(DEFAULT_TEMPLATE_ORDER) != len(TEMPLATE_IDS)
    ):
        raise RuntimeError(
            "Template catalog tables must cover the canonical id set: "
            f"presets={sorted(preset_ids)}, aliases={sorted(alias_ids)}, "
            f"requirements={sorted(requirement_ids)}"
        )


_assert_catalog_alignment()
