"""Fight-simulation scenario and lead-side resolution from block fields."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal

from core.importer.tokens import normalize_token

FightScenarioId = Literal[
    "orbit-harass",
    "hit-and-run",
    "rush-ko",
    "clash-lock",
    "kite-zone",
    "teleport-burst",
    "feint-counter",
    "grapple-pin",
    "corner-trap",
    "regen-attrition",
    "berserk-overextend",
    "trade-chaos",
]
FightScenarioLead = Literal["a", "b"]

FIGHT_SCENARIO_LABELS: Mapping[FightScenarioId, str] = MappingProxyType(
    {
        "orbit-harass": "Orbit Harass",
        "hit-and-run": "Hit and Run",
        "rush-ko": "Rush KO",
        "clash-lock": "Clash Lock",
        "kite-zone": "Kite Zone",
        "teleport-burst": "Teleport Burst",
        "feint-counter": "Feint Counter",
        "grapple-pin": "Grapple Pin",
        "corner-trap": "Corner Trap",
        "regen-attrition": "Regen Attrition",
        "berserk-overextend": "Berserk Overextend",
        "trade-chaos": "Trade Chaos",
    }
)

FIGHT_SCENARIO_ALIASES: Mapping[str, FightScenarioId] = MappingProxyType(
    {
        "orbitharass": "orbit-harass",
        "orbit": "orbit-harass",
        "spinrush": "orbit-harass",
        "hitandrun": "hit-and-run",
        "hitrun": "hit-and-run",
        "rushko": "rush-ko",
        "speedblitz": "rush-ko",
        "clashlock": "clash-lock",
        "lock": "clash-lock",
        "kitezone": "kite-zone",
        "kite": "kite-zone",
        "teleportburst": "teleport-burst",
        "teleport": "teleport-burst",
        "feintcounter": "feint-counter",
        "feint": "feint-counter",
        "grapplepin": "grapple-pin",
        "grapple": "grapple-pin",
        "cornertrap": "corner-trap",
        "corner": "corner-trap",
        "regenattrition": "regen-attrition",
        "regen": "regen-attrition",
        "berserkoverextend": "berserk-overextend",
        "overextend": "berserk-overextend",
        "tradechaos": "trade-chaos",
        "chaos": "trade-chaos",
    }
)

_LEAD_TOKENS: Mapping[FightScenarioLead, frozenset[str]] = MappingProxyType(
    {
        "a": frozenset(
            {
                "a",
                "1",
                "fighter1",
                "character1",
                "char1",
                "postac1",
                "pojedynkowicz1",
                "left",
                "blue",
                "fightera",
                "charactera",
                "cornera",
                "aggressora",
                "attackera",
                "leada",
            }
        ),
        "b": frozenset(
            {
                "b",
                "2",
                "fighter2",
                "character2",
                "char2",
                "postac2",
                "pojedynkowicz2",
                "right",
                "red",
                "fighterb",
                "characterb",
                "cornerb",
                "aggressorb",
                "attackerb",
                "leadb",
            }
        ),
    }
)


def resolve_fight_scenario_id(value: str | None, fallback: FightScenarioId) -> FightScenarioId:
    if not value:
        return fallback
    return FIGHT_SCENARIO_ALIASES.get(normalize_token(value), fallback)


def resolve_fight_scenario_lead(
    value: str | None, fallback: FightScenarioLead
) -> FightScenarioLead:
    """Map side tokens such as ``left``, ``blue`` or ``fighter2`` to a lead."""

    if not value:
        return fallback
    token = normalize_token(value)
    for lead, tokens in _LEAD_TOKENS.items():
        if token in tokens:
            return lead
    return fallback
