from __future__ import annotations

import pytest

from core.templates.scenarios import (
    FIGHT_SCENARIO_ALIASES,
    FIGHT_SCENARIO_LABELS,
    resolve_fight_scenario_id,
    resolve_fight_scenario_lead,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Hit & Run", "hit-and-run"),
        ("orbit", "orbit-harass"),
        ("GRAPPLE", "grapple-pin"),
        ("trade-chaos", "trade-chaos"),
        ("moonwalk", "rush-ko"),
        (None, "rush-ko"),
        ("", "rush-ko"),
    ],
)
def test_resolve_fight_scenario_id(value: str | None, expected: str) -> None:
    assert resolve_fight_scenario_id(value, "rush-ko") == expected


def test_every_scenario_alias_targets_a_labelled_scenario() -> None:
    assert set(FIGHT_SCENARIO_ALIASES.values()) == set(FIGHT_SCENARIO_LABELS)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Left", "a"),
        ("blue", "a"),
        ("Fighter 2", "b"),
        ("red", "b"),
        ("B", "b"),
        ("nobody", "a"),
        (None, "a"),
    ],
)
def test_resolve_fight_scenario_lead(value: str | None, expected: str) -> None:
    assert resolve_fight_scenario_lead(value, "a") == expected
