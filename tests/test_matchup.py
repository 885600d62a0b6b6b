from __future__ import annotations

import pytest

from core.importer.matchup import (
    Matchup,
    enforce_file_name_side_order,
    parse_matchup_from_file_name,
    strip_file_extension,
    swap_import_sides,
)
from core.importer.models import FighterFact, ParsedImport, ParsedStat


def _payload() -> ParsedImport:
    return ParsedImport(
        fighter_a_name="Superman",
        fighter_b_name="King Hyperion",
        stats_a=[ParsedStat(label="Strength", value=96)],
        stats_b=[ParsedStat(label="Strength", value=92)],
        facts_a=[FighterFact(title="Style", text="Control")],
        facts_b=[FighterFact(title="Style", text="Pressure")],
        wins_a=["Doomsday"],
        wins_b=["Thor"],
        template_order=["hud-bars", "summary"],
        template_blocks={"Summary": ["winner: Superman"]},
    )


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("Superman vs King Hyperion.txt", Matchup("Superman", "King Hyperion")),
        ("superman_vs_king_hyperion.txt", Matchup("superman", "king hyperion")),
        ("Goku VS. Vegeta.md", Matchup("Goku", "Vegeta")),
        ("Hulk versus Thor", Matchup("Hulk", "Thor")),
        ("Pudzian kontra Najman.txt", Matchup("Pudzian", "Najman")),
        ("Batman v Joker.txt", Matchup("Batman", "Joker")),
        ("Dr. Doom vs Thanos.txt", Matchup("Dr. Doom", "Thanos")),
    ],
)
def test_parse_matchup_from_file_name(file_name: str, expected: Matchup) -> None:
    assert parse_matchup_from_file_name(file_name) == expected


@pytest.mark.parametrize("file_name", ["notes.txt", "vs.txt", "Superman vs .txt", ""])
def test_parse_matchup_rejects_non_matchup_names(file_name: str) -> None:
    assert parse_matchup_from_file_name(file_name) is None


def test_strip_file_extension() -> None:
    assert strip_file_extension("A vs B.txt") == "A vs B"
    assert strip_file_extension("no-extension") == "no-extension"


def test_swap_twice_restores_original() -> None:
    payload = _payload()

    assert swap_import_sides(swap_import_sides(payload)) == payload


def test_swap_exchanges_only_paired_fields() -> None:
    swapped = swap_import_sides(_payload())

    assert swapped.fighter_a_name == "King Hyperion"
    assert swapped.stats_a == [ParsedStat(label="Strength", value=92)]
    assert swapped.facts_b == [FighterFact(title="Style", text="Control")]
    assert swapped.wins_a == ["Thor"]
    assert swapped.template_order == ["hud-bars", "summary"]
    assert swapped.template_blocks == {"Summary": ["winner: Superman"]}


def test_enforce_swaps_when_file_name_reverses_sides() -> None:
    ordered = enforce_file_name_side_order(_payload(), "King Hyperion vs Superman.txt")

    assert ordered.fighter_a_name == "King Hyperion"
    assert ordered.fighter_b_name == "Superman"
    assert ordered.stats_a == [ParsedStat(label="Strength", value=92)]
    assert ordered.wins_b == ["Doomsday"]


def test_enforce_keeps_order_and_adopts_file_name_spelling() -> None:
    ordered = enforce_file_name_side_order(_payload(), "superman_vs_king_hyperion.txt")

    assert ordered.fighter_a_name == "superman"
    assert ordered.fighter_b_name == "king hyperion"
    assert ordered.stats_a == [ParsedStat(label="Strength", value=96)]


def test_enforce_without_matchup_returns_payload_unchanged() -> None:
    payload = _payload()

    assert enforce_file_name_side_order(payload, "import.txt") == payload


def test_enforce_does_not_mutate_input() -> None:
    payload = _payload()

    enforce_file_name_side_order(payload, "King Hyperion vs Superman.txt")

    assert payload == _payload()
