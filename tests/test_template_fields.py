from __future__ import annotations

import pytest

from core.importer.models import FighterFact
from core.templates.fields import (
    TemplateFields,
    build_card_facts,
    parse_curve_values,
    parse_percent_value,
    parse_template_field_map,
    pick_template_field,
    plain_template_lines,
)


def test_field_map_normalizes_keys_and_last_occurrence_wins() -> None:
    fields = parse_template_field_map(
        ["- Headline: Big Fight", "- Phase_1 = Opening", "plain line", "- headline: Later"]
    )

    assert fields == {"headline": "Later", "phase1": "Opening"}


def test_field_map_skips_empty_values() -> None:
    assert parse_template_field_map(["- winner:   ", "- : orphan"]) == {}


def test_pick_template_field_uses_first_present_alias() -> None:
    fields = {"header": "H", "title": "T"}

    assert pick_template_field(fields, ["headline", "title", "header"]) == "T"
    assert pick_template_field(fields, ["Line_1", "line1"], "fallback") == "fallback"


def test_template_fields_line_prefers_named_then_plain_lines() -> None:
    block = TemplateFields.from_lines(["- line_2: Named", "First plain", "Second plain"])

    assert plain_template_lines(["- line_2: Named", "First plain"]) == ["First plain"]
    assert block.line(0, ["line_1", "line1"]) == "First plain"
    assert block.line(1, ["line_2", "line2"]) == "Named"
    assert block.line(5, ["line_6"], "-") == "-"


def test_parse_curve_values_scales_fractions_and_clamps() -> None:
    values = parse_curve_values("20, 45%; 0.8 | 130 abc", [1.0])

    assert values == pytest.approx([20.0, 45.0, 80.0, 100.0])


def test_parse_curve_values_falls_back_when_nothing_parses() -> None:
    assert parse_curve_values("n/a", [10.0, 20.0]) == [10.0, 20.0]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("75%", 75.0), ("0.5", 50.0), ("-4", 0.0), ("wide", 12.0), ("inf", 12.0)],
)
def test_parse_percent_value(raw: str, expected: float) -> None:
    assert parse_percent_value(raw, 12.0) == pytest.approx(expected)


def test_build_card_facts_overrides_imported_facts() -> None:
    imported = [
        FighterFact(title="Style", text="Boxer"),
        FighterFact(title="Advantage", text="Reach"),
        FighterFact(title="Mentality", text="Calm"),
    ]

    facts = build_card_facts(imported, {"atut": "Speed"})

    assert facts == [
        FighterFact(title="Style", text="Boxer"),
        FighterFact(title="Advantage", text="Speed"),
        FighterFact(title="Mentality", text="Calm"),
    ]


def test_build_card_facts_without_fallback_uses_dash() -> None:
    facts = build_card_facts([], {"mentality": "Focused"})

    assert [fact.text for fact in facts] == ["-", "-", "Focused"]
