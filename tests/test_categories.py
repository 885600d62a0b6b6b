from __future__ import annotations

from core.importer.categories import build_category_payload
from core.importer.defaults import DEFAULT_CATEGORIES
from core.importer.models import Category, ParsedStat


def _stats(*pairs: tuple[str, int]) -> list[ParsedStat]:
    return [ParsedStat(label=label, value=value) for label, value in pairs]


def test_categories_follow_a_then_b_only_labels() -> None:
    payload = build_category_payload(
        _stats(("Strength", 96), ("Speed", 95)),
        _stats(("Speed", 84), ("Regeneration", 99), ("Strength", 92)),
    )

    assert payload.categories == [
        Category(id="strength", label="Strength"),
        Category(id="speed", label="Speed"),
        Category(id="regeneration", label="Regeneration"),
    ]


def test_labels_equal_after_normalization_share_one_category() -> None:
    payload = build_category_payload(
        _stats(("Combat IQ", 90)),
        _stats(("combat-iq", 80)),
    )

    assert payload.categories == [Category(id="combat-iq", label="Combat IQ")]
    assert payload.stats_a == {"combat-iq": 90}
    assert payload.stats_b == {"combat-iq": 80}


def test_unrated_categories_get_default_value() -> None:
    payload = build_category_payload(
        _stats(("Strength", 96), ("Hax", 80)),
        _stats(("Strength", 92)),
        default_value=10,
    )

    assert payload.stats_b == {"strength": 92, "hax": 10}


def test_every_category_is_rated_on_both_sides_with_unique_ids() -> None:
    payload = build_category_payload(
        _stats(("Siła", 90), ("Speed", 70), ("Durability", 60)),
        _stats(("Stamina", 40), ("speed", 75)),
    )

    ids = [category.id for category in payload.categories]
    assert len(ids) == len(set(ids))
    assert set(payload.stats_a) == set(ids)
    assert set(payload.stats_b) == set(ids)
    assert all(0 <= value <= 100 for value in payload.stats_a.values())


def test_labels_without_alphanumerics_are_ignored() -> None:
    payload = build_category_payload(_stats(("???", 50), ("Speed", 70)), _stats(("Speed", 60)))

    assert [category.id for category in payload.categories] == ["speed"]


def test_no_stats_fall_back_to_default_categories() -> None:
    payload = build_category_payload([], [])

    assert payload.categories == list(DEFAULT_CATEGORIES)
    assert set(payload.stats_a.values()) == {50}
    assert payload.stats_a == payload.stats_b
