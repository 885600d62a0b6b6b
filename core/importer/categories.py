"""Category synthesis: reconcile two authored stat lists into one schema."""

from __future__ import annotations

from collections.abc import Sequence

from core.importer.defaults import DEFAULT_CATEGORIES
from core.importer.models import Category, CategoryPayload, ParsedStat
from core.importer.tokens import clamp_stat, normalize_token, slugify

DEFAULT_STAT_VALUE = 50


def build_category_payload(
    stats_a: Sequence[ParsedStat],
    stats_b: Sequence[ParsedStat],
    default_value: int = DEFAULT_STAT_VALUE,
) -> CategoryPayload:
    """Merge both stat lists into an ordered, collision-free category schema.

    Rules:
    - Order is A's labels as authored, then labels only B introduced.
    - Labels equal under ``normalize_token`` share one category; the first
      literal label seen wins.
    - Ids are slugs of that label, suffixed ``-2``, ``-3``... on collision.
    - Every category gets ``default_value`` for a side that did not rate it.
    - With no stats at all, the built-in default categories are used.
    """

    ordered_keys: list[str] = []
    first_label_by_key: dict[str, str] = {}
    for stat in (*stats_a, *stats_b):
        key = normalize_token(stat.label)
        if not key or key in first_label_by_key:
            continue
        ordered_keys.append(key)
        first_label_by_key[key] = stat.label

    if not ordered_keys:
        categories = list(DEFAULT_CATEGORIES)
        return CategoryPayload(
            categories=categories,
            stats_a={category.id: default_value for category in categories},
            stats_b={category.id: default_value for category in categories},
        )

    used_ids: set[str] = set()
    categories: list[Category] = []
    id_by_key: dict[str, str] = {}
    for index, key in enumerate(ordered_keys):
        label = first_label_by_key[key]
        base_id = slugify(label) or f"stat-{index + 1}"
        category_id = base_id
        suffix = 2
        while category_id in used_ids:
            category_id = f"{base_id}-{suffix}"
            suffix += 1
        used_ids.add(category_id)
        id_by_key[key] = category_id
        categories.append(Category(id=category_id, label=label))

    return CategoryPayload(
        categories=categories,
        stats_a=_stat_record(categories, stats_a, id_by_key, default_value),
        stats_b=_stat_record(categories, stats_b, id_by_key, default_value),
    )


def _stat_record(
    categories: list[Category],
    stats: Sequence[ParsedStat],
    id_by_key: dict[str, str],
    default_value: int,
) -> dict[str, int]:
    record = {category.id: default_value for category in categories}
    for stat in stats:
        category_id = id_by_key.get(normalize_token(stat.label))
        if category_id is not None:
            record[category_id] = clamp_stat(stat.value)
    return record
