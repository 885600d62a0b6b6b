from __future__ import annotations

import pytest

from core.importer.tokens import normalize_token
from core.templates.catalog import (
    DEFAULT_TEMPLATE_ORDER,
    TEMPLATE_BLOCK_ALIASES,
    TEMPLATE_BLOCK_REQUIREMENTS,
    TEMPLATE_IDS,
    TEMPLATE_PRESETS,
    TEMPLATE_TOKEN_MAP,
    get_preset,
    is_template_id,
)


def test_catalog_covers_fourteen_templates() -> None:
    assert len(TEMPLATE_IDS) == 14
    assert len(DEFAULT_TEMPLATE_ORDER) == 14
    assert set(DEFAULT_TEMPLATE_ORDER) == TEMPLATE_IDS
    assert DEFAULT_TEMPLATE_ORDER[0] == "tactical-board"


def test_token_map_keys_are_normalized_tokens() -> None:
    for key, template_id in TEMPLATE_TOKEN_MAP.items():
        assert normalize_token(key) == key
        assert is_template_id(template_id)


def test_every_template_has_aliases_and_requirements() -> None:
    assert set(TEMPLATE_BLOCK_ALIASES) == TEMPLATE_IDS
    assert {item.template_id for item in TEMPLATE_BLOCK_REQUIREMENTS} == TEMPLATE_IDS
    assert all(aliases for aliases in TEMPLATE_BLOCK_ALIASES.values())


def test_get_preset() -> None:
    preset = get_preset("hud-bars")

    assert preset.name == "HUD Bars"
    assert preset in TEMPLATE_PRESETS


def test_get_preset_rejects_unknown_id() -> None:
    with pytest.raises(ValueError, match="Unknown template id"):
        get_preset("hud bars")
