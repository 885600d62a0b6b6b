from __future__ import annotations

from core.importer.models import ImportSuccess
from core.importer.text_parser import parse_vs_import_text
from core.templates.blocks import find_template_block
from core.templates.blueprint import build_import_blueprint
from core.templates.catalog import DEFAULT_TEMPLATE_ORDER, TEMPLATE_BLOCK_REQUIREMENTS


def test_blueprint_parses_with_full_template_order() -> None:
    result = parse_vs_import_text(build_import_blueprint())

    assert isinstance(result, ImportSuccess)
    assert result.data.template_order == list(DEFAULT_TEMPLATE_ORDER)
    assert result.data.fighter_a_name == "Fighter A"
    assert result.data.fighter_b_name == "Fighter B"
    assert len(result.data.stats_a) == 3


def test_blueprint_has_one_block_per_requirement() -> None:
    result = parse_vs_import_text(build_import_blueprint())

    assert isinstance(result, ImportSuccess)
    blocks = result.data.template_blocks
    assert len(blocks) == len(TEMPLATE_BLOCK_REQUIREMENTS)
    for requirement in TEMPLATE_BLOCK_REQUIREMENTS:
        lines = find_template_block(blocks, requirement.template_id)
        assert lines[0] == f"purpose: {requirement.purpose}"
        assert len(lines) == len(requirement.fields) + 1
