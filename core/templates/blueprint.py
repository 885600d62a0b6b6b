"""Example import document covering every section and template block."""

from __future__ import annotations

from core.templates.catalog import TEMPLATE_BLOCK_REQUIREMENTS, TEMPLATE_PRESETS


def build_import_blueprint() -> str:
    """Return a ready-to-edit import document.

    Sections 1-9 carry sample data and the full template order; every
    template block lists its purpose and the accepted field alias groups.
    """

    lines = [
        "1. (Character A Name)",
        "2. (Character A Stats)",
        "- Strength: 96",
        "- Speed: 95",
        "- Durability: 94",
        "3. (Character A Feats)",
        "- Style: Range control and pace control",
        "- Advantage: Tactical discipline",
        "- Mentality: Win by decision, avoid collateral damage",
        "4. (Defeated by Character A)",
        "- Doomsday",
        "- Brainiac",
        "5. (Character B Name)",
        "6. (Character B Stats)",
        "- Strength: 92",
        "- Speed: 84",
        "- Durability: 95",
        "7. (Character B Feats)",
        "- Style: Aggressive distance closing",
        "- Advantage: Extreme regeneration",
        "- Mentality: Break the opponent at any cost",
        "8. (Defeated by Character B)",
        "- Thor",
        "- Hulk",
        "9. (Template Order Used In This Fight)",
    ]
    lines.extend(f"- {preset.id}" for preset in TEMPLATE_PRESETS)
    lines.append("")
    lines.append("# Template blocks (optional / extended)")
    for requirement in TEMPLATE_BLOCK_REQUIREMENTS:
        lines.append(f"Template {requirement.block}:")
        lines.append(f"- purpose: {requirement.purpose}")
        lines.extend(f"- {field_group}:" for field_group in requirement.fields)
        lines.append("")
    return "\n".join(lines)
