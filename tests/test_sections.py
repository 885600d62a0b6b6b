from __future__ import annotations

from core.importer.sections import (
    Section,
    first_missing_section,
    pick_name_from_section,
    split_sections,
)


def test_split_sections_keys_by_number_and_keeps_blank_lines() -> None:
    raw = "preamble\r\n1. Superman\r\n\r\n2. Stats\r\n- Strength: 96\r\n"

    sections = split_sections(raw)

    assert sorted(sections) == [1, 2]
    assert sections[1].title == "Superman"
    assert sections[1].lines == [""]
    assert sections[2].lines == ["- Strength: 96", ""]


def test_split_sections_last_duplicate_wins() -> None:
    sections = split_sections("1. First\n- a\n1. Second\n- b\n")

    assert sections[1].title == "Second"
    assert sections[1].lines == ["- b", ""]


def test_first_missing_section_reports_lowest_gap() -> None:
    sections = split_sections("1. A\n2. B\n3. C\n5. E\n6. F\n7. G\n8. H\n")

    assert first_missing_section(sections) == 4


def test_first_missing_section_none_when_complete() -> None:
    sections = split_sections("\n".join(f"{number}. x" for number in range(1, 9)))

    assert first_missing_section(sections) is None


def test_pick_name_uses_heading_text() -> None:
    section = Section(number=1, title="(Superman)", lines=["- ignored"])

    assert pick_name_from_section(section, "Fighter A") == "Superman"


def test_pick_name_skips_placeholder_heading_for_first_bullet() -> None:
    section = Section(number=1, title="(Character A Name)", lines=["", "- King Hyperion"])

    assert pick_name_from_section(section, "Fighter A") == "King Hyperion"


def test_pick_name_falls_back_to_first_non_blank_line() -> None:
    section = Section(number=5, title="Name", lines=["", "  Batman  "])

    assert pick_name_from_section(section, "Fighter B") == "Batman"


def test_pick_name_uses_fallback_when_nothing_usable() -> None:
    section = Section(number=5, title="", lines=["", "   "])

    assert pick_name_from_section(section, "Fighter B") == "Fighter B"
