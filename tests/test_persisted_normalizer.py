from __future__ import annotations

import json
import re
from typing import Any

from core.importer.models import FighterFact, FightRecord, ImportSuccess, ParsedStat
from core.importer.text_parser import parse_vs_import_text
from core.storage.normalizer import (
    normalize_fight_collection,
    normalize_persisted_fight,
    normalize_persisted_import,
)

_DOCUMENT = """1. Superman
2. Stats
- Strength: 96
- Speed: 95
3. Feats
- Style: Range control
4. Defeated
- Doomsday
5. King Hyperion
6. Stats
- Strength: 92
7. Feats
- Regeneration
8. Defeated
- Thor
9. Order
- hud bars
- winner cv
Template Summary:
- winner: Superman
"""


def _import_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "fighterAName": "Superman",
        "fighterBName": "King Hyperion",
        "statsA": [{"label": "Strength", "value": 96}],
        "statsB": [{"label": "Strength", "value": 92}],
    }
    payload.update(overrides)
    return payload


def _fight(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": "fight-1",
        "name": "Superman vs King Hyperion",
        "fileName": "Superman vs King Hyperion.txt",
        "createdAt": 1_700_000_000_000,
        "payload": _import_payload(),
        "portraitADataUrl": "data:image/png;base64,AAAA",
        "portraitBDataUrl": "data:image/png;base64,BBBB",
    }
    record.update(overrides)
    return record


def test_persisted_round_trip_of_parsed_import() -> None:
    result = parse_vs_import_text(_DOCUMENT)
    assert isinstance(result, ImportSuccess)

    restored = normalize_persisted_import(result.data.to_persisted())

    assert restored == result.data


def test_import_requires_both_names() -> None:
    assert normalize_persisted_import(_import_payload(fighterBName="")) is None
    assert normalize_persisted_import(_import_payload(fighterAName=7)) is None
    assert normalize_persisted_import(["not", "a", "mapping"]) is None


def test_import_filters_stats_elementwise() -> None:
    restored = normalize_persisted_import(
        _import_payload(
            statsA=[
                {"label": "Strength", "value": "96"},
                {"label": "Speed", "value": None},
                {"label": "", "value": 5},
                {"label": "Durability", "value": 150.4},
                {"label": "Hax", "value": True},
                "junk",
            ]
        )
    )

    assert restored is not None
    assert restored.stats_a == [
        ParsedStat(label="Strength", value=96),
        ParsedStat(label="Durability", value=100),
    ]


def test_import_fills_fact_defaults_and_drops_empty_facts() -> None:
    restored = normalize_persisted_import(
        _import_payload(factsA=[{"title": "", "text": "Fast"}, {"title": "Mind"}, {}, 3])
    )

    assert restored is not None
    assert restored.facts_a == [
        FighterFact(title="Fact", text="Fast"),
        FighterFact(title="Mind", text="-"),
    ]


def test_import_resolves_template_order_and_blocks() -> None:
    restored = normalize_persisted_import(
        _import_payload(
            templateOrder=["hud-bars", "bogus", "Winner CV", 4],
            templateBlocks={"Summary": ["a", 3], "": ["x"], "Other": "nope"},
            winsA=["Thor", None, "Hulk"],
        )
    )

    assert restored is not None
    assert restored.template_order == ["hud-bars", "winner-cv"]
    assert restored.template_blocks == {"Summary": ["a"], "Other": []}
    assert restored.wins_a == ["Thor", "Hulk"]


def test_fight_requires_payload_and_portraits() -> None:
    assert normalize_persisted_fight(_fight(portraitBDataUrl="")) is None
    assert normalize_persisted_fight(_fight(payload={"fighterAName": "A"})) is None
    assert normalize_persisted_fight("fight") is None


def test_fight_regenerates_missing_identity_fields() -> None:
    record = normalize_persisted_fight(
        _fight(id="  ", name="", fileName=None, createdAt="soon"), index=3
    )

    assert record is not None
    assert re.fullmatch(r"fight-\d+-3-[0-9a-z]{6}", record.id)
    assert record.name == "Superman vs King Hyperion"
    assert record.file_name == "Superman vs King Hyperion.txt"
    assert record.created_at > 0


def test_fight_keeps_valid_fields() -> None:
    record = normalize_persisted_fight(_fight())

    assert record is not None
    assert record.id == "fight-1"
    assert record.created_at == 1_700_000_000_000
    assert record.portrait_a == "data:image/png;base64,AAAA"


def test_collection_drops_invalid_records_and_sorts_newest_first() -> None:
    fights = normalize_fight_collection(
        [
            _fight(id="old", createdAt=1),
            {"broken": True},
            _fight(id="new", createdAt=3),
            _fight(id="mid", createdAt=2),
        ]
    )

    assert [fight.id for fight in fights] == ["new", "mid", "old"]


def test_collection_rejects_non_list() -> None:
    assert normalize_fight_collection({"fights": []}) == []
    assert normalize_fight_collection(None) == []


def test_fight_record_round_trip_through_json() -> None:
    result = parse_vs_import_text(_DOCUMENT)
    assert isinstance(result, ImportSuccess)
    record = FightRecord(
        id="1700000000000-abc123",
        name="Superman vs King Hyperion",
        file_name="Superman vs King Hyperion.txt",
        created_at=1_700_000_000_000,
        payload=result.data,
        portrait_a="data:image/png;base64,AAAA",
        portrait_b="data:image/webp;base64,BBBB",
    )

    restored = normalize_persisted_fight(json.loads(json.dumps(record.to_persisted())))

    assert restored == record


def test_oversized_numbers_are_dropped_without_affecting_siblings() -> None:
    huge = json.loads("1" + "0" * 400)
    oversized = _fight(
        id="huge",
        createdAt=huge,
        payload=_import_payload(
            statsA=[{"label": "Strength", "value": 96}, {"label": "Speed", "value": huge}]
        ),
    )

    fights = normalize_fight_collection([oversized, _fight(id="ok", createdAt=5)])

    assert sorted(fight.id for fight in fights) == ["huge", "ok"]
    restored = next(fight for fight in fights if fight.id == "huge")
    assert restored.payload.stats_a == [ParsedStat(label="Strength", value=96)]
    assert 0 < restored.created_at < huge
