from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.importer.models import FightRecord, ParsedImport, ParsedStat
from core.storage.store import JsonFileFightStore, JsonFileLegacySource
from core.utils.errors import StoreError


def _record(fight_id: str, created_at: int) -> FightRecord:
    return FightRecord(
        id=fight_id,
        name=f"{fight_id} fight",
        file_name=f"{fight_id}.txt",
        created_at=created_at,
        payload=ParsedImport(
            fighter_a_name="Superman",
            fighter_b_name="King Hyperion",
            stats_a=[ParsedStat(label="Strength", value=96)],
            stats_b=[ParsedStat(label="Strength", value=92)],
            template_order=["summary"],
        ),
        portrait_a="data:image/png;base64,AAAA",
        portrait_b="data:image/png;base64,BBBB",
    )


@pytest.mark.anyio
async def test_store_initializes_empty(tmp_path: Path) -> None:
    store = JsonFileFightStore(tmp_path / "fights.json")

    assert await store.read_all() == []
    assert await store.get_meta("activeFightId") is None
    assert not store.path.exists()


@pytest.mark.anyio
async def test_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "fights.json"
    fights = [_record("b", 2), _record("a", 1)]

    await JsonFileFightStore(path).write_all(fights)

    assert await JsonFileFightStore(path).read_all() == fights
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["version"] == 1
    assert raw["fights"][0]["portraitADataUrl"] == "data:image/png;base64,AAAA"
    assert list(path.parent.glob("*.tmp")) == []


@pytest.mark.anyio
async def test_store_keeps_one_record_per_id(tmp_path: Path) -> None:
    path = tmp_path / "fights.json"
    replacement = _record("a", 3).model_copy(update={"name": "rematch"})

    await JsonFileFightStore(path).write_all([_record("a", 1), _record("b", 2), replacement])

    stored = await JsonFileFightStore(path).read_all()
    assert [(fight.id, fight.name) for fight in stored] == [("a", "rematch"), ("b", "b fight")]
    assert len(json.loads(path.read_text(encoding="utf-8"))["fights"]) == 2


@pytest.mark.anyio
async def test_store_meta_set_and_clear(tmp_path: Path) -> None:
    store = JsonFileFightStore(tmp_path / "fights.json")
    await store.write_all([_record("a", 1)])

    await store.set_meta("activeFightId", "a")
    assert await store.get_meta("activeFightId") == "a"
    assert len(await store.read_all()) == 1

    await store.set_meta("activeFightId", None)
    assert await store.get_meta("activeFightId") is None


@pytest.mark.anyio
async def test_store_drops_invalid_records_on_read(tmp_path: Path) -> None:
    path = tmp_path / "fights.json"
    valid = _record("a", 1).to_persisted()
    path.write_text(
        json.dumps({"version": 1, "fights": [valid, {"id": "broken"}], "meta": {}}),
        encoding="utf-8",
    )

    fights = await JsonFileFightStore(path).read_all()

    assert [fight.id for fight in fights] == ["a"]


@pytest.mark.anyio
async def test_store_raises_for_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "fights.json"
    path.write_text("{broken", encoding="utf-8")

    with pytest.raises(StoreError, match="Invalid fight store JSON"):
        await JsonFileFightStore(path).read_all()


@pytest.mark.anyio
async def test_store_raises_for_non_object_document(tmp_path: Path) -> None:
    path = tmp_path / "fights.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(StoreError, match="must contain an object"):
        await JsonFileFightStore(path).get_meta("activeFightId")


@pytest.mark.anyio
async def test_legacy_source_reads_and_clears(tmp_path: Path) -> None:
    path = tmp_path / "legacy.json"
    serialized = json.dumps([_record("a", 1).to_persisted()])
    path.write_text(
        json.dumps({"fights": serialized, "activeFightId": "a"}),
        encoding="utf-8",
    )
    legacy = JsonFileLegacySource(path)

    assert await legacy.read_fights() == serialized
    assert await legacy.read_active_id() == "a"

    await legacy.clear()
    assert not path.exists()
    assert await legacy.read_fights() is None
    assert await legacy.read_active_id() is None


@pytest.mark.anyio
async def test_legacy_source_ignores_unreadable_snapshot(tmp_path: Path) -> None:
    path = tmp_path / "legacy.json"
    path.write_text("not json", encoding="utf-8")

    assert await JsonFileLegacySource(path).read_fights() is None
