"""Fight persistence boundary and the JSON-file reference stores."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol

from core.importer.models import FightRecord
from core.storage.normalizer import normalize_fight_collection
from core.utils.errors import StoreError

logger = logging.getLogger("versus.storage")

_STORE_VERSION = 1
META_ACTIVE_FIGHT_KEY = "activeFightId"


class FightStore(Protocol):
    """Opaque asynchronous key-value store for fight records.

    Callers must not issue overlapping writes to the same store.
    """

    async def read_all(self) -> list[FightRecord]: ...

    async def write_all(self, fights: list[FightRecord]) -> None: ...

    async def get_meta(self, key: str) -> str | None: ...

    async def set_meta(self, key: str, value: str | None) -> None: ...


class LegacyFightSource(Protocol):
    """Flat serialized snapshot written by earlier versions."""

    async def read_fights(self) -> str | None: ...

    async def read_active_id(self) -> str | None: ...

    async def clear(self) -> None: ...


class JsonFileFightStore:
    """Persist fight records and metadata in one JSON document."""

    def __init__(self, store_path: Path) -> None:
        self._store_path = store_path

    @property
    def path(self) -> Path:
        return self._store_path

    async def read_all(self) -> list[FightRecord]:
        data = await asyncio.to_thread(self._read_data)
        return normalize_fight_collection(data.get("fights"))

    async def write_all(self, fights: list[FightRecord]) -> None:
        """Replace stored records; a later record replaces an earlier one with the same id."""

        by_id = {fight.id: fight.to_persisted() for fight in fights}
        await asyncio.to_thread(self._update, fights=list(by_id.values()))

    async def get_meta(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read_data)
        meta = data.get("meta")
        if not isinstance(meta, dict):
            return None
        value = meta.get(key)
        return value if isinstance(value, str) and value.strip() else None

    async def set_meta(self, key: str, value: str | None) -> None:
        await asyncio.to_thread(self._update, meta_key=key, meta_value=value)

    def _update(
        self,
        *,
        fights: list[dict[str, Any]] | None = None,
        meta_key: str | None = None,
        meta_value: str | None = None,
    ) -> None:
        data = self._read_data()
        stored_meta = data.get("meta")
        meta = dict(stored_meta) if isinstance(stored_meta, dict) else {}
        if fights is not None:
            data["fights"] = fights
        if meta_key is not None:
            if meta_value and meta_value.strip():
                meta[meta_key] = meta_value
            else:
                meta.pop(meta_key, None)
        data["meta"] = meta
        data["version"] = _STORE_VERSION
        self._write_data(data)

    def _read_data(self) -> dict[str, Any]:
        if not self._store_path.exists():
            return {"version": _STORE_VERSION, "fights": [], "meta": {}}

        try:
            raw = json.loads(self._store_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise StoreError(f"Invalid fight store JSON: {self._store_path}") from exc

        if not isinstance(raw, dict):
            raise StoreError(f"Fight store must contain an object: {self._store_path}")
        return raw

    def _write_data(self, data: dict[str, Any]) -> None:
        self._store_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._store_path.with_suffix(f"{self._store_path.suffix}.tmp")
        temp_path.write_text(
            json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False),
            encoding="utf-8",
        )
        temp_path.replace(self._store_path)


class JsonFileLegacySource:
    """Legacy snapshot: ``{"fights": "<json string>", "activeFightId": "..."}``."""

    def __init__(self, path: Path) -> None:
        self._path = path

    async def read_fights(self) -> str | None:
        data = await asyncio.to_thread(self._read)
        value = data.get("fights")
        return value if isinstance(value, str) else None

    async def read_active_id(self) -> str | None:
        data = await asyncio.to_thread(self._read)
        value = data.get("activeFightId")
        return value if isinstance(value, str) and value.strip() else None

    async def clear(self) -> None:
        await asyncio.to_thread(self._path.unlink, missing_ok=True)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable legacy fight snapshot: %s", self._path)
            return {}
        return raw if isinstance(raw, dict) else {}
