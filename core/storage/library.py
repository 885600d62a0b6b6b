"""Fight library: restore, legacy migration and record lifecycle."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from core.importer.matchup import strip_file_extension
from core.importer.models import FightRecord, ParsedImport
from core.importer.tokens import normalize_token
from core.storage.normalizer import normalize_fight_collection, now_ms, random_suffix
from core.storage.store import META_ACTIVE_FIGHT_KEY, FightStore, LegacyFightSource
from core.utils.errors import FightNotFoundError, StoreError

logger = logging.getLogger("versus.storage")

NEW_FIGHT_NAME = "New Fight"


@dataclass(frozen=True)
class RestoreReport:
    """Outcome of ``FightLibrary.restore``."""

    fight_count: int
    active_fight_id: str | None
    migrated_from_legacy: bool
    primary_unreadable: bool = False


def find_fight_by_query(fights: list[FightRecord], query: str) -> FightRecord | None:
    """Match a query against record names and file names, extension-insensitive."""

    cleaned = strip_file_extension(query).strip()
    token = normalize_token(cleaned)
    if not token:
        return None
    for fight in fights:
        if (
            normalize_token(strip_file_extension(fight.name)) == token
            or normalize_token(strip_file_extension(fight.file_name)) == token
        ):
            return fight
    return None


class FightLibrary:
    """In-memory view of stored fights backed by a ``FightStore``.

    Every mutation is written through to the store immediately.
    """

    def __init__(self, store: FightStore, legacy: LegacyFightSource | None = None) -> None:
        self._store = store
        self._legacy = legacy
        self._fights: list[FightRecord] = []
        self._active_fight_id: str | None = None

    @property
    def fights(self) -> list[FightRecord]:
        return [fight.model_copy(deep=True) for fight in self._fights]

    @property
    def active_fight_id(self) -> str | None:
        return self._active_fight_id

    async def restore(self) -> RestoreReport:
        """Load the primary store, falling back to (and migrating) the legacy snapshot.

        An unreadable primary store is served from the legacy snapshot without
        migrating; with nothing to fall back to its ``StoreError`` propagates.
        """

        primary_error: StoreError | None = None
        try:
            fights = await self._store.read_all()
            active_fight_id = await self._store.get_meta(META_ACTIVE_FIGHT_KEY)
        except StoreError as exc:
            if self._legacy is None:
                raise
            logger.warning("Primary fight store unreadable, trying legacy snapshot: %s", exc)
            primary_error = exc
            fights, active_fight_id = [], None
        migrated = False

        if not fights and self._legacy is not None:
            fights, legacy_active_id = await self._read_legacy()
            if legacy_active_id and any(fight.id == legacy_active_id for fight in fights):
                active_fight_id = legacy_active_id
            if primary_error is not None and not fights:
                raise primary_error
            if fights and primary_error is None:
                await self._store.write_all(fights)
                await self._store.set_meta(META_ACTIVE_FIGHT_KEY, active_fight_id)
                await self._legacy.clear()
                migrated = True
                logger.info("Migrated %d fights from legacy snapshot", len(fights))

        if active_fight_id and not any(fight.id == active_fight_id for fight in fights):
            active_fight_id = None

        self._fights = fights
        self._active_fight_id = active_fight_id
        return RestoreReport(
            fight_count=len(fights),
            active_fight_id=active_fight_id,
            migrated_from_legacy=migrated,
            primary_unreadable=primary_error is not None,
        )

    def get(self, fight_id: str) -> FightRecord | None:
        for fight in self._fights:
            if fight.id == fight_id:
                return fight.model_copy(deep=True)
        return None

    def find(self, query: str) -> FightRecord | None:
        match = find_fight_by_query(self._fights, query)
        return match.model_copy(deep=True) if match is not None else None

    def resolve(self, id_or_query: str) -> FightRecord:
        """Look up by exact id first, then by name/file-name query."""

        fight = self.get(id_or_query) or self.find(id_or_query)
        if fight is None:
            raise FightNotFoundError(f"No fight matches {id_or_query!r}", query=id_or_query)
        return fight

    async def create_from_draft(
        self,
        payload: ParsedImport,
        *,
        file_name: str,
        portrait_a: str,
        portrait_b: str,
    ) -> FightRecord:
        """Confirm a draft import into a new record at the head of the library."""

        if not portrait_a or not portrait_b:
            raise ValueError("Both portraits are required to create a fight")

        fallback_name = f"{payload.fighter_a_name} vs {payload.fighter_b_name}".strip()
        name = strip_file_extension(file_name) or fallback_name or NEW_FIGHT_NAME
        fight = FightRecord(
            id=f"{now_ms()}-{random_suffix()}",
            name=name,
            file_name=file_name or f"{name}.txt",
            created_at=now_ms(),
            payload=payload.model_copy(deep=True),
            portrait_a=portrait_a,
            portrait_b=portrait_b,
        )
        self._fights = [fight, *self._fights]
        await self._store.write_all(self._fights)
        logger.info("Added fight %s (%s)", fight.id, fight.name)
        return fight.model_copy(deep=True)

    async def delete(self, fight_id: str) -> bool:
        remaining = [fight for fight in self._fights if fight.id != fight_id]
        if len(remaining) == len(self._fights):
            return False
        self._fights = remaining
        await self._store.write_all(remaining)
        if self._active_fight_id == fight_id:
            await self.set_active(None)
        logger.info("Deleted fight %s", fight_id)
        return True

    async def set_active(self, fight_id: str | None) -> None:
        if fight_id is not None and self.get(fight_id) is None:
            raise ValueError(f"Unknown fight id: {fight_id}")
        self._active_fight_id = fight_id
        await self._store.set_meta(META_ACTIVE_FIGHT_KEY, fight_id)

    async def _read_legacy(self) -> tuple[list[FightRecord], str | None]:
        assert self._legacy is not None
        serialized = await self._legacy.read_fights()
        if not serialized:
            return [], None
        try:
            parsed = json.loads(serialized)
        except json.JSONDecodeError:
            logger.warning("Ignoring invalid legacy fight payload")
            return [], None
        fights = normalize_fight_collection(parsed)
        return fights, await self._legacy.read_active_id()
