"""Persistence Adapter: save/load/exists/clear for the single save slot.

Invariants:
    - Encoding is canonical JSON (sorted keys, compact separators, UTF-8):
      save -> load -> save writes byte-identical blobs
    - load() fails closed: undecodable or schema-mismatched blobs are logged and
      reported as None, never raised
    - exists() is True only when load() would return a record
    - save_preferences() never creates a record; it only rewrites one that exists

Design Decisions:
    - Async over a SlotStore: the pure machine never awaits, the session shell does
    - Storage failures (SaveStorageError, DatabaseError) propagate; only bad
      *content* is treated as a missing save
"""

import json
import logging

from pydantic import ValidationError

from well_of_power.core.domain_types import Language
from well_of_power.core.errors import CorruptSaveError
from well_of_power.core.game_state import GameView
from well_of_power.core.repository_protocols import SlotStore
from well_of_power.core.save_record import (
    SaveRecord,
    save_record_from_snapshot,
    save_record_from_view,
    save_record_to_snapshot,
)
from well_of_power.schemas.save_record import SaveRecordPayload

logger = logging.getLogger(__name__)


def encode_save_record(record: SaveRecord) -> bytes:
    """Canonical byte encoding of a record."""
    return json.dumps(
        save_record_to_snapshot(record),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def decode_save_record(blob: bytes, slot: str | None = None) -> SaveRecord:
    """Validate and decode a blob. Raises CorruptSaveError on any mismatch."""
    try:
        payload = SaveRecordPayload.model_validate_json(blob)
    except ValidationError as e:
        raise CorruptSaveError(
            f"{e.error_count()} schema error(s): {e.errors()[0]['msg']}", slot,
        ) from e
    return save_record_from_snapshot(payload.model_dump())


class SaveAdapter:
    """Reads and writes the game's one save slot."""

    def __init__(self, store: SlotStore, slot: str):
        self.store = store
        self.slot = slot

    async def save(self, view: GameView) -> SaveRecord:
        """Overwrite the slot with the projection of view."""
        record = save_record_from_view(view)
        await self.write_record(record)
        return record

    async def write_record(self, record: SaveRecord) -> None:
        await self.store.write(self.slot, encode_save_record(record))
        logger.info(
            "Game saved",
            extra={"slot": self.slot, "position": record.position},
        )

    async def load(self) -> SaveRecord | None:
        blob = await self.store.read(self.slot)
        if blob is None:
            return None
        try:
            return decode_save_record(blob, self.slot)
        except CorruptSaveError as e:
            logger.warning(
                f"Ignoring unreadable save: {e.reason}",
                extra={"slot": self.slot, "error_code": e.code},
            )
            return None

    async def exists(self) -> bool:
        return await self.load() is not None

    async def clear(self) -> None:
        await self.store.delete(self.slot)
        logger.info("Save cleared", extra={"slot": self.slot})

    async def save_preferences(self, language: Language, muted: bool) -> bool:
        """Rewrite language/muted of the existing record. False if there is none."""
        record = await self.load()
        if record is None:
            return False
        await self.write_record(record.with_preferences(language, muted))
        return True
