"""Slot Stores: named-blob backends implementing core.repository_protocols.SlotStore.

Invariants:
    - read() returns None for an absent slot (absence is not an error)
    - write() replaces the whole slot; delete() of an absent slot is a no-op
    - Bytes written are the bytes read back, unchanged

Design Decisions:
    - Three backends selected by settings.storage_backend:
      memory (tests, throwaway runs), file (one JSON file per slot, the closest
      match to a browser localStorage key), database (save_slots table)
    - File IO via aiofiles so the event loop never blocks on disk
"""

import logging
import re
from pathlib import Path

import aiofiles
from sqlalchemy import delete as sa_delete

from well_of_power.core.errors import SaveStorageError
from well_of_power.infrastructure.database import DatabaseSessionManager
from well_of_power.models.save_slot import SaveSlot

logger = logging.getLogger(__name__)

_SLOT_NAME = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _check_slot_name(name: str) -> None:
    if not _SLOT_NAME.match(name) or name in (".", ".."):
        raise SaveStorageError(f"invalid slot name {name!r}", "validate", name)


class InMemorySlotStore:
    """Dict-backed store. State lives as long as the instance."""

    def __init__(self):
        self._slots: dict[str, bytes] = {}

    async def read(self, name: str) -> bytes | None:
        return self._slots.get(name)

    async def write(self, name: str, blob: bytes) -> None:
        _check_slot_name(name)
        self._slots[name] = bytes(blob)

    async def delete(self, name: str) -> None:
        self._slots.pop(name, None)

    async def ping(self) -> bool:
        return True


class FileSlotStore:
    """One `<name>.json` file per slot inside a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        _check_slot_name(name)
        return self.directory / f"{name}.json"

    async def read(self, name: str) -> bytes | None:
        path = self._path(name)
        if not path.exists():
            return None
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except OSError as e:
            logger.error(f"Failed to read save file {path}: {e}", extra={"slot": name})
            raise SaveStorageError(str(e), "read", name) from e

    async def write(self, name: str, blob: bytes) -> None:
        path = self._path(name)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(blob)
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to write save file {path}: {e}", extra={"slot": name})
            raise SaveStorageError(str(e), "write", name) from e

    async def delete(self, name: str) -> None:
        path = self._path(name)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise SaveStorageError(str(e), "delete", name) from e

    async def ping(self) -> bool:
        return not self.directory.exists() or self.directory.is_dir()


class DatabaseSlotStore:
    """save_slots table, one row per slot."""

    def __init__(self, manager: DatabaseSessionManager):
        self.manager = manager

    async def read(self, name: str) -> bytes | None:
        async with self.manager.session() as db:
            row = await db.get(SaveSlot, name)
            if row is None:
                return None
            return row.payload.encode("utf-8")

    async def write(self, name: str, blob: bytes) -> None:
        _check_slot_name(name)
        try:
            payload = blob.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SaveStorageError("blob is not UTF-8", "write", name) from e
        async with self.manager.session() as db:
            row = await db.get(SaveSlot, name)
            if row is None:
                db.add(SaveSlot(name=name, payload=payload))
            else:
                row.payload = payload
            await db.commit()

    async def delete(self, name: str) -> None:
        async with self.manager.session() as db:
            await db.execute(sa_delete(SaveSlot).where(SaveSlot.name == name))
            await db.commit()

    async def ping(self) -> bool:
        return await self.manager.health_check()
