"""Game Session: imperative shell around the progression machine and the save slot.

Invariants:
    - One command at a time: every command runs under a single asyncio.Lock
    - Every command returns a CommandOutcome whose view and has_save were both
      taken under the same lock as the command itself
    - Save policy: progress is written after start_new_game, select_option and
      advance; preferences are written after set_language and toggle_mute
    - Outside a run in flight (menu, end screen) a preference change only
      rewrites the stored record's preferences; it never fabricates an empty
      run and never rewrites progress
    - go_to_main_menu never writes: the saved run stays resumable
    - Rejected commands never write

Design Decisions:
    - Machine stays synchronous and IO-free; this class does the awaits around it
      (ADR: impureim sandwich)
    - Saving after select_option commits the answer immediately; the record
      points at the next unanswered dilemma (see core/save_record.py)
    - A save continued past a shrunken catalog ends with stats ahead of the
      clamped position; the stored record stays the source of truth for it
"""

import asyncio
import logging
from dataclasses import dataclass

from well_of_power.config import Settings
from well_of_power.core.catalog import Catalog
from well_of_power.core.domain_types import GameFlag, Language
from well_of_power.core.game_machine import ProgressionMachine
from well_of_power.core.game_state import GameView
from well_of_power.core.phase_resolver import PhaseBands
from well_of_power.core.repository_protocols import SlotStore
from well_of_power.infrastructure import database
from well_of_power.infrastructure.catalog_loader import load_catalog
from well_of_power.infrastructure.persistence import SaveAdapter
from well_of_power.infrastructure.slot_stores import (
    DatabaseSlotStore, FileSlotStore, InMemorySlotStore,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutcome:
    """Result of one session command, consistent with the slot at that moment."""
    rejection: dict | None
    view: GameView
    has_save: bool

    @property
    def applied(self) -> bool:
        return self.rejection is None


class GameSession:
    """Serializes commands and applies the save policy."""

    def __init__(self, machine: ProgressionMachine, saves: SaveAdapter):
        self.machine = machine
        self.saves = saves
        self._lock = asyncio.Lock()

    def view(self) -> GameView:
        return self.machine.snapshot()

    async def has_save(self) -> bool:
        return await self.saves.exists()

    async def current(self) -> CommandOutcome:
        """Current view and save availability, read under the command lock."""
        async with self._lock:
            return await self._outcome(None)

    async def open(self) -> None:
        """Startup: adopt saved language/muted, stay in the menu."""
        async with self._lock:
            record = await self.saves.load()
            if record is not None:
                self.machine.restore_preferences(record)

    # --- Progress commands ----------------------------------------------------

    async def start_new_game(self) -> CommandOutcome:
        async with self._lock:
            self.machine.start_new_game()
            await self.saves.save(self.machine.snapshot())
            return await self._outcome(None)

    async def continue_game(self) -> CommandOutcome:
        async with self._lock:
            record = await self.saves.load()
            return await self._outcome(self.machine.continue_game(record))

    async def select_option(self, index: int) -> CommandOutcome:
        async with self._lock:
            error = self.machine.select_option_at(index)
            if error is None:
                await self.saves.save(self.machine.snapshot())
            return await self._outcome(error)

    async def advance(self) -> CommandOutcome:
        async with self._lock:
            error = self.machine.advance()
            if error is None:
                await self.saves.save(self.machine.snapshot())
            return await self._outcome(error)

    async def go_to_main_menu(self) -> CommandOutcome:
        async with self._lock:
            return await self._outcome(self.machine.go_to_main_menu())

    # --- Preference commands --------------------------------------------------

    async def set_language(self, language: Language | str) -> CommandOutcome:
        async with self._lock:
            error = self.machine.set_language(language)
            if error is None:
                await self._save_preferences()
            return await self._outcome(error)

    async def toggle_mute(self) -> CommandOutcome:
        async with self._lock:
            self.machine.toggle_mute()
            await self._save_preferences()
            return await self._outcome(None)

    # --- Internals ------------------------------------------------------------

    async def _save_preferences(self) -> None:
        view = self.machine.snapshot()
        if view.flag == GameFlag.PLAYING:
            await self.saves.save(view)
        else:
            await self.saves.save_preferences(view.language, view.muted)

    async def _outcome(self, rejection: dict | None) -> CommandOutcome:
        return CommandOutcome(
            rejection=rejection,
            view=self.machine.snapshot(),
            has_save=await self.saves.exists(),
        )


# --- Wiring -------------------------------------------------------------------

def build_slot_store(settings: Settings) -> SlotStore:
    """Slot store for settings.storage_backend."""
    if settings.storage_backend == "memory":
        return InMemorySlotStore()
    if settings.storage_backend == "file":
        return FileSlotStore(settings.save_dir)
    manager = database.db_manager or database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    return DatabaseSlotStore(manager)


def create_game_session(
    settings: Settings,
    catalog: Catalog | None = None,
    store: SlotStore | None = None,
) -> GameSession:
    """Assemble catalog, phase bands, machine and save adapter from settings."""
    catalog = catalog if catalog is not None else load_catalog(settings.catalog_path)
    bands = PhaseBands.from_starts(settings.phase_band_starts)
    machine = ProgressionMachine(catalog, bands)
    if store is None:
        store = build_slot_store(settings)
    adapter = SaveAdapter(store, settings.save_slot_name)
    logger.info(
        f"Game session ready: {len(catalog)} dilemmas, {len(bands.bands)} phases",
        extra={"backend": settings.storage_backend, "slot": settings.save_slot_name},
    )
    return GameSession(machine, adapter)
