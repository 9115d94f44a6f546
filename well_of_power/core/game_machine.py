"""Progression Machine: owns the game state and exposes the command surface.

Invariants:
    - Every command is atomic: checks run before any mutation, so a command is
      either fully applied (returns None) or rejected (returns an error dict)
    - position is non-decreasing within a run; advance() is the only forward step
    - After every advance(), stats.answered == position
    - position == catalog_length <=> flag == ENDED while in a run
    - go_to_main_menu() is always available and always yields a clean menu state
    - Listeners are notified with a fresh GameView after every applied command only

Design Decisions:
    - Owned state object with a command dispatcher instead of shared mutable state:
      callers hold the machine, never the GameState
    - Phase derived via the single phase resolver, keyed on position
    - continue_game() takes the loaded record: the machine does no IO
      (the session service loads it; ADR: impureim sandwich)
    - Out-of-range saved positions (catalog shrank) clamp to ENDED; the saved
      stats are kept as the player's recorded result
"""

import logging
from typing import Callable

from well_of_power.core import enforce_commands as enforce
from well_of_power.core.catalog import Catalog, Dilemma, Option
from well_of_power.core.domain_types import GameFlag, Language, Phase, parse_language
from well_of_power.core.game_state import GameState, GameView, Stats
from well_of_power.core.phase_resolver import PhaseBands, resolve
from well_of_power.core.save_record import SaveRecord

logger = logging.getLogger(__name__)

Listener = Callable[[GameView], None]


class ProgressionMachine:
    """Linear dilemma progression with a single run in flight."""

    def __init__(self, catalog: Catalog, bands: PhaseBands):
        self._catalog = catalog
        self._bands = bands
        self._state = GameState()
        self._listeners: list[Listener] = []

    @property
    def catalog_length(self) -> int:
        return len(self._catalog)

    @property
    def bands(self) -> PhaseBands:
        return self._bands

    # --- Read side ------------------------------------------------------------

    def snapshot(self) -> GameView:
        """Read-only view of the current state, phase included."""
        state = self._state
        return GameView(
            flag=state.flag,
            position=state.position,
            catalog_length=self.catalog_length,
            phase=self.get_phase(),
            stats=state.stats,
            selected_option=state.selected_option,
            selected_index=state.selected_index,
            awaiting_continue=state.awaiting_continue,
            language=state.language,
            muted=state.muted,
            current_dilemma=self.current_dilemma(),
        )

    def current_dilemma(self) -> Dilemma | None:
        if self._state.flag != GameFlag.PLAYING:
            return None
        return self._catalog.at(self._state.position)

    def get_phase(self) -> Phase:
        """Career phase for the current position. Meaningful while playing."""
        return resolve(self._state.position, self.catalog_length, self._bands)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for applied commands. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Commands -------------------------------------------------------------

    def start_new_game(self) -> dict | None:
        self._state.reset_progress()
        self._enter_run()
        return self._applied("start_new_game")

    def continue_game(self, record: SaveRecord | None) -> dict | None:
        """Resume the saved run at its next unanswered dilemma."""
        error = enforce.check_save_available(record)
        if error:
            return self._rejected("continue_game", error)

        state = self._state
        state.clear_selection()
        state.stats = Stats(record.stats.correct_count, record.stats.incorrect_count)
        state.language = record.language
        state.muted = record.muted
        if record.position > self.catalog_length:
            logger.warning(
                f"Saved position {record.position} beyond catalog of "
                f"{self.catalog_length}; clamping to end",
                extra={"command": "continue_game", "position": record.position},
            )
        state.position = max(0, min(record.position, self.catalog_length))
        self._enter_run()
        return self._applied("continue_game")

    def select_option(self, option: Option) -> dict | None:
        """Answer the current dilemma. Stats are recorded immediately."""
        dilemma = self.current_dilemma()
        error = enforce.check_can_answer(self._state, dilemma)
        if not error:
            error = enforce.check_option_belongs(dilemma, option)
        if error:
            return self._rejected("select_option", error)
        return self._record_answer(dilemma, dilemma.option_index(option))

    def select_option_at(self, index: int) -> dict | None:
        """Answer the current dilemma by option index."""
        dilemma = self.current_dilemma()
        error = enforce.check_can_answer(self._state, dilemma)
        if not error:
            error = enforce.check_option_index(dilemma, index)
        if error:
            return self._rejected("select_option", error)
        return self._record_answer(dilemma, index)

    def advance(self) -> dict | None:
        """Dismiss the narrative response and move to the next dilemma."""
        error = enforce.check_can_advance(self._state)
        if error:
            return self._rejected("advance", error)

        state = self._state
        state.position += 1
        state.clear_selection()
        if state.position >= self.catalog_length:
            state.flag = GameFlag.ENDED
        return self._applied("advance")

    def set_language(self, language: Language | str) -> dict | None:
        error = enforce.check_language(language)
        if error:
            return self._rejected("set_language", error)
        self._state.language = parse_language(language)
        return self._applied("set_language")

    def toggle_mute(self) -> dict | None:
        self._state.muted = not self._state.muted
        return self._applied("toggle_mute")

    def go_to_main_menu(self) -> dict | None:
        """Escape hatch from any state. Progress of the run in flight is discarded."""
        self._state.reset_progress()
        self._state.flag = GameFlag.MENU
        return self._applied("go_to_main_menu")

    def restore_preferences(self, record: SaveRecord | None) -> dict | None:
        """Adopt the saved language/muted while sitting in the menu."""
        error = enforce.check_save_available(record) or enforce.check_in_menu(self._state)
        if error:
            return self._rejected("restore_preferences", error)
        self._state.language = record.language
        self._state.muted = record.muted
        return self._applied("restore_preferences")

    # --- Internals ------------------------------------------------------------

    def _enter_run(self) -> None:
        if self._state.position >= self.catalog_length:
            self._state.flag = GameFlag.ENDED
        else:
            self._state.flag = GameFlag.PLAYING

    def _record_answer(self, dilemma: Dilemma, index: int) -> dict | None:
        option = dilemma.options[index]
        state = self._state
        state.selected_option = option
        state.selected_index = index
        state.awaiting_continue = True
        state.stats = state.stats.record(option.is_correct)
        return self._applied("select_option")

    def _applied(self, command: str) -> dict | None:
        view = self.snapshot()
        logger.debug(
            f"{command} applied",
            extra={"command": command, "position": view.position},
        )
        for listener in list(self._listeners):
            listener(view)
        return None

    def _rejected(self, command: str, error: dict) -> dict:
        logger.debug(
            f"{command} ignored: {error['message']}",
            extra={"command": command, "error_code": error["error_code"]},
        )
        return error
