"""Command Enforcement: precondition checks for every progression command.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Return error dict on violation, None on success
    - A rejected command leaves the state untouched (the machine checks before mutating)

Design Decisions:
    - Return dicts (not exceptions): invalid commands come from a disciplined
      caller and are not user-facing failures, so they are reported, not raised
      (ADR: uniform rejection shape shared with the HTTP layer)
"""

from well_of_power.core.catalog import Dilemma, Option
from well_of_power.core.domain_types import GameFlag, Language, parse_language
from well_of_power.core.game_state import GameState


# --- select_option -----------------------------------------------------------

def check_can_answer(state: GameState, dilemma: Dilemma | None) -> dict | None:
    """Selection is single-shot per dilemma and only while playing."""
    if state.flag != GameFlag.PLAYING or dilemma is None:
        return _error("GAME_NOT_PLAYING", "No dilemma is being played.")
    if state.awaiting_continue:
        return _error(
            "ALREADY_ANSWERED",
            f"Dilemma at position {state.position} was already answered.",
        )
    return None


def check_option_belongs(dilemma: Dilemma, option: Option) -> dict | None:
    if dilemma.option_index(option) is None:
        return _error(
            "OPTION_NOT_IN_DILEMMA",
            f"Option does not belong to dilemma {dilemma.id}.",
        )
    return None


def check_option_index(dilemma: Dilemma, index: int) -> dict | None:
    if not 0 <= index < len(dilemma.options):
        return _error(
            "OPTION_INDEX_OUT_OF_RANGE",
            f"Dilemma {dilemma.id} has {len(dilemma.options)} options, got index {index}.",
        )
    return None


# --- advance -----------------------------------------------------------------

def check_can_advance(state: GameState) -> dict | None:
    if not state.awaiting_continue:
        return _error(
            "NOT_AWAITING_CONTINUE",
            "Advance requires an answered dilemma.",
        )
    return None


# --- preferences -------------------------------------------------------------

def check_language(value: object) -> dict | None:
    if parse_language(value) is None:
        supported = ", ".join(lang.value for lang in Language)
        return _error(
            "INVALID_LANGUAGE",
            f"Unsupported language {value!r}; expected one of {supported}.",
        )
    return None


def check_in_menu(state: GameState) -> dict | None:
    if state.flag != GameFlag.MENU:
        return _error("NOT_IN_MENU", "Preferences can only be restored from the menu.")
    return None


# --- continue_game -----------------------------------------------------------

def check_save_available(record: object | None) -> dict | None:
    if record is None:
        return _error("SAVE_UNAVAILABLE", "There is no saved game to continue.")
    return None


# --- Helper ------------------------------------------------------------------

def _error(code: str, message: str) -> dict:
    """Construct a standard rejection dict."""
    return {
        "status": "error",
        "error_code": code,
        "message": f"ERROR: {message}",
    }
