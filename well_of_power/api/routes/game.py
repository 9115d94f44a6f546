"""Game Commands: the presentation layer's command surface over HTTP.

Invariants:
    - One endpoint per machine command; every command response carries the
      resulting state, plus the rejection dict when the command was ignored
    - Ignored commands return 200: they are reported, not failed
    - continue without a loadable save -> 404 SAVE_UNAVAILABLE
    - Routes never mutate game state directly (GameSession only)
    - has_save in a response comes from the command outcome, never a second read

Design Decisions:
    - _game_session as module-level singleton: one save slot per installation,
      one machine per process (ADR: single-process server, deliberate exception
      to the no-global-state rule); tests override get_game_session
"""

import logging

from fastapi import APIRouter, Depends

from well_of_power.api.routes.game_presenters import (
    render_command, render_phase, render_state,
)
from well_of_power.config import get_settings
from well_of_power.core.errors import SaveUnavailableError
from well_of_power.schemas.game import (
    CommandResponse, GameStateResponse, LanguageRequest, PhaseResponse,
    SelectOptionRequest,
)
from well_of_power.services.game_session import (
    CommandOutcome, GameSession, create_game_session,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/game", tags=["game"])

_game_session: GameSession | None = None


def init_game_session(session: GameSession) -> None:
    global _game_session
    _game_session = session


def get_game_session() -> GameSession:
    """FastAPI dependency for the process-wide game session."""
    global _game_session
    if _game_session is None:
        _game_session = create_game_session(get_settings())
    return _game_session


def _respond(outcome: CommandOutcome) -> CommandResponse:
    return render_command(outcome.view, outcome.has_save, outcome.rejection)


@router.get("/state", response_model=GameStateResponse)
async def get_state(game: GameSession = Depends(get_game_session)):
    """Full read-only state for rendering."""
    current = await game.current()
    return render_state(current.view, current.has_save)


@router.get("/phase", response_model=PhaseResponse)
async def get_phase(game: GameSession = Depends(get_game_session)):
    current = await game.current()
    return render_phase(current.view, game.machine.bands)


@router.post("/new", response_model=CommandResponse)
async def start_new_game(game: GameSession = Depends(get_game_session)):
    return _respond(await game.start_new_game())


@router.post("/continue", response_model=CommandResponse)
async def continue_game(game: GameSession = Depends(get_game_session)):
    """Resume the saved run, 404 when there is nothing to resume."""
    outcome = await game.continue_game()
    if not outcome.applied:
        raise SaveUnavailableError(game.saves.slot)
    return _respond(outcome)


@router.post("/select", response_model=CommandResponse)
async def select_option(
    body: SelectOptionRequest, game: GameSession = Depends(get_game_session),
):
    return _respond(await game.select_option(body.option_index))


@router.post("/advance", response_model=CommandResponse)
async def advance(game: GameSession = Depends(get_game_session)):
    return _respond(await game.advance())


@router.post("/language", response_model=CommandResponse)
async def set_language(
    body: LanguageRequest, game: GameSession = Depends(get_game_session),
):
    return _respond(await game.set_language(body.language))


@router.post("/mute", response_model=CommandResponse)
async def toggle_mute(game: GameSession = Depends(get_game_session)):
    return _respond(await game.toggle_mute())


@router.post("/menu", response_model=CommandResponse)
async def go_to_main_menu(game: GameSession = Depends(get_game_session)):
    return _respond(await game.go_to_main_menu())
