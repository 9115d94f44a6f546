"""Game Presenters: render GameView snapshots into API response models.

Invariants:
    - Pure: input is a GameView plus the has_save flag, output is a response model
    - Option correctness is only revealed for the answered option
    - All text resolved in the view's language

Design Decisions:
    - Extracted from game routes so routes stay one call per command (ADR: thin routes)
"""

from well_of_power.core.domain_types import GameFlag
from well_of_power.core.game_state import GameView
from well_of_power.core.game_stats import compute_run_stats
from well_of_power.core.language_strings import (
    get_phase_title, get_rating_message, get_ui_labels,
)
from well_of_power.core.phase_resolver import PhaseBands, describe_bands
from well_of_power.core.soundtrack import answer_cue, click_sound, select_music
from well_of_power.schemas.game import (
    AnswerResponse,
    CommandResponse,
    DilemmaResponse,
    GameStateResponse,
    OptionResponse,
    PhaseBandResponse,
    PhaseResponse,
    SoundtrackResponse,
    StatsResponse,
)


def render_dilemma(view: GameView) -> DilemmaResponse | None:
    dilemma = view.current_dilemma
    if dilemma is None:
        return None
    lang = view.language
    answer = None
    if view.selected_option is not None and view.selected_index is not None:
        answer = AnswerResponse(
            option_index=view.selected_index,
            is_correct=view.selected_option.is_correct,
            narrative_response=view.selected_option.narrative_response.resolve(lang),
        )
    return DilemmaResponse(
        id=dilemma.id,
        situation=dilemma.situation.resolve(lang),
        character=dilemma.character,
        options=[
            OptionResponse(index=i, text=option.text.resolve(lang))
            for i, option in enumerate(dilemma.options)
        ],
        answer=answer,
    )


def render_state(view: GameView, has_save: bool) -> GameStateResponse:
    stats = compute_run_stats(view)
    music = select_music(view)
    verdict = None
    if view.flag == GameFlag.ENDED:
        verdict = get_rating_message(stats["rating"], view.language)
    return GameStateResponse(
        flag=view.flag.value,
        position=view.position,
        catalog_length=view.catalog_length,
        phase=view.phase.value,
        phase_title=get_phase_title(view.phase, view.language),
        language=view.language.value,
        muted=view.muted,
        awaiting_continue=view.awaiting_continue,
        has_save=has_save,
        stats=StatsResponse(**stats),
        dilemma=render_dilemma(view),
        verdict=verdict,
        labels=get_ui_labels(view.language),
        soundtrack=SoundtrackResponse(
            **music,
            answer_cue=answer_cue(view),
            click=click_sound(view.position),
        ),
    )


def render_command(
    view: GameView, has_save: bool, rejection: dict | None,
) -> CommandResponse:
    return CommandResponse(
        applied=rejection is None,
        rejection=rejection,
        state=render_state(view, has_save),
    )


def render_phase(view: GameView, bands: PhaseBands) -> PhaseResponse:
    return PhaseResponse(
        phase=view.phase.value,
        phase_title=get_phase_title(view.phase, view.language),
        position=view.position,
        bands=[
            PhaseBandResponse(**band)
            for band in describe_bands(bands, view.catalog_length)
        ],
    )
