"""Game Schemas: request bodies and response envelopes for the game command API.

Invariants:
    - SelectOptionRequest.option_index >= 0 (upper bound is a machine rejection, not a 400)
    - LanguageRequest.language is one of the supported Language values
    - Responses never expose option correctness before an answer is given
"""

from typing import Literal

from pydantic import BaseModel, Field


# --- Requests ----------------------------------------------------------------

class SelectOptionRequest(BaseModel):
    option_index: int = Field(ge=0)


class LanguageRequest(BaseModel):
    language: Literal["es", "en"]


# --- Responses ---------------------------------------------------------------

class StatsResponse(BaseModel):
    correct: int
    incorrect: int
    answered: int
    remaining: int
    total_dilemmas: int
    accuracy_pct: int
    progress_pct: int
    rating: str
    phase: str


class OptionResponse(BaseModel):
    index: int
    text: str


class AnswerResponse(BaseModel):
    """Feedback for the answered dilemma (present only while awaiting continue)."""
    option_index: int
    is_correct: bool
    narrative_response: str


class DilemmaResponse(BaseModel):
    id: int
    situation: str
    character: str | None = None
    options: list[OptionResponse]
    answer: AnswerResponse | None = None


class SoundtrackResponse(BaseModel):
    playlist: str
    track: str
    volume: float
    loop: bool
    muted: bool
    answer_cue: str | None = None
    click: str


class GameStateResponse(BaseModel):
    """Everything the presentation layer needs to render one frame."""
    flag: Literal["menu", "playing", "ended"]
    position: int
    catalog_length: int
    phase: str
    phase_title: str
    language: Literal["es", "en"]
    muted: bool
    awaiting_continue: bool
    has_save: bool
    stats: StatsResponse
    dilemma: DilemmaResponse | None = None
    verdict: str | None = None
    labels: dict[str, str]
    soundtrack: SoundtrackResponse


class CommandResponse(BaseModel):
    """Result of one command: the resulting state and the rejection, if ignored."""
    applied: bool
    rejection: dict | None = None
    state: GameStateResponse


class PhaseBandResponse(BaseModel):
    phase: str
    start: int
    end: int
    reachable: bool


class PhaseResponse(BaseModel):
    phase: str
    phase_title: str
    position: int
    bands: list[PhaseBandResponse]
