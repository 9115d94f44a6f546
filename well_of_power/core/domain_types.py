"""Domain Types: enums and identity types shared across the game.

Invariants:
    - Phase members are declared in ascending career order
    - All valid states encoded as Enums, no raw string matching
    - Language and GameFlag values are the wire/save values

Design Decisions:
    - str Enums: serialize to JSON without custom encoders (ADR: save blob and API are JSON)
    - NewType for dilemma ids: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DilemmaId = NewType("DilemmaId", int)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_SAVE_SLOT = "well-of-power-save"
SAVE_RECORD_VERSION = 1


# ─── Enums ───────────────────────────────────────────────────────

class GameFlag(str, Enum):
    """Top-level game mode shown to the presentation layer."""
    MENU = "menu"
    PLAYING = "playing"
    ENDED = "ended"


class Language(str, Enum):
    """Supported content languages."""
    ES = "es"
    EN = "en"


DEFAULT_LANGUAGE = Language.ES


class Phase(str, Enum):
    """Career tiers, declared lowest first."""
    INTERN = "intern"
    JUNIOR = "junior"
    SUPERVISOR = "supervisor"
    MANAGER = "manager"
    MAGNATE = "magnate"

    @property
    def rank(self) -> int:
        """Zero-based position in the career ladder."""
        return PHASE_ORDER.index(self)


PHASE_ORDER: tuple[Phase, ...] = tuple(Phase)


def parse_language(value: object) -> Language | None:
    """Map a Language or its string value to Language, None when unsupported."""
    if isinstance(value, Language):
        return value
    if isinstance(value, str):
        try:
            return Language(value.strip().lower())
        except ValueError:
            return None
    return None
