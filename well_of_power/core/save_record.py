"""Save Record: persisted projection of the game state, and its snapshot dict form.

Invariants:
    - Holds position, stats, language and muted only; never the selection or
      awaiting_continue (a continued game resumes at the next unanswered dilemma)
    - A view awaiting continue projects to position + 1: the answer is already
      committed, so stats.answered == position for every record produced here
    - save_record_to_snapshot produces a JSON-safe dict (no Enums, no dataclasses)

Design Decisions:
    - Validation of untrusted snapshots lives at the boundary (schemas/save_record.py);
      save_record_from_snapshot assumes an already-validated dict
"""

from dataclasses import dataclass, replace

from well_of_power.core.domain_types import Language, SAVE_RECORD_VERSION
from well_of_power.core.game_state import GameView, Stats


@dataclass(frozen=True)
class SaveRecord:
    """The single persisted run plus player preferences."""
    position: int
    stats: Stats
    language: Language
    muted: bool
    version: int = SAVE_RECORD_VERSION

    def with_preferences(self, language: Language, muted: bool) -> "SaveRecord":
        return replace(self, language=language, muted=muted)


def save_record_from_view(view: GameView) -> SaveRecord:
    """Project a game view onto the persisted record."""
    return SaveRecord(
        position=view.committed_position,
        stats=view.stats,
        language=view.language,
        muted=view.muted,
    )


def save_record_to_snapshot(record: SaveRecord) -> dict:
    """Serialize SaveRecord to a JSON-safe dict. Pure, no IO."""
    return {
        "version": record.version,
        "position": record.position,
        "stats": {
            "correct_count": record.stats.correct_count,
            "incorrect_count": record.stats.incorrect_count,
        },
        "language": record.language.value,
        "muted": record.muted,
    }


def save_record_from_snapshot(data: dict) -> SaveRecord:
    """Reconstruct SaveRecord from a validated snapshot dict. Pure, no IO."""
    stats = data["stats"]
    return SaveRecord(
        position=data["position"],
        stats=Stats(
            correct_count=stats["correct_count"],
            incorrect_count=stats["incorrect_count"],
        ),
        language=Language(data["language"]),
        muted=data["muted"],
        version=data.get("version", SAVE_RECORD_VERSION),
    )
