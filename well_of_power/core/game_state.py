"""Game State: the mutable state owned by the progression machine, and its read-only view.

Invariants:
    - selected_option is not None => awaiting_continue
    - flag == MENU => position == 0, no selection, not awaiting_continue
    - language and muted are preferences: reset_progress() never touches them
    - Stats is immutable; recording an answer yields a new Stats

Design Decisions:
    - GameState is a plain dataclass held privately by ProgressionMachine;
      external layers only receive GameView snapshots (frozen)
    - Phase is NOT a field: it is derived on demand by the phase resolver
"""

from dataclasses import dataclass, field

from well_of_power.core.catalog import Dilemma, Option
from well_of_power.core.domain_types import DEFAULT_LANGUAGE, GameFlag, Language, Phase


@dataclass(frozen=True)
class Stats:
    """Cumulative answer outcomes for the current run."""
    correct_count: int = 0
    incorrect_count: int = 0

    @property
    def answered(self) -> int:
        return self.correct_count + self.incorrect_count

    def record(self, is_correct: bool) -> "Stats":
        if is_correct:
            return Stats(self.correct_count + 1, self.incorrect_count)
        return Stats(self.correct_count, self.incorrect_count + 1)


@dataclass
class GameState:
    """Machine-owned state; mutate only through ProgressionMachine commands."""

    # === Run progress ===
    flag: GameFlag = GameFlag.MENU
    position: int = 0
    stats: Stats = field(default_factory=Stats)

    # === Answer sub-state (transient, never persisted) ===
    selected_option: Option | None = None
    selected_index: int | None = None
    awaiting_continue: bool = False

    # === Preferences (survive new game / main menu) ===
    language: Language = DEFAULT_LANGUAGE
    muted: bool = False

    def reset_progress(self) -> None:
        """Back to the start of a run. Preferences persist."""
        self.position = 0
        self.stats = Stats()
        self.clear_selection()

    def clear_selection(self) -> None:
        self.selected_option = None
        self.selected_index = None
        self.awaiting_continue = False


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot handed to presentation, audio and persistence."""
    flag: GameFlag
    position: int
    catalog_length: int
    phase: Phase
    stats: Stats
    selected_option: Option | None
    selected_index: int | None
    awaiting_continue: bool
    language: Language
    muted: bool
    current_dilemma: Dilemma | None

    @property
    def is_playing(self) -> bool:
        return self.flag == GameFlag.PLAYING

    @property
    def is_ended(self) -> bool:
        return self.flag == GameFlag.ENDED

    @property
    def committed_position(self) -> int:
        """Position of the next unanswered dilemma (an answer commits immediately)."""
        if self.awaiting_continue:
            return min(self.position + 1, self.catalog_length)
        return self.position
