"""Run Stats: pure computation of the summary shown in the stats panel and end screen.

Invariants:
    - All inputs come from a GameView (no IO, no DB)
    - Returns a flat dict of JSON-serializable values
    - Never raises: an unanswered run reports 0% accuracy

Design Decisions:
    - Pure function, not a method on GameState (ADR: state is enforcement, stats are presentation)
    - Rating thresholds keyed on accuracy only; phase is flavor, never a score input
"""

from well_of_power.core.game_state import GameView

# (minimum accuracy %, rating) checked top-down
_RATINGS: tuple[tuple[int, str], ...] = (
    (90, "visionary"),
    (70, "reliable"),
    (50, "promising"),
    (0, "reckless"),
)


def rate_accuracy(accuracy_pct: int) -> str:
    for threshold, rating in _RATINGS:
        if accuracy_pct >= threshold:
            return rating
    return _RATINGS[-1][1]


def compute_run_stats(view: GameView) -> dict:
    """Compute summary statistics for the current run. Pure, no IO."""
    stats = view.stats
    answered = stats.answered
    accuracy = round(100 * stats.correct_count / answered) if answered else 0
    total = view.catalog_length
    progress = round(100 * view.committed_position / total) if total else 100

    return {
        "correct": stats.correct_count,
        "incorrect": stats.incorrect_count,
        "answered": answered,
        "remaining": max(total - view.committed_position, 0),
        "total_dilemmas": total,
        "accuracy_pct": accuracy,
        "progress_pct": progress,
        "rating": rate_accuracy(accuracy),
        "phase": view.phase.value,
    }
