"""Soundtrack Cues: which music and effects the audio collaborator should play.

Invariants:
    - Pure: the audio layer plays, this module only chooses
    - Menu music while in the menu, phase music while playing or ended
    - Track choice is deterministic: keyed on position within the phase playlist
    - Correct and incorrect answers have distinct cues

Design Decisions:
    - Phase comes from the GameView (single phase resolver), never from scanning
      dilemma text for keywords
    - Muted is reported, not applied: the player decides whether to silence output
"""

from well_of_power.core.domain_types import GameFlag, Phase
from well_of_power.core.game_state import GameView

_SOUNDS_DIR = "/assets/sounds"

MENU_PLAYLIST: tuple[str, ...] = (
    f"{_SOUNDS_DIR}/game1.mp3",
    f"{_SOUNDS_DIR}/game2.mp3",
)

PHASE_PLAYLISTS: dict[Phase, tuple[str, ...]] = {
    Phase.INTERN: (f"{_SOUNDS_DIR}/game3.mp3", f"{_SOUNDS_DIR}/game4.mp3"),
    Phase.JUNIOR: (f"{_SOUNDS_DIR}/game5.mp3", f"{_SOUNDS_DIR}/game6.mp3"),
    Phase.SUPERVISOR: (f"{_SOUNDS_DIR}/game7.mp3", f"{_SOUNDS_DIR}/game8.mp3"),
    Phase.MANAGER: (f"{_SOUNDS_DIR}/game9.mp3", f"{_SOUNDS_DIR}/game10.mp3"),
    Phase.MAGNATE: (
        f"{_SOUNDS_DIR}/game11.mp3",
        f"{_SOUNDS_DIR}/game12.mp3",
        f"{_SOUNDS_DIR}/game13.mp3",
    ),
}

CLICK_SOUNDS: tuple[str, ...] = (
    f"{_SOUNDS_DIR}/click1.mp3",
    f"{_SOUNDS_DIR}/click2.mp3",
)
SUCCESS_SOUND = f"{_SOUNDS_DIR}/game1.mp3"
ERROR_SOUND = f"{_SOUNDS_DIR}/game2.mp3"

MUSIC_VOLUME = 0.3


def select_music(view: GameView) -> dict:
    """Background track for the current view."""
    if view.flag == GameFlag.MENU:
        playlist = MENU_PLAYLIST
        key = "menu"
    else:
        playlist = PHASE_PLAYLISTS[view.phase]
        key = view.phase.value
    track = playlist[view.position % len(playlist)]
    return {
        "playlist": key,
        "track": track,
        "volume": MUSIC_VOLUME,
        "loop": True,
        "muted": view.muted,
    }


def answer_cue(view: GameView) -> str | None:
    """Effect for the answer just given, None when nothing is awaiting continue."""
    if view.selected_option is None:
        return None
    return SUCCESS_SOUND if view.selected_option.is_correct else ERROR_SOUND


def click_sound(position: int) -> str:
    return CLICK_SOUNDS[position % len(CLICK_SOUNDS)]
