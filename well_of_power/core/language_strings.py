"""Language Strings: centralized es/en text for menus, phases, stats and the end screen.

Invariants:
    - All strings are pure data (no IO, no computation beyond lookup)
    - Every table covers both members of Language
    - Dilemma content is NOT here; it lives in the catalog as LocalizedText

Design Decisions:
    - One dict per concern keyed by Language, mirroring the catalog's es/en split
    - Missing keys raise KeyError: a label typo must fail tests, not render blank
"""

from well_of_power.core.domain_types import Language, Phase


# --- UI labels ---------------------------------------------------------------

_UI_LABELS: dict[Language, dict[str, str]] = {
    Language.ES: {
        "title": "WELL OF POWER",
        "loading": "Cargando...",
        "start_game": "Nueva partida",
        "continue_game": "Continuar partida",
        "credits": "Créditos",
        "author": "Por Paul Mora",
        "continue": "Continuar",
        "main_menu": "Menú principal",
        "restart": "Jugar de nuevo",
        "correct": "Correctas",
        "incorrect": "Incorrectas",
        "progress": "Progreso",
        "toggle_language": "EN",
        "toggle_sound": "Sonido",
        "game_over": "Fin del recorrido",
    },
    Language.EN: {
        "title": "WELL OF POWER",
        "loading": "Loading...",
        "start_game": "New game",
        "continue_game": "Continue game",
        "credits": "Credits",
        "author": "By Paul Mora",
        "continue": "Continue",
        "main_menu": "Main menu",
        "restart": "Play again",
        "correct": "Correct",
        "incorrect": "Incorrect",
        "progress": "Progress",
        "toggle_language": "ES",
        "toggle_sound": "Sound",
        "game_over": "End of the journey",
    },
}


# --- Career phase titles -----------------------------------------------------

_PHASE_TITLES: dict[Language, dict[Phase, str]] = {
    Language.ES: {
        Phase.INTERN: "Practicante",
        Phase.JUNIOR: "Ingeniero Junior",
        Phase.SUPERVISOR: "Supervisor",
        Phase.MANAGER: "Gerente",
        Phase.MAGNATE: "Magnate",
    },
    Language.EN: {
        Phase.INTERN: "Intern",
        Phase.JUNIOR: "Junior Engineer",
        Phase.SUPERVISOR: "Supervisor",
        Phase.MANAGER: "Manager",
        Phase.MAGNATE: "Magnate",
    },
}


# --- End screen verdicts (keyed by game_stats rating) ------------------------

_RATING_MESSAGES: dict[Language, dict[str, str]] = {
    Language.ES: {
        "visionary": "Tus decisiones construyeron un imperio sólido y seguro.",
        "reliable": "Un líder confiable: pocos errores, buen criterio.",
        "promising": "Tienes potencial, pero algunas decisiones costaron caro.",
        "reckless": "El pozo casi se derrumba. Hay mucho por aprender.",
    },
    Language.EN: {
        "visionary": "Your decisions built a solid, safe empire.",
        "reliable": "A reliable leader: few mistakes, sound judgment.",
        "promising": "You show potential, but some decisions were costly.",
        "reckless": "The well nearly collapsed. There is a lot to learn.",
    },
}


# --- Public API ---------------------------------------------------------------


def get_label(key: str, language: Language) -> str:
    return _UI_LABELS[language][key]


def get_ui_labels(language: Language) -> dict[str, str]:
    """All UI labels for a language (copy, safe to mutate)."""
    return dict(_UI_LABELS[language])


def get_phase_title(phase: Phase, language: Language) -> str:
    return _PHASE_TITLES[language][phase]


def get_rating_message(rating: str, language: Language) -> str:
    return _RATING_MESSAGES[language][rating]
