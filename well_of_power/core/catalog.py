"""Dilemma Catalog: immutable, ordered dilemma content consumed by the machine.

Invariants:
    - Dilemma ids are unique and strictly ascending by catalog position
    - Every dilemma has at least one option
    - Localized text is normalized once, here, into LocalizedText
    - Nothing in the catalog is mutated after build_catalog returns

Design Decisions:
    - Source text fields are a union (plain string | {"es", "en"} mapping);
      normalize_text resolves it at load time instead of at every render
    - Accepts the Spanish legacy content keys (situacion/opciones/texto/es_correcta/
      respuesta/personaje) alongside the English ones, so legacy content files load
    - Pure: build_catalog takes parsed JSON; reading the file is the shell's job
"""

from dataclasses import dataclass
from typing import Any, Iterator

from well_of_power.core.domain_types import DilemmaId, Language
from well_of_power.core.errors import CatalogError

_SITUATION_KEYS = ("situation", "situacion")
_OPTIONS_KEYS = ("options", "opciones")
_OPTION_TEXT_KEYS = ("text", "texto")
_IS_CORRECT_KEYS = ("is_correct", "es_correcta")
_RESPONSE_KEYS = ("narrative_response", "respuesta")
_CHARACTER_KEYS = ("character", "personaje")


@dataclass(frozen=True)
class LocalizedText:
    """Text available in every supported language."""
    es: str
    en: str

    def resolve(self, language: Language) -> str:
        return self.en if language == Language.EN else self.es


@dataclass(frozen=True)
class Option:
    """One answer of a dilemma."""
    text: LocalizedText
    is_correct: bool
    narrative_response: LocalizedText


@dataclass(frozen=True)
class Dilemma:
    """One scenario the player must resolve."""
    id: DilemmaId
    situation: LocalizedText
    options: tuple[Option, ...]
    character: str | None = None

    def option_index(self, option: Option) -> int | None:
        """Index of option in this dilemma, None if it does not belong here."""
        for index, candidate in enumerate(self.options):
            if candidate == option:
                return index
        return None


class Catalog:
    """Ordered, read-only sequence of dilemmas indexed by position."""

    def __init__(self, dilemmas: tuple[Dilemma, ...] | list[Dilemma]):
        self._dilemmas = tuple(dilemmas)
        _check_ids(self._dilemmas)

    def __len__(self) -> int:
        return len(self._dilemmas)

    def __iter__(self) -> Iterator[Dilemma]:
        return iter(self._dilemmas)

    def at(self, position: int) -> Dilemma | None:
        """Dilemma at position, None outside [0, len)."""
        if 0 <= position < len(self._dilemmas):
            return self._dilemmas[position]
        return None


# --- Normalization -----------------------------------------------------------

def normalize_text(raw: Any, field_name: str = "text") -> LocalizedText:
    """Resolve a plain string or an {es, en} mapping into LocalizedText.

    A mapping missing one language falls back to the other.
    """
    if isinstance(raw, str):
        return LocalizedText(es=raw, en=raw)
    if isinstance(raw, dict):
        es = raw.get(Language.ES.value)
        en = raw.get(Language.EN.value)
        if not isinstance(es, str) and not isinstance(en, str):
            raise CatalogError(f"{field_name} mapping has no 'es' or 'en' string")
        es = es if isinstance(es, str) else en
        en = en if isinstance(en, str) else es
        return LocalizedText(es=es, en=en)
    raise CatalogError(
        f"{field_name} must be a string or a language mapping, got {type(raw).__name__}",
    )


def build_catalog(records: Any) -> Catalog:
    """Build a Catalog from parsed JSON (a list of dilemma objects)."""
    if not isinstance(records, list):
        raise CatalogError("catalog root must be a list of dilemmas")
    return Catalog([_build_dilemma(record, index) for index, record in enumerate(records)])


def _build_dilemma(record: Any, index: int) -> Dilemma:
    if not isinstance(record, dict):
        raise CatalogError("dilemma must be an object", index)

    dilemma_id = record.get("id")
    if not isinstance(dilemma_id, int) or isinstance(dilemma_id, bool):
        raise CatalogError("dilemma id must be an integer", index)

    raw_options = _first_key(record, _OPTIONS_KEYS)
    if not isinstance(raw_options, list) or not raw_options:
        raise CatalogError(f"dilemma {dilemma_id} has no options", index)

    character = _first_key(record, _CHARACTER_KEYS)
    return Dilemma(
        id=DilemmaId(dilemma_id),
        situation=_text_field(record, _SITUATION_KEYS, "situation", index),
        options=tuple(_build_option(raw, index) for raw in raw_options),
        character=character if isinstance(character, str) else None,
    )


def _build_option(raw: Any, index: int) -> Option:
    if not isinstance(raw, dict):
        raise CatalogError("option must be an object", index)
    is_correct = _first_key(raw, _IS_CORRECT_KEYS)
    if not isinstance(is_correct, bool):
        raise CatalogError("option correctness flag must be a boolean", index)
    return Option(
        text=_text_field(raw, _OPTION_TEXT_KEYS, "option text", index),
        is_correct=is_correct,
        narrative_response=_text_field(raw, _RESPONSE_KEYS, "narrative response", index),
    )


def _text_field(
    record: dict, keys: tuple[str, ...], field_name: str, index: int,
) -> LocalizedText:
    raw = _first_key(record, keys)
    if raw is None:
        raise CatalogError(f"missing {field_name}", index)
    try:
        return normalize_text(raw, field_name)
    except CatalogError as e:
        raise CatalogError(e.detail, index) from e


def _first_key(record: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def _check_ids(dilemmas: tuple[Dilemma, ...]) -> None:
    previous: int | None = None
    for index, dilemma in enumerate(dilemmas):
        if previous is not None and dilemma.id <= previous:
            raise CatalogError(
                f"dilemma ids must be unique and ascending (id {dilemma.id} after {previous})",
                index,
            )
        previous = dilemma.id
