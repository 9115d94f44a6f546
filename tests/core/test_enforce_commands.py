"""Tests for command enforcement: pure precondition checks returning error dicts."""

from well_of_power.core import enforce_commands as enforce
from well_of_power.core.domain_types import GameFlag
from well_of_power.core.game_state import GameState


def _playing(awaiting=False):
    return GameState(flag=GameFlag.PLAYING, awaiting_continue=awaiting)


def test_can_answer_while_playing(scenario_catalog):
    assert enforce.check_can_answer(_playing(), scenario_catalog.at(0)) is None


def test_cannot_answer_in_menu(scenario_catalog):
    error = enforce.check_can_answer(GameState(), scenario_catalog.at(0))
    assert error["error_code"] == "GAME_NOT_PLAYING"


def test_cannot_answer_without_dilemma():
    assert enforce.check_can_answer(_playing(), None)["error_code"] == "GAME_NOT_PLAYING"


def test_cannot_answer_twice(scenario_catalog):
    error = enforce.check_can_answer(_playing(awaiting=True), scenario_catalog.at(0))
    assert error["error_code"] == "ALREADY_ANSWERED"


def test_option_index_bounds(scenario_catalog):
    dilemma = scenario_catalog.at(0)
    assert enforce.check_option_index(dilemma, 1) is None
    assert enforce.check_option_index(dilemma, 2)["error_code"] == "OPTION_INDEX_OUT_OF_RANGE"


def test_option_belongs(scenario_catalog):
    dilemma = scenario_catalog.at(0)
    assert enforce.check_option_belongs(dilemma, dilemma.options[0]) is None
    foreign = scenario_catalog.at(1).options[0]
    assert enforce.check_option_belongs(dilemma, foreign)["error_code"] == "OPTION_NOT_IN_DILEMMA"


def test_advance_requires_answer():
    assert enforce.check_can_advance(_playing(awaiting=True)) is None
    assert enforce.check_can_advance(_playing())["error_code"] == "NOT_AWAITING_CONTINUE"


def test_language_check():
    assert enforce.check_language("en") is None
    error = enforce.check_language("de")
    assert error["error_code"] == "INVALID_LANGUAGE"
    assert "es, en" in error["message"]


def test_in_menu_check():
    assert enforce.check_in_menu(GameState()) is None
    assert enforce.check_in_menu(_playing())["error_code"] == "NOT_IN_MENU"


def test_save_available_check():
    assert enforce.check_save_available(object()) is None
    assert enforce.check_save_available(None)["error_code"] == "SAVE_UNAVAILABLE"


def test_error_shape():
    error = enforce.check_save_available(None)
    assert set(error) == {"status", "error_code", "message"}
    assert error["status"] == "error"
    assert error["message"].startswith("ERROR: ")
