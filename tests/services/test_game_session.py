"""Game Session: save policy and startup preference restore around the machine.

Invariants:
    - start_new_game, select_option and advance write the slot; menu never does
    - Rejected commands leave the slot untouched
    - Preference changes in the menu rewrite an existing save only
"""

import pytest

from well_of_power.config import Settings
from well_of_power.core.domain_types import GameFlag, Language
from well_of_power.core.game_state import Stats
from well_of_power.core.save_record import SaveRecord
from well_of_power.infrastructure.slot_stores import FileSlotStore, InMemorySlotStore
from well_of_power.services.game_session import (
    build_slot_store, create_game_session,
)


@pytest.fixture
def settings():
    return Settings(
        storage_backend="memory",
        save_slot_name="session-test",
        phase_band_starts={"intern": 0, "junior": 1},
    )


@pytest.fixture
def store():
    return InMemorySlotStore()


@pytest.fixture
def game(settings, scenario_catalog, store):
    return create_game_session(settings, catalog=scenario_catalog, store=store)


# --- Save policy --------------------------------------------------------------

async def test_new_game_writes_save(game):
    assert await game.has_save() is False
    assert (await game.start_new_game()).applied
    record = await game.saves.load()
    assert record.position == 0
    assert record.stats == Stats()


async def test_select_commits_answer_to_save(game):
    await game.start_new_game()
    assert (await game.select_option(1)).applied
    record = await game.saves.load()
    assert record.position == 1
    assert record.stats == Stats(0, 1)


async def test_advance_writes_save(game):
    await game.start_new_game()
    await game.select_option(0)
    await game.advance()
    assert (await game.saves.load()).position == 1


async def test_rejected_command_does_not_write(game, store):
    await game.start_new_game()
    before = await store.read("session-test")
    error = (await game.advance()).rejection
    assert error["error_code"] == "NOT_AWAITING_CONTINUE"
    assert await store.read("session-test") == before


async def test_menu_keeps_save_resumable(game):
    await game.start_new_game()
    await game.select_option(0)
    await game.advance()
    assert (await game.go_to_main_menu()).applied
    assert game.view().flag == GameFlag.MENU

    assert (await game.continue_game()).applied
    view = game.view()
    assert view.flag == GameFlag.PLAYING
    assert view.position == 1
    assert view.stats == Stats(1, 0)


async def test_continue_after_answer_skips_answered_dilemma(game):
    await game.start_new_game()
    await game.select_option(0)
    await game.go_to_main_menu()
    await game.continue_game()
    view = game.view()
    assert view.position == 1
    assert not view.awaiting_continue


async def test_continue_without_save_is_rejected(game):
    error = (await game.continue_game()).rejection
    assert error["error_code"] == "SAVE_UNAVAILABLE"
    assert game.view().flag == GameFlag.MENU


async def test_continue_with_corrupt_save_is_rejected(game, store):
    await store.write("session-test", b"{not json")
    assert (await game.continue_game()).rejection["error_code"] == "SAVE_UNAVAILABLE"


async def test_finished_run_saves_end_position(game):
    await game.start_new_game()
    for _ in range(3):
        await game.select_option(0)
        await game.advance()
    assert game.view().flag == GameFlag.ENDED
    record = await game.saves.load()
    assert record.position == 3
    assert record.stats == Stats(3, 0)


# --- Preferences --------------------------------------------------------------

async def test_language_in_menu_without_save_writes_nothing(game, store):
    assert (await game.set_language("en")).applied
    assert game.view().language == Language.EN
    assert await store.read("session-test") is None


async def test_language_in_menu_rewrites_existing_save(game):
    await game.start_new_game()
    await game.select_option(0)
    await game.go_to_main_menu()
    await game.set_language("en")
    record = await game.saves.load()
    assert record.language == Language.EN
    assert record.position == 1


async def test_mute_while_playing_saves_progress(game):
    await game.start_new_game()
    await game.select_option(0)
    await game.toggle_mute()
    record = await game.saves.load()
    assert record.muted is True
    assert record.position == 1


async def test_invalid_language_is_rejected_without_write(game, store):
    error = (await game.set_language("fr")).rejection
    assert error["error_code"] == "INVALID_LANGUAGE"
    assert await store.read("session-test") is None


async def test_open_restores_saved_preferences(settings, scenario_catalog, store):
    first = create_game_session(settings, catalog=scenario_catalog, store=store)
    await first.saves.write_record(SaveRecord(1, Stats(1, 0), Language.EN, True))

    game = create_game_session(settings, catalog=scenario_catalog, store=store)
    await game.open()
    view = game.view()
    assert view.flag == GameFlag.MENU
    assert view.language == Language.EN
    assert view.muted is True
    assert view.position == 0


async def test_open_without_save_keeps_defaults(game):
    await game.open()
    assert game.view().language == Language.ES


# --- Save continued past a shrunken catalog -----------------------------------

async def test_mute_after_clamped_continue_keeps_save(game):
    await game.saves.write_record(SaveRecord(5, Stats(3, 2), Language.ES, False))
    assert (await game.continue_game()).applied
    assert game.view().flag == GameFlag.ENDED

    outcome = await game.toggle_mute()
    assert outcome.has_save is True
    assert await game.has_save() is True
    record = await game.saves.load()
    assert record == SaveRecord(5, Stats(3, 2), Language.ES, True)


async def test_language_after_clamped_continue_keeps_result(game):
    await game.saves.write_record(SaveRecord(5, Stats(3, 2), Language.ES, False))
    await game.continue_game()
    await game.set_language("en")

    await game.go_to_main_menu()
    assert (await game.continue_game()).applied
    view = game.view()
    assert view.flag == GameFlag.ENDED
    assert view.stats == Stats(3, 2)
    assert view.language == Language.EN


async def test_mute_on_end_screen_keeps_final_record(game):
    await game.start_new_game()
    for _ in range(3):
        await game.select_option(0)
        await game.advance()
    await game.toggle_mute()
    assert await game.saves.load() == SaveRecord(3, Stats(3, 0), Language.ES, True)


# --- Outcomes -----------------------------------------------------------------

async def test_outcome_reports_slot_state_of_the_command(game):
    outcome = await game.start_new_game()
    assert outcome.has_save is True
    assert outcome.view.flag == GameFlag.PLAYING
    assert outcome.rejection is None


async def test_rejected_outcome_carries_view(game):
    outcome = await game.advance()
    assert not outcome.applied
    assert outcome.rejection["error_code"] == "NOT_AWAITING_CONTINUE"
    assert outcome.view.flag == GameFlag.MENU
    assert outcome.has_save is False


async def test_current_matches_slot(game):
    current = await game.current()
    assert current.has_save is False
    await game.start_new_game()
    current = await game.current()
    assert current.has_save is True
    assert current.view.position == 0


# --- Wiring -------------------------------------------------------------------

def test_build_memory_store(settings):
    assert isinstance(build_slot_store(settings), InMemorySlotStore)


def test_build_file_store(tmp_path):
    store = build_slot_store(Settings(storage_backend="file", save_dir=str(tmp_path)))
    assert isinstance(store, FileSlotStore)
    assert store.directory == tmp_path


def test_create_session_uses_bundled_catalog(settings):
    game = create_game_session(settings)
    assert game.machine.catalog_length == 10
    assert game.saves.slot == "session-test"
