"""Game routes: command endpoints return the resulting state, rejections inline.

Invariants:
    - Applied and ignored commands both return 200 with the state
    - continue without a save -> 404 SAVE_UNAVAILABLE envelope
    - Body validation failures -> 400 VALIDATION_ERROR envelope
"""

from well_of_power.core.domain_types import Language
from well_of_power.core.game_state import Stats
from well_of_power.core.save_record import SaveRecord


async def test_initial_state_is_menu(client):
    res = await client.get("/api/v1/game/state")
    assert res.status_code == 200
    body = res.json()
    assert body["flag"] == "menu"
    assert body["has_save"] is False
    assert body["dilemma"] is None
    assert body["language"] == "es"
    assert body["labels"]["start_game"] == "Nueva partida"
    assert body["soundtrack"]["playlist"] == "menu"


async def test_new_game_shows_first_dilemma(client):
    res = await client.post("/api/v1/game/new")
    assert res.status_code == 200
    body = res.json()
    assert body["applied"] is True
    assert body["rejection"] is None
    state = body["state"]
    assert state["flag"] == "playing"
    assert state["has_save"] is True
    assert state["phase"] == "intern"
    assert state["dilemma"]["id"] == 1
    assert state["dilemma"]["situation"] == "Situación 1"
    assert state["dilemma"]["answer"] is None
    assert "is_correct" not in state["dilemma"]["options"][0]


async def test_select_reveals_answer(client):
    await client.post("/api/v1/game/new")
    res = await client.post("/api/v1/game/select", json={"option_index": 1})
    state = res.json()["state"]
    assert state["awaiting_continue"] is True
    assert state["dilemma"]["answer"] == {
        "option_index": 1,
        "is_correct": False,
        "narrative_response": "Response 1.1",
    }
    assert state["stats"]["incorrect"] == 1
    assert state["soundtrack"]["answer_cue"].endswith("game2.mp3")


async def test_second_select_is_ignored(client):
    await client.post("/api/v1/game/new")
    await client.post("/api/v1/game/select", json={"option_index": 0})
    res = await client.post("/api/v1/game/select", json={"option_index": 1})
    assert res.status_code == 200
    body = res.json()
    assert body["applied"] is False
    assert body["rejection"]["error_code"] == "ALREADY_ANSWERED"
    assert body["state"]["stats"]["correct"] == 1
    assert body["state"]["stats"]["incorrect"] == 0


async def test_out_of_range_option_is_ignored(client):
    await client.post("/api/v1/game/new")
    res = await client.post("/api/v1/game/select", json={"option_index": 5})
    assert res.json()["rejection"]["error_code"] == "OPTION_INDEX_OUT_OF_RANGE"


async def test_full_run_reaches_end_screen(client):
    await client.post("/api/v1/game/new")
    for index in (0, 1, 0):
        await client.post("/api/v1/game/select", json={"option_index": index})
        res = await client.post("/api/v1/game/advance")
    state = res.json()["state"]
    assert state["flag"] == "ended"
    assert state["position"] == 3
    assert state["dilemma"] is None
    assert state["stats"]["accuracy_pct"] == 67
    assert state["verdict"] == "Tienes potencial, pero algunas decisiones costaron caro."


async def test_advance_without_answer_is_ignored(client):
    await client.post("/api/v1/game/new")
    res = await client.post("/api/v1/game/advance")
    assert res.json()["rejection"]["error_code"] == "NOT_AWAITING_CONTINUE"


async def test_continue_without_save_is_404(client):
    res = await client.post("/api/v1/game/continue")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "SAVE_UNAVAILABLE"
    assert error["category"] == "resource_not_found"


async def test_menu_then_continue_resumes(client):
    await client.post("/api/v1/game/new")
    await client.post("/api/v1/game/select", json={"option_index": 0})
    await client.post("/api/v1/game/advance")
    res = await client.post("/api/v1/game/menu")
    assert res.json()["state"]["flag"] == "menu"
    assert res.json()["state"]["has_save"] is True

    res = await client.post("/api/v1/game/continue")
    assert res.status_code == 200
    state = res.json()["state"]
    assert state["flag"] == "playing"
    assert state["position"] == 1
    assert state["phase"] == "junior"


async def test_continue_from_seeded_save(client, game):
    await game.saves.write_record(SaveRecord(2, Stats(1, 1), Language.EN, False))
    res = await client.post("/api/v1/game/continue")
    state = res.json()["state"]
    assert state["position"] == 2
    assert state["language"] == "en"
    assert state["dilemma"]["situation"] == "Situation 3"


async def test_language_switch_localizes_state(client):
    await client.post("/api/v1/game/new")
    res = await client.post("/api/v1/game/language", json={"language": "en"})
    state = res.json()["state"]
    assert state["language"] == "en"
    assert state["dilemma"]["situation"] == "Situation 1"
    assert state["phase_title"] == "Intern"
    assert state["labels"]["continue"] == "Continue"


async def test_unsupported_language_is_400(client):
    res = await client.post("/api/v1/game/language", json={"language": "fr"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "body.language"


async def test_negative_option_index_is_400(client):
    res = await client.post("/api/v1/game/select", json={"option_index": -1})
    assert res.status_code == 400


async def test_mute_toggles(client):
    res = await client.post("/api/v1/game/mute")
    state = res.json()["state"]
    assert state["muted"] is True
    assert state["soundtrack"]["muted"] is True


async def test_phase_endpoint(client):
    await client.post("/api/v1/game/new")
    res = await client.get("/api/v1/game/phase")
    assert res.status_code == 200
    body = res.json()
    assert body["phase"] == "intern"
    assert body["phase_title"] == "Practicante"
    assert [b["phase"] for b in body["bands"]] == ["intern", "junior"]
    assert body["bands"][1]["end"] == 3


async def test_mute_on_clamped_end_screen_keeps_continue_available(client, game):
    await game.saves.write_record(SaveRecord(5, Stats(3, 2), Language.ES, False))
    res = await client.post("/api/v1/game/continue")
    assert res.json()["state"]["flag"] == "ended"

    res = await client.post("/api/v1/game/mute")
    assert res.json()["state"]["has_save"] is True
    state = (await client.get("/api/v1/game/state")).json()
    assert state["has_save"] is True
    assert state["muted"] is True
