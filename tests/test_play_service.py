from fastapi.testclient import TestClient

from klondike.cards import card_code
from klondike.deck import build_deck
from server import play_service
from server.play_service import app

client = TestClient(app)


def fixed_codes():
    return [card_code(card) for card in build_deck()]


def start_fixed_session():
    response = client.post("/session/start", json={"deck": fixed_codes()})
    assert response.status_code == 200
    return response.json()


def test_start_session_returns_dealt_table():
    payload = start_fixed_session()
    state = payload["state"]

    assert payload["session_id"]
    assert state["stock_size"] == 24
    assert [len(pile) for pile in state["piles"]] == [1, 2, 3, 4, 5, 6, 7]
    assert state["piles"][0][0]["code"] == "ks"
    assert state["selection"] == {"zone": "none", "index": None}


def test_click_flow_moves_cards():
    session_id = start_fixed_session()["session_id"]

    response = client.post(f"/session/{session_id}/click", json={"zone": "stock"})
    assert response.status_code == 200
    state = response.json()["state"]
    assert state["waste_size"] == 3
    assert state["waste_top"]["code"] == "6d"

    state = client.get(f"/session/{session_id}").json()["state"]
    assert state["stock_size"] == 21

    response = client.post(f"/session/{session_id}/click", json={"zone": "pile", "index": 3})
    assert response.json()["state"]["selection"] == {"zone": "pile", "index": 3}


def test_click_validation_errors():
    session_id = start_fixed_session()["session_id"]

    response = client.post(f"/session/{session_id}/click", json={"zone": "pile", "index": 7})
    assert response.status_code == 400

    response = client.post(f"/session/{session_id}/click", json={"zone": "foundation"})
    assert response.status_code == 422

    response = client.post(f"/session/{session_id}/click", json={"zone": "tableau", "index": 1})
    assert response.status_code == 422


def test_bad_deck_is_rejected():
    codes = fixed_codes()
    codes[0] = codes[1]
    response = client.post("/session/start", json={"deck": codes})
    assert response.status_code == 422


def test_new_game_and_close_session():
    response = client.post("/session/start", json={"seed": 3})
    session_id = response.json()["session_id"]

    response = client.post(f"/session/{session_id}/new")
    assert response.status_code == 200
    body = response.json()
    assert body["summary"] == {"won": False, "foundationCards": 0, "clicks": 0}
    assert body["state"]["stock_size"] == 24

    assert client.delete(f"/session/{session_id}").status_code == 200
    assert client.get(f"/session/{session_id}").status_code == 404


def test_unknown_session_is_404():
    assert client.get("/session/does-not-exist").status_code == 404
    assert client.post("/session/does-not-exist/click", json={"zone": "stock"}).status_code == 404


def test_full_registry_evicts_least_recently_used_session(monkeypatch):
    monkeypatch.setattr(play_service.settings, "max_sessions", 3)
    monkeypatch.setattr(play_service, "sessions", play_service.OrderedDict())

    ids = []
    for _ in range(3):
        response = client.post("/session/start", json={"seed": 1})
        assert response.status_code == 200
        ids.append(response.json()["session_id"])

    assert client.get(f"/session/{ids[0]}").status_code == 200
    responses = [client.post("/session/start", json={"seed": 2}) for _ in range(2)]

    assert [response.status_code for response in responses] == [200, 200]
    assert len(play_service.sessions) == 3
    assert client.get(f"/session/{ids[0]}").status_code == 200
    assert client.get(f"/session/{ids[1]}").status_code == 404
    assert client.get(f"/session/{ids[2]}").status_code == 404


def test_closing_an_unknown_session_is_404():
    assert client.delete("/session/does-not-exist").status_code == 404
