"""Tests for the local pass-and-play FastAPI endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from loveletter.app.local_game_service import LocalGameService
from loveletter.server.local_api import create_app

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def service() -> LocalGameService:
    return LocalGameService()


@pytest.fixture
def client(service: LocalGameService) -> TestClient:
    return TestClient(create_app(service))


@pytest.fixture
def game_id(client: TestClient) -> str:
    resp = client.post("/api/local-games", json={"players": ["Ann", "Bo", "Cy"], "seed": 3})
    assert resp.status_code == 201
    return resp.json()["game_id"]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_game_validates_player_count(client: TestClient) -> None:
    resp = client.post("/api/local-games", json={"players": ["Ann", "Bo"]})
    assert resp.status_code == 422
    resp = client.post("/api/local-games", json={"players": ["A", "B", "C", "D", "E"]})
    assert resp.status_code == 422


def test_get_turn_for_current_player(client: TestClient, game_id: str) -> None:
    resp = client.get(f"/api/local-games/{game_id}", params={"player_id": 0})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "awaiting_action"
    assert body["active_player_name"] == "Ann"
    assert len(body["private_hand"]) == 2
    assert body["legal_actions"]
    assert len(body["public_table"]["players"]) == 3


def test_get_turn_unknown_game(client: TestClient) -> None:
    resp = client.get("/api/local-games/MISSING")
    assert resp.status_code == 404


def test_submit_legal_action(client: TestClient, game_id: str) -> None:
    turn = client.get(f"/api/local-games/{game_id}", params={"player_id": 0}).json()
    action = turn["legal_actions"][0]
    resp = client.post(
        f"/api/local-games/{game_id}/actions",
        json={"player_id": 0, "action": action},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["public_table"]["players"][0]["discards"][0] == action["card"]


def test_submit_out_of_turn_conflicts(client: TestClient, game_id: str) -> None:
    resp = client.post(
        f"/api/local-games/{game_id}/actions",
        json={"player_id": 1, "action": {"card": "Handmaid"}},
    )
    assert resp.status_code == 409


def test_submit_unknown_card(client: TestClient, game_id: str) -> None:
    resp = client.post(
        f"/api/local-games/{game_id}/actions",
        json={"player_id": 0, "action": {"card": "Jester"}},
    )
    assert resp.status_code == 400


def test_submit_card_not_in_hand(client: TestClient, service: LocalGameService, game_id: str) -> None:
    hand = service.get_session(game_id).game.player(0).hand
    missing = next(name for name in ("Princess", "Countess", "King") if name not in [c.label for c in hand])
    resp = client.post(
        f"/api/local-games/{game_id}/actions",
        json={"player_id": 0, "action": {"card": missing}},
    )
    assert resp.status_code == 400
    assert "does not have card" in resp.json()["detail"]


def test_play_round_to_the_end(client: TestClient, service: LocalGameService, game_id: str) -> None:
    body = None
    for _ in range(40):
        current = service.get_session(game_id).game.current_player
        turn = client.get(f"/api/local-games/{game_id}", params={"player_id": current}).json()
        if turn["status"] == "finished":
            body = turn
            break
        client.post(
            f"/api/local-games/{game_id}/actions",
            json={"player_id": current, "action": turn["legal_actions"][0]},
        )
    assert body is not None
    assert body["result"]["winners"]
