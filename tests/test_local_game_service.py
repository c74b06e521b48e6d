"""Tests for the local interactive game service."""

from __future__ import annotations

import re

import pytest

from loveletter.app.legal_actions import legal_actions
from loveletter.app.local_game_service import LocalGameService, LocalGameSession
from loveletter.domain.actions import CardAction
from loveletter.domain.cards import Card
from loveletter.domain.errors import (
    InvalidNumberOfPlayers,
    InvalidPlayerNumber,
    NotCurrentPlayer,
    PlayerDoesntHaveCard,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def service() -> LocalGameService:
    return LocalGameService()


@pytest.fixture
def session(service: LocalGameService) -> LocalGameSession:
    return service.create_game(["Alice", "Bob", "Charlie"], seed=42)


def _play_first_legal(service: LocalGameService, session: LocalGameSession) -> dict:
    game = session.game
    action = legal_actions(game, game.current_player)[0]
    return service.submit_action(session.game_id, game.current_player, action)


# ---------------------------------------------------------------------------
# Game creation
# ---------------------------------------------------------------------------


class TestCreateGame:
    def test_create_game(self, session: LocalGameSession) -> None:
        assert re.fullmatch(r"[A-Z2-7]{8}", session.game_id)
        assert session.display_names == ["Alice", "Bob", "Charlie"]
        assert session.status == "awaiting_action"
        assert [p.name for p in session.game.table.players] == ["Alice", "Bob", "Charlie"]

    def test_blank_names_get_defaults(self, service: LocalGameService) -> None:
        session = service.create_game(["", "Bob", "", "Dee"], seed=1)
        assert session.display_names == ["Player 1", "Bob", "Player 3", "Dee"]

    @pytest.mark.parametrize("names", [["A", "B"], ["A", "B", "C", "D", "E"]])
    def test_rejects_bad_player_count(self, service: LocalGameService, names: list[str]) -> None:
        with pytest.raises(InvalidNumberOfPlayers):
            service.create_game(names)

    def test_same_seed_same_deal(self, service: LocalGameService) -> None:
        first = service.create_game(["A", "B", "C"], seed=9)
        second = service.create_game(["A", "B", "C"], seed=9)
        assert first.game_id != second.game_id
        assert [p.hand for p in first.game.table.players] == [
            p.hand for p in second.game.table.players
        ]

    def test_unknown_game(self, service: LocalGameService) -> None:
        with pytest.raises(KeyError):
            service.get_session("NOPE")


# ---------------------------------------------------------------------------
# Turn views
# ---------------------------------------------------------------------------


class TestTurnView:
    def test_current_player_view(self, service: LocalGameService, session: LocalGameSession) -> None:
        view = service.get_turn_view(session.game_id, 0)
        assert view["status"] == "awaiting_action"
        assert view["active_player_id"] == 0
        assert view["active_player_name"] == "Alice"
        assert view["requires_handoff"] is False
        assert len(view["private_hand"]) == 2
        assert view["legal_actions"]
        assert view["result"] is None
        assert view["public_table"]["cards_remaining"] == 11

    def test_waiting_player_view(self, service: LocalGameService, session: LocalGameSession) -> None:
        view = service.get_turn_view(session.game_id, 1)
        assert view["requires_handoff"] is True
        assert len(view["private_hand"]) == 1
        assert view["legal_actions"] == []

    def test_public_view_hides_hands(self, service: LocalGameService, session: LocalGameSession) -> None:
        view = service.get_turn_view(session.game_id)
        assert view["private_hand"] is None
        assert view["legal_actions"] == []
        assert [p["hand_size"] for p in view["public_table"]["players"]] == [2, 1, 1]

    def test_bad_seat(self, service: LocalGameService, session: LocalGameSession) -> None:
        with pytest.raises(InvalidPlayerNumber):
            service.get_turn_view(session.game_id, 7)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class TestSubmitAction:
    def test_submit_advances_turn(self, service: LocalGameService, session: LocalGameSession) -> None:
        view = _play_first_legal(service, session)
        assert view["active_player_id"] != 0 or session.game.is_over
        assert view["public_table"]["players"][0]["discards"]
        assert any("discards a" in text for text in view["messages"])

    def test_wrong_player(self, service: LocalGameService, session: LocalGameSession) -> None:
        action = legal_actions(session.game, 0)[0]
        with pytest.raises(NotCurrentPlayer):
            service.submit_action(session.game_id, 1, action)

    def test_card_not_in_hand(self, service: LocalGameService, session: LocalGameSession) -> None:
        hand = session.game.player(0).hand
        missing = next(card for card in Card if card not in hand)
        with pytest.raises(PlayerDoesntHaveCard):
            service.submit_action(session.game_id, 0, CardAction(missing, 0, target_id=1))

    def test_play_to_completion(self, service: LocalGameService, session: LocalGameSession) -> None:
        for _ in range(40):
            if session.game.is_over:
                break
            _play_first_legal(service, session)
        assert session.status == "finished"
        view = service.get_turn_view(session.game_id)
        assert view["status"] == "finished"
        assert view["result"]["winners"]
        assert view["result"]["winner_names"][0] in session.display_names
        assert session.result is not None

    def test_remove_game(self, service: LocalGameService, session: LocalGameSession) -> None:
        service.remove_game(session.game_id)
        with pytest.raises(KeyError):
            service.get_turn_view(session.game_id)
