"""Interactive local game service for pass-and-play sessions.

Each session wraps one round and a recording messenger, so that every seat
can be shown the table narration plus the private messages meant for it.
"""

from __future__ import annotations

import base64
import logging
import os
import random
from dataclasses import dataclass, field, replace
from typing import Any

from loveletter.app.legal_actions import legal_actions
from loveletter.domain.actions import CardAction
from loveletter.domain.cards import Card
from loveletter.domain.errors import InvalidNumberOfPlayers
from loveletter.domain.game import Game, RoundResult
from loveletter.domain.state import ALLOWED_PLAYER_COUNTS
from loveletter.messenger import RecordingMessenger

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class LocalGameSession:
    """In-memory state for one interactive local round."""

    game_id: str
    game: Game
    display_names: list[str]
    messenger: RecordingMessenger = field(default_factory=RecordingMessenger)
    result: RoundResult | None = None

    @property
    def status(self) -> str:
        return "finished" if self.game.is_over else "awaiting_action"


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class LocalGameService:
    """Orchestrate pass-and-play rounds for seats sharing one device."""

    def __init__(self, enforce_countess: bool = True) -> None:
        self._sessions: dict[str, LocalGameSession] = {}
        self._enforce_countess = enforce_countess

    # -- public API ----------------------------------------------------------

    def create_game(
        self,
        names: list[str],
        seed: int | None = None,
    ) -> LocalGameSession:
        """Deal a new round for the named seats."""
        if len(names) not in ALLOWED_PLAYER_COUNTS:
            raise InvalidNumberOfPlayers(len(names))
        display_names = [name or f"Player {idx + 1}" for idx, name in enumerate(names)]
        game = Game.new(
            len(display_names),
            rng=random.Random(seed),
            names=display_names,
            enforce_countess=self._enforce_countess,
        )
        session = LocalGameSession(
            game_id=self._new_game_id(),
            game=game,
            display_names=display_names,
        )
        self._sessions[session.game_id] = session
        logger.info("Created local game %s for %s", session.game_id, display_names)
        return session

    def get_session(self, game_id: str) -> LocalGameSession:
        """Look up a game session by its short ID."""
        if game_id not in self._sessions:
            raise KeyError(f"Unknown game id: {game_id}")
        return self._sessions[game_id]

    def get_turn_view(self, game_id: str, player_id: int | None = None) -> dict[str, Any]:
        """Build the turn payload for the UI.

        Private fields (hand, legal actions, inbox) are only filled in when a
        seat is named.
        """
        session = self.get_session(game_id)
        game = session.game
        if player_id is not None:
            game.player(player_id)
        view: dict[str, Any] = {
            "game_id": game_id,
            "status": session.status,
            "active_player_id": game.current_player,
            "active_player_name": session.display_names[game.current_player],
            "requires_handoff": player_id is None or player_id != game.current_player,
            "public_table": self._build_public_table(session),
            "private_hand": None,
            "legal_actions": [],
            "messages": [],
            "result": None,
        }
        if player_id is not None:
            view["private_hand"] = _serialize_cards(game.player(player_id).hand)
            view["legal_actions"] = _serialize_actions(legal_actions(game, player_id))
            view["messages"] = session.messenger.inbox(player_id)
        else:
            view["messages"] = session.messenger.broadcasts()
        if game.is_over:
            view["result"] = self._build_result(session)
        return view

    def submit_action(
        self,
        game_id: str,
        player_id: int,
        action: CardAction,
    ) -> dict[str, Any]:
        """Apply a seat's action and return that seat's updated view."""
        session = self.get_session(game_id)
        if action.current != player_id:
            action = replace(action, current=player_id)
        session.game.perform_action(action, session.messenger)
        if session.game.is_over and session.result is None:
            session.result = session.game.result()
            logger.info("Local game %s finished: %s", game_id, session.result.winners)
        return self.get_turn_view(game_id, player_id)

    def remove_game(self, game_id: str) -> None:
        """Forget a session."""
        self._sessions.pop(game_id, None)

    # -- internal helpers ----------------------------------------------------

    def _new_game_id(self) -> str:
        """Generate a short uppercase Base32 game ID (8 chars), unique in-memory."""
        for _ in range(100):
            raw = os.urandom(5)  # 5 bytes -> 8 Base32 chars
            token = base64.b32encode(raw).decode("ascii").rstrip("=")[:8].upper()
            if token not in self._sessions:
                return token
        raise RuntimeError("Failed to generate unique game ID")

    def _build_public_table(self, session: LocalGameSession) -> dict[str, Any]:
        game = session.game
        players_view = []
        for idx, seat in enumerate(game.table.players):
            players_view.append({
                "id": idx,
                "name": session.display_names[idx],
                "discards": _serialize_cards(seat.discards),
                "active": idx in game.active,
                "protected": idx in game.protected,
                "hand_size": len(seat.hand),
            })
        return {
            "players": players_view,
            "cards_remaining": game.table.deck.cards_remaining(),
        }

    def _build_result(self, session: LocalGameSession) -> dict[str, Any]:
        result = session.result or session.game.result()
        session.result = result
        return {
            "winners": list(result.winners),
            "winner_names": [session.display_names[idx] for idx in result.winners],
            "hands": {str(idx): card.label for idx, card in result.hands.items()},
            "discard_values": {str(idx): value for idx, value in result.discard_values.items()},
        }


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _serialize_cards(cards: list[Card]) -> list[str]:
    return [card.label for card in cards]


def _serialize_actions(actions: list[CardAction]) -> list[dict[str, Any]]:
    """Serialize legal actions for the UI."""
    result = []
    for a in actions:
        entry: dict[str, Any] = {"card": a.card.label}
        if a.target_id is not None:
            entry["target"] = a.target_id
        if a.guessed is not None:
            entry["guess"] = a.guessed.label
        result.append(entry)
    return result
