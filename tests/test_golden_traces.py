"""Golden trace tests to validate core rule flows."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from loveletter.domain import errors
from loveletter.domain.actions import CardAction
from loveletter.domain.cards import Card
from loveletter.domain.game import Game
from loveletter.domain.state import Deck, PlayerState, Table
from loveletter.messenger import RecordingMessenger

FIXTURE = Path(__file__).parent / "fixtures" / "golden_traces.json"


def _cards(names: list[str]) -> list[Card]:
    return [Card.parse(name) for name in names]


def _make_game(trace: dict) -> Game:
    """Build a game from the explicit hands and deck of a trace."""
    players = [
        PlayerState(name=f"p{idx}", hand=_cards(hand)) for idx, hand in enumerate(trace["hands"])
    ]
    table = Table(
        players=players,
        deck=Deck.from_draw_order(_cards(trace["deck"])),
        out_card=Card.parse(trace["out_card"]),
    )
    return Game(table)


def _make_action(spec: dict) -> CardAction:
    guess = spec.get("guess")
    return CardAction(
        Card.parse(spec["card"]),
        spec["player"],
        target_id=spec.get("target"),
        guessed=Card.parse(guess) if guess is not None else None,
    )


def _assert_expectations(game: Game, expect: dict) -> None:
    """Validate expectations defined in a golden trace."""
    if "active" in expect:
        assert sorted(game.active) == expect["active"]
    if "protected" in expect:
        assert sorted(game.protected) == expect["protected"]
    if "current_player" in expect:
        assert game.current_player == expect["current_player"]
    if "cards_remaining" in expect:
        assert game.table.deck.cards_remaining() == expect["cards_remaining"]
    if "hands" in expect:
        for player_id, names in expect["hands"].items():
            assert game.player(int(player_id)).hand == _cards(names)
    if "discards" in expect:
        for player_id, names in expect["discards"].items():
            assert game.player(int(player_id)).discards == _cards(names)
    if "out_card" in expect:
        out_card = expect["out_card"]
        assert game.table.out_card == (Card.parse(out_card) if out_card is not None else None)
    if "over" in expect:
        assert game.is_over == expect["over"]
    if "winners" in expect:
        assert list(game.result().winners) == expect["winners"]


@pytest.mark.parametrize(
    "trace",
    json.loads(FIXTURE.read_text(encoding="utf-8"))["traces"],
    ids=lambda trace: trace["name"],
)
def test_golden_traces(trace: dict) -> None:
    """Run golden traces against the rules engine."""
    game = _make_game(trace)
    messenger = RecordingMessenger()
    for step in trace["steps"]:
        if "action" in step:
            action = _make_action(step["action"])
            if "error" in step:
                before = str(game)
                with pytest.raises(getattr(errors, step["error"])):
                    game.perform_action(action, messenger)
                assert str(game) == before
            else:
                game.perform_action(action, messenger)
            continue
        if "expect" in step:
            _assert_expectations(game, step["expect"])
            continue
        raise ValueError("Unknown step in golden trace")
