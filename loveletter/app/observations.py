"""Observation builders for Love Letter."""

from __future__ import annotations

from dataclasses import dataclass

from loveletter.domain.cards import Card
from loveletter.domain.game import Game


@dataclass(frozen=True)
class SeatView:
    """Public information about one seat."""

    player_id: int
    name: str
    discards: tuple[Card, ...]
    active: bool
    protected: bool
    hand_size: int


@dataclass(frozen=True)
class Observation:
    """Player-centric view of the round (info-set safe)."""

    player_id: int
    hand: tuple[Card, ...]
    current_player: int
    seats: tuple[SeatView, ...]
    cards_remaining: int
    round_over: bool


def build_observation(game: Game, player_id: int) -> Observation:
    """Build an observation that hides opponent hands and the set-aside card."""
    player = game.player(player_id)
    seats = tuple(
        SeatView(
            player_id=idx,
            name=seat.name,
            discards=tuple(seat.discards),
            active=idx in game.active,
            protected=idx in game.protected,
            hand_size=len(seat.hand),
        )
        for idx, seat in enumerate(game.table.players)
    )
    return Observation(
        player_id=player_id,
        hand=tuple(player.hand),
        current_player=game.current_player,
        seats=seats,
        cards_remaining=game.table.deck.cards_remaining(),
        round_over=game.is_over,
    )
