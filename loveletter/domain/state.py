"""Physical table state: players, the deck and the set-aside card.

Nothing here knows the rules of the game; the game module keeps these
objects consistent.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .cards import Card, default_deck
from .errors import (
    DiscardingCardNotInHand,
    InvalidNumberOfCards,
    InvalidNumberOfPlayers,
    InvalidPlayerNumber,
)

ALLOWED_PLAYER_COUNTS = (3, 4)


@dataclass
class PlayerState:
    name: str
    hand: list[Card] = field(default_factory=list)
    discards: list[Card] = field(default_factory=list)

    def add_card_to_hand(self, card: Card) -> None:
        self.hand.append(card)

    def card_in_hand(self) -> Card:
        """Return the single card held; any other hand size is a broken invariant."""
        if len(self.hand) != 1:
            raise InvalidNumberOfCards(len(self.hand))
        return self.hand[0]

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def discard(self, card: Card) -> None:
        """Move one copy of ``card`` from the hand to the discard pile."""
        try:
            self.hand.remove(card)
        except ValueError as exc:
            raise DiscardingCardNotInHand(card) from exc
        self.discards.append(card)

    def discard_value(self) -> int:
        """Return the total rank of every card this player has discarded."""
        return sum(int(card) for card in self.discards)


@dataclass
class Deck:
    """The draw pile. Cards are dealt from the end of the list."""

    cards: list[Card] = field(default_factory=default_deck)

    def deal_one(self) -> Card | None:
        if not self.cards:
            return None
        return self.cards.pop()

    def cards_remaining(self) -> int:
        return len(self.cards)

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self.cards)

    @classmethod
    def from_draw_order(cls, cards: list[Card]) -> "Deck":
        """Build a deck that deals ``cards`` first to last."""
        return cls(list(reversed(cards)))

    @classmethod
    def shuffled(cls, rng: random.Random) -> "Deck":
        deck = cls()
        deck.shuffle(rng)
        return deck


@dataclass
class Table:
    players: list[PlayerState]
    deck: Deck = field(default_factory=Deck)
    out_card: Card | None = None

    def __post_init__(self) -> None:
        if len(self.players) not in ALLOWED_PLAYER_COUNTS:
            raise InvalidNumberOfPlayers(len(self.players))

    @classmethod
    def with_players(
        cls,
        num_players: int,
        deck: Deck | None = None,
        names: list[str] | None = None,
    ) -> "Table":
        """Create a table of unnamed players ("1", "2", ...) unless names are given."""
        if num_players not in ALLOWED_PLAYER_COUNTS:
            raise InvalidNumberOfPlayers(num_players)
        if names is None:
            names = [str(idx + 1) for idx in range(num_players)]
        if len(names) != num_players:
            raise InvalidNumberOfPlayers(len(names))
        players = [PlayerState(name=name) for name in names]
        return cls(players=players, deck=deck if deck is not None else Deck())

    @property
    def num_players(self) -> int:
        return len(self.players)

    def player(self, player_num: int) -> PlayerState:
        if not 0 <= player_num < len(self.players):
            raise InvalidPlayerNumber(player_num)
        return self.players[player_num]
