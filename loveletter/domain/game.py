"""Round state machine for Love Letter."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from loveletter.messenger import Messenger, to_all, to_player

from .actions import CardAction
from .cards import Card
from .effects import perform_card_action, rules_for_card
from .errors import (
    InvalidConfiguration,
    InvalidState,
    MustPlayCountess,
    NotCurrentPlayer,
    PlayerDoesntHaveCard,
    RoundInProgress,
    RoundOver,
    UnexpectedEmptyDeck,
)
from .state import Deck, PlayerState, Table

logger = logging.getLogger(__name__)

_COUNTESS_COMPANIONS = (Card.KING, Card.PRINCE)


@dataclass(frozen=True)
class RoundResult:
    winners: tuple[int, ...]
    hands: dict[int, Card]
    discard_values: dict[int, int]


class Game:
    """One round of Love Letter.

    The game owns the table along with the round state: whose turn it is,
    who is still in, and who is protected. ``perform_action`` is the only
    way to change any of it.
    """

    def __init__(
        self,
        table: Table,
        current_player: int = 0,
        active: set[int] | None = None,
        protected: set[int] | None = None,
        enforce_countess: bool = True,
    ) -> None:
        self.table = table
        self.current_player = current_player
        self.active: set[int] = (
            set(range(table.num_players)) if active is None else set(active)
        )
        self.protected: set[int] = set() if protected is None else set(protected)
        self.enforce_countess = enforce_countess
        self._deck_exhausted = False
        for player_index in sorted({current_player} | self.active | self.protected):
            self.table.player(player_index)
        if current_player not in self.active:
            raise InvalidConfiguration("The current player must be active")
        if not self.protected <= self.active:
            raise InvalidConfiguration("Protected players must be active")

    @classmethod
    def new(
        cls,
        num_players: int,
        rng: random.Random | None = None,
        deck: Deck | None = None,
        names: list[str] | None = None,
        enforce_countess: bool = True,
    ) -> "Game":
        """Set up a fresh round: deal one card each, set one aside, first player draws.

        A supplied deck is used in its current order; otherwise a standard deck
        is shuffled with ``rng``.
        """
        if deck is None:
            deck = Deck.shuffled(rng or random.Random())
        table = Table.with_players(num_players, deck=deck, names=names)
        game = cls(table, enforce_countess=enforce_countess)
        for player_num in range(num_players):
            game._deal_one_to_player(player_num)
        out_card = table.deck.deal_one()
        if out_card is None:
            raise UnexpectedEmptyDeck()
        table.out_card = out_card
        game._deal_one_to_player(game.current_player)
        logger.debug("New round with %s players", num_players)
        return game

    # -- public API ----------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return len(self.active) <= 1 or self._deck_exhausted

    def player(self, player_num: int) -> PlayerState:
        return self.table.player(player_num)

    def validate_action(self, action: CardAction) -> None:
        """Raise the first reason ``action`` cannot be played now."""
        if self.is_over:
            raise RoundOver()
        if action.current != self.current_player:
            raise NotCurrentPlayer(action.current)
        player = self.player(action.current)
        if not player.has_card(action.card):
            raise PlayerDoesntHaveCard(action.current, action.card)
        if self.enforce_countess and self._must_play_countess(player, action.card):
            raise MustPlayCountess(action.current)
        rules = rules_for_card(action.card)
        if rules.plays_without_target(action, self.current_player, self.active, self.protected):
            # Every opponent is protected: the card is discarded with no effect.
            return
        rules.action_allowed(action, self.current_player, self.active, self.protected)

    def perform_action(self, action: CardAction, messenger: Messenger) -> None:
        """Validate and resolve one action, then pass the turn."""
        self.validate_action(action)

        to_all(messenger, f"Player {action.current} discards a {action.card}")
        self.player(self.current_player).discard(action.card)
        logger.debug(
            "Player %s plays %s (target=%s, guess=%s)",
            action.current,
            action.card,
            action.target_id,
            action.guessed,
        )

        perform_card_action(action, self, messenger)

        self._make_next_player_current(messenger)

    def result(self) -> RoundResult:
        """Return the winners of a finished round.

        A lone survivor wins. Otherwise the highest card in hand wins, then the
        highest total of discarded cards; players still tied share the win.
        """
        if not self.is_over:
            raise RoundInProgress()
        hands = {idx: self.player(idx).card_in_hand() for idx in sorted(self.active)}
        discard_values = {
            idx: self.player(idx).discard_value() for idx in sorted(self.active)
        }
        if len(self.active) == 1:
            return RoundResult(tuple(sorted(self.active)), hands, discard_values)
        best = max((hands[idx], discard_values[idx]) for idx in hands)
        winners = tuple(
            idx for idx in sorted(hands) if (hands[idx], discard_values[idx]) == best
        )
        return RoundResult(winners, hands, discard_values)

    # -- used by card effects --------------------------------------------------

    def make_inactive(self, player_index: int) -> None:
        """Knock a player out of the round, revealing any card left in hand."""
        player = self.player(player_index)
        self.active.discard(player_index)
        self.protected.discard(player_index)
        for card in list(player.hand):
            player.discard(card)

    def make_protected(self, player_index: int) -> None:
        self.player(player_index)
        if player_index not in self.active:
            raise InvalidState(f"Cannot protect inactive player {player_index}")
        self.protected.add(player_index)

    def make_unprotected(self, player_index: int) -> None:
        self.protected.discard(player_index)

    def draw_replacement(self, player_index: int) -> Card:
        """Give a player a new card from the deck, or the set-aside card if the deck is empty."""
        card = self.table.deck.deal_one()
        if card is None:
            card = self.table.out_card
            self.table.out_card = None
        if card is None:
            raise UnexpectedEmptyDeck()
        self.player(player_index).add_card_to_hand(card)
        return card

    # -- internal helpers ----------------------------------------------------

    def _make_next_player_current(self, messenger: Messenger) -> None:
        self.current_player = self._next_active_player(self.current_player)
        self.make_unprotected(self.current_player)
        if len(self.active) <= 1:
            self._finish(messenger)
            return
        card = self.table.deck.deal_one()
        if card is None:
            self._deck_exhausted = True
            self._finish(messenger)
            return
        self.player(self.current_player).add_card_to_hand(card)
        to_player(messenger, self.current_player, f"You draw a {card}")

    def _next_active_player(self, player_index: int) -> int:
        count = self.table.num_players
        for offset in range(1, count + 1):
            idx = (player_index + offset) % count
            if idx in self.active:
                return idx
        raise InvalidState("No active players")

    def _finish(self, messenger: Messenger) -> None:
        result = self.result()
        names = ", ".join(f"Player {idx}" for idx in result.winners)
        to_all(messenger, f"The round is over. Winner: {names}")
        logger.info("Round finished; winners %s", result.winners)

    def _deal_one_to_player(self, player_num: int) -> None:
        card = self.table.deck.deal_one()
        if card is None:
            raise UnexpectedEmptyDeck()
        self.player(player_num).add_card_to_hand(card)

    @staticmethod
    def _must_play_countess(player: PlayerState, card: Card) -> bool:
        if card == Card.COUNTESS or Card.COUNTESS not in player.hand:
            return False
        return any(companion in player.hand for companion in _COUNTESS_COMPANIONS)

    def __str__(self) -> str:
        lines = []
        for num, player in enumerate(self.table.players):
            hand = ", ".join(str(card) for card in player.hand)
            discards = ", ".join(str(card) for card in player.discards)
            lines.append(f"Player {num} ({player.name})\n{hand}\nDiscards: {discards}")
        lines.append(f"Deck: {self.table.deck.cards_remaining()} left")
        return "\n".join(lines)


@dataclass
class GameBuilder:
    """Fluent helper for setting up a round."""

    _num_players: int = 4
    _seed: int | None = None
    _names: list[str] | None = None
    _enforce_countess: bool = True
    _deck: Deck | None = field(default=None, repr=False)

    def num_players(self, num_players: int) -> "GameBuilder":
        self._num_players = num_players
        return self

    def seed(self, seed: int | None) -> "GameBuilder":
        self._seed = seed
        return self

    def names(self, names: list[str]) -> "GameBuilder":
        self._names = list(names)
        self._num_players = len(names)
        return self

    def deck(self, deck: Deck) -> "GameBuilder":
        self._deck = deck
        return self

    def enforce_countess(self, enabled: bool) -> "GameBuilder":
        self._enforce_countess = enabled
        return self

    def build(self) -> Game:
        return Game.new(
            self._num_players,
            rng=random.Random(self._seed),
            deck=self._deck,
            names=self._names,
            enforce_countess=self._enforce_countess,
        )
