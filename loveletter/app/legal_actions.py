"""Legal action helpers for the application layer."""

from __future__ import annotations

from typing import Iterable

from loveletter.domain.actions import CardAction
from loveletter.domain.cards import Card
from loveletter.domain.effects import rules_for_card
from loveletter.domain.errors import InvalidAction
from loveletter.domain.game import Game

GUARD_GUESSES = tuple(card for card in Card if card != Card.GUARD)


def legal_actions(game: Game, player_id: int) -> list[CardAction]:
    """Return every action the player may submit right now."""
    if game.is_over or game.current_player != player_id:
        return []
    actions: list[CardAction] = []
    for card in sorted(set(game.player(player_id).hand)):
        for action in _candidate_actions(game, player_id, card):
            try:
                game.validate_action(action)
            except InvalidAction:
                continue
            actions.append(action)
    return actions


def _candidate_actions(game: Game, player_id: int, card: Card) -> Iterable[CardAction]:
    """Yield every shape of action for ``card``; validation filters them."""
    rules = rules_for_card(card)
    if not rules.target_required:
        yield CardAction(card, player_id)
        return
    yield CardAction(card, player_id)
    for target in sorted(game.active):
        if rules.guess_required:
            for guess in GUARD_GUESSES:
                yield CardAction(card, player_id, target_id=target, guessed=guess)
        else:
            yield CardAction(card, player_id, target_id=target)
