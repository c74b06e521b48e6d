"""Card rules and effect procedures, keyed by card kind."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from loveletter.messenger import Messenger, to_all, to_player

from .actions import CardAction
from .card_rules import (
    GUESS_REQUIRED,
    NO_TARGET,
    TARGET_REQUIRED,
    TARGET_SELF_ALLOWED,
    CardRules,
)
from .cards import Card

if TYPE_CHECKING:
    from .game import Game

CardEffect = Callable[[CardAction, "Game", Messenger], None]


def rules_for_card(card: Card) -> CardRules:
    return CARD_RULES[card]


def perform_card_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Resolve the effect of an already validated action."""
    rules = rules_for_card(action.card)
    if rules.plays_without_target(action, game.current_player, game.active, game.protected):
        to_all(
            messenger,
            f"Player {action.current} plays a {action.card}, but there is no one to target.",
        )
        return
    CARD_EFFECTS[action.card](action, game, messenger)


def _announce(action: CardAction, messenger: Messenger) -> None:
    to_all(messenger, f"Player {action.current} plays a {action.card}")


def _announce_with_target(action: CardAction, messenger: Messenger) -> None:
    to_all(
        messenger,
        f"Player {action.current} plays a {action.card} on Player {action.target()}",
    )


def guard_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Eliminate the target if the guess names the card in their hand."""
    target_index = action.target()
    guess = action.guess()
    target = game.player(target_index)

    to_all(
        messenger,
        f"Player {action.current} guesses that Player {target_index} has a {guess}",
    )
    if target.card_in_hand() == guess:
        to_all(messenger, f"Player {target_index} has a {guess} and is out!")
        game.make_inactive(target_index)
    else:
        to_all(messenger, f"Player {target_index} does not have a {guess}")


def priest_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Show the target's card to the acting player only."""
    target_index = action.target()
    target_card = game.player(target_index).card_in_hand()

    _announce_with_target(action, messenger)
    to_all(
        messenger,
        f"Player {target_index} shows their card to Player {action.current}",
    )
    to_player(
        messenger,
        action.current,
        f"Player {target_index} shows you a {target_card}",
    )


def baron_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Compare hands; the lower card is out and a tie does nothing."""
    _announce_with_target(action, messenger)

    current_index = action.current
    target_index = action.target()
    player_card = game.player(current_index).card_in_hand()
    target_card = game.player(target_index).card_in_hand()

    if player_card == target_card:
        to_all(messenger, "The cards are equal. Nobody is out.")
        return
    if player_card > target_card:
        out_index, out_card = target_index, target_card
    else:
        out_index, out_card = current_index, player_card
    to_all(messenger, f"Player {out_index} showed a {out_card} and is out.")
    game.make_inactive(out_index)


def handmaid_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Protect the acting player until their next turn."""
    _announce(action, messenger)
    to_all(messenger, f"Player {action.current} is safe.")
    game.make_protected(action.current)


def prince_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Make the target discard their hand and draw again.

    The replacement comes from the deck, or from the set-aside card once the
    deck is empty. A target who discards the Princess is out and draws nothing.
    """
    _announce_with_target(action, messenger)

    target_index = action.target()
    target = game.player(target_index)
    target_card = target.card_in_hand()

    to_all(messenger, f"Player {target_index} discards a {target_card}.")
    target.discard(target_card)
    if target_card == Card.PRINCESS:
        to_all(messenger, f"Player {target_index} is out!")
        game.make_inactive(target_index)
        return

    drawn = game.draw_replacement(target_index)
    to_all(messenger, f"Player {target_index} draws a new card.")
    to_player(messenger, target_index, f"You draw a {drawn}")


def king_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Swap hands between the acting player and the target."""
    _announce_with_target(action, messenger)

    current_index = action.current
    target_index = action.target()
    current = game.player(current_index)
    target = game.player(target_index)
    current_card = current.card_in_hand()
    target_card = target.card_in_hand()

    current.hand, target.hand = target.hand, current.hand
    to_all(messenger, f"Player {current_index} and Player {target_index} trade hands.")
    to_player(messenger, current_index, f"You receive a {target_card}")
    to_player(messenger, target_index, f"You receive a {current_card}")


def countess_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Announce the play; the Countess has no effect."""
    _announce(action, messenger)


def princess_action(action: CardAction, game: Game, messenger: Messenger) -> None:
    """Knock out the player who discarded the Princess."""
    _announce(action, messenger)
    to_all(messenger, f"Player {action.current} discarded the Princess and is out!")
    game.make_inactive(action.current)


CARD_RULES: dict[Card, CardRules] = {
    Card.GUARD: GUESS_REQUIRED,
    Card.PRIEST: TARGET_REQUIRED,
    Card.BARON: TARGET_REQUIRED,
    Card.HANDMAID: NO_TARGET,
    Card.PRINCE: TARGET_SELF_ALLOWED,
    Card.KING: TARGET_REQUIRED,
    Card.COUNTESS: NO_TARGET,
    Card.PRINCESS: NO_TARGET,
}

CARD_EFFECTS: dict[Card, CardEffect] = {
    Card.GUARD: guard_action,
    Card.PRIEST: priest_action,
    Card.BARON: baron_action,
    Card.HANDMAID: handmaid_action,
    Card.PRINCE: prince_action,
    Card.KING: king_action,
    Card.COUNTESS: countess_action,
    Card.PRINCESS: princess_action,
}
