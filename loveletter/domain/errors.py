"""Exception hierarchy for the Love Letter rules engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cards import Card


class LoveLetterError(Exception):
    """Base class for every error raised by the engine."""


class InvalidAction(LoveLetterError):
    """An action that the rules do not allow; the game is left unchanged."""


class InvalidConfiguration(LoveLetterError):
    """Bad construction or lookup input."""


class InvalidState(LoveLetterError):
    """An internal invariant was broken."""


class NotCurrentPlayer(InvalidAction):
    def __init__(self, player: int) -> None:
        self.player = player
        super().__init__(f"Only the current player can take an action. {player} provided.")


class TargetingInactive(InvalidAction):
    def __init__(self, target: int) -> None:
        self.target = target
        super().__init__(f"Inactive player targeted: {target}")


class TargetingProtected(InvalidAction):
    def __init__(self, target: int) -> None:
        self.target = target
        super().__init__(f"Protected player targeted: {target}")


class CannotTargetSelf(InvalidAction):
    def __init__(self) -> None:
        super().__init__("Cannot target self")


class MissingTarget(InvalidAction):
    def __init__(self) -> None:
        super().__init__("Missing target")


class MissingGuess(InvalidAction):
    def __init__(self) -> None:
        super().__init__("Missing guess")


class PlayerDoesntHaveCard(InvalidAction):
    def __init__(self, player: int, card: Card) -> None:
        self.player = player
        self.card = card
        super().__init__(f"Player {player} does not have card, {card}")


class MustPlayCountess(InvalidAction):
    def __init__(self, player: int) -> None:
        self.player = player
        super().__init__(f"Player {player} must play the Countess")


class RoundOver(InvalidAction):
    def __init__(self) -> None:
        super().__init__("The round is over")


class InvalidNumberOfPlayers(InvalidConfiguration):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"You can only play Love Letter with 3 or 4 players. {count} is not allowed"
        )


class InvalidPlayerNumber(InvalidConfiguration):
    def __init__(self, player: int) -> None:
        self.player = player
        super().__init__(f"Invalid player number: {player}")


class InvalidNumberOfCards(InvalidState):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"Internal error: player should only have one card, but they have {count}"
        )


class UnexpectedEmptyDeck(InvalidState):
    def __init__(self) -> None:
        super().__init__("Internal error: the deck ran out during setup")


class DiscardingCardNotInHand(InvalidState):
    def __init__(self, card: Card) -> None:
        self.card = card
        super().__init__(f"Discarding a card, {card}, that is not in the player's hand")


class RoundInProgress(InvalidState):
    def __init__(self) -> None:
        super().__init__("The round has not finished yet")
