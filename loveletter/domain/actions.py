from __future__ import annotations

from dataclasses import dataclass

from .cards import Card
from .errors import MissingGuess, MissingTarget


@dataclass(frozen=True)
class CardAction:
    """A player's attempt to play a card.

    Target and guess are optional so that any shape of action can be built;
    the card rules ask for them through ``target()`` and ``guess()``.
    """

    card: Card
    current: int
    target_id: int | None = None
    guessed: Card | None = None

    def target(self) -> int:
        if self.target_id is None:
            raise MissingTarget()
        return self.target_id

    def guess(self) -> Card:
        if self.guessed is None:
            raise MissingGuess()
        return self.guessed

    @property
    def has_target(self) -> bool:
        return self.target_id is not None
