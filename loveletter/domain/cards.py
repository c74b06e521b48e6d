"""Card definitions and the default deck for Love Letter."""

from __future__ import annotations

from enum import IntEnum


class Card(IntEnum):
    """A card kind. The integer value is the card's rank."""

    GUARD = 1
    PRIEST = 2
    BARON = 3
    HANDMAID = 4
    PRINCE = 5
    KING = 6
    COUNTESS = 7
    PRINCESS = 8

    @property
    def label(self) -> str:
        """Return the name printed on the card."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, text: str | int) -> "Card":
        """Resolve a card from its name or rank."""
        if isinstance(text, int):
            return cls(text)
        cleaned = text.strip()
        if cleaned.isdigit():
            try:
                return cls(int(cleaned))
            except ValueError as exc:
                raise ValueError(f"Unknown card rank: {cleaned}") from exc
        try:
            return cls[cleaned.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown card: {text}") from exc


DECK_COMPOSITION = (
    (Card.GUARD, 5),
    (Card.PRIEST, 2),
    (Card.BARON, 2),
    (Card.HANDMAID, 2),
    (Card.PRINCE, 2),
    (Card.KING, 1),
    (Card.COUNTESS, 1),
    (Card.PRINCESS, 1),
)


def default_deck() -> list[Card]:
    """Return the 16 cards of a standard deck, unshuffled."""
    cards: list[Card] = []
    for card, count in DECK_COMPOSITION:
        cards.extend([card] * count)
    return cards
