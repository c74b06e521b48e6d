from .actions import CardAction
from .card_rules import CardRules, eligible_targets
from .cards import Card, default_deck
from .effects import CARD_EFFECTS, CARD_RULES, perform_card_action, rules_for_card
from .errors import (
    CannotTargetSelf,
    DiscardingCardNotInHand,
    InvalidAction,
    InvalidConfiguration,
    InvalidNumberOfCards,
    InvalidNumberOfPlayers,
    InvalidPlayerNumber,
    InvalidState,
    LoveLetterError,
    MissingGuess,
    MissingTarget,
    MustPlayCountess,
    NotCurrentPlayer,
    PlayerDoesntHaveCard,
    RoundInProgress,
    RoundOver,
    TargetingInactive,
    TargetingProtected,
    UnexpectedEmptyDeck,
)
from .game import Game, GameBuilder, RoundResult
from .state import Deck, PlayerState, Table

__all__ = [
    "Card",
    "default_deck",
    "CardAction",
    "CardRules",
    "eligible_targets",
    "CARD_RULES",
    "CARD_EFFECTS",
    "rules_for_card",
    "perform_card_action",
    "Game",
    "GameBuilder",
    "RoundResult",
    "Deck",
    "PlayerState",
    "Table",
    "LoveLetterError",
    "InvalidAction",
    "InvalidConfiguration",
    "InvalidState",
    "NotCurrentPlayer",
    "MissingTarget",
    "MissingGuess",
    "TargetingInactive",
    "TargetingProtected",
    "CannotTargetSelf",
    "PlayerDoesntHaveCard",
    "MustPlayCountess",
    "RoundOver",
    "InvalidNumberOfPlayers",
    "InvalidPlayerNumber",
    "InvalidNumberOfCards",
    "UnexpectedEmptyDeck",
    "DiscardingCardNotInHand",
    "RoundInProgress",
]
