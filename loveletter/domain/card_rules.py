"""Per-card legality rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet

from .actions import CardAction
from .errors import (
    CannotTargetSelf,
    NotCurrentPlayer,
    TargetingInactive,
    TargetingProtected,
)


@dataclass(frozen=True)
class CardRules:
    """Legality policy shared by every card of one kind.

    Cards only differ along three axes: whether they need a target, whether
    the acting player may target themselves, and whether a guess is needed.
    """

    target_required: bool = False
    current_allowed_as_target: bool = False
    guess_required: bool = False

    def action_allowed(
        self,
        action: CardAction,
        current_player: int,
        active: AbstractSet[int],
        protected: AbstractSet[int],
    ) -> None:
        """Raise the first rule the action breaks; return None if it is legal."""
        self._check_player_is_current(action, current_player)
        self._check_target(action, current_player, active, protected)
        self._check_guess(action)

    def plays_without_target(
        self,
        action: CardAction,
        current_player: int,
        active: AbstractSet[int],
        protected: AbstractSet[int],
    ) -> bool:
        """Return True when a targeted card is played into a table with no one to target.

        Only opponent-targeting cards qualify, and only when every other active
        player is protected. ``action_allowed`` still rejects such an action;
        the game decides whether to let it through.
        """
        if not self.target_required or self.current_allowed_as_target:
            return False
        if action.has_target:
            return False
        return not eligible_targets(current_player, active, protected)

    @staticmethod
    def _check_player_is_current(action: CardAction, current_player: int) -> None:
        if action.current != current_player:
            raise NotCurrentPlayer(action.current)

    def _check_target(
        self,
        action: CardAction,
        current_player: int,
        active: AbstractSet[int],
        protected: AbstractSet[int],
    ) -> None:
        if not self.target_required:
            return
        target = action.target()
        if target not in active:
            raise TargetingInactive(target)
        if target in protected:
            raise TargetingProtected(target)
        if not self.current_allowed_as_target and target == current_player:
            raise CannotTargetSelf()

    def _check_guess(self, action: CardAction) -> None:
        if self.guess_required:
            action.guess()


def eligible_targets(
    current_player: int,
    active: AbstractSet[int],
    protected: AbstractSet[int],
) -> list[int]:
    """Return the opponents that may be targeted, in seat order."""
    return sorted(
        idx for idx in active if idx != current_player and idx not in protected
    )


NO_TARGET = CardRules()
TARGET_REQUIRED = CardRules(target_required=True)
GUESS_REQUIRED = CardRules(target_required=True, guess_required=True)
TARGET_SELF_ALLOWED = CardRules(target_required=True, current_allowed_as_target=True)
