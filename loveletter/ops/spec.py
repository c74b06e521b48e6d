"""Table specification models and validation."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Mapping

from loveletter.domain.errors import InvalidNumberOfPlayers
from loveletter.domain.game import Game
from loveletter.domain.state import ALLOWED_PLAYER_COUNTS


@dataclass(frozen=True)
class TableSpec:
    """Specification for dealing a round."""

    players: tuple[str, ...]
    seed: int | None = None
    enforce_countess: bool = True

    def __post_init__(self) -> None:
        """Validate table spec fields."""
        if len(self.players) not in ALLOWED_PLAYER_COUNTS:
            raise InvalidNumberOfPlayers(len(self.players))
        for name in self.players:
            if not isinstance(name, str) or not name:
                raise ValueError("Player names must be non-empty strings")
        if len(set(self.players)) != len(self.players):
            raise ValueError("Player names must be unique")

    def to_mapping(self) -> dict[str, object]:
        """Return a mapping representation of the table spec."""
        payload: dict[str, object] = {
            "players": list(self.players),
            "rules": {"enforce_countess": self.enforce_countess},
        }
        if self.seed is not None:
            payload["seed"] = self.seed
        return payload

    def build_game(self) -> Game:
        """Deal a round described by this spec."""
        return Game.new(
            len(self.players),
            rng=random.Random(self.seed),
            names=list(self.players),
            enforce_countess=self.enforce_countess,
        )

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "TableSpec":
        """Create a TableSpec from a mapping.

        ``players`` may be a list of names or a player count.
        """
        players_value = data.get("players")
        if isinstance(players_value, int) and not isinstance(players_value, bool):
            players = tuple(f"Player {idx + 1}" for idx in range(players_value))
        elif isinstance(players_value, list):
            players = tuple(str(name) for name in players_value)
        else:
            raise ValueError("players must be a list of names or a player count")
        seed_value = data.get("seed")
        if seed_value is not None and not isinstance(seed_value, int):
            raise ValueError("seed must be an integer")
        rules = data.get("rules", {}) or {}
        if not isinstance(rules, Mapping):
            raise ValueError("rules must be a mapping")
        return TableSpec(
            players=players,
            seed=seed_value,
            enforce_countess=bool(rules.get("enforce_countess", True)),
        )


def parse_table_spec(spec: TableSpec | Mapping[str, Any]) -> TableSpec:
    """Normalize a table spec input into a TableSpec instance."""
    if isinstance(spec, TableSpec):
        return spec
    return TableSpec.from_mapping(spec)
