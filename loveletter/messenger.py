"""Narration sinks used by the game to describe what happens at the table."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)


class Messenger(Protocol):
    """Receives narration. A recipient of None means every player."""

    def message(self, recipient: int | None, text: str) -> None:
        """Deliver ``text`` to one player index, or to all players."""


def to_all(messenger: Messenger, text: str) -> None:
    """Broadcast ``text`` to every player."""
    messenger.message(None, text)


def to_player(messenger: Messenger, recipient: int, text: str) -> None:
    """Send ``text`` to a single player."""
    messenger.message(recipient, text)


@dataclass
class RecordingMessenger:
    """Keeps every message in order; used by sessions and tests."""

    messages: list[tuple[int | None, str]] = field(default_factory=list)

    def message(self, recipient: int | None, text: str) -> None:
        self.messages.append((recipient, text))

    def inbox(self, player_id: int) -> list[str]:
        """Return the messages visible to one player: broadcasts plus their own."""
        return [text for recipient, text in self.messages if recipient in (None, player_id)]

    def broadcasts(self) -> list[str]:
        return [text for recipient, text in self.messages if recipient is None]

    def clear(self) -> None:
        self.messages.clear()


class LoggingMessenger:
    """Writes narration to the standard logging system."""

    def __init__(self, names: list[str] | None = None, level: int = logging.INFO) -> None:
        self._names = names
        self._level = level

    def message(self, recipient: int | None, text: str) -> None:
        logger.log(self._level, "%s: %s", self._recipient_label(recipient), text)

    def _recipient_label(self, recipient: int | None) -> str:
        if recipient is None:
            return "All"
        if self._names is not None and 0 <= recipient < len(self._names):
            return self._names[recipient]
        return f"Player {recipient}"
