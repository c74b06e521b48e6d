"""Play a round of Love Letter in the terminal, passing one device around."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable

from loveletter.app.legal_actions import legal_actions
from loveletter.app.observations import build_observation
from loveletter.domain.actions import CardAction
from loveletter.domain.cards import Card
from loveletter.domain.errors import InvalidAction
from loveletter.domain.game import Game, RoundResult
from loveletter.ops.cli import load_spec
from loveletter.ops.spec import TableSpec

Reader = Callable[[str], str]
Writer = Callable[[str], None]


class ConsoleMessenger:
    """Prints narration, labelling private messages with the recipient's name."""

    def __init__(self, game: Game, write: Writer) -> None:
        self._game = game
        self._write = write

    def message(self, recipient: int | None, text: str) -> None:
        if recipient is None:
            self._write(text)
        else:
            self._write(f"[to {self._game.player(recipient).name}] {text}")


def play_round(game: Game, read: Reader = input, write: Writer = print) -> RoundResult:
    """Prompt each player in turn until the round ends."""
    messenger = ConsoleMessenger(game, write)
    while not game.is_over:
        player_id = game.current_player
        observation = build_observation(game, player_id)
        write(f"--- {game.player(player_id).name} (Player {player_id}) ---")
        write("Your hand: " + ", ".join(str(card) for card in observation.hand))
        for seat in observation.seats:
            status = "out" if not seat.active else ("protected" if seat.protected else "in")
            discards = ", ".join(str(card) for card in seat.discards) or "-"
            write(f"  Player {seat.player_id} {seat.name} [{status}] discards: {discards}")
        action = _prompt_action(game, player_id, read, write)
        try:
            game.perform_action(action, messenger)
        except InvalidAction as exc:
            write(f"Not allowed: {exc}")
    result = game.result()
    write("--- Final table ---")
    write(str(game))
    names = ", ".join(game.player(idx).name for idx in result.winners)
    write(f"Winner: {names}")
    return result


def _prompt_action(game: Game, player_id: int, read: Reader, write: Writer) -> CardAction:
    options = legal_actions(game, player_id)
    cards = sorted({action.card for action in options})
    card = _prompt_card(read, write, "Card to play", cards)
    with_card = [action for action in options if action.card == card]
    targets = sorted({a.target_id for a in with_card if a.target_id is not None})
    target = None
    if targets:
        target = _prompt_int(read, write, "Target player", targets)
    guesses = sorted({a.guessed for a in with_card if a.guessed is not None and a.target_id == target})
    guess = _prompt_card(read, write, "Guess", guesses) if guesses else None
    return CardAction(card, player_id, target_id=target, guessed=guess)


def _prompt_card(read: Reader, write: Writer, label: str, choices: list[Card]) -> Card:
    listing = ", ".join(f"{card.value}={card}" for card in choices)
    while True:
        text = read(f"{label} ({listing}): ")
        try:
            card = Card.parse(text)
        except ValueError as exc:
            write(str(exc))
            continue
        if card in choices:
            return card
        write(f"{card} is not an option")


def _prompt_int(read: Reader, write: Writer, label: str, choices: list[int]) -> int:
    listing = ", ".join(str(choice) for choice in choices)
    while True:
        text = read(f"{label} ({listing}): ").strip()
        if text.isdigit() and int(text) in choices:
            return int(text)
        write(f"{text!r} is not an option")


def main() -> None:
    """Run the CLI entrypoint."""
    parser = argparse.ArgumentParser(description="Play Love Letter in the terminal.")
    parser.add_argument("--spec", type=Path, default=None, help="Path to a table spec file.")
    parser.add_argument(
        "--players",
        nargs="+",
        default=None,
        help="Player names (3 or 4). Ignored when --spec is given.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the shuffle.")
    parser.add_argument("--verbose", action="store_true", help="Log engine activity.")
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    if args.spec is not None:
        spec = load_spec(args.spec)
    else:
        names = args.players or ["Player 1", "Player 2", "Player 3", "Player 4"]
        spec = TableSpec(players=tuple(names), seed=args.seed)
    play_round(spec.build_game())


if __name__ == "__main__":
    main()
