from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

from moves import MoveSet

logger = logging.getLogger(__name__)

EXIT_KEY = "0"
HELP_KEY = "?"

ChoiceKind = Literal["move", "exit", "help", "invalid"]


@dataclass(frozen=True)
class Choice:
    kind: ChoiceKind
    # 0-based move index, only set when kind == "move".
    index: int | None = None


def classify_choice(raw: str, move_count: int) -> Choice:
    """Map one line of user input onto the 1-based menu."""
    text = raw.strip()
    if text == HELP_KEY:
        return Choice("help")
    if not text.isdecimal():
        return Choice("invalid")
    digits = text.lstrip("0") or "0"
    # More digits than the largest menu number is out of range; keeps int() bounded.
    if len(digits) > len(str(move_count)):
        return Choice("invalid")
    number = int(digits)
    if number == 0:
        return Choice("exit")
    if number <= move_count:
        return Choice("move", number - 1)
    return Choice("invalid")


def format_menu(moves: MoveSet) -> str:
    lines = ["Available moves:"]
    lines.extend(f"{i} - {move}" for i, move in enumerate(moves, start=1))
    lines.append(f"{EXIT_KEY} - exit")
    lines.append(f"{HELP_KEY} - help")
    return "\n".join(lines)


def prompt_for_choice(
    moves: MoveSet,
    *,
    show_help: Callable[[], None],
    read: Callable[[str], str] | None = None,
    write: Callable[[str], None] | None = None,
) -> Choice:
    """Prompt until the user picks a move or exits. EOF counts as exit."""
    read = read or input
    write = write or print
    write(format_menu(moves))
    while True:
        try:
            raw = read("Enter your move: ")
        except EOFError:
            write("")
            return Choice("exit")

        choice = classify_choice(raw, len(moves))
        if choice.kind == "help":
            show_help()
            continue
        if choice.kind == "invalid":
            logger.debug("rejected input %r", raw)
            write(f"Invalid input. Enter a number from 0 to {len(moves)}, or {HELP_KEY} for help.")
            continue
        return choice
