from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Verdict = Literal["win", "lose", "draw"]

VERDICT_MESSAGES: dict[str, str] = {
    "win": "You win!",
    "lose": "You lose!",
    "draw": "Draw!",
}


def determine_outcome(n: int, user_index: int, opponent_index: int) -> Verdict:
    """Decide a round from the user's side.

    Moves sit on a cycle of length ``n``; each move beats the ``n // 2`` moves
    right before it and loses to the ``n // 2`` moves right after it, so with
    ``rock, paper, scissors`` paper (1) beats rock (0).

    The operand order is ``user - opponent`` on purpose; swapping it makes
    paper lose to rock.
    """
    if n < 3 or n % 2 == 0:
        raise ValueError(f"move count must be odd and at least 3, got {n}")
    for index in (user_index, opponent_index):
        if not 0 <= index < n:
            raise ValueError(f"move index {index} out of range for {n} moves")

    half = n // 2
    d = (user_index - opponent_index + half + n) % n - half
    if d == 0:
        return "draw"
    return "win" if d > 0 else "lose"


def beats(n: int, a: int, b: int) -> bool:
    return determine_outcome(n, a, b) == "win"


@dataclass(frozen=True)
class RoundResult:
    user_move: str
    opponent_move: str
    verdict: Verdict
    key_hex: str
    commitment: str

    @property
    def message(self) -> str:
        return VERDICT_MESSAGES[self.verdict]
