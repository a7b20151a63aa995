from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Sequence

USAGE_EXAMPLE = "rps play rock paper scissors"


class MoveSetError(ValueError):
    """Base class for move lists the game cannot be played with."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Invalid input: {self.message}\nExample: {USAGE_EXAMPLE}"


class TooFewMoves(MoveSetError):
    pass


class EvenCount(MoveSetError):
    pass


class DuplicateMoves(MoveSetError):
    pass


class EmptyMoveName(MoveSetError):
    pass


def validate_moves(moves: Sequence[str]) -> MoveSetError | None:
    """Return the first structural problem with ``moves``, or None if playable."""
    if len(moves) < 3:
        return TooFewMoves(f"at least three moves are required, got {len(moves)}.")
    if len(moves) % 2 == 0:
        return EvenCount(f"the number of moves must be odd, got {len(moves)}.")
    if any(not m.strip() for m in moves):
        return EmptyMoveName("move names must not be empty.")
    duplicates = sorted(m for m, count in Counter(moves).items() if count > 1)
    if duplicates:
        return DuplicateMoves("all moves must be unique; repeated: " + ", ".join(duplicates) + ".")
    return None


@dataclass(frozen=True)
class MoveSet:
    moves: tuple[str, ...]

    @classmethod
    def parse(cls, moves: Sequence[str]) -> "MoveSet":
        error = validate_moves(moves)
        if error is not None:
            raise error
        return cls(moves=tuple(moves))

    def __len__(self) -> int:
        return len(self.moves)

    def __getitem__(self, index: int) -> str:
        return self.moves[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.moves)

    @property
    def half(self) -> int:
        return len(self.moves) // 2
