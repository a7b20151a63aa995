from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal, Sequence

from commit_reveal import Reveal, choose_move_index, compute_commitment, generate_key
from moves import MoveSet
from protocol import RoundResult, determine_outcome

logger = logging.getLogger(__name__)

Status = Literal["created", "committed", "awaiting_choice", "resolved", "exited"]


class SessionStateError(RuntimeError):
    pass


@dataclass
class GameSession:
    """One game: the computer's move is fixed and committed before the user picks.

    A session is single-use. ``resolved`` and ``exited`` are terminal.
    """

    moves: MoveSet
    _key: bytes = field(repr=False)
    _opponent_index: int = field(repr=False)
    status: Status = "created"
    commitment: str | None = None
    _reveal_declined: bool = field(default=False, repr=False)

    @classmethod
    def start(cls, moves: Sequence[str] | MoveSet) -> "GameSession":
        # Validation happens before any randomness is drawn.
        move_set = moves if isinstance(moves, MoveSet) else MoveSet.parse(moves)
        session = cls(
            moves=move_set,
            _key=generate_key(),
            _opponent_index=choose_move_index(len(move_set)),
        )
        logger.debug("session created with %d moves", len(move_set))
        return session

    @property
    def opponent_move(self) -> str:
        return self.moves[self._opponent_index]

    def commit(self) -> str:
        if self.commitment is not None:
            return self.commitment
        self._require("created")
        self.commitment = compute_commitment(self._key, self.opponent_move)
        self._transition("committed")
        return self.commitment

    def await_choice(self) -> None:
        if self.status == "awaiting_choice":
            return
        self._require("committed")
        self._transition("awaiting_choice")

    def resolve(self, user_index: int) -> RoundResult:
        self._require("committed", "awaiting_choice")
        if self.commitment is None:
            raise SessionStateError("session has no commitment")
        if not 0 <= user_index < len(self.moves):
            raise ValueError(f"move index {user_index} out of range for {len(self.moves)} moves")

        verdict = determine_outcome(len(self.moves), user_index, self._opponent_index)
        self._transition("resolved")
        return RoundResult(
            user_move=self.moves[user_index],
            opponent_move=self.opponent_move,
            verdict=verdict,
            key_hex=self._key.hex(),
            commitment=self.commitment,
        )

    def exit(self, *, reveal: bool = True) -> Reveal | None:
        """Abandon the session after the commitment was shown.

        With ``reveal`` the key and move are still disclosed so the
        commitment can be audited.
        """
        self._require("committed", "awaiting_choice")
        self._reveal_declined = not reveal
        self._transition("exited")
        return Reveal.of(self._key, self.opponent_move) if reveal else None

    def reveal(self) -> Reveal:
        """Key and move, once the round is over. Refused after exit(reveal=False)."""
        self._require("resolved", "exited")
        if self._reveal_declined:
            raise SessionStateError("reveal was declined when the session exited")
        return Reveal.of(self._key, self.opponent_move)

    def _require(self, *allowed: Status) -> None:
        if self.status not in allowed:
            raise SessionStateError(f"session is {self.status}, expected {' or '.join(allowed)}")

    def _transition(self, status: Status) -> None:
        logger.debug("session %s -> %s", self.status, status)
        self.status = status
