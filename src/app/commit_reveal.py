from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from typing import Final

KEY_BYTES: Final[int] = 32


def generate_key(num_bytes: int = KEY_BYTES) -> bytes:
    return secrets.token_bytes(num_bytes)


def choose_move_index(size: int) -> int:
    # Must draw from the same CSPRNG as generate_key.
    if size < 1:
        raise ValueError(f"cannot choose from {size} moves")
    return secrets.randbelow(size)


def compute_commitment(key: bytes, move: str) -> str:
    return hmac.new(key, move.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_commitment(*, expected_commitment: str, key: bytes, move: str) -> bool:
    computed = compute_commitment(key, move)
    return secrets.compare_digest(expected_commitment.strip().lower().encode("utf-8"), computed.encode("ascii"))


def parse_key(key_hex: str, num_bytes: int = KEY_BYTES) -> bytes:
    try:
        key = bytes.fromhex(key_hex.strip())
    except ValueError as exc:
        raise ValueError("key must be a hex string") from exc
    if len(key) != num_bytes:
        raise ValueError(f"key must be {num_bytes} bytes ({num_bytes * 2} hex characters), got {len(key)}")
    return key


@dataclass(frozen=True)
class Reveal:
    key_hex: str
    move: str

    @classmethod
    def of(cls, key: bytes, move: str) -> "Reveal":
        return cls(key_hex=key.hex(), move=move)

    def verify(self, commitment: str) -> bool:
        return verify_commitment(expected_commitment=commitment, key=parse_key(self.key_hex), move=self.move)
