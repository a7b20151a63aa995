from __future__ import annotations

import argparse
import logging
import os
import sys

from commit_reveal import parse_key, verify_commitment
from menu import prompt_for_choice
from moves import MoveSet, MoveSetError
from protocol import RoundResult
from rules_table import generate_rules_table
from session import GameSession

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rps", description="Provably fair rock-paper-scissors for any odd number of moves")
    parser.add_argument("--log-level", default=_default_log_level(), help="DEBUG|INFO|WARNING|ERROR (env RPS_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play one round against the computer")
    play.add_argument("moves", nargs="*", help="Odd number (>= 3) of unique moves, e.g. rock paper scissors")
    play.add_argument(
        "--reveal-on-exit",
        action=argparse.BooleanOptionalAction,
        default=_default_reveal_on_exit(),
        help="Disclose the key and computer move when you exit without playing (env RPS_REVEAL_ON_EXIT)",
    )

    rules = sub.add_parser("rules", help="Print the win/lose table for a move set")
    rules.add_argument("moves", nargs="*")

    verify = sub.add_parser("verify", help="Check a revealed key and move against a published HMAC")
    verify.add_argument("--key", required=True, help="Secret key as hex")
    verify.add_argument("--move", required=True, help="Revealed computer move")
    verify.add_argument("--hmac", required=True, help="HMAC shown before you chose")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "verify":
        return _verify(args.key, args.move, args.hmac)

    try:
        moves = MoveSet.parse(args.moves)
    except MoveSetError as exc:
        logger.debug("rejected move set %r: %s", args.moves, type(exc).__name__)
        print(exc, file=sys.stderr)
        return 1

    if args.cmd == "rules":
        print(generate_rules_table(moves))
        return 0

    if args.cmd == "play":
        return _play(moves, reveal_on_exit=args.reveal_on_exit)

    raise SystemExit("unhandled command")


def _play(moves: MoveSet, *, reveal_on_exit: bool) -> int:
    session = GameSession.start(moves)
    print(f"HMAC: {session.commit()}")

    session.await_choice()
    choice = prompt_for_choice(moves, show_help=lambda: print(generate_rules_table(moves)))

    if choice.kind == "exit":
        reveal = session.exit(reveal=reveal_on_exit)
        print("Exiting without playing.")
        if reveal is not None:
            print(f"Computer move: {reveal.move}")
            print(f"HMAC key: {reveal.key_hex}")
            _print_verify_hint(reveal.key_hex, reveal.move, session.commitment or "")
        return 0

    if choice.index is None:
        raise SystemExit(f"unhandled choice {choice.kind}")
    _show_result(session.resolve(choice.index))
    return 0


def _show_result(result: RoundResult) -> None:
    print(f"Your move: {result.user_move}")
    print(f"Computer move: {result.opponent_move}")
    print(result.message)
    print(f"HMAC key: {result.key_hex}")
    _print_verify_hint(result.key_hex, result.opponent_move, result.commitment)


def _print_verify_hint(key_hex: str, move: str, commitment: str) -> None:
    # HMAC-SHA256 keyed with the raw key bytes (hex-decoded) over the move text.
    print("Verify with any HMAC-SHA256 tool (hex key), or run:")
    print(f"   rps verify --key {key_hex} --move {_quote(move)} --hmac {commitment}")


def _verify(key_hex: str, move: str, commitment: str) -> int:
    try:
        key = parse_key(key_hex)
    except ValueError as exc:
        print(f"Invalid key: {exc}", file=sys.stderr)
        return 2

    if verify_commitment(expected_commitment=commitment, key=key, move=move):
        print("OK: the HMAC matches the revealed key and move.")
        return 0
    print("MISMATCH: the HMAC does not match the revealed key and move.")
    return 1


def _quote(move: str) -> str:
    return f'"{move}"' if any(c.isspace() for c in move) else move


def _default_log_level() -> str:
    return os.environ.get("RPS_LOG_LEVEL", "WARNING")


def _default_reveal_on_exit() -> bool:
    return os.environ.get("RPS_REVEAL_ON_EXIT", "1").strip().lower() not in ("0", "false", "no", "off")


if __name__ == "__main__":
    raise SystemExit(main())
