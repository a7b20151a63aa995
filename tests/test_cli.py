from __future__ import annotations

import builtins
import re
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

import session as session_module  # type: ignore[import-not-found]  # noqa: E402
from cli import main  # type: ignore[import-not-found]  # noqa: E402
from commit_reveal import compute_commitment  # type: ignore[import-not-found]  # noqa: E402

KEY = bytes(range(32))


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


@pytest.fixture
def rock_opponent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(session_module, "generate_key", lambda: KEY)
    monkeypatch.setattr(session_module, "choose_move_index", lambda size: 0)


@pytest.mark.usefixtures("rock_opponent")
def test_play_win(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, ["2"])
    assert main(["play", "rock", "paper", "scissors"]) == 0

    out = capsys.readouterr().out
    commitment = compute_commitment(KEY, "rock")
    assert out.startswith(f"HMAC: {commitment}\n")
    assert "Your move: paper" in out
    assert "Computer move: rock" in out
    assert "You win!" in out
    assert f"HMAC key: {KEY.hex()}" in out
    assert f"rps verify --key {KEY.hex()} --move rock --hmac {commitment}" in out


@pytest.mark.usefixtures("rock_opponent")
def test_commitment_printed_before_menu(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, ["1"])
    assert main(["play", "rock", "paper", "scissors"]) == 0
    out = capsys.readouterr().out
    assert out.index("HMAC:") < out.index("Available moves:") < out.index("Draw!")


@pytest.mark.usefixtures("rock_opponent")
def test_play_recovers_from_bad_input_and_help(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, ["banana", "7", "?", "3"])
    assert main(["play", "rock", "paper", "scissors"]) == 0
    out = capsys.readouterr().out
    assert out.count("Invalid input") == 2
    assert "User v  PC >" in out
    assert "You lose!" in out


@pytest.mark.usefixtures("rock_opponent")
def test_exit_reveals_by_default(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("RPS_REVEAL_ON_EXIT", raising=False)
    _feed(monkeypatch, ["0"])
    assert main(["play", "rock", "paper", "scissors"]) == 0
    out = capsys.readouterr().out
    assert "Exiting without playing." in out
    assert f"HMAC key: {KEY.hex()}" in out
    assert "Your move:" not in out


@pytest.mark.usefixtures("rock_opponent")
def test_exit_without_reveal(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, ["0"])
    assert main(["play", "--no-reveal-on-exit", "rock", "paper", "scissors"]) == 0
    out = capsys.readouterr().out
    assert KEY.hex() not in out
    assert "Computer move" not in out


@pytest.mark.usefixtures("rock_opponent")
def test_reveal_policy_from_env(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("RPS_REVEAL_ON_EXIT", "off")
    _feed(monkeypatch, [])
    assert main(["play", "rock", "paper", "scissors"]) == 0
    assert KEY.hex() not in capsys.readouterr().out


@pytest.mark.parametrize(
    "moves",
    [[], ["rock", "paper"], ["a", "b", "c", "d"], ["a", "b", "a"]],
)
def test_invalid_moves_exit_nonzero(moves: list[str], monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, [])
    assert main(["play", *moves]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Invalid input:")


def test_even_count_reports_count(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["play", "1", "2", "3", "4"]) == 1
    assert "got 4" in capsys.readouterr().err


def test_rules_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["rules", "rock", "spock", "paper", "lizard", "scissors"]) == 0
    out = capsys.readouterr().out
    assert re.search(r"\|\s*spock\s*\|", out)


def test_verify_command(capsys: pytest.CaptureFixture[str]) -> None:
    commitment = compute_commitment(KEY, "lizard")
    assert main(["verify", "--key", KEY.hex(), "--move", "lizard", "--hmac", commitment]) == 0
    assert capsys.readouterr().out.startswith("OK")

    assert main(["verify", "--key", KEY.hex(), "--move", "spock", "--hmac", commitment]) == 1
    assert capsys.readouterr().out.startswith("MISMATCH")

    assert main(["verify", "--key", "zz", "--move", "spock", "--hmac", commitment]) == 2
    assert "Invalid key" in capsys.readouterr().err


def test_verify_command_non_ascii_hmac(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["verify", "--key", KEY.hex(), "--move", "rock", "--hmac", "é" * 64]) == 1
    assert capsys.readouterr().out.startswith("MISMATCH")
