from __future__ import annotations

from tabulate import tabulate

from moves import MoveSet
from protocol import determine_outcome

CORNER = "User v  PC >"

CELL_TEXT = {"win": "Win", "lose": "Lose", "draw": "Draw"}


def rules_rows(moves: MoveSet) -> list[list[str]]:
    n = len(moves)
    return [
        [user_move] + [CELL_TEXT[determine_outcome(n, i, j)] for j in range(n)]
        for i, user_move in enumerate(moves)
    ]


def generate_rules_table(moves: MoveSet) -> str:
    """Every pairing, read from the user's side: rows are your move, columns the computer's."""
    intro = (
        "Each cell shows the result for you (row) against the computer (column).\n"
        f"Every move beats the {moves.half} move(s) listed before it and loses to the "
        f"{moves.half} after it, wrapping around the list."
    )
    table = tabulate(rules_rows(moves), headers=[CORNER, *moves], tablefmt="grid")
    return intro + "\n" + table
