"""
Win and draw detection over a single board snapshot.
Teaching notes:
- There are exactly 8 winning lines: 3 rows, 3 columns, 2 diagonals.
- Lines are scanned in a fixed order and the first complete one decides the winner,
  so even a malformed board with two complete lines has a deterministic answer.
"""
from typing import Iterable, Optional, Tuple

from .game_basics import EMPTY, validate_board

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def winning_line(board: Iterable[int]) -> Optional[Tuple[int, int, int]]:
    b = validate_board(board)
    for line in WIN_LINES:
        a, m, c = line
        v = b[a]
        if v != EMPTY and v == b[m] and v == b[c]:
            return line
    return None


def evaluate(board: Iterable[int]) -> int:
    """Return the winning player (1 or 2), or 0 when nobody has three in a row.

    Raises:
        InvalidBoard: if ``board`` is not 9 cells of 0/1/2.
    """
    b = validate_board(board)
    line = winning_line(b)
    if line is None:
        return 0
    return b[line[0]]


def is_draw(board: Iterable[int]) -> bool:
    b = validate_board(board)
    return EMPTY not in b and evaluate(b) == 0
