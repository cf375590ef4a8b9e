"""
Game basics: cell encoding, board snapshots, serialization and player helpers.
Teaching notes:
- A snapshot is a tuple of 9 cells: 0=empty, 1=X, 2=O, row-major (index = row*3 + col).
- Tuples are immutable, so every snapshot in a history can be shared safely.
- X always starts; the side to move follows from the ply number alone.
"""
from typing import Iterable, Tuple

EMPTY = 0
X = 1
O = 2

BOARD_SIZE = 9
CELL_VALUES = (EMPTY, X, O)
SYMBOLS = {EMPTY: '_', X: 'X', O: 'O'}

Board = Tuple[int, ...]

EMPTY_BOARD: Board = (EMPTY,) * BOARD_SIZE


class InvalidBoard(ValueError):
    """A snapshot that is not 9 cells of 0/1/2."""


def validate_board(board: Iterable[int]) -> Board:
    board_t = tuple(board)
    if len(board_t) != BOARD_SIZE:
        raise InvalidBoard(f"Board must have {BOARD_SIZE} cells, got {len(board_t)}")
    for i, v in enumerate(board_t):
        if v not in CELL_VALUES:
            raise InvalidBoard(f"Cell {i} holds {v!r}; expected one of {CELL_VALUES}")
    return board_t


def serialize_board(board: Iterable[int]) -> str:
    return ''.join(str(cell) for cell in board)


def place_mark(board: Board, cell: int, player: int) -> Board:
    """Return a copy of ``board`` with ``cell`` set to ``player``."""
    lst = list(board)
    lst[cell] = player
    return tuple(lst)


def player_for_step(step: int) -> int:
    # X moves on even plies, O on odd ones
    return X if step % 2 == 0 else O


def player_symbol(player: int) -> str:
    return SYMBOLS[player]


def render_board(board: Board) -> str:
    rows = []
    for r in range(3):
        rows.append(' '.join(SYMBOLS[board[r * 3 + c]] for c in range(3)))
    return '\n'.join(rows)
