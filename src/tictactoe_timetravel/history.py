"""
Game history with time travel.

A ``GameHistory`` keeps every board snapshot of a session plus a cursor selecting the
active one. Playing a move from a rewound position discards the snapshots after the
cursor before appending the new one. Turn, winner and draw are never stored: they are
recomputed from the snapshot under the cursor and its step number.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .game_basics import (
    BOARD_SIZE,
    EMPTY,
    EMPTY_BOARD,
    Board,
    place_mark,
    player_for_step,
    player_symbol,
)
from .win_detector import evaluate

WINNER = "winner"
DRAW = "draw"
NEXT_TO_MOVE = "next"


class InvalidStep(IndexError):
    """Rewind target outside the recorded history."""


class InvalidMove(ValueError):
    """Cell index that does not exist on a 3x3 board."""


@dataclass(frozen=True)
class Status:
    kind: str
    player: Optional[int] = None

    @classmethod
    def winner(cls, player: int) -> "Status":
        return cls(WINNER, player)

    @classmethod
    def draw(cls) -> "Status":
        return cls(DRAW)

    @classmethod
    def next_to_move(cls, player: int) -> "Status":
        return cls(NEXT_TO_MOVE, player)

    @property
    def is_over(self) -> bool:
        return self.kind != NEXT_TO_MOVE

    @property
    def text(self) -> str:
        if self.kind == WINNER:
            return f"Winner: {player_symbol(self.player)}"
        if self.kind == DRAW:
            return "Draw"
        return f"Next player: {player_symbol(self.player)}"


@dataclass(frozen=True)
class MoveEntry:
    step: int
    label: str


@dataclass(frozen=True)
class View:
    board: Board
    status: Status
    moves: Tuple[MoveEntry, ...]


def move_label(step: int) -> str:
    return "Go to game start" if step == 0 else f"Go to move #{step}"


def status_for(board: Board, step: int) -> Status:
    w = evaluate(board)
    if w != 0:
        return Status.winner(w)
    if EMPTY not in board:
        return Status.draw()
    return Status.next_to_move(player_for_step(step))


class GameHistory:
    """Ordered board snapshots and the cursor into them.

    Snapshot 0 is always the empty board. Each later snapshot differs from its
    predecessor in exactly one cell.
    """

    def __init__(self) -> None:
        self._snapshots: List[Board] = [EMPTY_BOARD]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def step(self) -> int:
        return self._cursor

    @property
    def snapshots(self) -> Tuple[Board, ...]:
        return tuple(self._snapshots)

    @property
    def board(self) -> Board:
        return self._snapshots[self._cursor]

    def player_to_move(self, step: Optional[int] = None) -> int:
        return player_for_step(self._cursor if step is None else step)

    def apply_move(self, cell: int) -> View:
        """Place the current player's mark on ``cell``.

        Clicking an occupied cell or playing on a decided board is ignored and the
        unchanged view is returned.

        Raises:
            InvalidMove: if ``cell`` is not an integer in [0, 8].
        """
        if isinstance(cell, bool) or not isinstance(cell, int) or not 0 <= cell < BOARD_SIZE:
            raise InvalidMove(f"Cell must be an integer in [0, {BOARD_SIZE - 1}], got {cell!r}")
        current = self.board
        if evaluate(current) != 0:
            logging.debug("Ignoring move at %d: game already decided at step %d", cell, self._cursor)
            return self.current_view()
        if current[cell] != EMPTY:
            logging.debug("Ignoring move at %d: cell occupied at step %d", cell, self._cursor)
            return self.current_view()

        player = self.player_to_move()
        dropped = len(self._snapshots) - (self._cursor + 1)
        if dropped:
            logging.debug("Branching from step %d; discarding %d later snapshot(s)", self._cursor, dropped)
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(place_mark(current, cell, player))
        self._cursor = len(self._snapshots) - 1
        logging.debug("Step %d: %s -> cell %d", self._cursor, player_symbol(player), cell)
        return self.current_view()

    def rewind_to(self, step: int) -> View:
        """Move the cursor to ``step`` without touching the stored snapshots.

        Raises:
            InvalidStep: if ``step`` is outside [0, len(history) - 1].
        """
        if isinstance(step, bool) or not isinstance(step, int) or not 0 <= step < len(self._snapshots):
            raise InvalidStep(f"Step must be in [0, {len(self._snapshots) - 1}], got {step!r}")
        self._cursor = step
        logging.debug("Rewound to step %d", step)
        return self.current_view()

    def current_view(self) -> View:
        return View(
            board=self.board,
            status=status_for(self.board, self._cursor),
            moves=tuple(MoveEntry(i, move_label(i)) for i in range(len(self._snapshots))),
        )
