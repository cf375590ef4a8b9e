"""tictactoe_timetravel package.

Tic-tac-toe game state with a rewindable move history, win/draw detection,
transcript export, and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .game_basics import EMPTY, O, X, InvalidBoard
from .history import GameHistory, InvalidMove, InvalidStep, MoveEntry, Status, View
from .transcript import ExportArgs, export_transcript
from .win_detector import evaluate, is_draw, winning_line

__all__ = [
    "EMPTY",
    "X",
    "O",
    "GameHistory",
    "View",
    "Status",
    "MoveEntry",
    "InvalidBoard",
    "InvalidMove",
    "InvalidStep",
    "evaluate",
    "is_draw",
    "winning_line",
    "export_transcript",
    "ExportArgs",
]
