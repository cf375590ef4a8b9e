from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .game_basics import render_board
from .history import GameHistory, InvalidMove, InvalidStep, View
from .paths import export_dir
from .transcript import ExportArgs, export_transcript


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-timetravel", description="Tic-tac-toe with time travel")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    def add_export_args(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--export",
            type=Path,
            nargs="?",
            const=None,
            default=argparse.SUPPRESS,
            help="Write a transcript of the session (default dir: $TTT_EXPORT_DIR or ./transcripts)",
        )
        sp.add_argument(
            "--format",
            choices=["csv", "parquet", "both"],
            default="csv",
            help="Transcript format: csv (default), parquet, both",
        )

    p_rep = sub.add_parser("replay", help="Play a fixed sequence of moves and show the result")
    p_rep.add_argument("--moves", default="", help='Comma-separated cells 0-8, e.g. "0,4,1"')
    p_rep.add_argument("--goto", type=int, default=None, help="Rewind to this step after the moves")
    add_export_args(p_rep)

    p_play = sub.add_parser(
        "play",
        help="Read commands from stdin: <cell> | move <cell> | goto <step> | show | quit",
    )
    add_export_args(p_play)

    return p


def format_view(view: View, current_step: int) -> str:
    lines = [render_board(view.board), view.status.text]
    for entry in view.moves:
        marker = ">" if entry.step == current_step else " "
        lines.append(f"{marker} {entry.step}. {entry.label}")
    return "\n".join(lines)


def _parse_moves(raw: str) -> List[int]:
    return [int(x) for x in raw.split(",") if x.strip()]


def _maybe_export(ns: argparse.Namespace, history: GameHistory, argv: Optional[List[str]]) -> None:
    if not hasattr(ns, "export"):
        return
    out = ns.export if ns.export is not None else export_dir()
    export_transcript(history, ExportArgs(
        out=out,
        format=ns.format,
        cli_argv=list(argv) if argv is not None else None,
    ))
    logging.info("Exported transcript to: %s", out)


def run_replay(ns: argparse.Namespace, argv: Optional[List[str]] = None) -> int:
    try:
        moves = _parse_moves(ns.moves)
    except ValueError:
        logging.error("Invalid move list %r. Must be comma-separated integers.", ns.moves)
        return 2
    history = GameHistory()
    try:
        for cell in moves:
            history.apply_move(cell)
        if ns.goto is not None:
            history.rewind_to(ns.goto)
    except (InvalidMove, InvalidStep) as e:
        logging.error("%s", e)
        return 2
    print(format_view(history.current_view(), history.step))
    _maybe_export(ns, history, argv)
    return 0


def handle_command(history: GameHistory, line: str) -> bool:
    """Apply one ``play`` command. Returns False when the session should end."""
    parts = line.split()
    if not parts:
        return True
    cmd = parts[0].lower()
    if cmd in {"quit", "exit", "q"}:
        return False
    if cmd == "show":
        return True
    try:
        if cmd == "goto" and len(parts) == 2:
            history.rewind_to(int(parts[1]))
        elif cmd == "move" and len(parts) == 2:
            history.apply_move(int(parts[1]))
        elif len(parts) == 1:
            history.apply_move(int(cmd))
        else:
            logging.error("Unknown command: %s", line.strip())
    except ValueError:
        # InvalidMove is a ValueError too
        logging.error("Invalid command: %s", line.strip())
    except InvalidStep as e:
        logging.error("%s", e)
    return True


def run_play(ns: argparse.Namespace, argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    r = stdin if stdin is not None else sys.stdin
    history = GameHistory()
    print(format_view(history.current_view(), history.step))
    for line in r:
        if not handle_command(history, line):
            break
        print(format_view(history.current_view(), history.step))
    _maybe_export(ns, history, argv)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictactoe-timetravel"))
        except Exception:
            print("unknown")
        return 0

    try:
        if ns.cmd == "replay":
            return run_replay(ns, argv)
        if ns.cmd == "play":
            return run_play(ns, argv)
    except RuntimeError as e:
        # missing parquet dependencies
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
