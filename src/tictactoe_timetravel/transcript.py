"""
Transcript export for a game history.

Writes one row per recorded step (board, mover, cell played, status) as CSV and/or
Parquet, plus a manifest.json with row counts and checksums. Transcripts are write-only
artifacts for later analysis; nothing in this package reads them back.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .game_basics import player_symbol, serialize_board
from .history import GameHistory, status_for

TRANSCRIPT_VERSION = "1.0.0"
FIELDNAMES = ["step", "label", "board", "player", "cell", "status", "is_current"]


@dataclass
class ExportArgs:
    out: Path
    format: str = "csv"  # one of: "csv", "parquet", "both"
    cli_argv: List[str] | None = None


def _changed_cell(prev: tuple, cur: tuple) -> Optional[int]:
    for i, (a, b) in enumerate(zip(prev, cur)):
        if a != b:
            return i
    return None


def transcript_rows(history: GameHistory) -> List[Dict[str, Any]]:
    snaps = history.snapshots
    view = history.current_view()
    rows: List[Dict[str, Any]] = []
    for entry in view.moves:
        i = entry.step
        board = snaps[i]
        cell = _changed_cell(snaps[i - 1], board) if i > 0 else None
        rows.append({
            "step": i,
            "label": entry.label,
            "board": serialize_board(board),
            # the mark placed to reach this step, empty for the start position
            "player": player_symbol(board[cell]) if cell is not None else "",
            "cell": cell,
            "status": status_for(board, i).text,
            "is_current": i == history.step,
        })
    return rows


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def export_transcript(history: GameHistory, args: ExportArgs) -> Path:
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")

    have_parquet = (
        importlib.util.find_spec('pandas') is not None
        and importlib.util.find_spec('pyarrow') is not None
    )
    msg = (
        "Parquet dependencies not available (install pandas and pyarrow). "
        "Use pip install .[parquet] to enable parquet support."
    )
    if fmt == "parquet" and not have_parquet:
        # fail before writing anything
        raise RuntimeError(msg)

    rows = transcript_rows(history)
    args.out.mkdir(parents=True, exist_ok=True)
    csv_path = args.out / "transcript.csv"
    parquet_path = args.out / "transcript.parquet"
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        with csv_path.open('w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=FIELDNAMES)
            w.writeheader()
            for r in rows:
                w.writerow(r)
        wrote_csv = True
        logging.info("Wrote CSV: %s (%d rows)", csv_path, len(rows))

    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            df = pd.DataFrame(rows, columns=FIELDNAMES)
            df["cell"] = df["cell"].astype("Int64")
            df.to_parquet(parquet_path, index=False)
            wrote_parquet = True
            logging.info("Wrote Parquet: %s", parquet_path)
        else:
            logging.warning(
                "%s Proceeding with CSV only; manifest will record parquet_written=false.",
                msg,
            )

    files: Dict[str, Any] = {
        "transcript_csv": str(csv_path) if wrote_csv else None,
        "transcript_parquet": str(parquet_path) if wrote_parquet else None,
    }
    checksums = {label: _sha256_file(Path(p)) for label, p in files.items() if p is not None}
    manifest = {
        "transcript_version": TRANSCRIPT_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split(" ")[0],
        "format": fmt,
        "cli_argv": args.cli_argv,
        "row_count": len(rows),
        "current_step": history.step,
        "final_status": history.current_view().status.text,
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    (args.out / "manifest.json").write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json to %s", args.out)
    return args.out
