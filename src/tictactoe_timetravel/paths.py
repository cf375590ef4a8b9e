"""Path helpers for where transcripts are written.

Environment-first, falling back to the repository root (nearest parent with .git)
and finally the current working directory.
"""

from __future__ import annotations

import os
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTT_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TTT_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path.cwd().resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def export_dir() -> Path:
    p = os.getenv("TTT_EXPORT_DIR")
    return Path(p) if p else repo_root() / "transcripts"
