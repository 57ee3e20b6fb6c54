from __future__ import annotations

import os
from pathlib import Path


def resolve_path(cwd: Path, path_str: str) -> Path:
    p = Path(path_str).expanduser()
    if not p.is_absolute():
        p = (cwd / p).resolve()
    else:
        p = p.resolve()
    return p


def relative_to_dir(target: Path, directory: Path) -> str:
    """POSIX-style path of ``target`` relative to ``directory`` (may climb with ``..``)."""
    return Path(os.path.relpath(target, directory)).as_posix()


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
