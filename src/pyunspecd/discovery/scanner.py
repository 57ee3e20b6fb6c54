from __future__ import annotations

import glob as _glob
import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

EXCLUDED_DIRS = frozenset({".unspecd", "build", "dist", "node_modules", "__pycache__", ".venv", "venv"})


def _is_excluded(path: Path, cwd: Path) -> bool:
    try:
        parts = path.relative_to(cwd).parts
    except ValueError:
        # absolute pattern outside cwd; judge by the full path
        parts = path.parts
    return any(part in EXCLUDED_DIRS for part in parts[:-1])


def expand_pattern(cwd: Path, pattern: str) -> list[Path]:
    """Expand one glob pattern rooted at ``cwd`` into sorted absolute file paths."""
    full = str(cwd / pattern)
    out: list[Path] = []
    for m in sorted(_glob.glob(full, recursive=True)):
        # judge the path as matched, before symlinks are followed
        if _is_excluded(Path(m), cwd):
            continue
        p = Path(m).resolve()
        if p.is_file():
            out.append(p)
    return out


def scan_tool_files(cwd: Path, patterns: Iterable[str]) -> list[Path]:
    """Expand every pattern and return unique candidate paths.

    A pattern that fails to expand is logged and skipped. Order is first-seen
    across patterns, so generated code is stable between runs.
    """
    cwd = cwd.resolve()
    found: list[Path] = []
    for pattern in patterns:
        try:
            paths = expand_pattern(cwd, pattern)
        except Exception as e:
            logger.warning('Failed to search pattern "%s": %s', pattern, e)
            continue
        logger.info('Found %d files matching "%s"', len(paths), pattern)
        found.extend(paths)

    unique = list(dict.fromkeys(found))
    logger.info("Total unique tool files found: %d", len(unique))
    return unique
