"""Logging setup for the pyunspecd CLI.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, by the CLI entry point.
"""
from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pyunspecd"

DEBUG_MODE = os.environ.get("UNSPECD_DEBUG", "").lower() in ("1", "true", "yes")


def setup_logging(level: int | None = None, *, verbose: bool = False) -> logging.Logger:
    """Attach a rich handler to the ``pyunspecd`` logger.

    Level: explicit ``level`` > ``--verbose`` / ``UNSPECD_DEBUG`` (DEBUG) > INFO.
    Calling it again replaces the handler instead of stacking a second one.
    """
    if level is None:
        level = logging.DEBUG if (verbose or DEBUG_MODE) else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for h in list(logger.handlers):
        if getattr(h, "_pyunspecd", False):
            logger.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=level <= logging.DEBUG,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._pyunspecd = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
