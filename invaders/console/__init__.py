# invaders/console/__init__.py
"""Curses front end for the invaders simulation."""

from __future__ import annotations

import logging
from pathlib import Path


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Route logging to `log_file` (the terminal belongs to curses) or stderr."""
    kwargs: dict = {}
    if log_file is not None:
        kwargs["filename"] = str(log_file)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        **kwargs,
    )
