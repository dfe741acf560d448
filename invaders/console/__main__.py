# invaders/console/__main__.py
"""Entry point: python -m invaders.console"""

from __future__ import annotations

import argparse
import curses
import os
from pathlib import Path

from ..config import GameConfig
from ..game import LoopStats, run
from . import configure_logging
from .config import settings
from .terminal import CursesFrontend

# Short ESC delay so the exit key responds within a frame.
os.environ.setdefault("ESCDELAY", "25")


def play(stdscr: curses.window, config: GameConfig) -> LoopStats:
    curses.curs_set(0)
    frontend = CursesFrontend(
        stdscr,
        width=config.screen.width,
        height=config.screen.height,
        key_hold_s=settings.KEY_HOLD_S,
    )
    frame_sleep_s = 1.0 / settings.TARGET_FPS if settings.TARGET_FPS > 0 else 0.0
    return run(
        frontend,
        config,
        max_frame_dt=settings.MAX_FRAME_DT,
        idle_poll_s=settings.IDLE_POLL_S,
        frame_sleep_s=frame_sleep_s,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Console Invaders")
    parser.add_argument("--seed", type=int, default=settings.SEED)
    parser.add_argument("--log-level", type=str, default=settings.LOG_LEVEL)
    parser.add_argument("--log-file", type=Path, default=settings.LOG_FILE)
    args = parser.parse_args()

    configure_logging(args.log_level, args.log_file)
    config = GameConfig(seed=args.seed)
    stats = curses.wrapper(play, config)
    best = max(stats.scores, default=0)
    print(f"Game Over!! {stats.sessions} game(s), best score {best}")


if __name__ == "__main__":
    main()
