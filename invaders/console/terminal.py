# invaders/console/terminal.py
"""Curses display/input boundary."""

from __future__ import annotations

import contextlib
import curses
import logging
import time
from collections.abc import Callable

from ..actions import Key
from ..render import Screen

logger = logging.getLogger(__name__)

KEY_MAP: dict[int, Key] = {
    curses.KEY_LEFT: Key.LEFT,
    ord("a"): Key.LEFT,
    ord("A"): Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    ord("d"): Key.RIGHT,
    ord("D"): Key.RIGHT,
    ord(" "): Key.FIRE,
    27: Key.EXIT,  # ESC
    ord("q"): Key.EXIT,
    ord("Q"): Key.EXIT,
    ord("p"): Key.PAUSE,
    ord("P"): Key.PAUSE,
}


class CursesFrontend:
    """Terminal front end.

    Terminals only report key presses (and auto-repeats), never releases, so a
    key counts as down until `key_hold_s` passes without another report of it.
    """

    def __init__(
        self,
        stdscr: curses.window,
        width: int,
        height: int,
        key_hold_s: float = 0.12,
        time_fn: Callable[[], float] = time.perf_counter,
    ):
        rows, cols = stdscr.getmaxyx()
        if rows < height or cols < width:
            raise SystemExit(f"Terminal is {cols}x{rows}; the game needs at least {width}x{height}.")
        self.stdscr = stdscr
        self.key_hold_s = key_hold_s
        self._time_fn = time_fn
        self._last_seen: dict[Key, float] = {}
        stdscr.nodelay(True)
        stdscr.keypad(True)
        logger.info(f"Terminal {cols}x{rows}, playfield {width}x{height}")

    def poll(self) -> set[Key]:
        now = self._time_fn()
        while True:
            code = self.stdscr.getch()
            if code == -1:
                break
            key = KEY_MAP.get(code)
            if key is not None:
                self._last_seen[key] = now
        return {k for k, seen in self._last_seen.items() if now - seen <= self.key_hold_s}

    def present(self, screen: Screen) -> None:
        last = screen.height - 1
        for row, text in enumerate(screen.lines()):
            if row == last:
                # Writing the bottom-right cell moves the cursor off-screen, which curses reports as an error.
                with contextlib.suppress(curses.error):
                    self.stdscr.addstr(row, 0, text)
            else:
                self.stdscr.addstr(row, 0, text)
        self.stdscr.refresh()

    def wait(self, seconds: float) -> None:
        time.sleep(seconds)
