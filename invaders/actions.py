from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

KEY_COUNT = 5


class Key(IntEnum):
    LEFT = 0
    RIGHT = 1
    FIRE = 2
    EXIT = 3
    PAUSE = 4


class LatchState(IntEnum):
    """Per-key latch.

    RELEASED -> PRESSED on the first sampled frame the key is down, PRESSED -> HELD
    on every following frame it stays down, and back to RELEASED once it is up.
    Edge-triggered actions (fire, pause, restart) only act on PRESSED.
    """

    RELEASED = 0
    PRESSED = 1
    HELD = 2


class KeyLatch:
    def __init__(self) -> None:
        self.state = LatchState.RELEASED

    def sample(self, down: bool) -> LatchState:
        if not down:
            self.state = LatchState.RELEASED
        elif self.state == LatchState.RELEASED:
            self.state = LatchState.PRESSED
        else:
            self.state = LatchState.HELD
        return self.state

    def reset(self) -> None:
        self.state = LatchState.RELEASED


class Keyboard:
    """Latched view of the five logical keys, sampled once per frame."""

    def __init__(self) -> None:
        self.latches = {key: KeyLatch() for key in Key}

    def sample(self, down: Iterable[Key]) -> None:
        down_set = set(down)
        for key, latch in self.latches.items():
            latch.sample(key in down_set)

    def is_down(self, key: Key) -> bool:
        return self.latches[key].state != LatchState.RELEASED

    def pressed(self, key: Key) -> bool:
        return self.latches[key].state == LatchState.PRESSED

    def state(self, key: Key) -> LatchState:
        return self.latches[key].state

    def reset(self) -> None:
        for latch in self.latches.values():
            latch.reset()
