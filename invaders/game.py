from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from .actions import Key, Keyboard
from .config import GameConfig
from .render import Screen
from .sim.clock import Clock
from .sim.session import Phase, Session

logger = logging.getLogger(__name__)


class Frontend(Protocol):
    """Display/input boundary driven by `run()`."""

    def poll(self) -> set[Key]: ...

    def present(self, screen: Screen) -> None: ...

    def wait(self, seconds: float) -> None: ...


class HeadlessFrontend:
    """Replays a scripted sequence of key sets, one per poll.

    Once the script runs out every poll reports `after` (EXIT by default), so a
    scripted run always terminates.
    """

    def __init__(
        self,
        script: Iterable[Iterable[Key]] = (),
        after: Iterable[Key] = (Key.EXIT,),
        keep_frames: bool = False,
    ):
        self._script = iter(script)
        self._after = set(after)
        self.keep_frames = keep_frames
        self.frames: list[str] = []
        self.last_frame: str | None = None
        self.presented = 0
        self.polls = 0
        self.waited_s = 0.0

    def poll(self) -> set[Key]:
        self.polls += 1
        try:
            return set(next(self._script))
        except StopIteration:
            return set(self._after)

    def present(self, screen: Screen) -> None:
        self.presented += 1
        self.last_frame = str(screen)
        if self.keep_frames:
            self.frames.append(self.last_frame)

    def wait(self, seconds: float) -> None:
        self.waited_s += seconds


@dataclass
class LoopStats:
    sessions: int = 0
    frames: int = 0
    scores: list[int] = field(default_factory=list)
    reasons: list[str | None] = field(default_factory=list)


def run(
    frontend: Frontend,
    config: GameConfig | None = None,
    rng: np.random.Generator | None = None,
    clock: Clock | None = None,
    max_frame_dt: float = 0.1,
    idle_poll_s: float = 0.005,
    frame_sleep_s: float = 0.0,
) -> LoopStats:
    """Play sessions back to back until EXIT is pressed.

    Each frame: tick, sample keys, check EXIT, update, present. After a session
    ends the game-over frame is presented once, then the loop idles until a FIRE
    edge (restart) or EXIT (stop). EXIT always wins over restart.
    """
    config = config if config is not None else GameConfig()
    rng = rng if rng is not None else np.random.default_rng(config.seed)
    clock = clock if clock is not None else Clock()
    keys = Keyboard()
    screen = Screen(config.screen.width, config.screen.height)
    stats = LoopStats()

    quit_requested = False
    while not quit_requested:
        session = Session(config, rng)
        stats.sessions += 1
        clock.reset()
        while session.phase is Phase.PLAYING:
            elapsed = clock.tick()
            dt = min(elapsed, max_frame_dt)
            keys.sample(frontend.poll())
            if keys.is_down(Key.EXIT):
                quit_requested = True
                session.quit()
                break
            session.update(dt, keys, elapsed=elapsed)
            frontend.present(session.render(screen))
            stats.frames += 1
            if frame_sleep_s > 0.0:
                frontend.wait(frame_sleep_s)

        stats.scores.append(session.score)
        stats.reasons.append(session.reason)
        frontend.present(session.render(screen))

        while not quit_requested:
            keys.sample(frontend.poll())
            if keys.is_down(Key.EXIT):
                quit_requested = True
            elif keys.pressed(Key.FIRE):
                logger.info("Restarting")
                break
            else:
                frontend.wait(idle_poll_s)

    logger.info(f"Stopped after {stats.sessions} session(s), {stats.frames} frames")
    return stats
