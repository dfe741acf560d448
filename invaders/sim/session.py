from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from ..actions import Key, Keyboard
from ..config import GameConfig
from ..constants import (
    GAME_OVER_CENTER_OFFSET,
    GAME_OVER_TEXT,
    PAUSED_TEXT,
    PLAYER_GLYPH,
    PLAYER_HIT_GLYPH,
    STATUS_COL,
    STATUS_FORMAT,
    STATUS_ROW,
)
from ..render import Screen
from .collision import resolve_hostile_projectile, resolve_player_projectile
from .formation import Formation
from .player import PlayerState
from .projectile import Owner, Projectile, ProjectilePool
from .shield import build_shields

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Session:
    """One game, from a fresh formation to game over.

    `update()` runs a single frame in fixed order and returns the frame's events;
    `render()` composes the frame into a caller-supplied (or new) `Screen`.
    """

    def __init__(self, config: GameConfig | None = None, rng: np.random.Generator | None = None):
        self.config = config if config is not None else GameConfig()
        self.config.validate()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        cfg = self.config
        scr = cfg.screen
        max_x = float(scr.width - len(PLAYER_GLYPH))
        self.player = PlayerState(x=max_x / 2.0, y=scr.player_row, speed=cfg.player_speed, max_x=max_x)
        self.bolt = Projectile.from_spec(Owner.PLAYER, cfg.player_bolt)
        self.bombs = ProjectilePool(cfg.hostile_bomb, cfg.hostile_pool_size)
        self.formation = Formation.from_config(cfg.formation)
        self.shields = build_shields(cfg.shields, scr)

        self.score = 0
        self.lives = cfg.lives
        self.phase = Phase.PLAYING
        self.reason: str | None = None
        self.paused = False
        self.anim_elapsed = 0.0
        self.time_s = 0.0
        self.frame = 0
        self.fps = 0.0
        logger.info(f"Session started: {self.formation.alive_count()} hostiles, {self.lives} lives")

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def quit(self) -> list[dict]:
        return self._end("quit")

    def _end(self, reason: str) -> list[dict]:
        if self.phase is Phase.GAME_OVER:
            return []
        self.phase = Phase.GAME_OVER
        self.reason = reason
        logger.info(f"Game over ({reason}): score={self.score} lives={self.lives} frames={self.frame}")
        return [{"type": "game_over", "reason": reason, "score": self.score}]

    def update(self, dt: float, keys: Keyboard, elapsed: float | None = None) -> list[dict]:
        """Advance one frame by `dt` seconds of simulated time.

        `elapsed` is the unclamped wall time of the frame, used only for the FPS
        readout; it defaults to `dt`.
        """
        if self.phase is Phase.GAME_OVER:
            return []
        events: list[dict] = []

        if keys.pressed(Key.PAUSE):
            self.paused = not self.paused
            events.append({"type": "pause", "paused": self.paused})
        if self.paused:
            return events

        dt = max(0.0, float(dt))
        cfg = self.config
        self.frame += 1
        self.time_s += dt
        shown = dt if elapsed is None else max(0.0, float(elapsed))
        self.fps = 1.0 / shown if shown > 0.0 else 0.0
        self.anim_elapsed += dt
        anim_due = self.anim_elapsed >= self.formation.anim_delay

        # Movement stays live during hit recovery; only firing is locked out.
        if keys.is_down(Key.LEFT):
            self.player.move(-1, dt)
        if keys.is_down(Key.RIGHT):
            self.player.move(1, dt)

        if self.bolt.visible:
            for ev in resolve_player_projectile(self.bolt, dt, self.shields, self.formation):
                if ev["type"] == "formation_hit":
                    self.score += ev["score"]
                    logger.debug(f"Hit cell ({ev['row']}, {ev['col']}), score={self.score}")
                events.append(ev)
        elif keys.pressed(Key.FIRE) and not self.player.hit:
            self.bolt.launch(self.player.x + 1.0, cfg.screen.height - 2.0)
            events.append({"type": "player_fire", "pos": [self.bolt.x, self.bolt.y]})

        if self.formation.reached(self.player.y):
            events.extend(self._end("invaded"))
        elif anim_due:
            reversal = self.formation.step(cfg.screen.width)
            if reversal is not None:
                events.append(reversal)
        events.extend(self.formation.fire(self.rng, self.player.col, self.bombs))

        for bomb in self.bombs.visible():
            for ev in resolve_hostile_projectile(bomb, dt, self.shields, self.player, cfg.screen.height):
                if ev["type"] == "player_hit":
                    self.lives = max(0, self.lives - 1)
                    ev["lives"] = self.lives
                    logger.debug(f"Player hit, lives={self.lives}")
                    events.append(ev)
                    if self.lives == 0:
                        events.extend(self._end("destroyed"))
                    continue
                events.append(ev)

        events.extend(self.formation.update_explosion(dt))
        if self.player.update_recovery(dt, cfg.recovery_duration_s):
            events.append({"type": "player_recovered"})

        if anim_due:
            self.formation.advance_frame()
            self.anim_elapsed = 0.0
        return events

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def status_line(self) -> str:
        return STATUS_FORMAT.format(score=self.score, lives=self.lives, fps=self.fps)

    def render(self, screen: Screen | None = None) -> Screen:
        scr = self.config.screen
        if screen is None:
            screen = Screen(scr.width, scr.height)
        screen.clear()

        screen.write(STATUS_COL, STATUS_ROW, self.status_line()[: screen.width - STATUS_COL])
        for shield in self.shields:
            for col, row, glyph in shield.cells():
                screen.put(col, row, glyph)
        for col, row, glyph in self.formation.cells():
            screen.put(col, row, glyph)

        glyph = PLAYER_HIT_GLYPH * len(PLAYER_GLYPH) if self.player.hit else PLAYER_GLYPH
        screen.write(self.player.col, self.player.y, glyph)

        if self.bolt.visible:
            screen.put(self.bolt.col, self.bolt.row, self.bolt.glyph)
        for bomb in self.bombs.visible():
            screen.put(bomb.col, bomb.row, bomb.glyph)

        if self.phase is Phase.GAME_OVER:
            _banner(screen, GAME_OVER_TEXT, screen.width // 2 - GAME_OVER_CENTER_OFFSET)
        elif self.paused:
            _banner(screen, PAUSED_TEXT, (screen.width - len(PAUSED_TEXT)) // 2)
        return screen


def _banner(screen: Screen, text: str, col: int) -> None:
    col = max(0, col)
    screen.write(col, screen.height // 2, text[: screen.width - col])
