from __future__ import annotations

from dataclasses import dataclass

from ..constants import PLAYER_GLYPH


@dataclass
class PlayerState:
    x: float  # left edge of the glyph, continuous
    y: int  # fixed screen row
    speed: float  # cells / s
    max_x: float  # rightmost legal left edge

    hit: bool = False
    recovery_time: float = 0.0  # seconds spent in the current hit-recovery window

    @property
    def width(self) -> int:
        return len(PLAYER_GLYPH)

    @property
    def col(self) -> int:
        return int(round(self.x))

    @property
    def recovering(self) -> bool:
        return self.hit

    def covers(self, col: int) -> bool:
        return self.col <= col < self.col + self.width

    def move(self, direction: int, dt: float) -> None:
        """Slide left (-1) or right (+1), clamped to the screen."""
        dx = self.speed * dt
        if direction < 0:
            self.x = self.x - dx if self.x > dx else 0.0
        elif direction > 0:
            self.x = self.x + dx if self.x + dx <= self.max_x else self.max_x

    def mark_hit(self) -> None:
        self.hit = True
        self.recovery_time = 0.0

    def update_recovery(self, dt: float, duration: float) -> bool:
        """Advance the hit-recovery timer; returns True on the frame recovery ends."""
        if not self.hit:
            return False
        self.recovery_time += dt
        if self.recovery_time >= duration:
            self.hit = False
            self.recovery_time = 0.0
            return True
        return False
