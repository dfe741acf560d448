from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from ..config import ScreenConfig, ShieldConfig
from ..constants import SHIELD_GLYPHS


@dataclass
class Shield:
    x: int
    y: int
    strength: np.ndarray  # int8[height, length], row-major like the screen

    MAX_STRENGTH = len(SHIELD_GLYPHS) - 1

    @classmethod
    def full(cls, x: int, y: int, length: int = 8, height: int = 3, max_strength: int = 3) -> Shield:
        if not 0 < max_strength <= cls.MAX_STRENGTH:
            raise ValueError(f"max_strength must be in 1..{cls.MAX_STRENGTH}, got {max_strength}")
        return cls(x=x, y=y, strength=np.full((height, length), max_strength, dtype=np.int8))

    @property
    def length(self) -> int:
        return int(self.strength.shape[1])

    @property
    def height(self) -> int:
        return int(self.strength.shape[0])

    def contains(self, col: int, row: int) -> bool:
        return self.x <= col < self.x + self.length and self.y <= row < self.y + self.height

    def cell_strength(self, row: int, col: int) -> int:
        """Strength of shield-local cell (row, col)."""
        if not (0 <= row < self.height and 0 <= col < self.length):
            raise IndexError(f"shield cell ({row}, {col}) outside {self.height}x{self.length}")
        return int(self.strength[row, col])

    def hit(self, col: int, row: int) -> bool:
        # Bounds test and damage in one call: True means the projectile was absorbed.
        if not self.contains(col, row):
            return False
        r, c = row - self.y, col - self.x
        if self.strength[r, c] <= 0:
            return False
        self.strength[r, c] -= 1
        return True

    def glyph(self, row: int, col: int) -> str:
        return SHIELD_GLYPHS[self.cell_strength(row, col)]

    def cells(self) -> Iterator[tuple[int, int, str]]:
        """Yield (screen_col, screen_row, glyph) for every cell, depleted ones included."""
        for r in range(self.height):
            for c in range(self.length):
                yield self.x + c, self.y + r, SHIELD_GLYPHS[int(self.strength[r, c])]


def build_shields(cfg: ShieldConfig, screen: ScreenConfig) -> list[Shield]:
    row = screen.height - cfg.rows_above_bottom
    return [
        Shield.full((i + 1) * cfg.spacing_x, row, cfg.length, cfg.height, cfg.max_strength)
        for i in range(cfg.count)
    ]
