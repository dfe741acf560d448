from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from ..config import FormationConfig
from ..constants import (
    BLANK,
    COL_SPACING,
    EXPLODING_GLYPH,
    FIRE_PROB_ALIGNED,
    FIRE_PROB_RANDOM,
    FORMATION_GLYPH_WIDTH,
    FORMATION_GLYPHS,
    FRAME_OFFSETS,
    ROW_SPACING,
)
from .projectile import ProjectilePool

logger = logging.getLogger(__name__)


class CellState(IntEnum):
    ALIVE = 0
    EXPLODING = 1
    DEAD = 2


@dataclass
class Formation:
    """The block of hostile cells.

    Cell (row, col) is drawn at screen column `x + COL_SPACING * col` and screen
    row `y + ROW_SPACING * row`, three glyphs wide. States only ever move
    ALIVE -> EXPLODING -> DEAD and at most one cell is EXPLODING at a time.
    """

    states: np.ndarray  # uint8[rows, cols] of CellState
    x: int
    y: int
    direction: int = 1
    anim_delay: float = 0.35
    delay_step: float = 0.05
    delay_guard: float = 10.0
    explode_duration: float = 0.6

    # State
    frame_offset: int = FRAME_OFFSETS[0]
    exploding: tuple[int, int] | None = None
    explode_elapsed: float = 0.0

    @classmethod
    def from_config(cls, cfg: FormationConfig) -> Formation:
        return cls(
            states=np.full((cfg.rows, cfg.cols), CellState.ALIVE, dtype=np.uint8),
            x=cfg.origin_x,
            y=cfg.origin_y,
            direction=cfg.direction,
            anim_delay=cfg.anim_delay_s,
            delay_step=cfg.anim_delay_step_s,
            delay_guard=cfg.anim_delay_guard_s,
            explode_duration=cfg.explode_duration_s,
        )

    @property
    def rows(self) -> int:
        return int(self.states.shape[0])

    @property
    def cols(self) -> int:
        return int(self.states.shape[1])

    @property
    def right_edge(self) -> int:
        return self.x + self.cols * COL_SPACING

    @property
    def bottom_row(self) -> int:
        return self.y + ROW_SPACING * (self.rows - 1)

    def index(self, row: int, col: int) -> int:
        self._check(row, col)
        return row * self.cols + col

    def state(self, row: int, col: int) -> CellState:
        self._check(row, col)
        return CellState(int(self.states[row, col]))

    def alive_count(self) -> int:
        return int(np.count_nonzero(self.states == CellState.ALIVE))

    def cell_origin(self, row: int, col: int) -> tuple[int, int]:
        """Screen (col, row) of the left glyph of a cell."""
        self._check(row, col)
        return self.x + COL_SPACING * col, self.y + ROW_SPACING * row

    def reached(self, row: int) -> bool:
        return self.bottom_row >= row

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"formation cell ({row}, {col}) outside {self.rows}x{self.cols}")

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------

    def step(self, screen_width: int) -> dict | None:
        """Apply one animation tick of motion. Returns a reversal event, if any."""
        if self.right_edge >= screen_width:
            return self._reverse(-1)
        if self.x <= 0:
            return self._reverse(1)
        self.x += self.direction
        return None

    def _reverse(self, new_direction: int) -> dict:
        self.direction = new_direction
        self.y += 1
        self.x += new_direction
        if self.anim_delay > self.delay_guard:
            self.anim_delay -= self.delay_step
        logger.debug(f"Formation reversed: dir={self.direction} y={self.y} delay={self.anim_delay:.3f}")
        return {
            "type": "formation_reversed",
            "direction": self.direction,
            "y": self.y,
            "anim_delay": self.anim_delay,
        }

    def advance_frame(self) -> None:
        a, b = FRAME_OFFSETS
        self.frame_offset = b if self.frame_offset == a else a

    # ------------------------------------------------------------------
    # Cell life cycle
    # ------------------------------------------------------------------

    def mark_exploding(self, row: int, col: int) -> list[dict]:
        if self.state(row, col) != CellState.ALIVE:
            raise ValueError(f"cell ({row}, {col}) is {self.state(row, col).name}, not ALIVE")
        events = []
        if self.exploding is not None:
            events.extend(self._retire_exploding())
        self.states[row, col] = CellState.EXPLODING
        self.exploding = (row, col)
        self.explode_elapsed = 0.0
        return events

    def update_explosion(self, dt: float) -> list[dict]:
        if self.exploding is None:
            return []
        self.explode_elapsed += dt
        if self.explode_elapsed >= self.explode_duration:
            return self._retire_exploding()
        return []

    def _retire_exploding(self) -> list[dict]:
        assert self.exploding is not None
        row, col = self.exploding
        self.states[row, col] = CellState.DEAD
        self.exploding = None
        self.explode_elapsed = 0.0
        return [{"type": "cell_destroyed", "row": row, "col": col}]

    # ------------------------------------------------------------------
    # Firing
    # ------------------------------------------------------------------

    def fire(self, rng: np.random.Generator, player_col: int, pool: ProjectilePool) -> list[dict]:
        events = []
        for row in range(self.rows):
            for col in range(self.cols):
                if self.states[row, col] != CellState.ALIVE:
                    continue
                cell_x = self.x + COL_SPACING * col
                prob = FIRE_PROB_ALIGNED if cell_x == player_col else FIRE_PROB_RANDOM
                if rng.random() >= prob:
                    continue
                p = pool.spawn(cell_x + 1, self.y + ROW_SPACING * row + 1)
                if p is None:
                    logger.debug(f"Hostile pool exhausted, cell ({row}, {col}) holds fire")
                    continue
                events.append({"type": "hostile_fire", "row": row, "col": col, "pos": [p.x, p.y]})
        return events

    # ------------------------------------------------------------------
    # Screen-space queries
    # ------------------------------------------------------------------

    def cell_at(self, col: int, row: int) -> tuple[int, int] | None:
        """(row, col) of the cell whose glyph span covers screen position (col, row)."""
        rel_row = row - self.y
        rel_col = col - self.x
        if rel_row < 0 or rel_col < 0 or rel_row % ROW_SPACING:
            return None
        r = rel_row // ROW_SPACING
        c, k = divmod(rel_col, COL_SPACING)
        if r >= self.rows or c >= self.cols or k >= FORMATION_GLYPH_WIDTH:
            return None
        return r, c

    def glyph_at(self, col: int, row: int) -> str:
        cell = self.cell_at(col, row)
        if cell is None:
            return BLANK
        r, c = cell
        k = col - (self.x + COL_SPACING * c)
        return self._glyph(r, c, k)

    def _glyph(self, row: int, col: int, k: int) -> str:
        state = self.states[row, col]
        if state == CellState.ALIVE:
            return FORMATION_GLYPHS[row % len(FORMATION_GLYPHS)][self.frame_offset + k]
        if state == CellState.EXPLODING:
            return EXPLODING_GLYPH
        return BLANK

    def cells(self) -> Iterator[tuple[int, int, str]]:
        """Yield (screen_col, screen_row, glyph) for every drawn glyph of non-dead cells."""
        for row in range(self.rows):
            for col in range(self.cols):
                if self.states[row, col] == CellState.DEAD:
                    continue
                sx, sy = self.cell_origin(row, col)
                for k in range(FORMATION_GLYPH_WIDTH):
                    yield sx + k, sy, self._glyph(row, col, k)
