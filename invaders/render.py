from __future__ import annotations

import numpy as np

from .constants import BLANK


class Screen:
    """Fixed-size character grid the session draws into each frame.

    Writes are bounds-checked: an off-grid position is a programming fault, so it
    trips an assertion, and with assertions disabled (`python -O`) the write is
    dropped rather than wrapped around.
    """

    def __init__(self, width: int = 120, height: int = 30):
        if width < 1 or height < 1:
            raise ValueError(f"screen must be at least 1x1, got {width}x{height}")
        self.cells = np.full((height, width), BLANK, dtype="<U1")

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def clear(self) -> None:
        self.cells.fill(BLANK)

    def put(self, col: int, row: int, glyph: str) -> bool:
        ok = self.in_bounds(col, row)
        assert ok, f"write at ({col}, {row}) outside {self.width}x{self.height} screen"
        if not ok:
            return False
        self.cells[row, col] = glyph
        return True

    def write(self, col: int, row: int, text: str) -> None:
        for k, ch in enumerate(text):
            self.put(col + k, row, ch)

    def get(self, col: int, row: int) -> str:
        if not self.in_bounds(col, row):
            raise IndexError(f"({col}, {row}) outside {self.width}x{self.height} screen")
        return str(self.cells[row, col])

    def row_text(self, row: int) -> str:
        return "".join(self.cells[row].tolist())

    def lines(self) -> list[str]:
        return [self.row_text(r) for r in range(self.height)]

    def __str__(self) -> str:
        return "\n".join(self.lines())
