from __future__ import annotations

from dataclasses import dataclass, field

from .constants import COL_SPACING, ROW_SPACING


@dataclass(frozen=True)
class ScreenConfig:
    width: int = 120
    height: int = 30

    @property
    def player_row(self) -> int:
        return self.height - 1


@dataclass(frozen=True)
class FormationConfig:
    cols: int = 10
    rows: int = 4
    origin_x: int = 2
    origin_y: int = 2
    direction: int = 1
    anim_delay_s: float = 0.35  # Delay between animation ticks
    # Escalation: each reversal tightens the delay, but only while it exceeds the guard.
    anim_delay_step_s: float = 0.05
    anim_delay_guard_s: float = 10.0
    explode_duration_s: float = 0.6


@dataclass(frozen=True)
class ShieldConfig:
    count: int = 3
    length: int = 8
    height: int = 3
    max_strength: int = 3
    spacing_x: int = 30  # Shield i sits at x = (i + 1) * spacing_x
    rows_above_bottom: int = 6


@dataclass(frozen=True)
class ProjectileSpec:
    glyph: str
    speed: float  # cells / s, negative is up


PLAYER_BOLT = ProjectileSpec(glyph="|", speed=-20.0)
HOSTILE_BOMB = ProjectileSpec(glyph="*", speed=20.0)


@dataclass(frozen=True)
class GameConfig:
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    formation: FormationConfig = field(default_factory=FormationConfig)
    shields: ShieldConfig = field(default_factory=ShieldConfig)
    player_bolt: ProjectileSpec = PLAYER_BOLT
    hostile_bomb: ProjectileSpec = HOSTILE_BOMB
    hostile_pool_size: int = 5
    player_speed: float = 12.0
    lives: int = 3
    recovery_duration_s: float = 1.0
    seed: int | None = None

    def validate(self) -> None:
        scr = self.screen
        fm = self.formation
        sh = self.shields
        if self.hostile_pool_size < 1:
            raise ValueError(f"hostile_pool_size must be >= 1, got {self.hostile_pool_size}")
        if self.lives < 1:
            raise ValueError(f"lives must be >= 1, got {self.lives}")
        if fm.direction not in (-1, 1):
            raise ValueError(f"formation direction must be +1 or -1, got {fm.direction}")
        if fm.cols < 1 or fm.rows < 1:
            raise ValueError(f"formation must have at least one cell, got {fm.cols}x{fm.rows}")
        if fm.origin_x < 0 or fm.origin_x + fm.cols * COL_SPACING > scr.width:
            raise ValueError(
                f"formation ({fm.cols} cols at x={fm.origin_x}) does not fit a {scr.width}-wide screen"
            )
        if fm.origin_y < 1 or fm.origin_y + ROW_SPACING * (fm.rows - 1) >= scr.player_row:
            raise ValueError(
                f"formation ({fm.rows} rows at y={fm.origin_y}) does not fit above row {scr.player_row}"
            )
        if sh.count:
            right = sh.count * sh.spacing_x + sh.length
            top = scr.height - sh.rows_above_bottom
            if right > scr.width or top < 1 or top + sh.height > scr.player_row:
                raise ValueError(f"shields do not fit a {scr.width}x{scr.height} screen")
