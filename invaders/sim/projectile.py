from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from ..config import ProjectileSpec


class Owner(str, Enum):
    PLAYER = "player"
    HOSTILE = "hostile"


@dataclass
class Projectile:
    owner: Owner
    glyph: str
    speed: float  # cells / s along y, negative is up

    # State
    x: float = 0.0
    y: float = 0.0
    visible: bool = False

    @classmethod
    def from_spec(cls, owner: Owner, spec: ProjectileSpec) -> Projectile:
        return cls(owner=owner, glyph=spec.glyph, speed=spec.speed)

    @property
    def col(self) -> int:
        return int(round(self.x))

    @property
    def row(self) -> int:
        return int(round(self.y))

    def launch(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.visible = True

    def advance(self, dt: float) -> None:
        self.y += self.speed * dt

    def destroy(self) -> None:
        self.visible = False


class ProjectilePool:
    """Fixed-capacity set of hostile projectiles; a slot is free while invisible."""

    def __init__(self, spec: ProjectileSpec, capacity: int):
        if capacity < 1:
            raise ValueError(f"pool capacity must be >= 1, got {capacity}")
        self.slots = [Projectile.from_spec(Owner.HOSTILE, spec) for _ in range(capacity)]

    def __iter__(self) -> Iterator[Projectile]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def spawn(self, x: float, y: float) -> Projectile | None:
        for p in self.slots:
            if not p.visible:
                p.launch(x, y)
                return p
        return None

    def visible(self) -> list[Projectile]:
        return [p for p in self.slots if p.visible]
