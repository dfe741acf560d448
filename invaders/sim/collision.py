"""Projectile resolution against cover, the formation and the player.

Both resolvers move the projectile at most one row per substep and test cover
before actors at every row it crosses, so a long frame cannot carry a shot past
a row it should have struck. A shield cell sharing a screen position with an
actor always absorbs the shot. They mutate the world in place and return event
dicts for the session to score.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence

from ..constants import IGNORABLE_GLYPHS, SCORE_PER_HIT
from .formation import CellState, Formation
from .player import PlayerState
from .projectile import Projectile
from .shield import Shield


def _substeps(p: Projectile, dt: float) -> Iterator[float]:
    n = max(1, math.ceil(abs(p.speed) * dt))
    step = dt / n
    for _ in range(n):
        yield step


def _hit_shields(p: Projectile, shields: Sequence[Shield]) -> dict | None:
    col, row = p.col, p.row
    for shield in shields:
        if shield.hit(col, row):
            p.destroy()
            return {"type": "shield_hit", "owner": p.owner.value, "pos": [col, row]}
    return None


def _player_row_test(p: Projectile, shields: Sequence[Shield], formation: Formation) -> list[dict]:
    hit = _hit_shields(p, shields)
    if hit is not None:
        return [hit]

    col, row = p.col, p.row
    if row <= 0:
        p.destroy()
        return [{"type": "miss", "owner": p.owner.value, "pos": [col, row]}]

    if formation.glyph_at(col, row) in IGNORABLE_GLYPHS:
        return []
    cell = formation.cell_at(col, row)
    assert cell is not None, f"formation glyph at ({col}, {row}) resolves to no cell"
    r, c = cell
    # Debris of an exploding cell does not stop the shot.
    if formation.state(r, c) != CellState.ALIVE:
        return []

    events = formation.mark_exploding(r, c)
    p.destroy()
    events.append({"type": "formation_hit", "row": r, "col": c, "score": SCORE_PER_HIT})
    return events


def resolve_player_projectile(
    p: Projectile, dt: float, shields: Sequence[Shield], formation: Formation
) -> list[dict]:
    if not p.visible:
        return []
    for step in _substeps(p, dt):
        p.advance(step)
        events = _player_row_test(p, shields, formation)
        if not p.visible:
            return events
    return []


def _hostile_row_test(
    p: Projectile, shields: Sequence[Shield], player: PlayerState, screen_height: int
) -> list[dict]:
    hit = _hit_shields(p, shields)
    if hit is not None:
        return [hit]

    col, row = p.col, p.row
    if row >= player.y and player.covers(col) and not player.recovering:
        player.mark_hit()
        p.destroy()
        return [{"type": "player_hit", "pos": [col, row]}]
    if row >= screen_height:
        p.destroy()
        return [{"type": "miss", "owner": p.owner.value, "pos": [col, row]}]
    return []


def resolve_hostile_projectile(
    p: Projectile,
    dt: float,
    shields: Sequence[Shield],
    player: PlayerState,
    screen_height: int,
) -> list[dict]:
    if not p.visible:
        return []
    for step in _substeps(p, dt):
        p.advance(step)
        events = _hostile_row_test(p, shields, player, screen_height)
        if not p.visible:
            return events
    return []
