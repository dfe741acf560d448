"""Formation motion, cell lifecycle, screen geometry and firing."""

import numpy as np
import pytest

from invaders.config import FormationConfig, HOSTILE_BOMB
from invaders.sim.formation import CellState, Formation
from invaders.sim.projectile import ProjectilePool


def make_formation(**overrides) -> Formation:
    return Formation.from_config(FormationConfig(**overrides))


class TestMotion:
    """Lateral stepping, edge reversal and animation frames."""

    def test_lateral_step(self):
        """Away from the edges the block steps one column per tick."""
        f = make_formation()
        assert f.step(120) is None
        assert (f.x, f.y, f.direction) == (3, 2, 1)

    def test_right_edge_reversal(self):
        """Touching the right edge flips direction and drops one row."""
        f = make_formation(origin_x=60)
        assert f.right_edge >= 120

        event = f.step(120)

        assert event is not None and event["type"] == "formation_reversed"
        assert f.direction == -1
        assert f.y == 3
        assert f.x == 59
        # Default delay sits below the guard, so it is not tightened.
        assert f.anim_delay == pytest.approx(0.35)

    def test_left_edge_reversal(self):
        """At x 0 the block turns right and drops one row."""
        f = make_formation(origin_x=0, direction=-1)
        f.step(120)
        assert (f.x, f.y, f.direction) == (1, 3, 1)

    def test_reversal_tightens_delay_above_guard(self):
        """Reversals shorten a delay that sits above the guard."""
        f = make_formation(origin_x=60, anim_delay_s=12.0)
        event = f.step(120)
        assert f.anim_delay == pytest.approx(11.95)
        assert event["anim_delay"] == pytest.approx(11.95)

    def test_reversal_keeps_delay_at_guard(self):
        """A delay at the guard is left alone."""
        f = make_formation(origin_x=60, anim_delay_s=10.0)
        f.step(120)
        assert f.anim_delay == pytest.approx(10.0)

    def test_sweep_bounces_between_edges(self):
        """Repeated steps keep the block inside the screen."""
        f = make_formation()
        rows_before = f.y
        for _ in range(200):
            f.step(120)
            assert 0 <= f.x and f.right_edge <= 120
        assert f.y > rows_before

    def test_frame_offset_alternates(self):
        f = make_formation()
        offsets = []
        for _ in range(4):
            offsets.append(f.frame_offset)
            f.advance_frame()
        assert offsets == [0, 3, 0, 3]

    def test_reached_uses_bottom_row(self):
        """The lowest drawn row decides when the player row is reached."""
        f = make_formation(origin_y=22)
        assert f.bottom_row == 28
        assert not f.reached(29)
        f.y += 1
        assert f.reached(29)


class TestCellLifecycle:
    """ALIVE to EXPLODING to DEAD transitions."""

    def test_explosion_runs_for_duration(self):
        """An exploding cell dies once the explosion duration elapses."""
        f = make_formation()
        assert f.mark_exploding(0, 0) == []
        assert f.state(0, 0) == CellState.EXPLODING
        assert f.alive_count() == 39

        assert f.update_explosion(0.5) == []
        assert f.state(0, 0) == CellState.EXPLODING

        events = f.update_explosion(0.1)
        assert events == [{"type": "cell_destroyed", "row": 0, "col": 0}]
        assert f.state(0, 0) == CellState.DEAD
        assert f.exploding is None
        assert f.explode_elapsed == 0.0

    def test_second_hit_retires_first(self):
        """A new explosion finishes the previous one immediately."""
        f = make_formation()
        f.mark_exploding(0, 0)
        events = f.mark_exploding(1, 1)
        assert events == [{"type": "cell_destroyed", "row": 0, "col": 0}]
        assert f.state(0, 0) == CellState.DEAD
        assert f.state(1, 1) == CellState.EXPLODING
        assert int(np.count_nonzero(f.states == CellState.EXPLODING)) == 1

    def test_only_alive_cells_can_explode(self):
        f = make_formation()
        f.mark_exploding(2, 3)
        with pytest.raises(ValueError):
            f.mark_exploding(2, 3)

    def test_accessors_bounds_checked(self):
        """Out-of-range rows and columns raise IndexError."""
        f = make_formation()
        assert f.index(3, 9) == 39
        assert f.index(1, 2) == 12
        with pytest.raises(IndexError):
            f.state(4, 0)
        with pytest.raises(IndexError):
            f.cell_origin(0, 10)


class TestScreenQueries:
    """Mapping screen positions back to cells and glyphs."""

    def test_cell_geometry(self):
        f = make_formation()
        assert f.cell_origin(0, 0) == (2, 2)
        assert f.cell_origin(1, 2) == (14, 4)
        assert f.cell_at(3, 2) == (0, 0)
        assert f.cell_at(16, 4) == (1, 2)
        assert f.cell_at(5, 2) is None  # gap between columns
        assert f.cell_at(3, 3) is None  # gap between rows
        assert f.cell_at(3, 10) is None  # below the block
        assert f.cell_at(1, 2) is None

    def test_glyphs_follow_frame_and_state(self):
        """Glyphs swap with the frame offset and reflect the cell state."""
        f = make_formation()
        assert "".join(f.glyph_at(c, 2) for c in range(2, 5)) == "<o>"
        f.advance_frame()
        assert "".join(f.glyph_at(c, 2) for c in range(2, 5)) == ">o<"
        assert "".join(f.glyph_at(c, 4) for c in range(2, 5)) == "-O-"
        f.mark_exploding(0, 0)
        assert "".join(f.glyph_at(c, 2) for c in range(2, 5)) == "xxx"
        f.update_explosion(1.0)
        assert "".join(f.glyph_at(c, 2) for c in range(2, 5)) == "   "

    def test_cells_skip_dead(self):
        f = make_formation()
        assert len(list(f.cells())) == 40 * 3
        f.states[:] = CellState.DEAD
        assert list(f.cells()) == []


class TestFiring:
    """Per-cell fire decisions against the hostile pool."""

    def test_aligned_cell_fires_at_high_probability(self, fixed_random):
        """Only the column over the player fires at the aligned probability."""
        f = make_formation()
        pool = ProjectilePool(HOSTILE_BOMB, 5)
        # 0.1 is below the aligned probability only.
        events = f.fire(fixed_random(0.1), player_col=8, pool=pool)
        fired = {(e["row"], e["col"]) for e in events}
        assert fired == {(0, 1), (1, 1), (2, 1), (3, 1)}
        xs = sorted((p.x, p.y) for p in pool.visible())
        assert xs == [(9.0, 3.0), (9.0, 5.0), (9.0, 7.0), (9.0, 9.0)]

    def test_nothing_fires_above_both_probabilities(self, fixed_random):
        f = make_formation()
        pool = ProjectilePool(HOSTILE_BOMB, 5)
        assert f.fire(fixed_random(0.5), player_col=2, pool=pool) == []
        assert pool.visible() == []

    def test_exhausted_pool_drops_shots(self, fixed_random):
        """Shots beyond pool capacity are dropped."""
        f = make_formation()
        pool = ProjectilePool(HOSTILE_BOMB, 5)
        events = f.fire(fixed_random(0.0), player_col=-1, pool=pool)
        assert len(events) == 5
        assert len(pool.visible()) == 5

    def test_dead_and_exploding_cells_hold_fire(self, fixed_random):
        f = make_formation()
        f.states[:] = CellState.DEAD
        f.states[0, 0] = CellState.EXPLODING
        pool = ProjectilePool(HOSTILE_BOMB, 5)
        assert f.fire(fixed_random(0.0), player_col=2, pool=pool) == []

    def test_one_draw_per_live_cell(self, fixed_random):
        """Every live cell consumes exactly one random draw."""
        f = make_formation()
        f.states[0, :] = CellState.DEAD
        rng = fixed_random(0.9)
        f.fire(rng, player_col=0, pool=ProjectilePool(HOSTILE_BOMB, 5))
        assert rng.calls == 30
