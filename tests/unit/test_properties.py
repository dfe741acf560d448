"""Property-based checks of session invariants under random input."""

import numpy as np
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, initialize, invariant, rule

from invaders.actions import Key, Keyboard
from invaders.config import GameConfig
from invaders.render import Screen
from invaders.sim.formation import CellState
from invaders.sim.session import Phase, Session

key_sets = st.sets(st.sampled_from([Key.LEFT, Key.RIGHT, Key.FIRE]), max_size=3)
frame_times = st.floats(min_value=0.0, max_value=0.1, allow_nan=False)


class SessionStateMachine(RuleBasedStateMachine):
    """Random frame times and key sets against a live session."""

    def __init__(self):
        super().__init__()
        self.session: Session | None = None
        self.keys = Keyboard()
        self.screen = Screen(120, 30)

    @initialize(seed=st.integers(min_value=0, max_value=2**16))
    def start(self, seed):
        self.session = Session(GameConfig(seed=seed))
        self._snapshot()

    def _snapshot(self):
        s = self.session
        self.states = s.formation.states.copy()
        self.strengths = [sh.strength.copy() for sh in s.shields]
        self.score = s.score
        self.lives = s.lives
        self.alive = s.formation.alive_count()

    @rule(down=key_sets, dt=frame_times)
    def frame(self, down, dt):
        """Score, lives, cells and shields only ever move in their allowed direction."""
        s = self.session
        was_playing = s.phase is Phase.PLAYING
        self.keys.sample(down)
        events = s.update(dt, self.keys)
        s.render(self.screen)

        # Cells only move forward through ALIVE -> EXPLODING -> DEAD.
        assert np.all(s.formation.states >= self.states)
        assert s.formation.alive_count() <= self.alive

        for before, shield in zip(self.strengths, s.shields):
            assert np.all(shield.strength <= before)
            assert np.all(shield.strength >= 0)

        hits = [e for e in events if e["type"] == "formation_hit"]
        assert s.score - self.score == 100 * len(hits)

        player_hits = [e for e in events if e["type"] == "player_hit"]
        assert len(player_hits) <= 1
        assert self.lives - s.lives == len(player_hits)

        if was_playing and s.phase is Phase.GAME_OVER:
            assert s.lives == 0 or s.formation.reached(s.player.y)
        self._snapshot()

    @invariant()
    def one_explosion_at_most(self):
        if self.session is not None:
            assert int(np.count_nonzero(self.session.formation.states == CellState.EXPLODING)) <= 1

    @invariant()
    def counters_in_range(self):
        if self.session is not None:
            assert self.session.score >= 0
            assert 0 <= self.session.lives <= 3
            if self.session.lives == 0:
                assert self.session.phase is Phase.GAME_OVER


TestSessionProperties = SessionStateMachine.TestCase
TestSessionProperties.settings = settings(max_examples=40, stateful_step_count=80, deadline=None)


@settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(
    x=st.floats(min_value=0.0, max_value=117.0, allow_nan=False),
    dt=st.floats(min_value=0.001, max_value=0.1, allow_nan=False),
)
def test_player_projectile_always_terminates(never_fire, x, dt):
    """A launched bolt always leaves play within the time needed to cross the screen."""
    s = Session(GameConfig(), rng=never_fire)
    s.player.x = x
    kb = Keyboard()
    kb.sample({Key.FIRE})
    s.update(dt, kb)
    assert s.bolt.visible

    # 28 rows to climb at 20 rows/s, plus one frame of rounding slack.
    bound = int(28.0 / (20.0 * dt)) + 2
    for _ in range(bound):
        kb.sample({Key.FIRE})
        s.update(dt, kb)
        if not s.bolt.visible:
            break
    assert not s.bolt.visible


@settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(
    y=st.integers(min_value=2, max_value=10),
    dt=st.floats(min_value=0.001, max_value=0.1, allow_nan=False),
)
def test_aligned_bolt_always_scores(never_fire, y, dt):
    """A bolt under a live column hits it for any formation row parity and frame time."""
    s = Session(GameConfig(), rng=never_fire)
    s.formation.y = y
    s.formation.anim_delay = 1e9
    s.bolt.launch(3.0, 28.0)
    idle = Keyboard()

    bound = int(28.0 / (20.0 * dt)) + 2
    for _ in range(bound):
        s.update(dt, idle)
        if not s.bolt.visible:
            break
    assert s.score == 100
    assert s.formation.state(3, 0) == CellState.EXPLODING
