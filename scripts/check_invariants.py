# ruff: noqa: E402
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invaders import GameConfig, Key, Keyboard, Session
from invaders.sim.formation import CellState


def check_session(seed: int, frames: int, dt: float) -> None:
    session = Session(GameConfig(seed=seed))
    rng = np.random.default_rng(seed)
    keys = Keyboard()
    states = session.formation.states.copy()
    strengths = [s.strength.copy() for s in session.shields]
    score, lives, alive = session.score, session.lives, session.formation.alive_count()

    for frame in range(frames):
        if session.game_over:
            break
        down = {Key.FIRE} if rng.random() < 0.5 else set()
        down.add(Key.LEFT if rng.random() < 0.5 else Key.RIGHT)
        keys.sample(down)
        events = session.update(dt, keys)
        session.render()

        now = session.formation.states
        assert np.all(now >= states), f"frame {frame}: a formation cell went backwards"
        assert int(np.count_nonzero(now == CellState.EXPLODING)) <= 1, f"frame {frame}: two cells exploding"
        for before, shield in zip(strengths, session.shields):
            assert np.all(shield.strength <= before), f"frame {frame}: shield strength grew"
            assert np.all(shield.strength >= 0), f"frame {frame}: shield strength negative"

        hits = sum(1 for e in events if e["type"] == "formation_hit")
        assert session.score - score == 100 * hits, f"frame {frame}: score moved without a hit"
        player_hits = sum(1 for e in events if e["type"] == "player_hit")
        assert lives - session.lives == player_hits <= 1, f"frame {frame}: lives dropped unexpectedly"
        assert session.formation.alive_count() <= alive

        states = now.copy()
        strengths = [s.strength.copy() for s in session.shields]
        score, lives, alive = session.score, session.lives, session.formation.alive_count()


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--sessions", type=int, default=5)
    parser.add_argument("--frames", type=int, default=5_000)
    parser.add_argument("--dt", type=float, default=1.0 / 60.0)
    args = parser.parse_args()

    for i in range(args.sessions):
        check_session(args.seed + i, args.frames, args.dt)
    print("ok")


if __name__ == "__main__":
    main()
