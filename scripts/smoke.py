# ruff: noqa: E402
from __future__ import annotations

import argparse
import itertools
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invaders import GameConfig, Key, Keyboard, Session


def random_keys(rng: np.random.Generator) -> set[Key]:
    keys: set[Key] = set()
    move = rng.integers(0, 3)
    if move == 1:
        keys.add(Key.LEFT)
    elif move == 2:
        keys.add(Key.RIGHT)
    if rng.random() < 0.3:
        keys.add(Key.FIRE)
    return keys


def run_episode(seed: int, dt: float, max_frames: int) -> dict:
    session = Session(GameConfig(seed=seed))
    input_rng = np.random.default_rng(seed + 10_000)
    keys = Keyboard()
    hits = 0
    for frame in itertools.count():
        if session.game_over or frame >= max_frames:
            break
        keys.sample(random_keys(input_rng))
        events = session.update(dt, keys)
        hits += sum(1 for e in events if e["type"] == "formation_hit")
        session.render()
    return {
        "seed": seed,
        "frames": session.frame,
        "score": session.score,
        "hits": hits,
        "lives": session.lives,
        "reason": session.reason,
    }


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="Simulated seconds per frame")
    parser.add_argument("--max-frames", type=int, default=20_000)
    args = parser.parse_args()

    results = []
    for ep in range(args.episodes):
        result = run_episode(args.seed + ep, args.dt, args.max_frames)
        results.append(result)
        print(f"episode {ep}: {result}")

    reasons: dict[str, int] = {}
    for r in results:
        reasons[str(r["reason"])] = reasons.get(str(r["reason"]), 0) + 1
    print("summary:", reasons, "best score:", max(r["score"] for r in results))


if __name__ == "__main__":
    main()
