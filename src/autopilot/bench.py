# src/autopilot/bench.py
from __future__ import annotations
import argparse
import csv
import os
from typing import Optional, Tuple

import numpy as np  # type: ignore

from snake.config import GRID_W, GRID_H
from snake.game import new_game_state
from autopilot.policies import AgentMemory, policy_random, policy_greedy, policy_heuristic

POLICIES = {
    "random": policy_random,
    "greedy": policy_greedy,
    "heuristic": policy_heuristic,
}


# --------------------------
# Episode loop (headless)
# --------------------------
def run_episode(policy: str, width: int, height: int,
                rng: np.random.Generator, max_ticks: int = 100_000) -> Tuple[int, int, Optional[str]]:
    """
    Play one session to the end without rendering.

    Returns:
        steps: number of ticks played
        score: food eaten
        reason: why the session ended (None if max_ticks was hit first)
    """
    try:
        choose = POLICIES[policy]
    except KeyError:
        raise ValueError(f"Unknown policy: {policy}") from None

    state = new_game_state(width, height, rng)
    memory = AgentMemory()
    steps = 0

    while state.alive and steps < max_ticks:
        state.step(choose(state, memory, rng))
        steps += 1

    return steps, state.score, state.end_reason


def summarize(scores) -> Tuple[float, int]:
    arr = np.asarray(scores, dtype=np.int64)
    if arr.size == 0:
        return 0.0, 0
    return float(arr.mean()), int(arr.max())


# --------------------------
# Main
# --------------------------
def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare snake policies headlessly")
    parser.add_argument("--episodes", type=int, default=50)
    parser.add_argument(
        "--policy",
        type=str,
        default="heuristic",
        choices=sorted(POLICIES) + ["all"],
        help="Which policy to run, or 'all' to compare them",
    )
    parser.add_argument("--width", type=int, default=GRID_W, help="grid width in cells")
    parser.add_argument("--height", type=int, default=GRID_H, help="grid height in cells")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Optional CSV file for per-episode results",
    )
    args = parser.parse_args(argv)

    names = sorted(POLICIES) if args.policy == "all" else [args.policy]
    rng = np.random.default_rng(args.seed)

    rows = [("policy", "ep", "steps", "score", "reason")]
    print("policy,ep,steps,score,reason")
    for name in names:
        scores = []
        for ep in range(1, args.episodes + 1):
            steps, score, reason = run_episode(name, args.width, args.height, rng)
            print(f"{name},{ep},{steps},{score},{reason}")
            rows.append((name, ep, steps, score, reason))
            scores.append(score)
        mean, best = summarize(scores)
        print(f"# {name}: mean score {mean:.2f}, best {best}")

    if args.out:
        os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
        with open(args.out, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerows(rows)
        print(f"\nSaved results → {args.out}")

    return rows


if __name__ == "__main__":
    main()
