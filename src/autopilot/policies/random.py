# src/autopilot/policies/random.py
from typing import Optional

import numpy as np  # type: ignore

from snake.game import GameState, Move


def policy_random(state: GameState, memory=None, rng: Optional[np.random.Generator] = None) -> Move:
    """
    Random policy: pick a uniformly random move, safe or not.
    Mostly useful as a floor when comparing policies.
    """
    rng = rng if rng is not None else np.random.default_rng()
    return Move(int(rng.integers(len(Move))))
