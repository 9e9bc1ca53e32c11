# src/autopilot/policies/greedy.py
from __future__ import annotations
from typing import List, Optional

import numpy as np  # type: ignore

from snake.game import GameState, Move


def best_move_toward_food(hx: int, hy: int, fx: int, fy: int) -> List[Move]:
    """All four moves, the ones that close the gap to the food first. Unchecked for safety."""
    toward = []
    if fx != hx:
        toward.append(Move.EAST if fx > hx else Move.WEST)
    if fy != hy:
        toward.append(Move.SOUTH if fy > hy else Move.NORTH)
    return toward + [m for m in Move if m not in toward]


def policy_greedy(state: GameState, memory=None, rng: Optional[np.random.Generator] = None) -> Move:
    """
    Greedy on food distance with simple safety:
    - prefer moves that reduce Manhattan distance
    - otherwise any safe move
    - if all moves are fatal, fall back to random
    """
    hx, hy = state.head
    fx, fy = state.food
    safe = set(state.safe_moves())

    for m in best_move_toward_food(hx, hy, fx, fy):
        if m in safe:
            return m

    rng = rng if rng is not None else np.random.default_rng()
    return Move(int(rng.integers(len(Move))))
