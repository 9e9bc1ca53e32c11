# src/autopilot/policies/heuristic.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np  # type: ignore

from snake.config import MAX_REPEATS
from snake.game import GameState, Move, manhattan

# Heuristic weights
TOWARD_FOOD = 100
AWAY_FROM_FOOD = -50
ALIGNED_WITH_FOOD = 50
REPEAT_PENALTY = -20
CENTER_RADIUS = 20


@dataclass
class AgentMemory:
    """What the agent remembers between ticks of one session."""
    last_move: Optional[Move] = None
    repeat_count: int = 0

    def clear(self) -> None:
        self.last_move = None
        self.repeat_count = 0


def _aligned(move: Move, dx: int, dy: int) -> bool:
    """Does the move point toward the food along its own axis?"""
    return ((move == Move.NORTH and dy < 0) or (move == Move.EAST and dx > 0)
            or (move == Move.SOUTH and dy > 0) or (move == Move.WEST and dx < 0))


def score_move(state: GameState, move: Move, memory: AgentMemory) -> float:
    """
    Weighted score of one candidate move:
    - +100 if it gets closer to the food, -50 if it gets farther
    - +50 if it heads toward the food on its axis
    - -20 if it repeats the previous pick
    - 20 minus the distance from the grid centre (keeps away from walls)
    """
    head = state.head
    food = state.food
    cand = state.next_head(move)

    score = 0
    new_dist = manhattan(cand, food)
    cur_dist = manhattan(head, food)
    if new_dist < cur_dist:
        score += TOWARD_FOOD
    elif new_dist > cur_dist:
        score += AWAY_FROM_FOOD

    if _aligned(move, food[0] - head[0], food[1] - head[1]):
        score += ALIGNED_WITH_FOOD

    if move == memory.last_move:
        score += REPEAT_PENALTY

    center = (state.width / 2, state.height / 2)
    score += CENTER_RADIUS - manhattan(cand, center)
    return score


def policy_heuristic(state: GameState, memory: AgentMemory, rng: np.random.Generator) -> Move:
    """
    Pick the best-scoring safe move, with a forced change of direction
    after the same move has won more than MAX_REPEATS times in a row.
    Updates memory in place.
    """
    safe = state.safe_moves()

    # Boxed in: any move, the session is lost anyway
    if not safe:
        return Move(int(rng.integers(len(Move))))

    if len(safe) == 1:
        return safe[0]

    best = safe[0]
    best_score = score_move(state, best, memory)
    for move in safe[1:]:
        s = score_move(state, move, memory)
        if s > best_score:  # strict: earlier moves win ties
            best, best_score = move, s

    if best == memory.last_move:
        memory.repeat_count += 1
        if memory.repeat_count > MAX_REPEATS:
            alternatives = [m for m in safe if m != best]
            if alternatives:
                best = alternatives[int(rng.integers(len(alternatives)))]
                memory.repeat_count = 0
    else:
        memory.repeat_count = 0

    memory.last_move = best
    return best


class HeuristicAgent:
    """Owns one session's memory and random generator."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.memory = AgentMemory()

    def choose_move(self, state: GameState) -> Move:
        return policy_heuristic(state, self.memory, self.rng)

    def reset(self) -> None:
        self.memory.clear()
