# game.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple
import enum
import logging

import numpy as np  # type: ignore

from .config import (
    GRID_W, GRID_H,
    UP, DOWN, LEFT, RIGHT, STILL,
    MAX_STEPS, MAX_FOOD_ATTEMPTS,
)

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class BoardFullError(RuntimeError):
    """Raised when food cannot be placed because every cell is taken."""


class Move(enum.IntEnum):
    """The four moves, in tie-break order."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def vector(self) -> Tuple[int, int]:
        return _VECTORS[self]


_VECTORS = {
    Move.NORTH: UP,
    Move.EAST: RIGHT,
    Move.SOUTH: DOWN,
    Move.WEST: LEFT,
}


# ---------- Helpers ----------
def manhattan(a, b):
    """Manhattan (L1) distance; works for float points too."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _check_dims(width: int, height: int) -> None:
    if int(width) != width or int(height) != height:
        raise ValueError(f"Grid size must be integral, got {width}x{height}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid size must be positive, got {width}x{height}")


def spawn_food(snake, width: int, height: int, rng: np.random.Generator) -> Cell:
    """
    Pick a uniformly random cell that is not on the snake.

    Rejection sampling first (the grid is almost always sparse); after
    MAX_FOOD_ATTEMPTS misses, choose among the free cells directly.
    Raises BoardFullError when there is no free cell at all.
    """
    occupied = set(snake)
    for _ in range(MAX_FOOD_ATTEMPTS):
        fx = int(rng.integers(width))
        fy = int(rng.integers(height))
        if (fx, fy) not in occupied:
            return (fx, fy)

    logger.warning("Food placement fell back to a free-cell scan (%d occupied)", len(occupied))
    free = np.ones((height, width), dtype=bool)
    for x, y in occupied:
        if 0 <= x < width and 0 <= y < height:
            free[y, x] = False
    candidates = np.flatnonzero(free)
    if candidates.size == 0:
        raise BoardFullError(f"No free cell on a {width}x{height} grid")
    fy, fx = divmod(int(rng.choice(candidates)), width)
    return (fx, fy)


# ---------- State ----------
@dataclass
class GameState:
    width: int
    height: int
    snake: List[Cell]              # head at index 0
    food: Optional[Cell]           # None once the board is full
    direction: Tuple[int, int] = STILL
    steps: int = 0                 # ticks since the last food
    score: int = 0
    alive: bool = True
    end_reason: Optional[str] = None  # "wall", "self", "starved" or "full"
    rng: np.random.Generator = field(default_factory=np.random.default_rng, repr=False, compare=False)
    _occupied: Set[Cell] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _check_dims(self.width, self.height)
        if not self.snake:
            raise ValueError("Snake must have at least one cell")
        self.snake = [tuple(c) for c in self.snake]
        self._occupied = set(self.snake)
        if len(self._occupied) != len(self.snake):
            raise ValueError("Snake cells must be distinct")

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def occupies(self, cell: Cell) -> bool:
        return cell in self._occupied

    def next_head(self, move: Move) -> Cell:
        hx, hy = self.head
        dx, dy = Move(move).vector
        return (hx + dx, hy + dy)

    def is_safe(self, move: Move) -> bool:
        """True if the move neither leaves the grid nor hits the body."""
        nx, ny = self.next_head(move)
        return self.in_bounds(nx, ny) and (nx, ny) not in self._occupied

    def safe_moves(self) -> List[Move]:
        return [m for m in Move if self.is_safe(m)]

    def generate_food(self) -> Cell:
        return spawn_food(self.snake, self.width, self.height, self.rng)

    def step(self, move: Move) -> bool:
        """
        Advance the game by one tick in the given direction.
        Does nothing once the session is over.
        Returns True if alive, False if game over.
        """
        if not self.alive:
            return False
        move = Move(move)

        self.steps += 1
        self.direction = move.vector
        new_head = self.next_head(move)

        # Wall collision
        if not self.in_bounds(*new_head):
            return self._end("wall")

        # Self collision
        if new_head in self._occupied:
            return self._end("self")

        # Stagnation guard
        if self.steps > MAX_STEPS:
            return self._end("starved")

        # Move / grow
        self.snake.insert(0, new_head)
        self._occupied.add(new_head)
        if new_head == self.food:
            self.score += 1
            self.steps = 0
            return self._place_food()
        else:
            self._occupied.discard(self.snake.pop())
        return True

    def _end(self, reason: str) -> bool:
        self.alive = False
        self.end_reason = reason
        return False

    def _place_food(self) -> bool:
        """Put new food on a free cell, or end the session if there is none."""
        try:
            self.food = self.generate_food()
        except BoardFullError:
            self.food = None
            return self._end("full")
        return True

    def reset(self) -> None:
        """Start a new session on the same grid and generator."""
        self.snake = [(self.width // 2, self.height // 2)]
        self._occupied = set(self.snake)
        self.direction = STILL
        self.steps = 0
        self.score = 0
        self.alive = True
        self.end_reason = None
        self._place_food()

    def resize(self, width: int, height: int) -> None:
        """
        Change the grid bounds used by later moves and food placement.
        The snake is left where it is; food outside the new grid is respawned,
        and the session ends as "full" when no in-grid cell is left for it.
        """
        _check_dims(width, height)
        self.width, self.height = int(width), int(height)
        if self.alive and not self.in_bounds(*self.food):
            self._place_food()


def new_game_state(width: int = GRID_W, height: int = GRID_H,
                   rng: Optional[np.random.Generator] = None) -> GameState:
    if rng is None:
        rng = np.random.default_rng()
    _check_dims(width, height)
    snake = [(width // 2, height // 2)]
    food = spawn_food(snake, width, height, rng)
    return GameState(width=width, height=height, snake=snake, food=food, rng=rng)
