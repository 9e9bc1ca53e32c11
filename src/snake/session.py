# session.py
from __future__ import annotations
from typing import Optional
import logging

import numpy as np  # type: ignore

from autopilot.policies.heuristic import HeuristicAgent
from .config import CFG, Config, GRID_W, GRID_H
from .game import GameState, Move, new_game_state

logger = logging.getLogger(__name__)


def tick_delay_ms(score: int, cfg: Config = CFG) -> int:
    """Delay before the next tick: faster as the score grows, never below min_tick_ms."""
    speedup = min(score * cfg.speedup_per_food_ms, cfg.max_speedup_ms)
    return max(cfg.base_tick_ms - speedup, cfg.min_tick_ms)


class Session:
    """
    One self-playing game: a GameState, the agent driving it, and the
    number of finished games. Each session owns its own generator, so
    several can run side by side.

    The caller owns the clock: update(now_ms) ticks only when a tick is
    due, and a finished game is restarted restart_delay_ms later.
    """

    def __init__(self, width: int = GRID_W, height: int = GRID_H,
                 cfg: Config = CFG, rng: Optional[np.random.Generator] = None):
        self.cfg = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.state: GameState = new_game_state(width, height, self.rng)
        self.agent = HeuristicAgent(self.rng)
        self.game_count = 0
        self.next_tick_ms: Optional[int] = None
        self.restart_at_ms: Optional[int] = None

    def tick(self) -> Optional[Move]:
        """Let the agent pick a move and apply it. Does nothing once the game is over."""
        if not self.state.alive:
            return None
        move = self.agent.choose_move(self.state)
        alive = self.state.step(move)
        if not alive:
            self.game_count += 1
            logger.debug(
                "Game %d over: %s, score %d, length %d",
                self.game_count, self.state.end_reason,
                self.state.score, len(self.state.snake),
            )
        return move

    def restart(self) -> None:
        self.state.reset()
        self.agent.reset()
        self.restart_at_ms = None
        logger.debug("Game %d started", self.game_count + 1)

    def update(self, now_ms: int) -> bool:
        """
        Advance the session if something is due at now_ms.
        Returns True if a tick or a restart happened.
        """
        if not self.state.alive:
            if self.restart_at_ms is None:
                self.restart_at_ms = now_ms + self.cfg.restart_delay_ms
                return False
            if now_ms < self.restart_at_ms:
                return False
            self.restart()
            self.next_tick_ms = now_ms + tick_delay_ms(self.state.score, self.cfg)
            return True

        if self.next_tick_ms is not None and now_ms < self.next_tick_ms:
            return False  # not time to move yet

        self.tick()
        if self.state.alive:
            self.next_tick_ms = now_ms + tick_delay_ms(self.state.score, self.cfg)
        else:
            self.restart_at_ms = now_ms + self.cfg.restart_delay_ms
        return True

    def resize(self, width: int, height: int) -> None:
        self.state.resize(width, height)
