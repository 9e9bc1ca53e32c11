"""Tests for autopilot.policies: heuristic agent and baseline policies."""

from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from snake.config import MAX_REPEATS
from snake.game import GameState, Move
from autopilot.policies.greedy import best_move_toward_food
from autopilot.policies import (
    AgentMemory,
    HeuristicAgent,
    policy_greedy,
    policy_heuristic,
    policy_random,
    score_move,
)


def make_state(snake, food, width=20, height=20) -> GameState:
    return GameState(
        width=width,
        height=height,
        snake=list(snake),
        food=food,
        rng=np.random.default_rng(0),
    )


# Only WEST is safe from (5, 5)
BOXED_SNAKE = [(5, 5), (5, 4), (6, 4), (6, 5), (6, 6), (5, 6)]


class TestScoreMove:
    def test_toward_food_with_alignment(self) -> None:
        state = make_state([(10, 10)], (15, 10))
        # +100 closer, +50 aligned, 20 - 1 from centre
        assert score_move(state, Move.EAST, AgentMemory()) == 169

    def test_away_from_food(self) -> None:
        state = make_state([(10, 10)], (15, 10))
        assert score_move(state, Move.WEST, AgentMemory()) == -31
        assert score_move(state, Move.NORTH, AgentMemory()) == -31

    def test_repeat_penalty(self) -> None:
        state = make_state([(10, 10)], (15, 10))
        memory = AgentMemory(last_move=Move.EAST)
        assert score_move(state, Move.EAST, memory) == 149

    def test_centre_is_real_valued(self) -> None:
        # centre (5.5, 5.5); candidate (6, 5) is 1.0 away
        state = make_state([(5, 5)], (0, 0), width=11, height=11)
        assert score_move(state, Move.EAST, AgentMemory()) == pytest.approx(-50 + 19.0)

    def test_vertical_alignment(self) -> None:
        state = make_state([(10, 10)], (10, 5))
        north = score_move(state, Move.NORTH, AgentMemory())
        assert north == 100 + 50 + 19


class TestPolicyHeuristic:
    def test_picks_best_scoring_move(self) -> None:
        state = make_state([(10, 10)], (15, 10))
        memory = AgentMemory()
        assert policy_heuristic(state, memory, np.random.default_rng(0)) == Move.EAST
        assert memory.last_move == Move.EAST
        assert memory.repeat_count == 0

    def test_ties_go_to_earlier_move(self) -> None:
        # EAST and SOUTH both score 169; EAST comes first
        state = make_state([(10, 10)], (15, 15))
        assert policy_heuristic(state, AgentMemory(), np.random.default_rng(0)) == Move.EAST

    def test_avoids_unsafe_best_move(self) -> None:
        # food is east but the body is there
        state = make_state([(10, 10), (11, 10), (11, 11)], (15, 10))
        move = policy_heuristic(state, AgentMemory(), np.random.default_rng(0))
        assert move != Move.EAST
        assert move in state.safe_moves()

    def test_single_safe_move(self) -> None:
        memories = [
            AgentMemory(),
            AgentMemory(last_move=Move.NORTH, repeat_count=9),
            AgentMemory(last_move=Move.WEST, repeat_count=MAX_REPEATS),
        ]
        for memory in memories:
            before = replace(memory)
            state = make_state(BOXED_SNAKE, (0, 0))
            assert policy_heuristic(state, memory, np.random.default_rng(1)) == Move.WEST
            assert memory == before

    def test_no_safe_move_returns_some_move(self) -> None:
        state = make_state([(0, 0), (1, 0), (1, 1), (0, 1)], (5, 5))
        memory = AgentMemory(last_move=Move.EAST, repeat_count=3)
        move = policy_heuristic(state, memory, np.random.default_rng(2))
        assert move in list(Move)
        assert memory == AgentMemory(last_move=Move.EAST, repeat_count=3)

    def test_deterministic_for_fixed_inputs(self) -> None:
        state = make_state([(7, 3), (7, 4), (7, 5)], (12, 9))
        memory = AgentMemory(last_move=Move.SOUTH, repeat_count=2)
        first_mem, second_mem = replace(memory), replace(memory)
        first = policy_heuristic(state, first_mem, np.random.default_rng(10))
        second = policy_heuristic(state, second_mem, np.random.default_rng(99))
        assert first == second
        assert first_mem == second_mem

    def test_anti_oscillation_forces_a_change(self) -> None:
        state = make_state([(10, 10)], (15, 10))
        memory = AgentMemory()
        rng = np.random.default_rng(5)

        picks = [policy_heuristic(state, memory, rng) for _ in range(MAX_REPEATS + 1)]
        assert picks == [Move.EAST] * (MAX_REPEATS + 1)
        assert memory.repeat_count == MAX_REPEATS

        forced = policy_heuristic(state, memory, rng)
        assert forced != Move.EAST
        assert forced in state.safe_moves()
        assert memory.repeat_count == 0
        assert memory.last_move == forced

        # back to the best move, counter starts over
        assert policy_heuristic(state, memory, rng) == Move.EAST
        assert memory.repeat_count == 0

    def test_repeat_count_resets_on_change(self) -> None:
        state = make_state([(10, 10)], (15, 10))
        memory = AgentMemory(last_move=Move.NORTH, repeat_count=4)
        assert policy_heuristic(state, memory, np.random.default_rng(0)) == Move.EAST
        assert memory.repeat_count == 0


class TestHeuristicAgent:
    def test_memory_is_per_agent(self) -> None:
        state = make_state([(10, 10)], (15, 10))
        a = HeuristicAgent(np.random.default_rng(0))
        b = HeuristicAgent(np.random.default_rng(0))
        for _ in range(3):
            a.choose_move(state)
        assert a.memory.repeat_count == 2
        assert b.memory == AgentMemory()

    def test_reset_clears_memory(self) -> None:
        state = make_state([(10, 10)], (15, 10))
        agent = HeuristicAgent(np.random.default_rng(0))
        agent.choose_move(state)
        agent.choose_move(state)
        agent.reset()
        assert agent.memory == AgentMemory()


class TestBaselines:
    def test_greedy_reduces_distance(self) -> None:
        state = make_state([(10, 10)], (10, 3))
        assert policy_greedy(state, None, np.random.default_rng(0)) == Move.NORTH

    def test_greedy_takes_any_safe_move_when_blocked(self) -> None:
        state = make_state(BOXED_SNAKE, (9, 5))
        assert policy_greedy(state, None, np.random.default_rng(0)) == Move.WEST

    def test_random_returns_moves(self) -> None:
        rng = np.random.default_rng(0)
        state = make_state([(10, 10)], (0, 0))
        seen = {policy_random(state, None, rng) for _ in range(100)}
        assert seen == set(Move)

    def test_preference_order_puts_closing_moves_first(self) -> None:
        assert best_move_toward_food(5, 5, 9, 1) == [Move.EAST, Move.NORTH, Move.SOUTH, Move.WEST]
        assert best_move_toward_food(5, 5, 5, 8) == [Move.SOUTH, Move.NORTH, Move.EAST, Move.WEST]
        assert best_move_toward_food(5, 5, 5, 5) == list(Move)
