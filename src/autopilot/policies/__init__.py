# src/autopilot/policies/__init__.py
"""Move-selection policies for the self-playing snake."""

from autopilot.policies.random import policy_random
from autopilot.policies.greedy import policy_greedy
from autopilot.policies.heuristic import (
    AgentMemory,
    HeuristicAgent,
    policy_heuristic,
    score_move,
)

__all__ = [
    "AgentMemory",
    "HeuristicAgent",
    "policy_heuristic",
    "policy_greedy",
    "policy_random",
    "score_move",
]
