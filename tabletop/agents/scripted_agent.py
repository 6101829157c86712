"""Adapter that turns a plain function into an agent."""

from __future__ import annotations

from typing import Callable

from ..model import Move, Observation
from ..player import Agent

Policy = Callable[[Observation, int], Move]


class ScriptedAgent(Agent):
    """Calls `policy(observation, player_id)` for every decision."""

    def __init__(self, agent_id: str, policy: Policy):
        super().__init__(agent_id=agent_id)
        self.policy = policy

    def decide(self, observation: Observation, player_id: int) -> Move:
        return self.policy(observation, player_id)
