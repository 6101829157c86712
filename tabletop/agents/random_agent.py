"""Uniform random play over the legal moves of any observation."""

from __future__ import annotations

import random

from ..errors import AgentExecutionError
from ..model import Move, Observation
from ..player import Agent
from ..serialize import derive_seed


class RandomAgent(Agent):
    """Picks any legal move with equal probability.

    The generator is reseeded from (seed, game id, agent id, seat) on every
    reset, so a replayed game makes the same choices.
    """

    def __init__(self, agent_id: str = "random"):
        super().__init__(agent_id=agent_id)
        self._rng = random.Random()

    def reset(self, game_id: str, player_id: int, seed: int) -> None:
        self._rng = random.Random(derive_seed(seed, game_id, self.agent_id, player_id))

    def decide(self, observation: Observation, player_id: int) -> Move:
        moves = list(observation.legal_moves(player_id))
        if not moves:
            raise AgentExecutionError(player_id, f"{self.agent_id} was asked to move with no legal moves.")
        return moves[self._rng.randrange(len(moves))]
