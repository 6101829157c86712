"""The seat-side contract every policy implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from .model import Move, Observation

if TYPE_CHECKING:
    from .events import MatchEvent
    from .result import MatchResult


class Agent(ABC):
    """A policy that maps a redacted view to a move.

    The loop calls `reset` once per game before the first decision and
    `on_game_end` once after scoring. Agents never see the full state, only
    the observation built for their own seat.
    """

    def __init__(self, agent_id: str):
        self.agent_id = agent_id

    @abstractmethod
    def decide(self, observation: Observation, player_id: int) -> Move:
        """Pick a move for seat `player_id`. Must be one of `observation.legal_moves(player_id)`."""

    def reset(self, game_id: str, player_id: int, seed: int) -> None:
        pass

    def on_game_end(self, result: MatchResult, history: Sequence[MatchEvent]) -> None:
        pass

    def debug_context(self) -> Mapping[str, Any] | None:
        """Extra detail attached to AGENT_ERROR and ILLEGAL_MOVE events."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.agent_id!r})"
