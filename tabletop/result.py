"""Final outcome of a match and the run artifact returned alongside it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .events import MatchEvent
from .serialize import to_primitive


class TerminationReason(str, Enum):
    """Why the loop stopped."""

    END_DECLARED = "end_declared"
    MAX_TURNS = "max_turns"


@dataclass(frozen=True)
class MatchResult:
    """Scores and bookkeeping for one finished game.

    `scores` are final (after any doubling penalty), `raw_scores` are the
    plain field sums. `winner` is the seat with the strictly lowest final
    score, or `None` when the lowest score is shared.
    """

    game_id: str
    game_name: str
    seed: int
    winner: int | None
    termination_reason: TerminationReason
    scores: dict[int, int] = field(default_factory=dict)
    raw_scores: dict[int, int] = field(default_factory=dict)
    agents: tuple[str, ...] = ()
    turns: int = 0
    details: str | None = None
    final_state_digest: str | None = None
    event_count: int = 0
    log_path: str | None = None

    def agent_scores(self) -> dict[str, list[int]]:
        """Final scores keyed by agent id; an id seated twice gets two entries."""
        by_agent: dict[str, list[int]] = {}
        for seat, agent_id in enumerate(self.agents):
            by_agent.setdefault(agent_id, []).append(self.scores[seat])
        return by_agent

    def to_dict(self) -> dict[str, Any]:
        return to_primitive(self)


@dataclass(frozen=True)
class MatchRun:
    result: MatchResult
    events: list[MatchEvent]
