"""Game-agnostic pieces for running seeded table-game matches."""

from .arena import Arena, ArenaSummary
from .errors import (
    AgentExecutionError,
    IllegalMoveError,
    InvariantViolationError,
    MatchConfigurationError,
    RuleViolationError,
    TabletopError,
)
from .events import EventType, MatchEvent
from .model import Move, Observation, State
from .player import Agent
from .result import MatchResult, MatchRun, TerminationReason

__all__ = [
    "Agent",
    "AgentExecutionError",
    "Arena",
    "ArenaSummary",
    "EventType",
    "IllegalMoveError",
    "InvariantViolationError",
    "MatchConfigurationError",
    "MatchEvent",
    "MatchResult",
    "MatchRun",
    "Move",
    "Observation",
    "RuleViolationError",
    "State",
    "TabletopError",
    "TerminationReason",
]
