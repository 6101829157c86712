"""Game-agnostic agents: uniform random play and caller-supplied policies."""

from .random_agent import RandomAgent
from .scripted_agent import ScriptedAgent

__all__ = ["RandomAgent", "ScriptedAgent"]
