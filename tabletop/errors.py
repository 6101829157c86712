"""Exception hierarchy raised by games and turn loops."""

from __future__ import annotations

from typing import Any


class TabletopError(Exception):
    """Root of every error raised by this package."""

    def to_dict(self) -> dict[str, Any]:
        return {"type": type(self).__name__, "message": str(self)}


class MatchConfigurationError(TabletopError):
    """Wrong seat count, or a loop driven before it was initialized."""


class RuleViolationError(TabletopError):
    """A field or state operation was called with its precondition broken."""


class IllegalMoveError(RuleViolationError):
    """A seat submitted a move that is not in its legal set."""

    def __init__(self, player_id: int, move: Any, reason: str | None = None):
        self.player_id = player_id
        self.move = move
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Player {player_id} cannot play {move!r}{detail}")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["player_id"] = self.player_id
        payload["move"] = self.move.to_dict() if hasattr(self.move, "to_dict") else repr(self.move)
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


class InvariantViolationError(TabletopError):
    """The engine reached a state its rules cannot produce, e.g. both card piles empty."""


class AgentExecutionError(TabletopError):
    """An agent raised instead of returning a move."""

    def __init__(self, player_id: int, message: str):
        self.player_id = player_id
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "player_id": self.player_id}
