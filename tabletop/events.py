"""Match event records and the JSONL event log."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable

from .serialize import canonical_json, to_primitive


class EventType(str, Enum):
    """What happened at one point of a match."""

    MATCH_START = "match_start"
    TURN = "turn"
    TURN_SKIPPED = "turn_skipped"
    ILLEGAL_MOVE = "illegal_move"
    AGENT_ERROR = "agent_error"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class MatchEvent:
    """One log record.

    `sequence` numbers events within a match and `turn` counts the moves
    applied so far. Events carry no wall-clock time, so two runs of the same
    seeded match produce identical logs.
    """

    event_type: EventType
    game_id: str
    sequence: int
    turn: int
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_type": self.event_type.value,
            "game_id": self.game_id,
            "sequence": self.sequence,
            "turn": self.turn,
            "payload": to_primitive(self.payload),
        }


def write_event_log(path: str | Path, events: Iterable[MatchEvent]) -> Path:
    """Write one canonical JSON object per line, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    lines = [canonical_json(event.to_dict()) for event in events]
    target.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return target
