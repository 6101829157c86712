"""Redacted view of a Skyjo game handed to agents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from tabletop.errors import InvariantViolationError
from tabletop.model import Observation

from .skyjo_field import Field
from .skyjo_moves import GameMove, legal_moves_for
from .skyjo_vectorize import observation_features

if TYPE_CHECKING:
    from .skyjo_state import GameState


@dataclass(frozen=True)
class RedactedGameState(Observation):
    """What every player may know: the middle card, visible cells, and who ended."""

    middle_card: int
    fields: tuple[Field, ...]
    ends_at: int | None = None

    def __post_init__(self) -> None:
        for field in self.fields:
            if any(cell.is_unrevealed and cell.value is not None for _, _, cell in field.cells()):
                raise InvariantViolationError("A redacted view must not carry face-down card values.")

    @classmethod
    def from_state(cls, state: GameState) -> RedactedGameState:
        return cls(
            middle_card=state.middle_card,
            fields=tuple(field.redacted() for field in state.fields),
            ends_at=state.ends_at,
        )

    @property
    def player_count(self) -> int:
        return len(self.fields)

    @property
    def player_has_ended(self) -> bool:
        return self.ends_at is not None

    def has_ended(self, player_id: int) -> bool:
        return self.ends_at == player_id

    def legal_moves(self, player_id: int) -> list[GameMove]:
        """Return the moves `player_id` may play, computed from visible data only."""
        return legal_moves_for(self.fields[player_id], self.ends_at, player_id)

    def visible_sums(self) -> dict[int, int]:
        """Sum of face-up cards per player; hidden cells count as zero."""
        return {player_id: field.sum() for player_id, field in enumerate(self.fields)}

    def vectorized(self) -> np.ndarray:
        return observation_features(self)

    def render(self) -> str:
        lines = [f"middleCard: {self.middle_card}"]
        for player_id, field in enumerate(self.fields):
            lines.append(f"player: {player_id}")
            lines.append(field.render())
        return "\n".join(lines)
