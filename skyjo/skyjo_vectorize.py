"""Fixed-shape numeric projections of cells, fields, and redacted states.

Cell encoding:

- cleared cell: -1
- face-up card `v`: `v + 2` (always >= 0, the lowest card is -2)
- face-down card as seen by agents: -2
- face-down card with its true value `v`: `-(v + 10)` (always <= -8)

Fields are flattened column-major. A redacted state is the middle card
followed by every field in seat order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .skyjo_field import FIELD_SIZE, Cell, Field

if TYPE_CHECKING:
    from .skyjo_observation import RedactedGameState

GONE_FEATURE = -1.0
HIDDEN_FEATURE = -2.0


def observation_size(player_count: int) -> int:
    return 1 + FIELD_SIZE * player_count


def policy_input_size(player_count: int) -> int:
    return observation_size(player_count) + 2


def cell_feature(cell: Cell) -> float:
    if cell.is_gone:
        return GONE_FEATURE
    if cell.is_revealed:
        return float(cell.value + 2)
    if cell.value is None:
        return HIDDEN_FEATURE
    return float(-(cell.value + 10))


def field_features(field: Field) -> np.ndarray:
    return np.array([cell_feature(cell) for _, _, cell in field.cells()], dtype=np.float64)


def observation_features(observation: RedactedGameState) -> np.ndarray:
    parts = [np.array([observation.middle_card], dtype=np.float64)]
    parts.extend(field_features(field) for field in observation.fields)
    return np.concatenate(parts)


def policy_input(observation: RedactedGameState, player_id: int, noise: float) -> np.ndarray:
    """State features plus the deciding seat and one noise feature."""
    return np.concatenate([observation_features(observation), np.array([player_id, noise], dtype=np.float64)])
