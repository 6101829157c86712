"""Reference Skyjo policies: fixed scripts, a greedy heuristic, and a small network."""

from __future__ import annotations

import random
from typing import Sequence

import numpy as np

from tabletop.player import Agent
from tabletop.serialize import derive_seed

from .skyjo_field import COLUMNS, ROWS, Field
from .skyjo_moves import DrawTo, End, GameMove, Reveal, SwapMiddle
from .skyjo_observation import RedactedGameState
from .skyjo_state import PLAYER_COUNT
from .skyjo_vectorize import policy_input, policy_input_size


class EndAfterSwapsAgent(Agent):
    """Swaps the middle card through its own cells and ends on a fixed decision."""

    def __init__(self, agent_id: str = "end-after-swaps", end_on: int = 12):
        super().__init__(agent_id=agent_id)
        self.end_on = end_on
        self._decisions = 0

    def reset(self, game_id: str, player_id: int, seed: int) -> None:
        self._decisions = 0

    def decide(self, observation: RedactedGameState, player_id: int) -> GameMove:
        self._decisions += 1
        legal = observation.legal_moves(player_id)
        if self._decisions >= self.end_on and End() in legal:
            return End()
        swaps = [move for move in legal if isinstance(move, SwapMiddle)]
        if not swaps:
            return legal[0]
        return swaps[(self._decisions - 1) % len(swaps)]


class ColumnSwapAgent(Agent):
    """Always swaps the middle card into column 0, cycling through its rows."""

    def __init__(self, agent_id: str = "column-swap"):
        super().__init__(agent_id=agent_id)
        self._decisions = 0

    def reset(self, game_id: str, player_id: int, seed: int) -> None:
        self._decisions = 0

    def decide(self, observation: RedactedGameState, player_id: int) -> GameMove:
        self._decisions += 1
        preferred = SwapMiddle(col=0, row=(self._decisions - 1) % ROWS)
        legal = observation.legal_moves(player_id)
        if preferred in legal:
            return preferred
        # column 0 was cleared
        for move in legal:
            if isinstance(move, SwapMiddle):
                return move
        return legal[0]


def pair_in_column(column: Sequence, value: int) -> int | None:
    """Row of the one cell missing from a face-up pair of `value`, if any."""
    matching = [row for row, cell in enumerate(column) if cell.is_revealed and cell.value == value]
    if len(matching) != ROWS - 1:
        return None
    return next(row for row in range(ROWS) if row not in matching)


def has_imminent_clear(field: Field, value: int) -> bool:
    """True when placing `value` in some cell of `field` would clear a column."""
    return any(pair_in_column(column, value) is not None for column in field.columns)


def players_with_imminent_clear(observation: RedactedGameState, value: int) -> list[int]:
    return [
        player_id
        for player_id, field in enumerate(observation.fields)
        if has_imminent_clear(field, value)
    ]


class ColumnHunterAgent(Agent):
    """Greedy heuristic built around completing columns and dumping high cards.

    In order of preference: complete a column with the middle card, trade a
    high face-up card (or a face-down one) for a low middle card, turn a card
    up, end the round when holding the lowest visible sum, and finally draw
    onto the highest face-up card.
    """

    def __init__(self, agent_id: str = "column-hunter", low_card: int = 3):
        super().__init__(agent_id=agent_id)
        self.low_card = low_card

    def decide(self, observation: RedactedGameState, player_id: int) -> GameMove:
        field = observation.fields[player_id]
        middle = observation.middle_card

        for col, column in enumerate(field.columns):
            row = pair_in_column(column, middle)
            if row is not None:
                return SwapMiddle(col=col, row=row)

        highest = self._highest_revealed(field)
        if middle <= self.low_card:
            if highest is not None and highest[2] > middle:
                return SwapMiddle(col=highest[0], row=highest[1])
            hidden = self._first_unrevealed(field)
            if hidden is not None:
                return SwapMiddle(col=hidden[0], row=hidden[1])

        hidden = self._first_unrevealed(field)
        if hidden is not None:
            return Reveal(col=hidden[0], row=hidden[1])

        if not observation.player_has_ended:
            sums = observation.visible_sums()
            if all(sums[player_id] < score for other, score in sums.items() if other != player_id):
                return End()

        if highest is not None:
            return DrawTo(col=highest[0], row=highest[1])
        return observation.legal_moves(player_id)[0]

    def _highest_revealed(self, field: Field) -> tuple[int, int, int] | None:
        revealed = [(col, row, cell.value) for col, row, cell in field.cells() if cell.is_revealed]
        if not revealed:
            return None
        return max(revealed, key=lambda item: item[2])

    def _first_unrevealed(self, field: Field) -> tuple[int, int] | None:
        for col, row, cell in field.cells():
            if cell.is_unrevealed:
                return col, row
        return None


def _sigmoid(values: np.ndarray) -> np.ndarray:
    return np.exp(-np.logaddexp(0.0, -values))


class NeuralAgent(Agent):
    """Three-layer linear network read through a sigmoid.

    The three outputs pick the move kind, column and row. A decoded move that
    is not legal is replaced by a random legal move.
    """

    ACTIONS = ("end", "draw_to", "reveal", "swap_middle")

    def __init__(
        self,
        agent_id: str = "neural",
        layers: Sequence[np.ndarray] | None = None,
        *,
        hidden_size: int = 20,
        rng: np.random.Generator | None = None,
    ):
        super().__init__(agent_id=agent_id)
        self._rng = rng or np.random.default_rng()
        if layers is None:
            sizes = [(hidden_size, policy_input_size(PLAYER_COUNT)), (hidden_size, hidden_size), (3, hidden_size)]
            layers = [self._rng.uniform(-1.0, 1.0, size=size) for size in sizes]
        self.layers = tuple(np.asarray(layer, dtype=np.float64) for layer in layers)
        self._fallback = random.Random()

    def reset(self, game_id: str, player_id: int, seed: int) -> None:
        derived = derive_seed(seed, game_id, self.agent_id, player_id)
        self._rng = np.random.default_rng(derived)
        self._fallback.seed(derived)

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        values = inputs
        for layer in self.layers:
            values = layer @ values
        return _sigmoid(values)

    def decide(self, observation: RedactedGameState, player_id: int) -> GameMove:
        outputs = self.forward(policy_input(observation, player_id, float(self._rng.random())))
        move = self._decode(outputs)
        legal = observation.legal_moves(player_id)
        if move in legal:
            return move
        return self._fallback.choice(legal)

    def mutated(self, rate: float = 0.05, scale: float = 0.3, agent_id: str | None = None) -> NeuralAgent:
        """Return a copy where each weight moves by up to `scale` with probability `rate`."""
        layers = []
        for layer in self.layers:
            mask = self._rng.random(layer.shape) < rate
            noise = self._rng.uniform(-scale, scale, size=layer.shape)
            layers.append(layer + mask * noise)
        return NeuralAgent(agent_id or self.agent_id, layers, rng=np.random.default_rng(self._rng.integers(2**63)))

    def _decode(self, outputs: np.ndarray) -> GameMove:
        action = self.ACTIONS[min(int(outputs[0] * len(self.ACTIONS)), len(self.ACTIONS) - 1)]
        col = min(int(outputs[1] * COLUMNS), COLUMNS - 1)
        row = min(int(outputs[2] * ROWS), ROWS - 1)
        if action == "end":
            return End()
        if action == "draw_to":
            return DrawTo(col=col, row=row)
        if action == "reveal":
            return Reveal(col=col, row=row)
        return SwapMiddle(col=col, row=row)
