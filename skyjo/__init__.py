"""Skyjo package exports."""

from .skyjo_agents import ColumnHunterAgent, ColumnSwapAgent, EndAfterSwapsAgent, NeuralAgent
from .skyjo_cards import DECK_SIZE, STANDARD_DECK, refill_if_empty, shuffled_deck
from .skyjo_field import COLUMNS, ROWS, Cell, CellKind, Field
from .skyjo_loop import GameLoop, LoopConfig
from .skyjo_moves import DrawTo, End, GameMove, MoveType, Reveal, SwapMiddle, move_from_dict
from .skyjo_observation import RedactedGameState
from .skyjo_state import PLAYER_COUNT, GameState

__all__ = [
    "COLUMNS",
    "Cell",
    "CellKind",
    "ColumnHunterAgent",
    "ColumnSwapAgent",
    "DECK_SIZE",
    "DrawTo",
    "End",
    "EndAfterSwapsAgent",
    "Field",
    "GameLoop",
    "GameMove",
    "GameState",
    "LoopConfig",
    "MoveType",
    "NeuralAgent",
    "PLAYER_COUNT",
    "ROWS",
    "RedactedGameState",
    "Reveal",
    "STANDARD_DECK",
    "SwapMiddle",
    "move_from_dict",
    "refill_if_empty",
    "shuffled_deck",
]
