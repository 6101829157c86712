"""Move definitions and legal-move enumeration for Skyjo."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from tabletop.model import Move

from .skyjo_field import COLUMNS, ROWS, Field


class MoveType(str, Enum):
    """Supported Skyjo move discriminators."""

    REVEAL = "Reveal"
    SWAP_MIDDLE = "SwapMiddle"
    DRAW_TO = "DrawTo"
    END = "End"


@dataclass(frozen=True)
class CellMove(Move):
    """A move addressed at one position of the mover's own field."""

    col: int
    row: int

    def __post_init__(self) -> None:
        if not 0 <= self.col < COLUMNS:
            raise ValueError(f"col must be between 0 and {COLUMNS - 1}.")
        if not 0 <= self.row < ROWS:
            raise ValueError(f"row must be between 0 and {ROWS - 1}.")


@dataclass(frozen=True)
class Reveal(CellMove):
    """Turn one of your face-down cards up."""

    move_type = MoveType.REVEAL.value


@dataclass(frozen=True)
class SwapMiddle(CellMove):
    """Take the middle card into a cell; the replaced card becomes the middle card."""

    move_type = MoveType.SWAP_MIDDLE.value


@dataclass(frozen=True)
class DrawTo(CellMove):
    """Draw from the stack into a cell; the replaced card becomes the middle card."""

    move_type = MoveType.DRAW_TO.value


@dataclass(frozen=True)
class End(Move):
    """Declare the round over; everyone else gets one more turn."""

    move_type = MoveType.END.value


GameMove = Reveal | SwapMiddle | DrawTo | End


def legal_moves_for(field: Field, ends_at: int | None, player_id: int) -> list[GameMove]:
    """Enumerate legal moves for `player_id` owning `field`.

    Only cell kinds are inspected, so a redacted field yields the same moves as
    the field it was redacted from.
    """
    if ends_at == player_id:
        return []
    moves: list[GameMove] = [End()] if ends_at is None else []
    for col, row, cell in field.cells():
        if cell.is_gone:
            continue
        moves.append(DrawTo(col=col, row=row))
        moves.append(SwapMiddle(col=col, row=row))
        if cell.is_unrevealed:
            moves.append(Reveal(col=col, row=row))
    return moves


def check_move(field: Field, ends_at: int | None, player_id: int, move: Any) -> tuple[bool, str | None]:
    """Return whether `move` is legal for `player_id` and a reason when it is not."""
    if ends_at == player_id:
        return False, f"Player {player_id} has already ended the round."
    if isinstance(move, End):
        if ends_at is not None:
            return False, f"Player {ends_at} already declared the round end."
        return True, None
    if not isinstance(move, (Reveal, SwapMiddle, DrawTo)):
        return False, f"Unsupported move type: {type(move).__name__}."
    cell = field.cell(move.col, move.row)
    if cell.is_gone:
        return False, f"Cell col={move.col}, row={move.row} is already cleared."
    if isinstance(move, Reveal) and not cell.is_unrevealed:
        return False, f"Cell col={move.col}, row={move.row} is already revealed."
    return True, None


def move_from_dict(data: Mapping[str, Any]) -> GameMove:
    """Parse a Skyjo move from a JSON payload."""
    move_type = data.get("type") or data.get("move_type")
    if move_type == MoveType.REVEAL.value:
        return Reveal(col=int(data["col"]), row=int(data["row"]))
    if move_type == MoveType.SWAP_MIDDLE.value:
        return SwapMiddle(col=int(data["col"]), row=int(data["row"]))
    if move_type == MoveType.DRAW_TO.value:
        return DrawTo(col=int(data["col"]), row=int(data["row"]))
    if move_type == MoveType.END.value:
        return End()
    raise ValueError(f"Unknown Skyjo move type: {move_type!r}")
