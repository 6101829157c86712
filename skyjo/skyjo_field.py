"""Cells and the per-player 4x3 field."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence

from tabletop.errors import InvariantViolationError, RuleViolationError

COLUMNS = 4
ROWS = 3
FIELD_SIZE = COLUMNS * ROWS
_FRAME = "-" * (2 + COLUMNS * 5 + 1)


class CellKind(str, Enum):
    """Visibility of a single field position."""

    GONE = "GONE"
    REVEALED = "REVEALED"
    UNREVEALED = "UNREVEALED"


@dataclass(frozen=True)
class Cell:
    """One field position.

    An unrevealed cell carries its value in the authoritative game state and
    `None` once redacted for an agent.
    """

    kind: CellKind
    value: int | None = None

    @classmethod
    def gone(cls) -> Cell:
        return cls(CellKind.GONE)

    @classmethod
    def revealed(cls, value: int) -> Cell:
        return cls(CellKind.REVEALED, value)

    @classmethod
    def unrevealed(cls, value: int | None = None) -> Cell:
        return cls(CellKind.UNREVEALED, value)

    @property
    def is_gone(self) -> bool:
        return self.kind is CellKind.GONE

    @property
    def is_revealed(self) -> bool:
        return self.kind is CellKind.REVEALED

    @property
    def is_unrevealed(self) -> bool:
        return self.kind is CellKind.UNREVEALED

    @property
    def is_hidden(self) -> bool:
        """True for a redacted unrevealed cell."""
        return self.is_unrevealed and self.value is None

    @property
    def estimated_value(self) -> int:
        """Points the cell contributes as far as its holder can tell."""
        if self.is_gone or self.value is None:
            return 0
        return self.value

    def redacted(self) -> Cell:
        if self.is_unrevealed:
            return Cell.unrevealed()
        return self

    def render(self) -> str:
        if self.is_gone:
            return "////"
        if self.is_revealed:
            return f"[{self.value:>2}]"
        if self.value is None:
            return "****"
        return f"{{{self.value:>2}}}"


@dataclass(frozen=True)
class Field:
    """A player's grid, stored column-major as `columns[col][row]`."""

    columns: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        if len(self.columns) != COLUMNS or any(len(column) != ROWS for column in self.columns):
            raise InvariantViolationError(f"A field must be {COLUMNS} columns of {ROWS} cells.")

    @classmethod
    def deal(cls, cards: Sequence[int]) -> Field:
        """Lay 12 cards face down, filling column 0 top to bottom, then column 1, and so on."""
        if len(cards) != FIELD_SIZE:
            raise InvariantViolationError(f"A field is dealt exactly {FIELD_SIZE} cards, got {len(cards)}.")
        return cls(
            columns=tuple(
                tuple(Cell.unrevealed(cards[col * ROWS + row]) for row in range(ROWS))
                for col in range(COLUMNS)
            )
        )

    @staticmethod
    def positions() -> Iterator[tuple[int, int]]:
        """Yield `(col, row)` in column-major order."""
        for col in range(COLUMNS):
            for row in range(ROWS):
                yield col, row

    def cell(self, col: int, row: int) -> Cell:
        return self.columns[col][row]

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        for col, row in self.positions():
            yield col, row, self.columns[col][row]

    def card_count(self) -> int:
        """Number of cards still lying in the field."""
        return sum(1 for _, _, cell in self.cells() if not cell.is_gone)

    def reveal(self, col: int, row: int) -> tuple[Field, tuple[int, ...]]:
        """Turn a face-down card up.

        Returns the new field and the cards cleared by a completed column
        (empty when no column was completed).
        """
        cell = self.cell(col, row)
        if not cell.is_unrevealed or cell.value is None:
            raise RuleViolationError(f"Cannot reveal {cell.kind.value} cell at col={col}, row={row}.")
        return self._place(col, row, cell.value)

    def swap_into(self, col: int, row: int, card: int) -> tuple[Field, tuple[int, ...]]:
        """Put `card` face up at `(col, row)`.

        Returns the new field and `(previous, *cleared)`. By convention the last
        returned card becomes the new middle card; the rest are discarded.
        """
        cell = self.cell(col, row)
        if cell.is_gone or cell.value is None:
            raise RuleViolationError(f"Cannot swap into {cell.kind.value} cell at col={col}, row={row}.")
        field, cleared = self._place(col, row, card)
        return field, (cell.value,) + cleared

    def redacted(self) -> Field:
        return Field(columns=tuple(tuple(cell.redacted() for cell in column) for column in self.columns))

    def sum(self) -> int:
        return sum(cell.estimated_value for _, _, cell in self.cells())

    def render(self) -> str:
        lines = [_FRAME]
        for row in range(ROWS):
            lines.append("| " + " ".join(self.columns[col][row].render() for col in range(COLUMNS)) + " |")
        lines.append(_FRAME)
        lines.append(f"sum = {self.sum()}")
        return "\n".join(lines)

    def _place(self, col: int, row: int, card: int) -> tuple[Field, tuple[int, ...]]:
        # A completed column is cleared in the same step it is completed.
        column = list(self.columns[col])
        column[row] = Cell.revealed(card)
        cleared: tuple[int, ...] = ()
        if all(cell == Cell.revealed(card) for cell in column):
            cleared = (card,) * ROWS
            column = [Cell.gone()] * ROWS
        columns = list(self.columns)
        columns[col] = tuple(column)
        return Field(columns=tuple(columns)), cleared
