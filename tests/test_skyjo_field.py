"""Rule-level tests for a single player's field."""

from __future__ import annotations

import pytest

from skyjo.skyjo_field import Cell, CellKind, Field
from tabletop.errors import InvariantViolationError, RuleViolationError

G = Cell.gone
R = Cell.revealed
U = Cell.unrevealed


def _field(*columns: tuple[Cell, Cell, Cell]) -> Field:
    filler = (U(7), U(8), U(9))
    padded = list(columns) + [filler] * (4 - len(columns))
    return Field(columns=tuple(padded))


def test_deal_fills_columns_top_to_bottom() -> None:
    field = Field.deal(list(range(12)))

    assert field.cell(0, 0) == U(0)
    assert field.cell(0, 2) == U(2)
    assert field.cell(1, 0) == U(3)
    assert field.cell(3, 2) == U(11)
    assert all(cell.kind is CellKind.UNREVEALED for _, _, cell in field.cells())


def test_deal_rejects_wrong_card_count() -> None:
    with pytest.raises(InvariantViolationError):
        Field.deal([1, 2, 3])


def test_field_shape_is_enforced() -> None:
    with pytest.raises(InvariantViolationError):
        Field(columns=((U(1), U(2)),) * 4)


def test_reveal_turns_card_up_without_clearing() -> None:
    field = _field((U(4), U(5), U(6)))
    new_field, cleared = field.reveal(0, 1)

    assert new_field.cell(0, 1) == R(5)
    assert cleared == ()
    assert field.cell(0, 1) == U(5)


def test_reveal_completing_column_clears_it() -> None:
    field = _field((R(9), U(9), R(9)))
    new_field, cleared = field.reveal(0, 1)

    assert new_field.columns[0] == (G(), G(), G())
    assert cleared == (9, 9, 9)


def test_reveal_of_revealed_or_gone_cell_fails() -> None:
    field = _field((R(1), G(), U(3)))

    with pytest.raises(RuleViolationError):
        field.reveal(0, 0)
    with pytest.raises(RuleViolationError):
        field.reveal(0, 1)


def test_swap_into_returns_previous_hidden_value() -> None:
    field = _field((U(12), U(1), U(2)))
    new_field, returned = field.swap_into(0, 0, -2)

    assert new_field.cell(0, 0) == R(-2)
    assert returned == (12,)


def test_swap_into_replaces_revealed_card() -> None:
    field = _field((R(10), U(1), U(2)))
    new_field, returned = field.swap_into(0, 0, 0)

    assert new_field.cell(0, 0) == R(0)
    assert returned == (10,)


def test_swap_completing_column_returns_previous_then_cleared() -> None:
    field = _field((R(5), R(5), U(11)))
    new_field, returned = field.swap_into(0, 2, 5)

    assert new_field.columns[0] == (G(), G(), G())
    assert returned == (11, 5, 5, 5)


def test_swap_into_gone_cell_fails() -> None:
    field = _field((G(), G(), G()))

    with pytest.raises(RuleViolationError):
        field.swap_into(0, 0, 3)


def test_matching_values_must_all_be_revealed_to_clear() -> None:
    field = _field((R(4), U(4), U(1)))
    new_field, returned = field.swap_into(0, 2, 4)

    assert new_field.columns[0] == (R(4), U(4), R(4))
    assert returned == (1,)


def test_redacted_hides_face_down_values_only() -> None:
    field = _field((R(3), G(), U(-2)), (U(12), U(0), R(-1)))
    redacted = field.redacted()

    assert redacted.cell(0, 0) == R(3)
    assert redacted.cell(0, 1) == G()
    assert redacted.cell(0, 2) == U()
    assert redacted.cell(0, 2).value is None
    assert redacted.cell(1, 2) == R(-1)
    assert all(cell.value is None for _, _, cell in redacted.cells() if cell.is_unrevealed)


def test_sum_counts_true_values_but_redacted_sum_does_not() -> None:
    field = _field((R(3), G(), U(-2)), (U(12), U(0), R(-1)))
    filler = 7 + 8 + 9

    assert field.sum() == 3 + 0 - 2 + 12 + 0 - 1 + 2 * filler
    assert field.redacted().sum() == 3 - 1
    assert field.card_count() == 11


def test_render_uses_fixed_width_tokens() -> None:
    field = _field((R(3), G(), U(-2)), (U(12), U(0), R(-1)))
    lines = field.render().splitlines()

    assert lines[0] == "-" * 23
    assert lines[1] == "| [ 3] {12} { 7} { 7} |"
    assert lines[2] == "| //// { 0} { 8} { 8} |"
    assert lines[3] == "| {-2} [-1] { 9} { 9} |"
    assert lines[-1] == f"sum = {field.sum()}"
    assert "****" in field.redacted().render()
