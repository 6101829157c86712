"""Tests for the redacted view agents receive and its numeric projection."""

from __future__ import annotations

import random

import numpy as np
import pytest

from skyjo.skyjo_field import Cell, Field
from skyjo.skyjo_moves import End
from skyjo.skyjo_observation import RedactedGameState
from skyjo.skyjo_state import GameState
from skyjo.skyjo_vectorize import (
    cell_feature,
    field_features,
    observation_features,
    observation_size,
    policy_input,
    policy_input_size,
)
from tabletop.errors import InvariantViolationError

G = Cell.gone
R = Cell.revealed
U = Cell.unrevealed


def _played_states(seed: int, turns: int = 60) -> list[GameState]:
    rng = random.Random(seed)
    state = GameState.deal(seed=seed)
    states = [state]
    for turn in range(turns):
        player_id = turn % state.player_count
        moves = [move for move in state.legal_moves(player_id) if not isinstance(move, End)]
        if moves:
            state = state.applying(rng.choice(moves), player_id)
            states.append(state)
    return states


def test_redacted_view_copies_public_information() -> None:
    state = GameState.deal(seed=9).applying(End(), 1)
    view = state.redacted()

    assert view.middle_card == state.middle_card
    assert view.ends_at == 1
    assert view.player_has_ended
    assert view.has_ended(1)
    assert not hasattr(view, "stack")
    assert not hasattr(view, "off_stack")


def test_redaction_never_exposes_face_down_values() -> None:
    for state in _played_states(seed=3):
        view = state.redacted()
        for true_field, redacted_field in zip(state.fields, view.fields, strict=True):
            for (_, _, true_cell), (_, _, cell) in zip(true_field.cells(), redacted_field.cells(), strict=True):
                if true_cell.is_unrevealed:
                    assert cell == U()
                    assert cell.value is None
                else:
                    assert cell == true_cell


def test_redacted_view_rejects_hidden_values() -> None:
    state = GameState.deal(seed=9)

    with pytest.raises(InvariantViolationError):
        RedactedGameState(middle_card=state.middle_card, fields=state.fields, ends_at=None)


def test_legal_moves_agree_with_true_state() -> None:
    for seed in (1, 2, 3):
        for state in _played_states(seed=seed):
            view = state.redacted()
            for player_id in range(state.player_count):
                assert view.legal_moves(player_id) == state.legal_moves(player_id)
        ended = state.applying(End(), 0)
        assert ended.redacted().legal_moves(0) == ended.legal_moves(0) == []


def test_visible_sums_ignore_hidden_cards() -> None:
    field = Field(columns=((R(4), U(), G()),) + ((U(), U(), U()),) * 3)
    view = RedactedGameState(middle_card=0, fields=(field,) * 4, ends_at=None)

    assert view.visible_sums() == {0: 4, 1: 4, 2: 4, 3: 4}


def test_observation_digest_is_deterministic() -> None:
    state = GameState.deal(seed=13)

    assert state.redacted().observation_digest() == state.redacted().observation_digest()
    assert state.redacted().to_dict()["middle_card"] == state.middle_card


def test_redacted_render_masks_face_down_cards() -> None:
    text = GameState.deal(seed=13).redacted().render()

    assert text.count("****") == 48
    assert "{" not in text


def test_cell_features() -> None:
    assert cell_feature(G()) == -1.0
    assert cell_feature(R(-2)) == 0.0
    assert cell_feature(R(12)) == 14.0
    assert cell_feature(U()) == -2.0
    assert cell_feature(U(3)) == -13.0


def test_field_features_are_column_major() -> None:
    field = Field(columns=((R(1), R(2), R(3)), (G(), U(), R(0))) + ((U(), U(), U()),) * 2)
    features = field_features(field)

    assert features.shape == (12,)
    assert features.tolist()[:6] == [3.0, 4.0, 5.0, -1.0, -2.0, 2.0]


def test_observation_vector_shape_and_content() -> None:
    view = GameState.deal(seed=17).redacted()
    features = observation_features(view)

    assert features.shape == (observation_size(4),) == (49,)
    assert features.dtype == np.float64
    assert features[0] == view.middle_card
    assert np.all(features[1:] == -2.0)
    assert np.array_equal(view.vectorized(), features)


def test_policy_input_appends_seat_and_noise() -> None:
    view = GameState.deal(seed=17).redacted()
    inputs = policy_input(view, 2, 0.25)

    assert inputs.shape == (policy_input_size(4),) == (51,)
    assert inputs[-2] == 2.0
    assert inputs[-1] == 0.25
