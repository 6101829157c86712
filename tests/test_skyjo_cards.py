"""Tests for the deck and the draw/discard recycling rule."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from skyjo.skyjo_cards import DECK_COUNTS, DECK_SIZE, STANDARD_DECK, refill_if_empty, shuffled_deck
from tabletop.errors import InvariantViolationError


def test_standard_deck_composition() -> None:
    assert DECK_SIZE == 150
    assert DECK_COUNTS[-2] == 5
    assert DECK_COUNTS[-1] == 10
    assert DECK_COUNTS[0] == 15
    for value in range(1, 13):
        assert DECK_COUNTS[value] == 10
    assert set(DECK_COUNTS) == set(range(-2, 13))


def test_shuffled_deck_is_a_permutation_and_leaves_constant_untouched() -> None:
    deck = shuffled_deck(random.Random(3))

    assert Counter(deck) == Counter(STANDARD_DECK)
    assert isinstance(STANDARD_DECK, tuple)
    assert STANDARD_DECK[:5] == (-2, -2, -2, -2, -2)


def test_independent_sources_give_independent_orders() -> None:
    first = shuffled_deck(random.Random(1))
    second = shuffled_deck(random.Random(2))
    again = shuffled_deck(random.Random(1))

    assert first != second
    assert first == again


def test_refill_keeps_non_empty_stack() -> None:
    stack, off_stack = refill_if_empty((1, 2), (3, 4), random.Random(0))

    assert stack == (1, 2)
    assert off_stack == (3, 4)


def test_refill_recycles_discard_pile() -> None:
    discarded = tuple(range(-2, 13))
    stack, off_stack = refill_if_empty((), discarded, random.Random(0))

    assert sorted(stack) == sorted(discarded)
    assert off_stack == ()


def test_refill_with_both_piles_empty_is_an_invariant_violation() -> None:
    with pytest.raises(InvariantViolationError):
        refill_if_empty((), (), random.Random(0))
