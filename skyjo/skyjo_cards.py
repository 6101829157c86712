"""Card economy: the fixed deck, shuffling, and discard-pile recycling."""

from __future__ import annotations

import random
from collections import Counter

from tabletop.errors import InvariantViolationError

STANDARD_DECK: tuple[int, ...] = (
    (-2,) * 5
    + (-1,) * 10
    + (0,) * 15
    + tuple(value for value in range(1, 13) for _ in range(10))
)
DECK_SIZE = len(STANDARD_DECK)
DECK_COUNTS: dict[int, int] = dict(Counter(STANDARD_DECK))


def shuffled_deck(rng: random.Random) -> list[int]:
    """Return the standard deck in a uniformly random order."""
    deck = list(STANDARD_DECK)
    rng.shuffle(deck)
    return deck


def refill_if_empty(
    stack: tuple[int, ...],
    off_stack: tuple[int, ...],
    rng: random.Random,
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Turn the discard pile into a fresh draw pile once the draw pile is empty.

    Returns `(stack, off_stack)` unchanged while cards remain to draw.
    """
    if stack:
        return stack, off_stack
    if not off_stack:
        raise InvariantViolationError("Draw pile and discard pile are both empty.")
    recycled = list(off_stack)
    rng.shuffle(recycled)
    return tuple(recycled), ()
