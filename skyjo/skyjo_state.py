"""Authoritative Skyjo game state and its transitions."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Any

from tabletop.errors import IllegalMoveError
from tabletop.serialize import derive_seed
from tabletop.model import State

from .skyjo_cards import refill_if_empty, shuffled_deck
from .skyjo_field import FIELD_SIZE, Field
from .skyjo_moves import DrawTo, End, GameMove, Reveal, SwapMiddle, check_move, legal_moves_for
from .skyjo_observation import RedactedGameState

logger = logging.getLogger(__name__)

PLAYER_COUNT = 4


@dataclass(frozen=True)
class GameState(State):
    """Immutable, fully visible Skyjo state.

    `stack` is the draw pile with the next card at the end; `off_stack` is the
    discard pile. Reshuffles of the discard pile are seeded from `seed` and
    `refill_count`, so `applying` depends only on its inputs.
    """

    middle_card: int
    stack: tuple[int, ...]
    off_stack: tuple[int, ...]
    fields: tuple[Field, ...]
    ends_at: int | None = None
    seed: int = 0
    refill_count: int = 0
    discard_middle_on_reveal_clear: bool = True

    @classmethod
    def deal(
        cls,
        seed: int,
        player_count: int = PLAYER_COUNT,
        *,
        discard_middle_on_reveal_clear: bool = True,
    ) -> GameState:
        """Shuffle a fresh deck, turn up nothing, and hand out 12 cards per player."""
        deck = shuffled_deck(random.Random(derive_seed(seed, "deal")))
        middle_card = deck.pop()
        fields = []
        for _ in range(player_count):
            cards = [deck.pop() for _ in range(FIELD_SIZE)]
            fields.append(Field.deal(cards))
        return cls(
            middle_card=middle_card,
            stack=tuple(deck),
            off_stack=(),
            fields=tuple(fields),
            ends_at=None,
            seed=seed,
            discard_middle_on_reveal_clear=discard_middle_on_reveal_clear,
        )

    @property
    def player_count(self) -> int:
        return len(self.fields)

    @property
    def player_has_ended(self) -> bool:
        return self.ends_at is not None

    def has_ended(self, player_id: int) -> bool:
        return self.ends_at == player_id

    def card_count(self) -> int:
        """Cards in circulation: middle card, both piles, and every field."""
        return 1 + len(self.stack) + len(self.off_stack) + sum(field.card_count() for field in self.fields)

    def legal_moves(self, player_id: int) -> list[GameMove]:
        return legal_moves_for(self.fields[player_id], self.ends_at, player_id)

    def is_legal(self, player_id: int, move: Any) -> tuple[bool, str | None]:
        """Validate `move` for `player_id` without applying it."""
        if not 0 <= player_id < self.player_count:
            return False, f"Unknown player id {player_id}."
        return check_move(self.fields[player_id], self.ends_at, player_id, move)

    def applying(self, move: GameMove, player_id: int) -> GameState:
        """Apply a legal move and return the next state."""
        legal, reason = self.is_legal(player_id, move)
        if not legal:
            raise IllegalMoveError(player_id, move, reason)

        if isinstance(move, End):
            return replace(self, ends_at=player_id)

        field = self.fields[player_id]

        if isinstance(move, Reveal):
            new_field, cleared = field.reveal(move.col, move.row)
            if not cleared:
                return replace(self, fields=self._with_field(player_id, new_field))
            *discarded, new_middle = cleared
            if self.discard_middle_on_reveal_clear:
                discarded.append(self.middle_card)
            return replace(
                self,
                middle_card=new_middle,
                off_stack=self.off_stack + tuple(discarded),
                fields=self._with_field(player_id, new_field),
            )

        if isinstance(move, SwapMiddle):
            new_field, returned = field.swap_into(move.col, move.row, self.middle_card)
            *discarded, new_middle = returned
            return replace(
                self,
                middle_card=new_middle,
                off_stack=self.off_stack + tuple(discarded),
                fields=self._with_field(player_id, new_field),
            )

        if isinstance(move, DrawTo):
            stack, off_stack, refill_count = self._refilled()
            drawn = stack[-1]
            new_field, returned = field.swap_into(move.col, move.row, drawn)
            *discarded, new_middle = returned
            return replace(
                self,
                middle_card=new_middle,
                stack=stack[:-1],
                off_stack=off_stack + (self.middle_card,) + tuple(discarded),
                fields=self._with_field(player_id, new_field),
                refill_count=refill_count,
            )

        raise IllegalMoveError(player_id, move, f"Unsupported move type: {type(move).__name__}.")

    def raw_scores(self) -> dict[int, int]:
        return {player_id: field.sum() for player_id, field in enumerate(self.fields)}

    def scores(self) -> dict[int, int]:
        """Final scores, doubling the declarer's unless it is strictly the lowest."""
        scores = self.raw_scores()
        if self.ends_at is not None:
            others = [score for player_id, score in scores.items() if player_id != self.ends_at]
            if others and scores[self.ends_at] >= min(others):
                scores[self.ends_at] = 2 * scores[self.ends_at]
        return scores

    def redacted(self) -> RedactedGameState:
        return RedactedGameState.from_state(self)

    def render(self) -> str:
        lines = [
            f"middleCard: {self.middle_card}",
            f"stack: {list(self.stack)}",
            f"offStack: {len(self.off_stack)} cards",
        ]
        for player_id, field in enumerate(self.fields):
            lines.append(f"player: {player_id}")
            lines.append(field.render())
        return "\n".join(lines)

    def _with_field(self, player_id: int, field: Field) -> tuple[Field, ...]:
        fields = list(self.fields)
        fields[player_id] = field
        return tuple(fields)

    def _refilled(self) -> tuple[tuple[int, ...], tuple[int, ...], int]:
        if self.stack:
            return self.stack, self.off_stack, self.refill_count
        rng = random.Random(derive_seed(self.seed, "refill", self.refill_count))
        stack, off_stack = refill_if_empty(self.stack, self.off_stack, rng)
        logger.debug("Recycled %d discarded cards into the draw pile", len(stack))
        return stack, off_stack, self.refill_count + 1

