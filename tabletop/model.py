"""Value types shared by every table game: moves, full states, and player views."""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Sequence

from .serialize import canonical_digest, to_primitive


class Move:
    """A command an agent hands back to the turn loop.

    Concrete moves are frozen dataclasses; `move_type` is the discriminator
    written to logs and read back by the game's move parser.
    """

    move_type: ClassVar[str] = "Move"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.move_type}
        for item in dataclasses.fields(self):  # type: ignore[arg-type]
            payload[item.name] = to_primitive(getattr(self, item.name))
        return payload


@dataclasses.dataclass(frozen=True)
class State:
    """Complete, hidden-information-included snapshot of a game."""

    def to_dict(self) -> dict[str, Any]:
        return to_primitive(self)

    def state_digest(self) -> str:
        return canonical_digest(self.to_dict())


@dataclasses.dataclass(frozen=True)
class Observation:
    """What one seat is allowed to see of a `State`."""

    def legal_moves(self, player_id: int) -> Sequence[Move]:
        raise NotImplementedError(f"{type(self).__name__} cannot enumerate moves.")

    def to_dict(self) -> dict[str, Any]:
        return to_primitive(self)

    def observation_digest(self) -> str:
        return canonical_digest(self.to_dict())
