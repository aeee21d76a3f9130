"""A player's turn: up to three throws plus a bust flag."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from x01_darts.errors import BustTurnError
from x01_darts.throw import Throw

MAX_THROWS_PER_TURN = 3


@dataclass(slots=True)
class Turn:
    """Throws made by one player before play passes on.

    The three-throw limit is not enforced here; the owning
    :class:`~x01_darts.leg.Leg` ends a turn after its third throw. A bust turn
    keeps its throws for audit but scores 0 and accepts no further throws.
    """

    throws: List[Throw] = field(default_factory=list)
    busted: bool = False

    def add_throw(self, throw: Throw) -> None:
        if self.busted:
            raise BustTurnError()
        self.throws.append(throw)

    def copy(self) -> Turn:
        return Turn(list(self.throws), self.busted)

    def bust(self) -> None:
        self.busted = True

    def is_bust(self) -> bool:
        return self.busted

    def num_throws(self) -> int:
        return len(self.throws)

    def points(self) -> int:
        if self.busted:
            return 0
        return sum(t.points() for t in self.throws)
