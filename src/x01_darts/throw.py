"""Single dart throws.

A :class:`Throw` is an immutable value. The classmethod constructors are the
intended way to build one; direct construction goes through the same
validation, so no partially-valid throw can exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from x01_darts.errors import BullseyeTripleError, InvalidNumberError, InvalidThrowError

BULLSEYE_VALUE = 25
MIN_NUMBER = 1
MAX_NUMBER = 20


class Multiplier(str, Enum):
    """Scoring ring a dart landed in."""

    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"

    @property
    def factor(self) -> int:
        if self is Multiplier.SINGLE:
            return 1
        if self is Multiplier.DOUBLE:
            return 2
        return 3


class ThrowKind(str, Enum):
    MISS = "miss"
    NUMBER = "number"
    BULLSEYE = "bullseye"


@dataclass(frozen=True, slots=True)
class Throw:
    """Outcome of one dart.

    ``multiplier`` is ``None`` for a miss. ``value`` is the segment number
    (1-20), 25 for the bullseye and 0 for a miss.
    """

    kind: ThrowKind
    multiplier: Optional[Multiplier] = None
    value: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ThrowKind):
            raise InvalidThrowError(f"Unknown throw kind {self.kind!r}")

        # bool is an int subclass, but True is not segment 1.
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidNumberError(self.value)

        if self.kind is ThrowKind.MISS:
            if self.multiplier is not None or self.value != 0:
                raise InvalidThrowError("A miss has no multiplier and a value of 0")
            return

        if self.multiplier is None:
            raise InvalidThrowError(f"A {self.kind.value} throw needs a multiplier")
        if not isinstance(self.multiplier, Multiplier):
            raise InvalidThrowError(f"Unknown multiplier {self.multiplier!r}")

        if self.kind is ThrowKind.BULLSEYE:
            if self.multiplier is Multiplier.TRIPLE:
                raise BullseyeTripleError()
            if self.value != BULLSEYE_VALUE:
                raise InvalidThrowError(f"Bullseye value must be {BULLSEYE_VALUE}, got {self.value}")
            return

        if not MIN_NUMBER <= self.value <= MAX_NUMBER:
            raise InvalidNumberError(self.value)

    # --- Constructors ---

    @classmethod
    def number(cls, multiplier: Multiplier, number: int) -> Throw:
        """A hit on one of the twenty numbered segments."""

        return cls(ThrowKind.NUMBER, multiplier, number)

    @classmethod
    def bullseye(cls, multiplier: Multiplier) -> Throw:
        """Outer (single) or inner (double) bullseye."""

        return cls(ThrowKind.BULLSEYE, multiplier, BULLSEYE_VALUE)

    @classmethod
    def miss(cls) -> Throw:
        return cls(ThrowKind.MISS)

    @classmethod
    def single(cls, number: int) -> Throw:
        return cls.number(Multiplier.SINGLE, number)

    @classmethod
    def double(cls, number: int) -> Throw:
        return cls.number(Multiplier.DOUBLE, number)

    @classmethod
    def triple(cls, number: int) -> Throw:
        return cls.number(Multiplier.TRIPLE, number)

    # --- Queries ---

    def points(self) -> int:
        if self.multiplier is None:
            return 0
        return self.value * self.multiplier.factor

    def is_miss(self) -> bool:
        return self.kind is ThrowKind.MISS
