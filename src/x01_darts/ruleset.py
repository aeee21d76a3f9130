"""Ruleset configuration for X01 games.

Pure predicates and validated, immutable configuration. File parsing lives in
:mod:`x01_darts.io`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from x01_darts.errors import InvalidScoreError, InvalidSetOptionsError
from x01_darts.throw import Multiplier, Throw


class InRule(str, Enum):
    """Constraint on a player's opening throw of a leg."""

    ANY = "any"
    DOUBLE = "double"
    TRIPLE = "triple"

    def valid_throw(self, throw: Throw) -> bool:
        if self is InRule.ANY:
            return True
        if self is InRule.DOUBLE:
            return throw.multiplier is Multiplier.DOUBLE
        return throw.multiplier is Multiplier.TRIPLE


class OutRule(str, Enum):
    """Constraint on the finishing throw of a leg."""

    ANY = "any"
    DOUBLE = "double"
    TRIPLE = "triple"

    def valid_finisher(self, throw: Throw) -> bool:
        if self is OutRule.ANY:
            return True
        if self is OutRule.DOUBLE:
            return throw.multiplier is Multiplier.DOUBLE
        return throw.multiplier is Multiplier.TRIPLE

    @property
    def minimum_remaining(self) -> int:
        """Smallest remaining score that can still be checked out."""

        if self is OutRule.ANY:
            return 1
        if self is OutRule.DOUBLE:
            return 2
        return 3

    def valid_remaining_points(self, points: int) -> bool:
        return points >= self.minimum_remaining


def is_valid_score(score: int) -> bool:
    """X01 starting scores are 101, 201, 301, ..."""

    return score > 1 and (score - 1) % 100 == 0


@dataclass(frozen=True, slots=True)
class SetOptions:
    """Set/leg structure of a match."""

    # Number of sets to play (best-of).
    num_sets: int = 1
    # Length of each set in legs (best-of).
    num_legs: int = 1
    # Required lead in won legs to take a set.
    win_distance: int = 1

    def __post_init__(self) -> None:
        for name in ("num_sets", "num_legs", "win_distance"):
            if getattr(self, name) <= 0:
                raise InvalidSetOptionsError(f"SetOptions.{name} must be > 0")

    @property
    def legs_to_win_set(self) -> int:
        return self.num_legs // 2 + 1

    @property
    def sets_to_win_match(self) -> int:
        return self.num_sets // 2 + 1


@dataclass(frozen=True, slots=True)
class Ruleset:
    """Immutable rules of an X01 game."""

    score: int
    in_rule: InRule = InRule.ANY
    out_rule: OutRule = OutRule.ANY
    sets: SetOptions = field(default_factory=SetOptions)

    def __post_init__(self) -> None:
        if not is_valid_score(self.score):
            raise InvalidScoreError(self.score)
