"""Exception types raised by :mod:`x01_darts`.

Construction errors derive from :class:`ValueError` so callers that only care
about "bad input" can catch that. Errors about game state derive from
:class:`RuntimeError`.

Busts and finished legs are *not* errors: they are reported through the
normal return values of ``add_throw``.
"""

from __future__ import annotations


class DartsError(Exception):
    """Base class for all errors raised by this package."""


class InvalidThrowError(DartsError, ValueError):
    """A throw could not be constructed."""


class InvalidNumberError(InvalidThrowError):
    def __init__(self, number: object) -> None:
        super().__init__(f"Throw has invalid number {number} (must be 1-20)")
        self.number = number


class BullseyeTripleError(InvalidThrowError):
    def __init__(self) -> None:
        super().__init__("Bullseye cannot be a triple")


class InvalidPlayerNameError(DartsError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name!r} is not a valid name for a player")
        self.name = name


class InvalidScoreError(DartsError, ValueError):
    def __init__(self, score: int) -> None:
        super().__init__(f"Ruleset.score must be of the form 100k+1 (101, 301, 501, ...), got {score}")
        self.score = score


class InvalidSetOptionsError(DartsError, ValueError):
    """Zero or negative set/leg/win-distance configuration."""


class EmptyParticipantsError(DartsError, ValueError):
    def __init__(self) -> None:
        super().__init__("Participants cannot be empty")


class InvalidFirstPlayerError(DartsError, ValueError):
    def __init__(self, index: int) -> None:
        super().__init__(f"First player {index} is invalid")
        self.index = index


class BustTurnError(DartsError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("Cannot add a throw to a turn that is already bust")


class InconsistentHistoryError(DartsError, RuntimeError):
    """A player's turn history leaves them with an unreachable remaining score."""

    def __init__(self, player_index: int, remaining: int) -> None:
        super().__init__(f"Turn history of player {player_index} leaves an invalid remaining score of {remaining}")
        self.player_index = player_index
        self.remaining = remaining


class GameFinishedError(DartsError, RuntimeError):
    """A throw was added to a leg, set or match that is already finished."""
