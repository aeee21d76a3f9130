"""Rules and scoring state machine for X01 darts games (301, 501, ...).

Throws are grouped into turns, turns into legs, legs into sets and sets into
a match, under a configurable :class:`Ruleset`.
"""

from .errors import (
    BullseyeTripleError,
    BustTurnError,
    DartsError,
    EmptyParticipantsError,
    GameFinishedError,
    InconsistentHistoryError,
    InvalidFirstPlayerError,
    InvalidNumberError,
    InvalidPlayerNameError,
    InvalidScoreError,
    InvalidSetOptionsError,
    InvalidThrowError,
)
from .leg import BustReason, Leg, State, ThrowResult
from .participants import Participant, Participants, Player
from .ruleset import InRule, OutRule, Ruleset, SetOptions
from .sets import Match, Outcome, Progress, Set
from .throw import Multiplier, Throw, ThrowKind
from .turn import Turn

__all__ = [
    "BullseyeTripleError",
    "BustReason",
    "BustTurnError",
    "DartsError",
    "EmptyParticipantsError",
    "GameFinishedError",
    "InRule",
    "InconsistentHistoryError",
    "InvalidFirstPlayerError",
    "InvalidNumberError",
    "InvalidPlayerNameError",
    "InvalidScoreError",
    "InvalidSetOptionsError",
    "InvalidThrowError",
    "Leg",
    "Match",
    "Multiplier",
    "OutRule",
    "Outcome",
    "Participant",
    "Participants",
    "Player",
    "Progress",
    "Ruleset",
    "Set",
    "SetOptions",
    "State",
    "Throw",
    "ThrowKind",
    "ThrowResult",
    "Turn",
]
