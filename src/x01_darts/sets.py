"""Sets and matches: repeated legs with leg/set bookkeeping.

Completion policy
-----------------
- A set is best-of ``num_legs``: a player needs ``num_legs // 2 + 1`` leg
  wins *and* a lead of at least ``win_distance`` legs over every other
  player. Legs keep being played past ``num_legs`` until both hold.
- A match is best-of ``num_sets``: the first player to ``num_sets // 2 + 1``
  set wins takes it.
- The starting player rotates by one after every leg within a set, and by
  one for the first leg of every new set.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import List, Optional, Sequence, Tuple

from x01_darts.errors import GameFinishedError, InvalidFirstPlayerError
from x01_darts.leg import BustReason, Leg, ThrowResult
from x01_darts.participants import Participants, Player
from x01_darts.ruleset import Ruleset
from x01_darts.throw import Throw

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    CONTINUE = "continue"
    BUST = "bust"
    LEG_WON = "leg_won"
    SET_WON = "set_won"
    MATCH_WON = "match_won"


@dataclass(frozen=True, slots=True)
class Progress:
    """Result of feeding one throw into a :class:`Set` or :class:`Match`."""

    outcome: Outcome
    # The leg that received the throw (already finished for *_WON outcomes).
    leg: Leg
    bust_reason: Optional[BustReason] = None

    @property
    def is_bust(self) -> bool:
        return self.outcome is Outcome.BUST


def _validate_first_player(participants: Participants, first_player: int) -> None:
    if not 0 <= first_player < participants.count():
        raise InvalidFirstPlayerError(first_player)


def _leading_by(wins: Sequence[int], index: int) -> int:
    others = [w for i, w in enumerate(wins) if i != index]
    return wins[index] - max(others, default=0)


def _progress_for_unfinished(result: ThrowResult) -> Progress:
    outcome = Outcome.BUST if result.is_bust else Outcome.CONTINUE
    return Progress(outcome=outcome, leg=result.leg, bust_reason=result.bust_reason)


class Set:
    """A sequence of legs sharing one ruleset and roster."""

    def __init__(self, ruleset: Ruleset, participants: Participants, first_player: int = 0) -> None:
        _validate_first_player(participants, first_player)

        self._ruleset = ruleset
        self._participants = participants
        self._legs: List[Leg] = []
        self._leg_wins: List[int] = [0] * participants.count()
        self._first_player = first_player
        self._current_leg = Leg(ruleset, participants, first_player)
        self._winner: Optional[int] = None

    @property
    def ruleset(self) -> Ruleset:
        return self._ruleset

    @property
    def participants(self) -> Participants:
        return self._participants

    @property
    def legs(self) -> Tuple[Leg, ...]:
        """Completed legs, oldest first."""

        return tuple(self._legs)

    @property
    def current_leg(self) -> Leg:
        return self._current_leg

    @property
    def first_player(self) -> int:
        """Index of the player who starts the next leg."""

        return self._first_player

    @property
    def leg_wins(self) -> Tuple[int, ...]:
        return tuple(self._leg_wins)

    def current_leg_number(self) -> int:
        if self.is_finished():
            return len(self._legs)
        return len(self._legs) + 1

    def is_finished(self) -> bool:
        return self._winner is not None

    def winner_index(self) -> Optional[int]:
        return self._winner

    def current_player(self) -> Player:
        return self._current_leg.current_player()

    def current_points(self) -> int:
        return self._current_leg.current_points()

    def add_throw(self, throw: Throw) -> Progress:
        if self.is_finished():
            raise GameFinishedError("Set is already finished")

        result = self._current_leg.add_throw(throw)
        if not result.is_finished:
            return _progress_for_unfinished(result)

        leg = result.leg
        winner = leg.winner_index()
        if winner is None:
            raise RuntimeError("Finished leg has no winner")

        self._legs.append(leg)
        self._leg_wins[winner] += 1
        self._first_player = self._participants.next_index(self._first_player)

        if self._is_won_by(winner):
            self._winner = winner
            logger.info(
                "Set won by player %d (%s), legs=%s",
                winner,
                self._participants.player(winner).name,
                self._leg_wins,
            )
            return Progress(outcome=Outcome.SET_WON, leg=leg)

        logger.info("Leg %d complete, legs=%s, player %d starts next", len(self._legs), self._leg_wins, self._first_player)
        self._current_leg = Leg(self._ruleset, self._participants, self._first_player)
        return Progress(outcome=Outcome.LEG_WON, leg=leg)

    def _is_won_by(self, index: int) -> bool:
        options = self._ruleset.sets
        if self._leg_wins[index] < options.legs_to_win_set:
            return False
        return _leading_by(self._leg_wins, index) >= options.win_distance


class Match:
    """A sequence of sets; the top-level game a caller drives."""

    def __init__(self, ruleset: Ruleset, participants: Participants, first_player: int = 0) -> None:
        _validate_first_player(participants, first_player)

        self._ruleset = ruleset
        self._participants = participants
        self._sets: List[Set] = []
        self._set_wins: List[int] = [0] * participants.count()
        self._first_player = first_player
        self._current_set = Set(ruleset, participants, first_player)
        self._winner: Optional[int] = None

    @property
    def ruleset(self) -> Ruleset:
        return self._ruleset

    @property
    def participants(self) -> Participants:
        return self._participants

    @property
    def sets(self) -> Tuple[Set, ...]:
        """Completed sets, oldest first."""

        return tuple(self._sets)

    @property
    def current_set(self) -> Set:
        return self._current_set

    @property
    def current_leg(self) -> Leg:
        return self._current_set.current_leg

    @property
    def set_wins(self) -> Tuple[int, ...]:
        return tuple(self._set_wins)

    def current_set_number(self) -> int:
        if self.is_finished():
            return len(self._sets)
        return len(self._sets) + 1

    def is_finished(self) -> bool:
        return self._winner is not None

    def winner_index(self) -> Optional[int]:
        return self._winner

    def current_player(self) -> Player:
        return self._current_set.current_player()

    def current_points(self) -> int:
        return self._current_set.current_points()

    def add_throw(self, throw: Throw) -> Progress:
        if self.is_finished():
            raise GameFinishedError("Match is already finished")

        progress = self._current_set.add_throw(throw)
        if progress.outcome is not Outcome.SET_WON:
            return progress

        finished_set = self._current_set
        winner = finished_set.winner_index()
        if winner is None:
            raise RuntimeError("Finished set has no winner")

        self._sets.append(finished_set)
        self._set_wins[winner] += 1
        self._first_player = self._participants.next_index(self._first_player)

        if self._set_wins[winner] >= self._ruleset.sets.sets_to_win_match:
            self._winner = winner
            logger.info(
                "Match won by player %d (%s), sets=%s",
                winner,
                self._participants.player(winner).name,
                self._set_wins,
            )
            return Progress(outcome=Outcome.MATCH_WON, leg=progress.leg)

        self._current_set = Set(self._ruleset, self._participants, self._first_player)
        return progress
