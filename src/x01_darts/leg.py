"""The per-leg scoring state machine.

A :class:`Leg` accepts throws one at a time through :meth:`Leg.add_throw`
and classifies each one as continuing the turn, ending it, busting it, or
finishing the leg.

Busts and finishes are ordinary results, not exceptions. The checks run in
a fixed order for every throw:

1. in-rule on the player's opening throw of the leg,
2. scored over (more points than remain),
3. exactly zero remaining, with or without a valid finisher,
4. a remainder that can no longer be checked out under the out-rule,
5. the three-throw turn limit.

A throw that both scores over and would have been a bad finisher is
therefore reported as :attr:`BustReason.SCORED_OVER`.

Only one ``add_throw`` call may be in flight per leg. The leg itself does no
locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import List, Optional, Sequence, Tuple

from x01_darts.errors import GameFinishedError, InconsistentHistoryError, InvalidFirstPlayerError
from x01_darts.participants import Participants, Player
from x01_darts.ruleset import Ruleset
from x01_darts.throw import Throw
from x01_darts.turn import MAX_THROWS_PER_TURN, Turn

logger = logging.getLogger(__name__)


class State(str, Enum):
    UNFINISHED = "unfinished"
    FINISHED = "finished"


class BustReason(str, Enum):
    """Why a turn was voided."""

    INVALID_ENTRY = "invalid_entry"
    SCORED_OVER = "scored_over"
    INVALID_FINISHER = "invalid_finisher"
    UNREACHABLE_REMAINDER = "unreachable_remainder"


@dataclass(frozen=True, slots=True)
class ThrowResult:
    """Result of feeding one throw into a :class:`Leg`."""

    state: State
    leg: Leg
    bust_reason: Optional[BustReason] = None
    turn_ended: bool = False

    @property
    def is_bust(self) -> bool:
        return self.bust_reason is not None

    @property
    def is_finished(self) -> bool:
        return self.state is State.FINISHED


@dataclass(slots=True)
class _CurrentPlayer:
    index: int
    # Remaining points at the start of the turn.
    points: int
    turn: Turn = field(default_factory=Turn)


class Leg:
    """One leg among ``participants`` under ``ruleset``.

    Parameters
    ----------
    ruleset, participants:
        Shared, read-only inputs. They are referenced, not copied.
    first_player:
        Index of the participant who throws first.
    """

    def __init__(self, ruleset: Ruleset, participants: Participants, first_player: int = 0) -> None:
        if not 0 <= first_player < participants.count():
            raise InvalidFirstPlayerError(first_player)

        self._ruleset = ruleset
        self._participants = participants
        self._turns: List[List[Turn]] = [[] for _ in range(participants.count())]
        self._state = State.UNFINISHED
        self._current = self._begin_turn(first_player)

    @classmethod
    def from_history(
        cls,
        ruleset: Ruleset,
        participants: Participants,
        turns: Sequence[Sequence[Turn]],
        current_index: int,
    ) -> Leg:
        """Resume a leg from completed turns, one sequence per participant.

        Raises
        ------
        InconsistentHistoryError
            If a player's history leaves a remaining score that legal play
            could not have produced.
        """

        if len(turns) != participants.count():
            raise ValueError(f"Expected turn history for {participants.count()} participants, got {len(turns)}")

        leg = cls(ruleset, participants, current_index)
        leg._turns = [[t.copy() for t in player_turns] for player_turns in turns]
        for index in range(participants.count()):
            leg._calculate_points(index)
        leg._current = leg._begin_turn(current_index)
        return leg

    # --- Read accessors ---

    @property
    def ruleset(self) -> Ruleset:
        return self._ruleset

    @property
    def participants(self) -> Participants:
        return self._participants

    @property
    def state(self) -> State:
        return self._state

    @property
    def current_index(self) -> int:
        return self._current.index

    @property
    def current_turn(self) -> Turn:
        """A copy of the turn in progress."""

        return self._current.turn.copy()

    def is_finished(self) -> bool:
        return self._state is State.FINISHED

    def current_player(self) -> Player:
        return self._participants.player(self._current.index)

    def current_points(self) -> int:
        """Points the active player still needs, including the turn in progress."""

        return self._current.points - self._current.turn.points()

    def darts_remaining(self) -> int:
        if self.is_finished():
            return 0
        return MAX_THROWS_PER_TURN - self._current.turn.num_throws()

    def turns(self, index: int) -> Tuple[Turn, ...]:
        """Copies of the completed turns of participant ``index`` (excluding the turn in progress)."""

        return tuple(t.copy() for t in self._turns[index])

    def remaining_points(self, index: int) -> int:
        if index == self._current.index:
            return self.current_points()
        return self._calculate_points(index)

    def awaiting_entry(self) -> bool:
        """True while the next throw is the active player's opening throw of the leg."""

        return not self._turns[self._current.index] and self._current.turn.num_throws() == 0

    def winner_index(self) -> Optional[int]:
        if not self.is_finished():
            return None
        return self._current.index

    # --- State machine ---

    def add_throw(self, throw: Throw) -> ThrowResult:
        """Apply ``throw`` for the active player and report the outcome."""

        if self.is_finished():
            raise GameFinishedError("Leg is already finished")

        current = self._current
        first_throw = self.awaiting_entry()
        current.turn.add_throw(throw)

        if first_throw and not self._ruleset.in_rule.valid_throw(throw):
            return self._bust_turn(BustReason.INVALID_ENTRY)

        remaining = current.points - current.turn.points()
        logger.debug("Player %d threw %s (%d points), %d remaining", current.index, throw, throw.points(), remaining)

        if remaining < 0:
            return self._bust_turn(BustReason.SCORED_OVER)

        if remaining == 0:
            if not self._ruleset.out_rule.valid_finisher(throw):
                return self._bust_turn(BustReason.INVALID_FINISHER)
            self._state = State.FINISHED
            logger.info("Leg won by player %d (%s)", current.index, self.current_player().name)
            return ThrowResult(State.FINISHED, self)

        if not self._ruleset.out_rule.valid_remaining_points(remaining):
            return self._bust_turn(BustReason.UNREACHABLE_REMAINDER)

        if current.turn.num_throws() >= MAX_THROWS_PER_TURN:
            return self._next_turn()

        return ThrowResult(State.UNFINISHED, self)

    # --- Internals ---

    def _calculate_points(self, index: int) -> int:
        scored = sum(t.points() for t in self._turns[index] if not t.is_bust())
        remaining = self._ruleset.score - scored
        if not self._ruleset.out_rule.valid_remaining_points(remaining):
            raise InconsistentHistoryError(index, remaining)
        return remaining

    def _begin_turn(self, index: int) -> _CurrentPlayer:
        return _CurrentPlayer(index=index, points=self._calculate_points(index))

    def _bust_turn(self, reason: BustReason) -> ThrowResult:
        logger.debug("Player %d bust: %s", self._current.index, reason.value)
        self._current.turn.bust()
        return self._next_turn(reason)

    def _next_turn(self, reason: Optional[BustReason] = None) -> ThrowResult:
        finished = self._current
        self._turns[finished.index].append(finished.turn)
        next_index = self._participants.next_index(finished.index)
        self._current = self._begin_turn(next_index)
        logger.debug("Turn of player %d ended, player %d to throw", finished.index, next_index)
        return ThrowResult(State.UNFINISHED, self, bust_reason=reason, turn_ended=True)
