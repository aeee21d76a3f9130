from __future__ import annotations

from typing import Union

import pytest

from x01_darts.errors import GameFinishedError, InvalidFirstPlayerError
from x01_darts.leg import BustReason
from x01_darts.participants import Participants
from x01_darts.ruleset import Ruleset, SetOptions
from x01_darts.sets import Match, Outcome, Progress, Set
from x01_darts.throw import Throw


def _rules(*, num_sets: int = 1, num_legs: int = 1, win_distance: int = 1) -> Ruleset:
    return Ruleset(score=101, sets=SetOptions(num_sets=num_sets, num_legs=num_legs, win_distance=win_distance))


def _win_current_leg(game: Union[Set, Match], winner: int) -> Progress:
    """Miss out whole turns until ``winner`` is up, then check out 101 in three darts."""

    leg = game.current_leg
    while leg.current_index != winner:
        for _ in range(3):
            game.add_throw(Throw.miss())

    game.add_throw(Throw.triple(20))
    game.add_throw(Throw.double(20))
    return game.add_throw(Throw.single(1))


def test_single_leg_set_is_won_by_first_leg(two_players: Participants) -> None:
    s = Set(_rules(), two_players)

    progress = _win_current_leg(s, 0)

    assert progress.outcome is Outcome.SET_WON
    assert progress.leg.is_finished()
    assert s.is_finished()
    assert s.winner_index() == 0
    assert s.leg_wins == (1, 0)
    assert len(s.legs) == 1
    with pytest.raises(GameFinishedError):
        s.add_throw(Throw.miss())


def test_progress_reports_continue_and_bust(two_players: Participants) -> None:
    s = Set(_rules(), two_players)

    progress = s.add_throw(Throw.triple(20))
    assert progress.outcome is Outcome.CONTINUE
    assert s.current_points() == 41

    progress = s.add_throw(Throw.triple(20))
    assert progress.outcome is Outcome.BUST
    assert progress.is_bust
    assert progress.bust_reason is BustReason.SCORED_OVER
    assert s.current_player().name == "Pete"


def test_starting_player_rotates_after_each_leg(two_players: Participants) -> None:
    s = Set(_rules(num_legs=3), two_players)
    assert s.current_leg_number() == 1

    progress = _win_current_leg(s, 0)
    assert progress.outcome is Outcome.LEG_WON
    assert s.current_leg_number() == 2
    assert s.first_player == 1
    assert s.current_leg.current_index == 1
    assert not s.current_leg.is_finished()


def test_best_of_three_set(two_players: Participants) -> None:
    s = Set(_rules(num_legs=3), two_players)

    assert _win_current_leg(s, 0).outcome is Outcome.LEG_WON
    assert _win_current_leg(s, 1).outcome is Outcome.LEG_WON
    assert s.leg_wins == (1, 1)

    assert s.current_leg.current_index == 0
    assert _win_current_leg(s, 0).outcome is Outcome.SET_WON
    assert s.winner_index() == 0
    assert s.leg_wins == (2, 1)
    assert s.current_leg_number() == 3


def test_win_distance_extends_set_past_num_legs(two_players: Participants) -> None:
    s = Set(_rules(num_legs=3, win_distance=2), two_players)

    _win_current_leg(s, 0)
    _win_current_leg(s, 1)
    progress = _win_current_leg(s, 0)

    assert progress.outcome is Outcome.LEG_WON
    assert s.leg_wins == (2, 1)
    assert not s.is_finished()

    progress = _win_current_leg(s, 0)
    assert progress.outcome is Outcome.SET_WON
    assert s.leg_wins == (3, 1)
    assert len(s.legs) == 4


def test_set_with_invalid_first_player_raises(ruleset_101: Ruleset) -> None:
    participants = Participants.from_names(["Anna"])

    with pytest.raises(InvalidFirstPlayerError) as ei:
        Set(ruleset_101, participants, 2)

    assert ei.value.index == 2


def test_match_is_best_of_num_sets(two_players: Participants) -> None:
    m = Match(_rules(num_sets=3), two_players)

    progress = _win_current_leg(m, 0)
    assert progress.outcome is Outcome.SET_WON
    assert not m.is_finished()
    assert m.current_set_number() == 2
    assert m.current_leg.current_index == 1

    progress = _win_current_leg(m, 1)
    assert progress.outcome is Outcome.SET_WON
    assert m.set_wins == (1, 1)

    progress = _win_current_leg(m, 0)
    assert progress.outcome is Outcome.MATCH_WON
    assert m.is_finished()
    assert m.winner_index() == 0
    assert m.set_wins == (2, 1)
    assert len(m.sets) == 3
    with pytest.raises(GameFinishedError):
        m.add_throw(Throw.miss())


def test_match_legs_within_a_set_report_leg_won(two_players: Participants) -> None:
    m = Match(_rules(num_legs=3), two_players)

    assert _win_current_leg(m, 1).outcome is Outcome.LEG_WON
    assert m.current_set.leg_wins == (0, 1)
    assert _win_current_leg(m, 1).outcome is Outcome.MATCH_WON
    assert m.winner_index() == 1


def test_finished_leg_without_winner_raises(two_players: Participants, monkeypatch: pytest.MonkeyPatch) -> None:
    game = Set(_rules(), two_players)
    monkeypatch.setattr(game.current_leg, "winner_index", lambda: None)

    with pytest.raises(RuntimeError, match="no winner"):
        _win_current_leg(game, 0)
