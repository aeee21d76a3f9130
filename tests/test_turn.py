import pytest

from x01_darts.errors import BustTurnError
from x01_darts.throw import Throw
from x01_darts.turn import Turn


def test_new_turn_is_empty_and_not_bust() -> None:
    turn = Turn()
    assert turn.num_throws() == 0
    assert turn.points() == 0
    assert not turn.is_bust()


def test_one_hundred_and_eighty() -> None:
    turn = Turn()
    for _ in range(3):
        turn.add_throw(Throw.triple(20))
    assert turn.points() == 180


def test_turn_itself_does_not_cap_throws() -> None:
    turn = Turn()
    for _ in range(4):
        turn.add_throw(Throw.single(1))
    assert turn.num_throws() == 4


def test_bust_turn_scores_zero_but_keeps_throws() -> None:
    turn = Turn()
    turn.add_throw(Throw.triple(20))
    turn.bust()
    turn.bust()

    assert turn.is_bust()
    assert turn.points() == 0
    assert turn.throws == [Throw.triple(20)]


def test_bust_turn_rejects_further_throws() -> None:
    turn = Turn()
    turn.bust()
    with pytest.raises(BustTurnError):
        turn.add_throw(Throw.miss())
