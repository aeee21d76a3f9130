from __future__ import annotations

import json
from pathlib import Path

import pytest

from x01_darts.errors import InvalidPlayerNameError, InvalidScoreError, InvalidSetOptionsError
from x01_darts.io import load_participants_from_json, load_ruleset_from_json, parse_in_rule, parse_out_rule
from x01_darts.ruleset import InRule, OutRule


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_parse_rule_names_are_case_insensitive() -> None:
    assert parse_in_rule("Double") is InRule.DOUBLE
    assert parse_out_rule(" TRIPLE ") is OutRule.TRIPLE
    assert parse_out_rule("any") is OutRule.ANY

    with pytest.raises(ValueError):
        parse_in_rule("master")


def test_load_ruleset_from_json_happy_path(tmp_path: Path) -> None:
    p = _write_json(
        tmp_path / "ruleset.json",
        {
            "score": 501,
            "in_rule": "any",
            "out_rule": "double",
            "sets": {"num_sets": 3, "num_legs": 5, "win_distance": 2},
        },
    )

    rules = load_ruleset_from_json(p)
    assert rules.score == 501
    assert rules.in_rule is InRule.ANY
    assert rules.out_rule is OutRule.DOUBLE
    assert rules.sets.num_sets == 3
    assert rules.sets.num_legs == 5
    assert rules.sets.win_distance == 2


def test_load_ruleset_from_json_defaults(tmp_path: Path) -> None:
    rules = load_ruleset_from_json(_write_json(tmp_path / "ruleset.json", {"score": 301}))

    assert rules.in_rule is InRule.ANY
    assert rules.out_rule is OutRule.ANY
    assert rules.sets.num_legs == 1


def test_load_ruleset_from_json_missing_score_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_ruleset_from_json(_write_json(tmp_path / "ruleset.json", {"out_rule": "double"}))


def test_load_ruleset_from_json_invalid_values_raise(tmp_path: Path) -> None:
    with pytest.raises(InvalidScoreError):
        load_ruleset_from_json(_write_json(tmp_path / "a.json", {"score": 500}))
    with pytest.raises(InvalidSetOptionsError):
        load_ruleset_from_json(_write_json(tmp_path / "b.json", {"score": 501, "sets": {"num_legs": 0}}))
    with pytest.raises(ValueError):
        load_ruleset_from_json(_write_json(tmp_path / "c.json", [501]))


def test_load_participants_from_json_names_and_objects(tmp_path: Path) -> None:
    p = _write_json(tmp_path / "players.json", ["Anna", {"name": "Pete"}])

    participants = load_participants_from_json(p)
    assert [x.player.name for x in participants] == ["Anna", "Pete"]


def test_load_participants_from_json_rejects_bad_input(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_participants_from_json(_write_json(tmp_path / "a.json", []))
    with pytest.raises(InvalidPlayerNameError):
        load_participants_from_json(_write_json(tmp_path / "b.json", ["Anna", "  "]))
    with pytest.raises(ValueError):
        load_participants_from_json(_write_json(tmp_path / "c.json", [{"nick": "A"}]))
    with pytest.raises(ValueError):
        load_participants_from_json(_write_json(tmp_path / "d.json", {"name": "Anna"}))
