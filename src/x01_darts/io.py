"""I/O utilities for building rulesets and rosters from configuration files.

This module owns:
- file format knowledge (JSON)
- parsing and validation of rule names
- construction of domain objects from :mod:`x01_darts.ruleset` and
  :mod:`x01_darts.participants`

Expected ruleset format::

    {
        "score": 501,
        "in_rule": "any",
        "out_rule": "double",
        "sets": {"num_sets": 1, "num_legs": 3, "win_distance": 1}
    }

Everything except ``score`` is optional.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from x01_darts.participants import Participants, Player
from x01_darts.ruleset import InRule, OutRule, Ruleset, SetOptions


def parse_in_rule(value: str) -> InRule:
    """Parse an in-rule name such as ``"double"`` (case-insensitive)."""

    try:
        return InRule(value.strip().lower())
    except ValueError as e:
        raise ValueError(f"Unknown in_rule: {value!r}") from e


def parse_out_rule(value: str) -> OutRule:
    """Parse an out-rule name such as ``"double"`` (case-insensitive)."""

    try:
        return OutRule(value.strip().lower())
    except ValueError as e:
        raise ValueError(f"Unknown out_rule: {value!r}") from e


def parse_set_options(raw: Mapping[str, Any]) -> SetOptions:
    return SetOptions(
        num_sets=int(raw.get("num_sets", 1)),
        num_legs=int(raw.get("num_legs", 1)),
        win_distance=int(raw.get("win_distance", 1)),
    )


def parse_ruleset(raw: Mapping[str, Any]) -> Ruleset:
    try:
        score = int(raw["score"])
    except KeyError as e:
        raise ValueError("ruleset is missing required key 'score'") from e

    sets_raw = raw.get("sets") or {}
    if not isinstance(sets_raw, Mapping):
        raise ValueError("ruleset 'sets' must be a JSON object")

    return Ruleset(
        score=score,
        in_rule=parse_in_rule(str(raw.get("in_rule", InRule.ANY.value))),
        out_rule=parse_out_rule(str(raw.get("out_rule", OutRule.ANY.value))),
        sets=parse_set_options(sets_raw),
    )


def load_ruleset_from_json(path: str | Path) -> Ruleset:
    """Load a :class:`~x01_darts.ruleset.Ruleset` from JSON."""

    path = Path(path)
    raw = json.loads(path.read_text(encoding="utf-8-sig"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name} must contain a JSON object")
    return parse_ruleset(raw)


def load_participants_from_json(path: str | Path) -> Participants:
    """Load the roster from a JSON list of names (or ``{"name": ...}`` objects).

    Player order in the file is the throwing order.
    """

    path = Path(path)
    raw = json.loads(path.read_text(encoding="utf-8-sig"))
    if not isinstance(raw, list):
        raise ValueError(f"{path.name} must be a JSON list")

    players: list[Player] = []
    for rec in raw:
        if isinstance(rec, dict):
            try:
                name = rec["name"]
            except KeyError as e:
                raise ValueError(f"Player entry {rec!r} is missing 'name'") from e
        else:
            name = rec
        players.append(Player(str(name)))

    return Participants.from_players(players)
