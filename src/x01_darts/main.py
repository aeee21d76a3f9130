from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from x01_darts.io import load_participants_from_json, load_ruleset_from_json
from x01_darts.participants import Participants
from x01_darts.ruleset import InRule, OutRule, Ruleset, SetOptions
from x01_darts.sets import Match


def configure_logging(*, level: int = logging.INFO) -> None:
    """Configure a simple root logger that writes to stderr.

    This is safe to call multiple times.
    """

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
    else:
        root.setLevel(level)


logger = logging.getLogger(__name__)


def build_default_ruleset(
    *,
    score: int = 501,
    in_rule: InRule = InRule.ANY,
    out_rule: OutRule = OutRule.DOUBLE,
    num_sets: int = 1,
    num_legs: int = 1,
    win_distance: int = 1,
) -> Ruleset:
    """Build the conventional 501 straight-in, double-out ruleset."""

    return Ruleset(
        score=score,
        in_rule=in_rule,
        out_rule=out_rule,
        sets=SetOptions(num_sets=num_sets, num_legs=num_legs, win_distance=win_distance),
    )


def load_match_config(
    *,
    ruleset_json_path: str | Path,
    players_json_path: str | Path,
) -> tuple[Ruleset, Participants]:
    """Load ruleset and roster from the JSON files used by :func:`start_match`."""

    return load_ruleset_from_json(ruleset_json_path), load_participants_from_json(players_json_path)


def start_match(
    *,
    ruleset: Ruleset,
    players: Participants | Iterable[str],
    first_player: int = 0,
    log_level: int | None = logging.INFO,
) -> Match:
    """Top-level entrypoint: set up logging and deal in a new match.

    ``players`` may be an existing roster or plain names in throwing order.
    """

    if log_level is not None:
        configure_logging(level=log_level)

    if isinstance(players, str):
        # A bare name would otherwise be split into one player per character.
        players = [players]
    participants = players if isinstance(players, Participants) else Participants.from_names(players)

    logger.info(
        "Ruleset: score=%d in=%s out=%s sets=%d legs=%d win_distance=%d",
        ruleset.score,
        ruleset.in_rule.value,
        ruleset.out_rule.value,
        ruleset.sets.num_sets,
        ruleset.sets.num_legs,
        ruleset.sets.win_distance,
    )
    logger.info(
        "Participants (%d): %s, player %d throws first",
        participants.count(),
        ", ".join(p.player.name for p in participants),
        first_player,
    )

    return Match(ruleset, participants, first_player)
