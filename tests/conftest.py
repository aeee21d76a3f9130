from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is importable when running without an installed package.
_SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

from x01_darts.participants import Participants  # noqa: E402
from x01_darts.ruleset import Ruleset  # noqa: E402


@pytest.fixture
def ruleset_101() -> Ruleset:
    return Ruleset(score=101)


@pytest.fixture
def two_players() -> Participants:
    return Participants.from_names(["Anna", "Pete"])
