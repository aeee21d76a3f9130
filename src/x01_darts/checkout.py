"""Checkout suggestions formulated as a small integer program.

Given a remaining score, find the fewest darts that reach exactly zero with a
last dart the out-rule accepts. The model:

- ``setup[t]`` ∈ {0, ..., darts-1}: how often scoring segment ``t`` is hit
  before the finisher,
- ``finisher[t]`` ∈ {0,1}: which segment finishes, over segments that are
  valid finishers,

subject to exactly one finisher, at most ``darts - 1`` setup darts and the
points adding up to the remaining score. The objective minimises the number
of darts.

When the player still has to satisfy an in-rule, the first dart must also
be a valid entry throw. Since setup darts come first, that means: if any
setup darts are used, at least one of them is a valid entry (it is thrown
first); otherwise the finisher itself must be a valid entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from typing import Dict, List, Optional, Tuple

import pulp

from x01_darts.leg import Leg
from x01_darts.ruleset import InRule, OutRule
from x01_darts.throw import BULLSEYE_VALUE, MAX_NUMBER, MIN_NUMBER, Multiplier, Throw
from x01_darts.turn import MAX_THROWS_PER_TURN

logger = logging.getLogger(__name__)

SCORING_THROWS: Tuple[Throw, ...] = tuple(
    Throw.number(m, n) for m in Multiplier for n in range(MIN_NUMBER, MAX_NUMBER + 1)
) + (Throw.bullseye(Multiplier.SINGLE), Throw.bullseye(Multiplier.DOUBLE))


def _segment_code(throw: Throw) -> str:
    if throw.multiplier is None:
        return "M"
    return f"{throw.multiplier.value[0].upper()}{throw.value}"


# ============================================================================
# Data structures
# ============================================================================


@dataclass(slots=True)
class CheckoutVariables:
    """PuLP decision variables of a checkout problem."""

    setup: Dict[Throw, pulp.LpVariable] = field(default_factory=dict)
    finisher: Dict[Throw, pulp.LpVariable] = field(default_factory=dict)


# ============================================================================
# Formulation
# ============================================================================


def _validate_request(remaining: int, darts: int) -> None:
    if remaining < 1:
        raise ValueError("remaining must be >= 1")
    if not 1 <= darts <= MAX_THROWS_PER_TURN:
        raise ValueError(f"darts must be between 1 and {MAX_THROWS_PER_TURN}")


def formulate_checkout_problem(
    remaining: int,
    out_rule: OutRule,
    *,
    darts: int = MAX_THROWS_PER_TURN,
    entry_rule: InRule | None = None,
) -> tuple[pulp.LpProblem, CheckoutVariables]:
    """Create the PuLP problem for checking out ``remaining`` in at most ``darts`` darts."""

    _validate_request(remaining, darts)

    problem = pulp.LpProblem(name="checkout", sense=pulp.LpMinimize)

    variables = create_decision_variables(out_rule, darts=darts)
    add_objective(problem, variables)
    add_constraints(problem, variables, remaining=remaining, darts=darts, entry_rule=entry_rule)

    return problem, variables


def create_decision_variables(out_rule: OutRule, *, darts: int) -> CheckoutVariables:
    setup = {
        t: pulp.LpVariable(f"setup_{_segment_code(t)}", lowBound=0, upBound=darts - 1, cat=pulp.LpInteger)
        for t in SCORING_THROWS
    }
    finisher = {
        t: pulp.LpVariable(f"finisher_{_segment_code(t)}", lowBound=0, upBound=1, cat=pulp.LpBinary)
        for t in SCORING_THROWS
        if out_rule.valid_finisher(t)
    }
    return CheckoutVariables(setup=setup, finisher=finisher)


def add_objective(problem: pulp.LpProblem, variables: CheckoutVariables) -> None:
    """Minimise the number of darts thrown."""

    problem += pulp.lpSum(variables.setup.values()) + pulp.lpSum(variables.finisher.values())


def add_constraints(
    problem: pulp.LpProblem,
    variables: CheckoutVariables,
    *,
    remaining: int,
    darts: int,
    entry_rule: InRule | None = None,
) -> None:
    setup_darts = pulp.lpSum(variables.setup.values())

    problem += pulp.lpSum(variables.finisher.values()) == 1, "checkout_one_finisher"
    problem += setup_darts <= darts - 1, "checkout_setup_dart_limit"
    problem += (
        pulp.lpSum(t.points() * v for t, v in variables.setup.items())
        + pulp.lpSum(t.points() * v for t, v in variables.finisher.items())
        == remaining,
        "checkout_total_points",
    )

    if entry_rule is None or entry_rule is InRule.ANY:
        return

    entry_setup = pulp.lpSum(v for t, v in variables.setup.items() if entry_rule.valid_throw(t))
    entry_finisher = pulp.lpSum(v for t, v in variables.finisher.items() if entry_rule.valid_throw(t))

    problem += entry_setup + entry_finisher >= 1, "checkout_entry_dart"
    if darts > 1:
        # Any setup dart forces at least one of them to be a valid entry.
        problem += (darts - 1) * entry_setup >= setup_darts, "checkout_entry_before_setup"


# ============================================================================
# Solving
# ============================================================================


def _build_cbc_solver(*, time_limit_seconds: int | None, enable_solver_output: bool) -> pulp.LpSolver:
    """Create a CBC (COIN-OR) solver instance for PuLP."""

    if time_limit_seconds is not None:
        return pulp.PULP_CBC_CMD(msg=enable_solver_output, timeLimit=time_limit_seconds)

    return pulp.PULP_CBC_CMD(msg=enable_solver_output)


def _max_checkout(out_rule: OutRule, darts: int) -> int:
    best_finisher = max(t.points() for t in SCORING_THROWS if out_rule.valid_finisher(t))
    return (darts - 1) * 3 * MAX_NUMBER + best_finisher


def _extract_checkout(variables: CheckoutVariables, entry_rule: InRule | None) -> Tuple[Throw, ...]:
    setup: List[Throw] = []
    for t, v in variables.setup.items():
        setup.extend([t] * int(round(pulp.value(v) or 0.0)))
    setup.sort(key=lambda t: t.points(), reverse=True)

    if entry_rule is not None and setup and not entry_rule.valid_throw(setup[0]):
        entry = next(t for t in setup if entry_rule.valid_throw(t))
        setup.remove(entry)
        setup.insert(0, entry)

    finisher = next(t for t, v in variables.finisher.items() if (pulp.value(v) or 0.0) > 0.5)
    return tuple(setup) + (finisher,)


def suggest_checkout(
    remaining: int,
    out_rule: OutRule,
    *,
    darts: int = MAX_THROWS_PER_TURN,
    entry_rule: InRule | None = None,
    time_limit_seconds: int | None = None,
    enable_solver_output: bool | None = None,
) -> Optional[Tuple[Throw, ...]]:
    """Return the shortest checkout for ``remaining``, or ``None`` if there is none.

    Setup darts are ordered highest-scoring first (a required entry dart is
    moved to the front) and the finisher is last.

    Notes
    -----
    Solver output defaults to off; set ``X01_DARTS_SOLVER_OUTPUT`` to any
    non-empty value to see CBC's log.
    """

    _validate_request(remaining, darts)

    if remaining < out_rule.minimum_remaining or remaining > _max_checkout(out_rule, darts):
        logger.debug("No checkout possible for %d with %d darts (%s out)", remaining, darts, out_rule.value)
        return None

    problem, variables = formulate_checkout_problem(remaining, out_rule, darts=darts, entry_rule=entry_rule)

    if enable_solver_output is None:
        enable_solver_output = bool(os.environ.get("X01_DARTS_SOLVER_OUTPUT"))

    solver = _build_cbc_solver(time_limit_seconds=time_limit_seconds, enable_solver_output=enable_solver_output)
    status = pulp.LpStatus[problem.solve(solver)]

    logger.info(
        "Checkout problem for %d (%s out, %d darts): variables=%d constraints=%d status=%s",
        remaining,
        out_rule.value,
        darts,
        len(problem.variables()),
        len(problem.constraints),
        status,
    )

    if status != "Optimal":
        return None

    return _extract_checkout(variables, entry_rule)


def checkout_for_leg(leg: Leg, **solver_kwargs) -> Optional[Tuple[Throw, ...]]:
    """Suggest a checkout for the active player of ``leg`` with the darts left in their turn."""

    if leg.is_finished():
        return None

    entry_rule = leg.ruleset.in_rule if leg.awaiting_entry() else None
    return suggest_checkout(
        leg.current_points(),
        leg.ruleset.out_rule,
        darts=leg.darts_remaining(),
        entry_rule=entry_rule,
        **solver_kwargs,
    )
