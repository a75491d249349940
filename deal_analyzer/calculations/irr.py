"""
IRR and NPV Calculations

Implements IRR by bisection over periodic (annual) cash flows.
"""

import logging
from typing import List, Sequence

import numpy as np

logger = logging.getLogger(__name__)

LOWER_BOUND = -0.99
UPPER_BOUND = 10.0
TOLERANCE = 1e-6
MAX_ITERATIONS = 1000


def calculate_npv(cash_flows: Sequence[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of periodic cash flows.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        discount_rate: Periodic discount rate as decimal (e.g., 0.10 for 10%)

    Returns:
        NPV value. Overflow at extreme rates yields +/-inf rather than raising.
    """
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(flows.size)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        discounted = flows / np.power(1.0 + discount_rate, periods)
        return float(np.sum(discounted))


def count_sign_changes(cash_flows: Sequence[float]) -> int:
    """Count sign changes between consecutive cash flows (zero counts as positive)."""
    changes = 0
    for previous, current in zip(cash_flows, cash_flows[1:]):
        if (current >= 0) != (previous >= 0):
            changes += 1
    return changes


def calculate_irr(
    cash_flows: List[float],
    lower: float = LOWER_BOUND,
    upper: float = UPPER_BOUND,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    Calculate IRR (Internal Rate of Return) using bisection.

    The search assumes NPV decreases as the rate rises between the bounds,
    which holds for a conventional series (one outlay followed by inflows).
    Series with several sign changes can have several roots; bisection
    returns whichever root it brackets, no root-selection policy is applied.

    Args:
        cash_flows: Array of periodic cash flows, first entry the initial outlay
        lower: Lower rate bound as decimal (default -99%)
        upper: Upper rate bound as decimal (default 1000%)
        tolerance: Absolute NPV tolerance for convergence
        max_iterations: Iteration budget

    Returns:
        IRR as a percentage (e.g., 12.5 for 12.5%). Returns 0 when the
        series has no sign change, and the current best estimate when the
        iteration budget runs out.
    """
    if count_sign_changes(cash_flows) == 0:
        logger.debug("No sign change in cash flows, IRR not computable")
        return 0.0

    guess = (lower + upper) / 2

    for iteration in range(max_iterations):
        npv = calculate_npv(cash_flows, guess)

        if abs(npv) < tolerance:
            logger.debug(f"IRR converged after {iteration} iterations: {guess * 100:.4f}%")
            return guess * 100

        if npv > 0:
            lower = guess
        else:
            upper = guess

        guess = (lower + upper) / 2

    logger.debug(
        f"IRR did not converge after {max_iterations} iterations, "
        f"best estimate {guess * 100:.4f}%"
    )
    return guess * 100


def calculate_multiple(cash_flows: List[float]) -> float:
    """
    Calculate equity multiple of a cash-flow series (inflows / outflows).

    Returns 0 when the series has no outflows.
    """
    total_inflows = sum(cf for cf in cash_flows if cf > 0)
    total_outflows = abs(sum(cf for cf in cash_flows if cf < 0))

    if total_outflows == 0:
        return 0.0

    return total_inflows / total_outflows


def calculate_profit(cash_flows: List[float]) -> float:
    """Calculate profit (total inflows minus total outflows)."""
    return sum(cash_flows)
