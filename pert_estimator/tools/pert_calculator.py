# pert_estimator/tools/pert_calculator.py

from __future__ import annotations

import math
from typing import Dict, Iterable

from pert_estimator.models import Task


def three_point_estimate(pessimistic: float, likely: float, optimistic: float) -> float:
    """Weighted PERT mean: (a + 4b + c) / 6."""
    return (pessimistic + 4 * likely + optimistic) / 6


def standard_deviation(pessimistic: float, optimistic: float) -> float:
    return (pessimistic - optimistic) / 6


def calculate_three_point_estimate(
    pessimistic: float,
    likely: float,
    optimistic: float,
) -> Dict[str, float]:
    """
    Main function used when a task is created.

    Returns a dict of the form:
    {
        "threePointEstimated": 6.0,
        "standardDeviationEstimated": 1.333
    }

    No validation happens here; callers are expected to have checked
    the inputs already (see task_validator).
    """
    return {
        "threePointEstimated": three_point_estimate(pessimistic, likely, optimistic),
        "standardDeviationEstimated": standard_deviation(pessimistic, optimistic),
    }


def aggregate(tasks: Iterable[Task]) -> Dict[str, float]:
    """
    Totals across tasks.

    Both totals are plain linear sums of the stored per-task values. The
    standard deviation is NOT combined in quadrature.
    """
    total_estimated = 0.0
    total_deviation = 0.0
    for task in tasks:
        total_estimated += task.three_point_estimated
        total_deviation += task.standard_deviation_estimated

    return {
        "threePointEstimated": total_estimated,
        "standardDeviationEstimated": total_deviation,
    }


def ceil_number(value: float, is_ceil: bool) -> float:
    if is_ceil and math.isfinite(value):
        return math.ceil(value)
    return value


def format_hours(value: float, is_ceil: bool) -> str:
    """
    Display text for an hour value.

    Rounded mode shows the integer ceiling. Otherwise the stored value is
    shown as-is: whole numbers without a trailing ".0", anything else with
    full float precision.
    """
    shown = ceil_number(value, is_ceil)
    if not math.isfinite(shown):
        return repr(float(shown))
    if isinstance(shown, int) or float(shown).is_integer():
        return str(int(shown))
    return repr(float(shown))


def format_total(totals: Dict[str, float], is_ceil: bool) -> str:
    expected = format_hours(totals["threePointEstimated"], is_ceil)
    deviation = format_hours(totals["standardDeviationEstimated"], is_ceil)
    return f"{expected}h +/- {deviation}h"
