# pert_estimator/tools/task_validator.py

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

from pert_estimator.errors import TaskValidationError
from pert_estimator.tools.pert_calculator import three_point_estimate


ESTIMATE_LABELS = {
    "estimatedA": "Pessimistic estimate",
    "estimatedB": "Most likely estimate",
    "estimatedC": "Optimistic estimate",
}


def _to_number(value: Any) -> Optional[float]:
    """
    Best-effort numeric coercion for form values.

    Accepts ints, floats and numeric strings ("4", " 2.5 "). Returns None
    for anything else, including booleans, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def check_task_input(
    description: Any,
    estimated_a: Any,
    estimated_b: Any,
    estimated_c: Any,
) -> Dict[str, str]:
    """
    Collect every problem with a task form submission.

    Returns a dict of field name -> message; an empty dict means the input
    is valid. The pessimistic > optimistic rule is reported on estimatedA
    and only checked once both values are themselves valid numbers.
    """
    errors: Dict[str, str] = {}

    if not isinstance(description, str) or not description.strip():
        errors["description"] = "Task description is required."

    numbers: Dict[str, float] = {}
    for field_name, raw in (
        ("estimatedA", estimated_a),
        ("estimatedB", estimated_b),
        ("estimatedC", estimated_c),
    ):
        label = ESTIMATE_LABELS[field_name]
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            errors[field_name] = f"{label} is required."
            continue
        number = _to_number(raw)
        if number is None:
            errors[field_name] = f"{label} must be a number."
            continue
        if number < 0:
            errors[field_name] = f"{label} must not be negative."
            continue
        numbers[field_name] = number

    if "estimatedA" in numbers and "estimatedC" in numbers:
        if not numbers["estimatedA"] > numbers["estimatedC"]:
            errors["estimatedA"] = (
                "Pessimistic estimate must be greater than the optimistic estimate."
            )

    if len(numbers) == 3 and "estimatedA" not in errors:
        expected = three_point_estimate(
            numbers["estimatedA"], numbers["estimatedB"], numbers["estimatedC"]
        )
        if not math.isfinite(expected):
            errors["estimatedA"] = "Estimates are too large to calculate."

    return errors


def validate_task_input(
    description: Any,
    estimated_a: Any,
    estimated_b: Any,
    estimated_c: Any,
) -> Tuple[str, float, float, float]:
    """
    Validate and normalise a task submission.

    Returns (description, a, b, c) with numbers as floats, or raises
    TaskValidationError carrying the per-field messages.
    """
    errors = check_task_input(description, estimated_a, estimated_b, estimated_c)
    if errors:
        raise TaskValidationError(errors)

    return (
        description.strip(),
        float(_to_number(estimated_a)),
        float(_to_number(estimated_b)),
        float(_to_number(estimated_c)),
    )
