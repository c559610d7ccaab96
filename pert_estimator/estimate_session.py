from __future__ import annotations

import logging
import math
import uuid
from dataclasses import replace
from typing import Any, Dict, Optional

from pert_estimator.config import Settings, get_settings
from pert_estimator.errors import ShareCodeError, TaskValidationError
from pert_estimator.models import EstimateSet, Task
from pert_estimator.tools.pert_calculator import aggregate, calculate_three_point_estimate
from pert_estimator.tools.share_codec import build_share_link, decode_estimate_set
from pert_estimator.tools.task_validator import validate_task_input

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Low-level helpers
# -------------------------------------------------------------------

def _new_task_id() -> str:
    return str(uuid.uuid4())


def create_task(
    description: Any,
    estimated_a: Any,
    estimated_b: Any,
    estimated_c: Any,
    task_id: Optional[str] = None,
) -> Task:
    """
    Validate a form submission and build the Task with its derived fields.

    Raises TaskValidationError when the input is rejected.
    """
    desc, a, b, c = validate_task_input(description, estimated_a, estimated_b, estimated_c)
    derived = calculate_three_point_estimate(a, b, c)

    return Task(
        id=task_id or _new_task_id(),
        description=desc,
        estimated_a=a,
        estimated_b=b,
        estimated_c=c,
        three_point_estimated=derived["threePointEstimated"],
        standard_deviation_estimated=derived["standardDeviationEstimated"],
    )


# -------------------------------------------------------------------
# Public session operations
# -------------------------------------------------------------------

def default_estimate_set(settings: Optional[Settings] = None) -> EstimateSet:
    settings = settings or get_settings()
    return EstimateSet(
        estimate_name=settings.default_estimate_name,
        is_ceil_numbers=settings.default_ceil_numbers,
        tasks=(),
    )


def add_task(
    state: EstimateSet,
    description: Any,
    estimated_a: Any,
    estimated_b: Any,
    estimated_c: Any,
    *,
    task_id: Optional[str] = None,
) -> EstimateSet:
    """
    Return a new EstimateSet with one more task appended.

    `state` is never modified; on invalid input TaskValidationError
    propagates and the caller keeps the old state.
    """
    task = create_task(description, estimated_a, estimated_b, estimated_c, task_id=task_id)
    tasks = state.tasks + (task,)
    if not all(math.isfinite(v) for v in aggregate(tasks).values()):
        raise TaskValidationError({"estimatedA": "Estimates are too large to add to this total."})

    logger.info(
        "Added task %s (%s): %.3fh +/- %.3fh",
        task.id,
        task.description,
        task.three_point_estimated,
        task.standard_deviation_estimated,
    )
    return replace(state, tasks=tasks)


def remove_task(state: EstimateSet, task_id: str) -> EstimateSet:
    """Drop the task with `task_id`. Unknown ids are ignored."""
    remaining = tuple(t for t in state.tasks if t.id != task_id)
    if len(remaining) == len(state.tasks):
        logger.debug("remove_task: no task with id %s", task_id)
        return state
    logger.info("Removed task %s", task_id)
    return replace(state, tasks=remaining)


def rename_estimate(state: EstimateSet, estimate_name: str) -> EstimateSet:
    return replace(state, estimate_name=estimate_name)


def set_ceil_numbers(state: EstimateSet, is_ceil_numbers: bool) -> EstimateSet:
    return replace(state, is_ceil_numbers=bool(is_ceil_numbers))


def aggregate_estimate(state: EstimateSet) -> Dict[str, float]:
    return aggregate(state.tasks)


def load_shared_estimate(code: str) -> EstimateSet:
    """
    Turn a share code from the URL into an EstimateSet.

    Raises ShareCodeError for anything malformed; callers decide on the
    fallback (the web app keeps the default set and shows the message).
    """
    try:
        estimate = decode_estimate_set(code)
    except ShareCodeError as e:
        logger.warning("Could not load shared estimate: %s", e)
        raise

    logger.info(
        "Loaded shared estimate '%s' with %d task(s)",
        estimate.estimate_name,
        len(estimate.tasks),
    )
    return estimate


def share_link_for(
    state: EstimateSet,
    origin: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    return build_share_link(origin or settings.public_url, state, settings.share_param)
