# run_local.py

from typing import Any, Dict, List

from pert_estimator.config import get_settings
from pert_estimator.errors import ShareCodeError
from pert_estimator.estimate_session import (
    add_task,
    aggregate_estimate,
    default_estimate_set,
    load_shared_estimate,
    share_link_for,
)
from pert_estimator.logging_setup import setup_logging
from pert_estimator.models import EstimateSet
from pert_estimator.tools.exporter import export_file_name, export_tasks_csv
from pert_estimator.tools.pert_calculator import format_hours, format_total
from pert_estimator.tools.share_codec import parse_share_link


def example_estimation_tasks() -> List[Dict[str, Any]]:
    """Example tasks used when no share code is pasted."""
    return [
        {"description": "Design", "pessimistic": 10, "likely": 6, "optimistic": 2},
        {"description": "Backend API", "pessimistic": 24, "likely": 12, "optimistic": 8},
        {"description": "Frontend form", "pessimistic": 16, "likely": 8, "optimistic": 4},
        {"description": "Deploy", "pessimistic": 6, "likely": 3, "optimistic": 1},
    ]


def example_estimate() -> EstimateSet:
    estimate = default_estimate_set()
    for t in example_estimation_tasks():
        estimate = add_task(
            estimate,
            t["description"],
            t["pessimistic"],
            t["likely"],
            t["optimistic"],
        )
    return estimate


def load_from_input(raw: str) -> EstimateSet:
    """Accept either a full share link or the bare code."""
    settings = get_settings()
    if "://" in raw:
        return parse_share_link(raw, settings.share_param)
    return load_shared_estimate(raw)


def main() -> None:
    settings = get_settings()
    setup_logging(log_dir=settings.log_dir, console_level=settings.log_level)

    print("=== PERT Estimate Calculator (Local Run) ===")
    print("Paste a share link or code to load it, or press Enter for the example estimate.\n")

    try:
        raw = input().strip()
    except EOFError:
        raw = ""

    estimate = None
    if raw:
        try:
            estimate = load_from_input(raw)
        except ShareCodeError as e:
            print(f"Could not load the shared estimate: {e}")
            print("Falling back to the example estimate.\n")
    if estimate is None:
        estimate = example_estimate()

    is_ceil = estimate.is_ceil_numbers
    print(f"\n=== {estimate.estimate_name} ===")
    for t in estimate.tasks:
        print(
            f"- {t.description}: "
            f"{format_hours(t.three_point_estimated, is_ceil)}h +/- "
            f"{format_hours(t.standard_deviation_estimated, is_ceil)}h"
        )
    print(f"\nTotal estimated: {format_total(aggregate_estimate(estimate), is_ceil)}")

    print("\n=== SHARE LINK ===")
    print(share_link_for(estimate, settings=settings))

    print(f"\n=== {export_file_name(estimate.estimate_name)} ===")
    print(export_tasks_csv(estimate.tasks))


if __name__ == "__main__":
    main()
