# pert_estimator/tools/exporter.py

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List

import pandas as pd

from pert_estimator.models import EstimateSet, Task, TASK_FIELDS
from pert_estimator.tools.pert_calculator import aggregate, format_hours, format_total

logger = logging.getLogger(__name__)

# Column order is fixed; labels are what ends up in the header row.
CSV_COLUMNS: Dict[str, str] = {
    "id": "id",
    "description": "Task",
    "estimatedA": "Pessimistic estimate (h)",
    "estimatedB": "Most likely estimate (h)",
    "estimatedC": "Optimistic estimate (h)",
    "threePointEstimated": "Estimate (h)",
    "standardDeviationEstimated": "Standard deviation (h)",
}

_UNSAFE_FILE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def tasks_to_df(tasks: Iterable[Task]) -> pd.DataFrame:
    rows = [t.to_dict() for t in tasks]
    df = pd.DataFrame(rows, columns=list(TASK_FIELDS))
    return df.rename(columns=CSV_COLUMNS)


def export_tasks_csv(tasks: Iterable[Task]) -> str:
    """
    CSV text with one row per task, stored values as-is.

    The display rounding flag is deliberately not applied here.
    """
    df = tasks_to_df(tasks)
    logger.debug("Exporting %d task(s) to CSV", len(df))
    return df.to_csv(index=False)


def export_file_name(estimate_name: str, extension: str = "csv") -> str:
    """`<estimateName>_Estimates.<ext>` with path separators and control chars replaced."""
    safe = _UNSAFE_FILE_CHARS.sub("_", estimate_name).strip()
    return f"{safe}_Estimates.{extension}"


def export_markdown_summary(estimate: EstimateSet) -> str:
    """Markdown report: task table using the display flag, then the totals line."""
    is_ceil = estimate.is_ceil_numbers
    sections: List[str] = []
    sections.append(f"# {estimate.estimate_name}")

    if estimate.tasks:
        lines = [
            "| " + " | ".join(list(CSV_COLUMNS.values())[1:]) + " |",
            "|" + "---|" * (len(CSV_COLUMNS) - 1),
        ]
        for t in estimate.tasks:
            cells = [
                t.description.replace("|", "\\|"),
                format_hours(t.estimated_a, is_ceil),
                format_hours(t.estimated_b, is_ceil),
                format_hours(t.estimated_c, is_ceil),
                format_hours(t.three_point_estimated, is_ceil),
                format_hours(t.standard_deviation_estimated, is_ceil),
            ]
            lines.append("| " + " | ".join(cells) + " |")
        sections.append("\n".join(lines))
    else:
        sections.append("_No tasks estimated yet._")

    sections.append(f"**Total estimated:** {format_total(aggregate(estimate.tasks), is_ceil)}")
    return "\n\n".join(sections) + "\n"
