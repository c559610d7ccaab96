# tests/test_exporter.py

from __future__ import annotations

import csv
import io

import pytest

from pert_estimator.estimate_session import add_task
from pert_estimator.models import EstimateSet
from pert_estimator.tools.exporter import (
    CSV_COLUMNS,
    export_file_name,
    export_markdown_summary,
    export_tasks_csv,
)


def _read_csv(text: str):
    return list(csv.reader(io.StringIO(text)))


def test_csv_has_labelled_header_and_fixed_column_order(sample_estimate: EstimateSet):
    rows = _read_csv(export_tasks_csv(sample_estimate.tasks))

    assert rows[0] == [
        "id",
        "Task",
        "Pessimistic estimate (h)",
        "Most likely estimate (h)",
        "Optimistic estimate (h)",
        "Estimate (h)",
        "Standard deviation (h)",
    ]
    assert rows[0] == list(CSV_COLUMNS.values())


def test_csv_row_per_task_with_stored_values(sample_estimate: EstimateSet):
    rows = _read_csv(export_tasks_csv(sample_estimate.tasks))[1:]

    assert [r[0] for r in rows] == ["task-design", "task-api", "task-deploy"]
    design = rows[0]
    assert design[1] == "Design"
    assert float(design[2]) == 10
    assert float(design[5]) == 6
    # Rounding flag never applies to the export.
    assert float(design[6]) == pytest.approx(4 / 3)


def test_csv_for_no_tasks_is_header_only():
    rows = _read_csv(export_tasks_csv(()))

    assert len(rows) == 1
    assert rows[0][0] == "id"


def test_csv_quotes_descriptions_with_commas(empty_estimate: EstimateSet):
    estimate = add_task(empty_estimate, 'Login, "SSO" flow', 8, 4, 2, task_id="t1")
    rows = _read_csv(export_tasks_csv(estimate.tasks))

    assert rows[1][1] == 'Login, "SSO" flow'


@pytest.mark.parametrize(
    "name, expected",
    [
        ("New estimate", "New estimate_Estimates.csv"),
        ("Q3/Q4 plan", "Q3_Q4 plan_Estimates.csv"),
        ("a\\b:c", "a_b_c_Estimates.csv"),
    ],
)
def test_export_file_name(name, expected):
    assert export_file_name(name) == expected


def test_markdown_summary_uses_display_flag(sample_estimate: EstimateSet):
    md = export_markdown_summary(sample_estimate)

    assert md.startswith("# New estimate\n")
    assert "| Design | 10 | 6 | 2 | 6 | 2 |" in md
    assert "**Total estimated:**" in md


def test_markdown_summary_without_tasks(empty_estimate: EstimateSet):
    md = export_markdown_summary(empty_estimate)

    assert "_No tasks estimated yet._" in md
    assert "0h +/- 0h" in md
