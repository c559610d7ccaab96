# tests/test_chart_builder.py

from __future__ import annotations

import pytest

from pert_estimator.models import EstimateSet
from pert_estimator.tools.chart_builder import build_estimate_chart


def test_no_chart_without_tasks():
    assert build_estimate_chart((), True) is None


def test_one_bar_per_task_in_order(sample_estimate: EstimateSet):
    fig = build_estimate_chart(sample_estimate.tasks, False)
    bar = fig.data[0]

    assert list(bar.x) == ["Design", "Backend API", "Deploy"]
    assert list(bar.y) == pytest.approx([t.three_point_estimated for t in sample_estimate.tasks])
    assert list(bar.error_y.array) == pytest.approx(
        [t.standard_deviation_estimated for t in sample_estimate.tasks]
    )


def test_chart_follows_rounding_flag(sample_estimate: EstimateSet):
    fig = build_estimate_chart(sample_estimate.tasks, True)

    assert list(fig.data[0].y) == [6, 14, 4]
    assert list(fig.data[0].error_y.array) == [2, 3, 1]
