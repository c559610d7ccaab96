# pert_estimator/tools/chart_builder.py

from __future__ import annotations

from typing import Optional, Sequence

import plotly.graph_objects as go

from pert_estimator.models import Task
from pert_estimator.tools.pert_calculator import ceil_number


def build_estimate_chart(tasks: Sequence[Task], is_ceil: bool) -> Optional[go.Figure]:
    """
    Bar per task (expected hours) with the standard deviation as error bar.

    Values follow the display rounding flag. Returns None when there is
    nothing to plot.
    """
    if not tasks:
        return None

    labels = [t.description for t in tasks]
    values = [ceil_number(t.three_point_estimated, is_ceil) for t in tasks]
    deviations = [ceil_number(t.standard_deviation_estimated, is_ceil) for t in tasks]

    fig = go.Figure(
        go.Bar(
            x=labels,
            y=values,
            error_y={"type": "data", "array": deviations, "visible": True},
            customdata=deviations,
            hovertemplate="%{x}<br>%{y}h +/- %{customdata}h<extra></extra>",
        )
    )
    fig.update_layout(
        xaxis_title="Task",
        yaxis_title="Estimate (h)",
        margin=dict(l=20, r=20, t=30, b=10),
    )
    return fig
