# tests/conftest.py

from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Keep log files out of the working tree; must happen before config is imported.
os.environ.setdefault("PERT_LOG_DIR", str(Path(tempfile.gettempdir()) / "pert-tests"))

import pytest

from pert_estimator.config import Settings
from pert_estimator.estimate_session import add_task
from pert_estimator.models import EstimateSet


@pytest.fixture()
def settings() -> Settings:
    """Settings with stock defaults regardless of the developer's .env."""
    return Settings(
        app_title="Estimate Calculator",
        default_estimate_name="New estimate",
        default_ceil_numbers=True,
        share_param="code",
        public_url="http://localhost:8501",
        log_level="INFO",
        log_dir=Path(tempfile.gettempdir()) / "pert-tests",
    )


@pytest.fixture()
def empty_estimate() -> EstimateSet:
    return EstimateSet(estimate_name="New estimate", is_ceil_numbers=True, tasks=())


@pytest.fixture()
def sample_estimate(empty_estimate: EstimateSet) -> EstimateSet:
    """Three tasks with fixed ids so assertions can refer to them."""
    estimate = add_task(empty_estimate, "Design", 10, 6, 2, task_id="task-design")
    estimate = add_task(estimate, "Backend API", 24, 12, 8, task_id="task-api")
    estimate = add_task(estimate, "Deploy", 7, 3.5, 1.25, task_id="task-deploy")
    return estimate
