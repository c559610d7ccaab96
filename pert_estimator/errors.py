# pert_estimator/errors.py

from __future__ import annotations

from typing import Dict


class EstimatorError(Exception):
    """Base class for errors raised by the estimator core."""


class TaskValidationError(EstimatorError, ValueError):
    """
    Raised when task input is rejected.

    `errors` maps the wire field name (description, estimatedA, ...) to the
    message shown next to that field.
    """

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        summary = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(f"Invalid task input ({summary})")


class ShareCodeError(EstimatorError, ValueError):
    """Raised when a share code cannot be turned back into an estimate."""
