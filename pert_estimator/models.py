# pert_estimator/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


TASK_FIELDS = (
    "id",
    "description",
    "estimatedA",
    "estimatedB",
    "estimatedC",
    "threePointEstimated",
    "standardDeviationEstimated",
)


@dataclass(frozen=True)
class Task:
    """
    A single estimated task.

    estimated_a is the pessimistic estimate, estimated_b the most likely and
    estimated_c the optimistic one (all in hours). The two derived fields are
    computed once when the task is created and travel with it afterwards.
    """
    id: str
    description: str
    estimated_a: float
    estimated_b: float
    estimated_c: float
    three_point_estimated: float
    standard_deviation_estimated: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "estimatedA": self.estimated_a,
            "estimatedB": self.estimated_b,
            "estimatedC": self.estimated_c,
            "threePointEstimated": self.three_point_estimated,
            "standardDeviationEstimated": self.standard_deviation_estimated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(
            id=data["id"],
            description=data["description"],
            estimated_a=data["estimatedA"],
            estimated_b=data["estimatedB"],
            estimated_c=data["estimatedC"],
            three_point_estimated=data["threePointEstimated"],
            standard_deviation_estimated=data["standardDeviationEstimated"],
        )


@dataclass(frozen=True)
class EstimateSet:
    """Whole session state: what gets shared through a link."""
    estimate_name: str = "New estimate"
    is_ceil_numbers: bool = True
    tasks: Tuple[Task, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "estimateName": self.estimate_name,
            "isCeilNumbers": self.is_ceil_numbers,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EstimateSet":
        return cls(
            estimate_name=data["estimateName"],
            is_ceil_numbers=data["isCeilNumbers"],
            tasks=tuple(Task.from_dict(t) for t in data["tasks"]),
        )
