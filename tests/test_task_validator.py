# tests/test_task_validator.py

from __future__ import annotations

import pytest

from pert_estimator.errors import TaskValidationError
from pert_estimator.tools.task_validator import check_task_input, validate_task_input


def test_valid_input_is_normalised():
    assert validate_task_input("  Design ", "10", 6, 2.0) == ("Design", 10.0, 6.0, 2.0)


def test_valid_input_has_no_errors():
    assert check_task_input("Design", 10, 6, 2) == {}


@pytest.mark.parametrize("description", ["", "   ", None, 42])
def test_description_is_required(description):
    errors = check_task_input(description, 10, 6, 2)
    assert set(errors) == {"description"}


@pytest.mark.parametrize("bad", ["abc", "", None, True, float("nan"), float("inf"), [1]])
def test_estimates_must_be_numbers(bad):
    errors = check_task_input("Design", 10, bad, 2)
    assert set(errors) == {"estimatedB"}


def test_negative_estimates_are_rejected():
    errors = check_task_input("Design", 10, -1, -2)
    assert set(errors) == {"estimatedB", "estimatedC"}
    assert "negative" in errors["estimatedC"]


@pytest.mark.parametrize("a, c", [(2, 2), (1, 5), (0, 0)])
def test_pessimistic_must_exceed_optimistic(a, c):
    errors = check_task_input("Design", a, 1, c)
    assert list(errors) == ["estimatedA"]
    assert "greater than the optimistic" in errors["estimatedA"]


def test_comparison_skipped_when_optimistic_invalid():
    errors = check_task_input("Design", 1, 1, "x")
    assert set(errors) == {"estimatedC"}


def test_validate_raises_with_all_field_errors():
    with pytest.raises(TaskValidationError) as exc_info:
        validate_task_input("", "x", 1, 5)

    assert set(exc_info.value.errors) == {"description", "estimatedA"}
    assert isinstance(exc_info.value, ValueError)


def test_estimates_whose_result_overflows_are_rejected():
    errors = check_task_input("big", 1e308, 1e308, 0)

    assert list(errors) == ["estimatedA"]
    assert "too large" in errors["estimatedA"]


def test_integer_too_large_for_a_float_is_not_a_number():
    errors = check_task_input("big", 10 ** 400, 1, 0)

    assert errors == {"estimatedA": "Pessimistic estimate must be a number."}
