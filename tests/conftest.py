"""
Pytest configuration for the talent engine.

Every time-dependent call takes an injected clock; tests pin it with FrozenClock.
"""

from datetime import datetime, timedelta, timezone

import pytest

from talent_core.clock import FrozenClock
from talent_core.schemas import ActionItem, Assessment, Employee, EmployeePlan, PerformanceReview

NOW = datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def make_item():
    """Factory for action items due `due_in` days from NOW (negative = past due)."""
    counter = {"n": 0}

    def _make(due_in: float = 10, **kw) -> ActionItem:
        counter["n"] += 1
        kw.setdefault("id", f"item-{counter['n']}")
        kw.setdefault("description", f"Task {counter['n']}")
        return ActionItem(due_date=NOW + timedelta(days=due_in), **kw)

    return _make


@pytest.fixture
def make_plan():
    def _make(items, **kw) -> EmployeePlan:
        kw.setdefault("id", "plan-1")
        kw.setdefault("employee_id", "emp-1")
        return EmployeePlan(action_items=list(items), **kw)

    return _make


@pytest.fixture
def make_employee():
    def _make(emp_id: str = "emp-1", months_ago: float = 24, performance=None, potential=None,
              assessed: bool = True) -> Employee:
        assessment = Assessment(performance=performance, potential=potential) if assessed else None
        return Employee(
            id=emp_id,
            name=f"Employee {emp_id}",
            created_at=NOW - timedelta(days=30 * months_ago),
            assessment=assessment,
        )

    return _make


@pytest.fixture
def manager_review():
    def _make(summary="meets", status="completed") -> PerformanceReview:
        return PerformanceReview(review_type="manager", status=status, manager_performance_summary=summary)

    return _make


@pytest.fixture
def self_review():
    def _make(humble=3, hungry=3, smart=3, status="submitted") -> PerformanceReview:
        return PerformanceReview(review_type="self", status=status, humble_score=humble,
                                 hungry_score=hungry, smart_score=smart)

    return _make
