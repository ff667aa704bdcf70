# talent_engine/plan_progress.py
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Set

from talent_core.clock import Clock, utc_now
from talent_core.schemas import ActionItem, EmployeePlan

# Explicit moves; "overdue" is derived from the due date and never set.
ALLOWED_TRANSITIONS: Dict[str, Set[str]] = {
    "not_started": {"in_progress", "blocked"},
    "in_progress": {"blocked", "completed"},
    "blocked": {"in_progress", "not_started"},
    "completed": set(),
}


class InvalidTransition(ValueError):
    pass


class UnknownActionItem(KeyError):
    """No action item with the given id on the plan."""

    def __str__(self):
        return f"action item {self.args[0]!r} not found on plan"


def is_overdue(item: ActionItem, now: datetime) -> bool:
    return not item.completed and now > item.due_date


def effective_status(item: ActionItem, now: Optional[datetime] = None) -> str:
    """Status as displayed: completion wins, then the due date, then the stored state."""
    now = now or utc_now()
    if item.completed:
        return "completed"
    if is_overdue(item, now):
        return "overdue"
    return item.status


def set_status(item: ActionItem, status: str, now: Optional[datetime] = None) -> ActionItem:
    if status == item.status:
        return item
    if status not in ALLOWED_TRANSITIONS.get(item.status, set()):
        raise InvalidTransition(f"cannot move action item {item.id} from {item.status} to {status}")
    if status == "completed":
        return item.model_copy(update={"status": status, "completed": True, "completed_date": now or utc_now()})
    return item.model_copy(update={"status": status})


def toggle_item(item: ActionItem, now: datetime) -> ActionItem:
    if not item.completed:
        return item.model_copy(update={"completed": True, "status": "completed", "completed_date": now})
    prior = item.status
    return item.model_copy(update={
        "completed": False,
        "completed_date": None,
        "status": "in_progress" if prior == "completed" else prior,
    })


def calculate_plan_progress(items: List[ActionItem]) -> int:
    if not items:
        return 0
    done = sum(1 for i in items if i.completed)
    # half-up, matching how the dashboard shows percentages
    return int(100 * done / len(items) + 0.5)


def next_plan_status(progress: int, current: str) -> str:
    if progress == 100:
        return "completed"
    if current == "completed":
        return "active"
    return current


def apply_items(plan: EmployeePlan, items: List[ActionItem], now: datetime) -> EmployeePlan:
    progress = calculate_plan_progress(items)
    return plan.model_copy(update={
        "action_items": items,
        "progress_percentage": progress,
        "status": next_plan_status(progress, plan.status),
        "last_reviewed": now,
    })


def toggle_completed(plan: EmployeePlan, item_id: str, clock: Clock = utc_now) -> EmployeePlan:
    """Flip one item's completion and return the proposed next plan (input is not mutated)."""
    now = clock()
    if not any(i.id == item_id for i in plan.action_items):
        raise UnknownActionItem(item_id)
    items = [toggle_item(i, now) if i.id == item_id else i for i in plan.action_items]
    return apply_items(plan, items, now)


def update_item_status(plan: EmployeePlan, item_id: str, status: str, clock: Clock = utc_now) -> EmployeePlan:
    if not any(i.id == item_id for i in plan.action_items):
        raise UnknownActionItem(item_id)
    now = clock()
    items = [set_status(i, status, now) if i.id == item_id else i for i in plan.action_items]
    return apply_items(plan, items, now)


def overdue_items(items: List[ActionItem], now: Optional[datetime] = None) -> List[ActionItem]:
    now = now or utc_now()
    return [i for i in items if is_overdue(i, now)]


def upcoming_items(items: List[ActionItem], now: Optional[datetime] = None, days: int = 7) -> List[ActionItem]:
    now = now or utc_now()
    horizon = now + timedelta(days=days)
    return [i for i in items if not i.completed and now <= i.due_date <= horizon]
