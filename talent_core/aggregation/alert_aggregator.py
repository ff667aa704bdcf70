# talent_core/aggregation/alert_aggregator.py
from __future__ import annotations
from collections import OrderedDict
from datetime import datetime
from typing import Any, Dict, List

from talent_core.clock import Clock, utc_now
from talent_core.schemas import EmployeeAlerts, EmployeeSnapshot
from talent_engine import review_alignment
from talent_engine.grid import BOX_RENDER_ORDER
from talent_engine.plan_progress import overdue_items


def employee_alerts(snap: EmployeeSnapshot, now: datetime) -> EmployeeAlerts:
    alignment = review_alignment.analyze(snap.manager_review, snap.self_review)
    emp = snap.employee
    overdue = len(overdue_items(snap.plan.action_items, now)) if snap.plan else 0
    return EmployeeAlerts(
        employee_id=emp.id,
        pending_review=alignment.pending_review,
        pending_manager_review=alignment.pending_manager_review,
        pending_self_review=alignment.pending_self_review,
        misaligned=alignment.misaligned,
        needs_plan=bool(emp.assessment) and snap.plan is None,
        plan_overdue_count=overdue,
    )


def aggregate_alerts(snapshots: List[EmployeeSnapshot], *, clock: Clock = utc_now) -> Dict[str, Any]:
    """
    Inputs: one snapshot per employee (employee, department, reviews, current plan).
    Output (compact, UI-ready):
    {
      "employees": [EmployeeAlerts, ...],
      "reviews": {"pendingSelf", "pendingManager", "misaligned", "totalPending"},
      "plans": {"missingPlans", "overdueActions", "totalFollowThrough"},
      "boxes": {"3-3": n, ..., "unassigned": n},     # board render order
      "departments": {name: {"employees", "pendingReviews", "followThrough"}}
    }
    """
    now = clock()
    alerts = [employee_alerts(s, now) for s in snapshots]

    pending_self = sum(1 for a in alerts if a.pending_self_review)
    pending_manager = sum(1 for a in alerts if a.pending_manager_review)

    # follow-through is only tracked for people already placed on the grid
    assessed = {s.employee.id for s in snapshots if s.employee.assessment}
    missing_plans = sum(1 for a in alerts if a.employee_id in assessed and a.needs_plan)
    overdue = sum(a.plan_overdue_count for a in alerts if a.employee_id in assessed)

    departments: Dict[str, Dict[str, int]] = OrderedDict()
    for s, a in zip(snapshots, alerts):
        name = s.department.name if s.department else "Unassigned"
        d = departments.setdefault(name, {"employees": 0, "pendingReviews": 0, "followThrough": 0})
        d["employees"] += 1
        d["pendingReviews"] += int(a.pending_review)
        if s.employee.id in assessed:
            d["followThrough"] += int(a.needs_plan) + a.plan_overdue_count

    boxes: Dict[str, int] = OrderedDict((k, 0) for k in BOX_RENDER_ORDER)
    for s in snapshots:
        key = (s.employee.assessment.box_key if s.employee.assessment else None) or "unassigned"
        boxes[key] = boxes.get(key, 0) + 1

    return {
        "employees": alerts,
        "reviews": {
            "pendingSelf": pending_self,
            "pendingManager": pending_manager,
            "misaligned": sum(1 for a in alerts if a.misaligned),
            "totalPending": pending_self + pending_manager,
        },
        "plans": {
            "missingPlans": missing_plans,
            "overdueActions": overdue,
            "totalFollowThrough": missing_plans + overdue,
        },
        "boxes": boxes,
        "departments": departments,
    }
