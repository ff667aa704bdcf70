"""Per-employee alerts and the roster summary."""

from talent_core.aggregation.alert_aggregator import aggregate_alerts, employee_alerts
from talent_core.schemas import Department, EmployeeSnapshot


class TestEmployeeAlerts:

    def test_assessed_without_plan_needs_plan(self, now, make_employee):
        snap = EmployeeSnapshot(employee=make_employee(performance="high", potential="high"))
        alerts = employee_alerts(snap, now)
        assert alerts.needs_plan is True
        assert alerts.pending_review is True
        assert alerts.plan_overdue_count == 0

    def test_unassessed_never_needs_plan(self, now, make_employee):
        snap = EmployeeSnapshot(employee=make_employee(assessed=False))
        assert employee_alerts(snap, now).needs_plan is False

    def test_overdue_count(self, now, make_employee, make_item, make_plan):
        plan = make_plan([make_item(-3), make_item(-1, completed=True), make_item(5)])
        snap = EmployeeSnapshot(employee=make_employee(performance="medium", potential="low"), plan=plan)
        alerts = employee_alerts(snap, now)
        assert alerts.needs_plan is False
        assert alerts.plan_overdue_count == 1


class TestRoster:

    def test_summary(self, clock, make_employee, make_item, make_plan, manager_review, self_review):
        snapshots = [
            # aligned, has a plan with one overdue item
            EmployeeSnapshot(
                employee=make_employee("a", performance="high", potential="high"),
                manager_review=manager_review("meets"), self_review=self_review(3, 3, 3),
                plan=make_plan([make_item(-1)]),
            ),
            # misaligned, no plan
            EmployeeSnapshot(
                employee=make_employee("b", performance="medium", potential="medium"),
                manager_review=manager_review("excellence"), self_review=self_review(2, 2, 2),
            ),
            # unassessed, self review still in draft
            EmployeeSnapshot(
                employee=make_employee("c", assessed=False),
                self_review=self_review(status="draft"),
            ),
        ]
        out = aggregate_alerts(snapshots, clock=clock)

        assert [a.employee_id for a in out["employees"]] == ["a", "b", "c"]
        assert out["reviews"] == {"pendingSelf": 1, "pendingManager": 1, "misaligned": 1, "totalPending": 2}
        assert out["plans"] == {"missingPlans": 1, "overdueActions": 1, "totalFollowThrough": 2}
        assert out["boxes"]["3-3"] == 1
        assert out["boxes"]["2-2"] == 1
        assert out["boxes"]["unassigned"] == 1
        assert list(out["boxes"])[0] == "3-3"

    def test_empty_roster(self, clock):
        out = aggregate_alerts([], clock=clock)
        assert out["employees"] == []
        assert out["reviews"]["totalPending"] == 0
        assert sum(out["boxes"].values()) == 0

    def test_departments_rollup(self, clock, make_employee, make_item, make_plan, manager_review, self_review):
        sales = Department(id="d1", name="Sales")
        snapshots = [
            EmployeeSnapshot(employee=make_employee("a", performance="high", potential="low"), department=sales,
                             manager_review=manager_review(), self_review=self_review(),
                             plan=make_plan([make_item(-1), make_item(-2)])),
            EmployeeSnapshot(employee=make_employee("b", performance="low", potential="low"), department=sales),
            EmployeeSnapshot(employee=make_employee("c", assessed=False)),
        ]
        out = aggregate_alerts(snapshots, clock=clock)
        assert list(out["departments"]) == ["Sales", "Unassigned"]
        assert out["departments"]["Sales"] == {"employees": 2, "pendingReviews": 1, "followThrough": 3}
        assert out["departments"]["Unassigned"] == {"employees": 1, "pendingReviews": 1, "followThrough": 0}
