"""Plan follow-through: progress, completion toggling, status moves, due-date views."""

import pytest

from talent_core.schemas import ActionItem
from talent_engine import plan_progress
from talent_engine.plan_progress import InvalidTransition, UnknownActionItem


class TestProgress:

    def test_empty_plan_is_zero(self):
        assert plan_progress.calculate_plan_progress([]) == 0

    def test_all_done_is_hundred(self, make_item):
        items = [make_item(completed=True) for _ in range(3)]
        assert plan_progress.calculate_plan_progress(items) == 100

    def test_half_done(self, make_item):
        items = [make_item(completed=True), make_item(completed=True), make_item(), make_item()]
        assert plan_progress.calculate_plan_progress(items) == 50

    @pytest.mark.parametrize("done,total,expected", [(1, 3, 33), (2, 3, 67), (1, 8, 13), (0, 5, 0)])
    def test_rounding(self, make_item, done, total, expected):
        items = [make_item(completed=i < done) for i in range(total)]
        assert plan_progress.calculate_plan_progress(items) == expected


class TestToggle:

    def test_complete_then_uncomplete(self, clock, now, make_item, make_plan):
        plan = make_plan([make_item(id="a"), make_item(id="b")])

        done = plan_progress.toggle_completed(plan, "a", clock)
        item = done.action_items[0]
        assert item.completed and item.status == "completed"
        assert item.completed_date == now
        assert done.progress_percentage == 50
        assert done.last_reviewed == now

        undone = plan_progress.toggle_completed(done, "a", clock)
        item = undone.action_items[0]
        assert not item.completed
        assert item.status == "in_progress"
        assert item.completed_date is None
        assert undone.progress_percentage == 0

    def test_input_plan_is_not_mutated(self, clock, make_item, make_plan):
        plan = make_plan([make_item(id="a")])
        plan_progress.toggle_completed(plan, "a", clock)
        assert plan.action_items[0].completed is False
        assert plan.progress_percentage == 0

    def test_last_item_completes_plan_and_untoggle_reactivates(self, clock, make_item, make_plan):
        plan = make_plan([make_item(id="a", completed=True), make_item(id="b")])
        finished = plan_progress.toggle_completed(plan, "b", clock)
        assert finished.progress_percentage == 100
        assert finished.status == "completed"

        reopened = plan_progress.toggle_completed(finished, "b", clock)
        assert reopened.status == "active"

    def test_on_hold_plan_keeps_its_status(self, clock, make_item, make_plan):
        plan = make_plan([make_item(id="a"), make_item(id="b")], status="on_hold")
        assert plan_progress.toggle_completed(plan, "a", clock).status == "on_hold"

    def test_unknown_item(self, clock, make_item, make_plan):
        with pytest.raises(UnknownActionItem):
            plan_progress.toggle_completed(make_plan([make_item(id="a")]), "zzz", clock)

    def test_unknown_item_on_status_update(self, clock, make_item, make_plan):
        with pytest.raises(UnknownActionItem) as info:
            plan_progress.update_item_status(make_plan([make_item(id="a")]), "zzz", "blocked", clock)
        assert "zzz" in str(info.value)


class TestStatusMoves:

    def test_allowed_path(self, clock, make_item, make_plan):
        plan = make_plan([make_item(id="a")])
        plan = plan_progress.update_item_status(plan, "a", "in_progress", clock)
        plan = plan_progress.update_item_status(plan, "a", "blocked", clock)
        plan = plan_progress.update_item_status(plan, "a", "not_started", clock)
        assert plan.action_items[0].status == "not_started"

    def test_in_progress_to_completed(self, clock, now, make_item, make_plan):
        plan = make_plan([make_item(id="a", status="in_progress")])
        plan = plan_progress.update_item_status(plan, "a", "completed", clock)
        item = plan.action_items[0]
        assert item.completed and item.completed_date == now
        assert plan.progress_percentage == 100
        assert plan.status == "completed"

    @pytest.mark.parametrize("start,target", [
        ("not_started", "overdue"),
        ("in_progress", "overdue"),
        ("not_started", "completed"),
        ("in_progress", "not_started"),
    ])
    def test_rejected(self, make_item, start, target):
        with pytest.raises(InvalidTransition):
            plan_progress.set_status(make_item(status=start), target)

    def test_completed_item_cannot_move(self, make_item):
        with pytest.raises(InvalidTransition):
            plan_progress.set_status(make_item(completed=True), "blocked")

    def test_same_status_is_a_no_op(self, make_item):
        item = make_item(status="blocked")
        assert plan_progress.set_status(item, "blocked") is item


class TestItemConsistency:

    def test_completed_flag_wins(self, make_item):
        assert make_item(completed=True, status="in_progress").status == "completed"

    def test_completed_status_sets_flag(self, make_item):
        assert make_item(status="completed").completed is True

    def test_stored_overdue_is_not_kept(self, make_item):
        assert make_item(status="overdue").status == "not_started"

    def test_camel_case_input(self, now):
        item = ActionItem.model_validate({
            "id": "x", "description": "d", "dueDate": now.isoformat(), "skillArea": "Leadership",
            "estimatedHours": 2,
        })
        assert item.skill_area == "Leadership"
        assert "dueDate" in item.model_dump(by_alias=True)


class TestDueDates:

    def test_effective_status(self, now, make_item):
        assert plan_progress.effective_status(make_item(-1), now) == "overdue"
        assert plan_progress.effective_status(make_item(-1, completed=True), now) == "completed"
        assert plan_progress.effective_status(make_item(3, status="blocked"), now) == "blocked"

    def test_overdue_and_upcoming(self, now, make_item):
        late = make_item(-2, id="late")
        late_done = make_item(-2, id="late-done", completed=True)
        soon = make_item(3, id="soon")
        edge = make_item(7, id="edge")
        later = make_item(20, id="later")
        items = [late, late_done, soon, edge, later]

        assert [i.id for i in plan_progress.overdue_items(items, now)] == ["late"]
        assert [i.id for i in plan_progress.upcoming_items(items, now)] == ["soon", "edge"]
        assert [i.id for i in plan_progress.upcoming_items(items, now, days=30)] == ["soon", "edge", "later"]
