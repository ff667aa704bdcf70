"""Flight-risk scoring."""

from datetime import timedelta

import pytest

from talent_engine import flight_risk


class TestScore:

    def test_new_star_without_plan_is_high_risk(self, clock, make_employee):
        emp = make_employee(months_ago=3, performance="high", potential="high")
        ra = flight_risk.score(emp, has_plan=False, clock=clock)
        assert ra.risk_score == 80
        assert ra.risk_level == "high"
        assert ra.factors["tenure"].reason == "New hire (<6 months)"
        assert ra.factors["plan"].risk == 20

    def test_plan_removes_plan_factor(self, clock, make_employee):
        emp = make_employee(months_ago=3, performance="high", potential="high")
        ra = flight_risk.score(emp, has_plan=True, clock=clock)
        assert ra.risk_score == 60
        assert ra.factors["plan"].risk == 0

    def test_unassessed_employee(self, clock, make_employee):
        emp = make_employee(months_ago=24, assessed=False)
        ra = flight_risk.score(emp, has_plan=False, clock=clock)
        assert ra.factors["performance"].reason == "Not yet assessed"
        assert ra.risk_score == 10
        assert ra.risk_level == "low"
        assert ra.factors["plan"].risk == 0

    def test_untapped_potential(self, clock, make_employee):
        emp = make_employee(months_ago=24, performance="medium", potential="high")
        ra = flight_risk.score(emp, has_plan=True, clock=clock)
        assert ra.factors["potential"].reason == "Untapped potential"
        assert ra.risk_score == 5 + 15

    def test_low_performer_with_plan(self, clock, make_employee):
        emp = make_employee(months_ago=24, performance="low", potential="low")
        ra = flight_risk.score(emp, has_plan=True, clock=clock)
        assert ra.risk_score == 15
        assert ra.risk_level == "low"

    def test_reasons_only_cover_contributing_factors(self, clock, make_employee):
        emp = make_employee(months_ago=24, performance="high", potential="medium")
        ra = flight_risk.score(emp, has_plan=False, clock=clock)
        assert flight_risk.risk_factor_reasons(ra) == ["High performer - retention critical", "No development plan"]
        assert ra.risk_level == "medium"

    def test_score_follows_the_clock(self, clock, make_employee):
        emp = make_employee(months_ago=5, performance="medium", potential="medium")
        before = flight_risk.score(emp, has_plan=True, clock=clock)
        clock.advance(days=60)
        after = flight_risk.score(emp, has_plan=True, clock=clock)
        assert before.factors["tenure"].risk == 20
        assert after.factors["tenure"].risk == 15


class TestTenure:

    @pytest.mark.parametrize("months,risk", [(0, 20), (5, 20), (6, 15), (11, 15), (12, 0), (48, 0), (49, 10)])
    def test_bands(self, now, months, risk):
        joined = now - timedelta(days=30 * months)
        assert flight_risk.months_with_company(joined, now) == months
        assert flight_risk._tenure_factor(months).risk == risk


class TestLevels:

    @pytest.mark.parametrize("score,level", [(0, "low"), (29, "low"), (30, "medium"), (49, "medium"), (50, "high")])
    def test_thresholds(self, score, level):
        assert flight_risk.risk_level_for(score) == level

    def test_roster_buckets(self, clock, make_employee):
        roster = [
            make_employee("a", months_ago=3, performance="high", potential="high"),
            make_employee("b", months_ago=24, performance="high", potential="medium"),
            make_employee("c", months_ago=24, assessed=False),
        ]
        buckets = flight_risk.score_roster(roster, {"b": None}, clock)
        assert [r.employee_id for r in buckets["high"]] == ["a"]
        assert [r.employee_id for r in buckets["medium"]] == ["b"]
        assert [r.employee_id for r in buckets["low"]] == ["c"]
