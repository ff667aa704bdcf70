# talent_engine/flight_risk.py
from datetime import datetime
from typing import Dict, List, Optional

from talent_core.clock import Clock, utc_now
from talent_core.schemas import Employee, RiskAssessment, RiskFactor

HIGH_RISK_AT = 50
MEDIUM_RISK_AT = 30


def months_with_company(joined: datetime, now: datetime) -> int:
    # 30-day months, floored
    return int((now - joined).total_seconds() // (86400 * 30))


def _tenure_factor(months: int) -> RiskFactor:
    if months < 6:
        return RiskFactor(risk=20, reason="New hire (<6 months)")
    if months < 12:
        return RiskFactor(risk=15, reason="Recently joined (<1 year)")
    if months > 48:
        return RiskFactor(risk=10, reason="Long tenure (>4 years)")
    return RiskFactor(risk=0, reason="Stable tenure")


def risk_level_for(score: int) -> str:
    if score >= HIGH_RISK_AT:
        return "high"
    if score >= MEDIUM_RISK_AT:
        return "medium"
    return "low"


def score(employee: Employee, has_plan: bool, clock: Clock = utc_now) -> RiskAssessment:
    """Weighted attrition-risk view for one employee; recomputed, never stored."""
    factors: Dict[str, RiskFactor] = {
        "tenure": _tenure_factor(months_with_company(employee.created_at, clock())),
        "performance": RiskFactor(),
        "potential": RiskFactor(),
        "plan": RiskFactor(),
    }

    assessment = employee.assessment
    if assessment:
        perf = assessment.performance or "medium"
        pot = assessment.potential or "medium"

        if perf == "high" and pot == "high":
            factors["performance"] = RiskFactor(risk=30, reason="Top talent (High perf/High potential)")
            factors["potential"] = RiskFactor(risk=10, reason="High potential - likely to seek growth")
        elif perf == "high":
            factors["performance"] = RiskFactor(risk=20, reason="High performer - retention critical")
        elif perf == "low":
            factors["performance"] = RiskFactor(risk=15, reason="Low performance - may need support or exit")
        else:
            factors["performance"] = RiskFactor(risk=5, reason="Solid performer")

        # high potential that is not yet delivering is likely to look elsewhere
        if pot == "high" and perf != "high":
            factors["potential"] = RiskFactor(risk=15, reason="Untapped potential")

        if not has_plan:
            factors["plan"] = RiskFactor(risk=20, reason="No development plan")
    else:
        factors["performance"] = RiskFactor(risk=10, reason="Not yet assessed")

    total = sum(f.risk for f in factors.values())
    return RiskAssessment(employee_id=employee.id, risk_score=total, risk_level=risk_level_for(total), factors=factors)


def risk_factor_reasons(assessment: RiskAssessment) -> List[str]:
    """Reasons of the contributing (non-zero) factors, as fed to retention planning."""
    return [f.reason for f in assessment.factors.values() if f.risk > 0 and f.reason]


def score_roster(employees: List[Employee], plans_by_employee: Optional[Dict[str, object]] = None,
                 clock: Clock = utc_now) -> Dict[str, List[RiskAssessment]]:
    """Bucket a roster by risk level (high / medium / low)."""
    plans_by_employee = plans_by_employee or {}
    out: Dict[str, List[RiskAssessment]] = {"high": [], "medium": [], "low": []}
    for emp in employees:
        ra = score(emp, bool(plans_by_employee.get(emp.id)), clock)
        out[ra.risk_level].append(ra)
    return out
