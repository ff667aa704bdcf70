# talent_engine/retention.py
from typing import List, Sequence, Tuple

from talent_core.clock import Clock, utc_now
from talent_core.schemas import ActionItem
from talent_engine.action_templates import ActionItemTemplate as T, stamp_templates

# Matched in this order; each bundle is added at most once.
CATEGORY_BUNDLES: List[Tuple[str, Tuple[str, ...], List[T]]] = [
    ("career_growth", ("career", "growth"), [
        T("Create career development roadmap with clear promotion timeline", "Career Development", "high", 14, 3, "Manager"),
        T("Identify and discuss stretch assignment opportunities", "Career Growth", "high", 21, 2, "Manager"),
    ]),
    ("tenure", ("tenure", "new"), [
        T("Schedule regular check-in meetings (weekly for first 3 months)", "Onboarding", "high", 7, 1, "Manager"),
        T("Assign mentor or buddy for additional support", "Mentorship", "medium", 14, 1, "HR"),
    ]),
    ("top_talent", ("top talent", "high perf"), [
        T("Review and adjust compensation to market competitive levels", "Compensation", "high", 30, 2, "HR"),
        T("Discuss LTIP eligibility and long-term incentive opportunities", "Compensation", "high", 30, 2, "HR"),
        T("Present visibility opportunities (presentations, high-profile projects)", "Recognition", "medium", 30, 5, "Manager"),
    ]),
    ("development_gap", ("plan", "development"), [
        T("Create personalized development plan with clear milestones", "Development", "high", 14, 3, "Manager"),
    ]),
]


def matched_categories(risk_factors: Sequence[str]) -> List[str]:
    lowered = [(f or "").lower() for f in risk_factors or []]
    return [
        name for name, keywords, _ in CATEGORY_BUNDLES
        if any(k in f for f in lowered for k in keywords)
    ]


def generate_retention_actions(risk_factors: Sequence[str], risk_level: str) -> List[T]:
    """
    Compose retention templates from risk-factor reasons.

    Order: stay interview -> category bundles (fixed order) -> senior-leader
    escalation (high risk only) -> work-life balance -> public recognition.
    """
    high = risk_level == "high"
    items: List[T] = [
        T("Conduct stay interview to understand motivations and concerns", "Retention",
          "high" if high else "medium", 7, 1, "Manager"),
    ]

    hits = set(matched_categories(risk_factors))
    for name, _, bundle in CATEGORY_BUNDLES:
        if name in hits:
            items.extend(bundle)

    if high:
        items.append(T("Executive/senior leader to have retention conversation", "Retention", "high", 7, 1, "Manager"))

    items.append(T("Solicit and address feedback on work-life balance and workload", "Work-Life Balance",
                   "high" if high else "medium", 14, 1, "Manager"))
    items.append(T("Recognize recent accomplishments publicly (team meeting, company update)", "Recognition",
                   "medium", 7, 0.5, "Manager"))
    return items


def build_retention_actions(risk_factors: Sequence[str], risk_level: str,
                            clock: Clock = utc_now) -> List[ActionItem]:
    return stamp_templates(generate_retention_actions(risk_factors, risk_level), clock)
