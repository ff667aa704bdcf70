# analyzers/result.py
from datetime import datetime, timedelta
from typing import List, Optional

from talent_core.schemas import ActionItem, NarrativeAnalysis, NarrativePlan
from talent_core.settings import settings
from talent_engine.action_templates import plan_type_for


def next_review_date(now: datetime, days: Optional[int] = None):
    return (now + timedelta(days=days or settings.NEXT_REVIEW_DAYS)).date()


def build_analysis(
    *,
    source: str,
    performance: str,
    potential: str,
    reasoning: str,
    confidence,
    strengths: List[str],
    development_areas: List[str],
    success_metrics: List[str],
    summary: str,
    employee_name: str,
    action_items: List[ActionItem],
    now: datetime,
    plan_title: Optional[str] = None,
    objectives: Optional[List[str]] = None,
    plan_success_metrics: Optional[List[str]] = None,
    timeline: Optional[str] = None,
    notes: str = "",
) -> NarrativeAnalysis:
    """Both analyzers finish here so the AI and fallback paths share one shape."""
    plan = NarrativePlan(
        plan_type=plan_type_for(performance),
        title=plan_title or f"Development Plan for {employee_name}",
        objectives=list(objectives or []),
        action_items=action_items,
        timeline=timeline or "90 days",
        success_metrics=list(plan_success_metrics if plan_success_metrics is not None else success_metrics),
        notes=notes,
        status="active",
        next_review_date=next_review_date(now),
    )
    return NarrativeAnalysis(
        performance=performance,
        potential=potential,
        reasoning=reasoning,
        confidence=confidence,
        strengths=list(strengths),
        development_areas=list(development_areas),
        success_metrics=list(success_metrics),
        summary=summary,
        source=source,
        plan=plan,
    )
