# -*- coding: utf-8 -*-
# analyzers/keyword.py
from typing import Iterable, Tuple

from analyzers.result import build_analysis
from talent_core.clock import Clock, utc_now
from talent_core.schemas import NarrativeAnalysis
from talent_engine import action_templates

NAME = "keyword"
FALLBACK_CONFIDENCE = 60

HIGH_PERFORMANCE = [
    "exceeded expectations", "outstanding", "exceptional", "excellent",
    "consistently delivers", "top performer", "high quality", "ahead of schedule",
]
LOW_PERFORMANCE = [
    "below expectations", "needs improvement", "struggling", "concerns",
    "inconsistent", "missed deadlines", "performance issues",
]
HIGH_POTENTIAL = [
    "leadership", "promotion", "high potential", "future leader",
    "strategic thinking", "takes initiative", "mentor", "growing rapidly",
]
LOW_POTENTIAL = [
    "limited growth", "plateaued", "comfort zone", "resistant to change",
    "no interest in advancement", "content in current role",
]

DEFAULT_OBJECTIVES = [
    "Continue building on current strengths",
    "Address identified development areas",
    "Prepare for future growth opportunities",
]
DEFAULT_PLAN_METRICS = [
    "Measurable improvement in key performance areas",
    "Completion of development activities",
    "Positive feedback from manager and peers",
]
DEFAULT_STRENGTHS = ["Strong results relative to peers", "Consistent follow-through", "Positive stakeholder feedback"]
DEFAULT_DEVELOPMENT_AREAS = [
    "Clarify growth plan with manager",
    "Expand cross-functional influence",
    "Document repeatable processes",
]
DEFAULT_SUCCESS_METRICS = ["Hit next cycle KPIs", "Complete all plan action items", "Capture progress update in 90 days"]


def _count(text: str, keywords: Iterable[str]) -> int:
    return sum(1 for kw in keywords if kw in text)


def _level(high_hits: int, low_hits: int) -> str:
    if high_hits > low_hits and high_hits >= 2:
        return "high"
    if low_hits > high_hits:
        return "low"
    return "medium"


def classify(review_text: str) -> Tuple[str, str]:
    """Keyword-frequency placement: (performance, potential)."""
    text = (review_text or "").lower()
    performance = _level(_count(text, HIGH_PERFORMANCE), _count(text, LOW_PERFORMANCE))
    potential = _level(_count(text, HIGH_POTENTIAL), _count(text, LOW_POTENTIAL))
    return performance, potential


class KeywordNarrativeAnalyzer:
    name = NAME

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    def run(self, review_text: str, employee_name: str) -> NarrativeAnalysis:
        performance, potential = classify(review_text)
        return build_analysis(
            source="fallback",
            performance=performance,
            potential=potential,
            reasoning="Based on keyword analysis of the performance review.",
            confidence=FALLBACK_CONFIDENCE,
            strengths=DEFAULT_STRENGTHS,
            development_areas=DEFAULT_DEVELOPMENT_AREAS,
            success_metrics=DEFAULT_SUCCESS_METRICS,
            summary="Generated from fallback keyword analysis. Please review and customize before finalizing.",
            employee_name=employee_name,
            action_items=action_templates.generate(performance, potential, employee_name, self.clock),
            now=self.clock(),
            objectives=DEFAULT_OBJECTIVES,
            plan_success_metrics=DEFAULT_PLAN_METRICS,
            timeline="90 days",
            notes="Generated based on performance review. Please review and customize as needed.",
        )

    async def analyze(self, review_text: str, employee_name: str) -> NarrativeAnalysis:
        return self.run(review_text, employee_name)
