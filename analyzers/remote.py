# -*- coding: utf-8 -*-
# analyzers/remote.py
import math
from typing import Awaitable, Callable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from analyzers.result import build_analysis
from orchestrator.engine_openrouter import ServiceResponseInvalid, generate_async
from orchestrator.utils_prompt import load_prompt, parse_llm_json
from talent_core.clock import Clock, utc_now
from talent_core.schemas import Level, NarrativeAnalysis
from talent_engine.action_templates import ActionItemTemplate, stamp_templates

NAME = "ai"
SYSTEM = load_prompt("narrative")

_OWNERS = {"employee": "Employee", "manager": "Manager", "hr": "HR"}
MAX_DAYS_TO_COMPLETE = 3650


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RemoteActionItem(_Wire):
    description: str
    skill_area: Optional[str] = None
    priority: str = "medium"
    days_to_complete: int = 30
    estimated_hours: Optional[float] = None
    owner: str = "Employee"

    @field_validator("priority", mode="before")
    @classmethod
    def known_priority(cls, v):
        v = str(v or "").strip().lower()
        return v if v in ("low", "medium", "high") else "medium"

    @field_validator("owner", mode="before")
    @classmethod
    def known_owner(cls, v):
        return _OWNERS.get(str(v or "").strip().lower(), "Employee")

    @field_validator("days_to_complete", mode="before")
    @classmethod
    def within_bounds(cls, v):
        # 1 day .. MAX_DAYS_TO_COMPLETE; unreadable values get the 30-day default
        try:
            days = float(v)
        except (TypeError, ValueError):
            return 30
        if math.isnan(days):
            return 30
        return int(min(MAX_DAYS_TO_COMPLETE, max(1, days)))


class RemoteAnalysisPayload(_Wire):
    performance: Level
    potential: Level
    reasoning: str = ""
    confidence: Optional[Union[int, float]] = None
    strengths: List[str] = Field(default_factory=list)
    development_areas: List[str] = Field(default_factory=list)
    plan_title: Optional[str] = None
    objectives: List[str] = Field(default_factory=list)
    action_items: List[RemoteActionItem]
    success_metrics: List[str] = Field(default_factory=list)
    timeline: Optional[str] = None

    @field_validator("performance", "potential", mode="before")
    @classmethod
    def lower_label(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


def build_prompt(review_text: str, employee_name: str) -> str:
    return f"""Analyze this performance review and provide a structured assessment.

EMPLOYEE: {employee_name}

PERFORMANCE REVIEW:
{review_text}

Return STRICT JSON with this schema (no extra keys, no commentary):
{{
  "performance": "low" | "medium" | "high",
  "potential": "low" | "medium" | "high",
  "reasoning": "2-3 sentence explanation of why you placed them in this box",
  "confidence": 75,
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "developmentAreas": ["area 1", "area 2", "area 3"],
  "planTitle": "A specific title for their development plan",
  "objectives": ["objective 1", "objective 2", "objective 3"],
  "actionItems": [
    {{
      "description": "Specific, actionable task",
      "skillArea": "Category like 'Leadership', 'Technical', 'Communication'",
      "priority": "high" | "medium" | "low",
      "daysToComplete": 30,
      "estimatedHours": 10,
      "owner": "Employee" | "Manager" | "HR"
    }}
  ],
  "successMetrics": ["measurable metric 1", "measurable metric 2"],
  "timeline": "90 days" | "6 months" | "12 months"
}}
"""


def parse_analysis(text: str) -> RemoteAnalysisPayload:
    data = parse_llm_json(text)
    try:
        return RemoteAnalysisPayload.model_validate(data)
    except ValidationError as e:
        raise ServiceResponseInvalid(f"analysis failed validation: {e.error_count()} error(s)") from e


class RemoteNarrativeAnalyzer:
    """Placement + plan from the external text-analysis service. Raises AnalysisServiceError on any failure."""
    name = NAME

    def __init__(self, generate: Callable[..., Awaitable[str]] = generate_async, clock: Clock = utc_now,
                 timeout: Optional[float] = None):
        self.generate = generate
        self.clock = clock
        self.timeout = timeout

    async def analyze(self, review_text: str, employee_name: str) -> NarrativeAnalysis:
        raw = await self.generate(system=SYSTEM, prompt=build_prompt(review_text, employee_name),
                                  timeout=self.timeout)
        a = parse_analysis(raw)

        templates = [
            ActionItemTemplate(i.description, i.skill_area or "General", i.priority,
                               i.days_to_complete, i.estimated_hours, i.owner)
            for i in a.action_items
        ]
        try:
            items = stamp_templates(templates, self.clock)
        except OverflowError as e:
            raise ServiceResponseInvalid(f"action item due date out of range: {e}") from e
        return build_analysis(
            source="ai",
            performance=a.performance,
            potential=a.potential,
            reasoning=a.reasoning,
            confidence=a.confidence,
            strengths=a.strengths,
            development_areas=a.development_areas,
            success_metrics=a.success_metrics,
            summary=a.reasoning,
            employee_name=employee_name,
            action_items=items,
            now=self.clock(),
            plan_title=a.plan_title,
            objectives=a.objectives,
            timeline=a.timeline,
            notes=(
                "Auto-generated from performance review analysis.\n\n"
                f"Strengths identified: {', '.join(a.strengths)}\n\n"
                f"Development areas: {', '.join(a.development_areas)}"
            ),
        )
