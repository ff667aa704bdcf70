from datetime import date, datetime, timezone
from typing import List, Optional, Dict, Literal, Union

from typing_extensions import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

Level = Literal["low", "medium", "high"]
Owner = Literal["Employee", "Manager", "HR"]
ItemStatus = Literal["not_started", "in_progress", "blocked", "completed", "overdue"]
PlanType = Literal["development", "performance_improvement", "retention", "succession"]
PlanStatus = Literal["active", "completed", "on_hold", "cancelled"]
ReviewType = Literal["manager", "self"]

# grid rank per label: x = performance, y = potential
LEVEL_RANK: Dict[str, int] = {"low": 1, "medium": 2, "high": 3}


def _as_utc(v: Optional[datetime]) -> Optional[datetime]:
    if isinstance(v, datetime) and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """Records the dashboard exchanges in camelCase (dueDate, skillArea, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -------- Grid --------

class Assessment(BaseModel):
    performance: Optional[Level] = None
    potential: Optional[Level] = None

    @computed_field
    @property
    def box_key(self) -> Optional[str]:
        if self.performance is None or self.potential is None:
            return None
        return f"{LEVEL_RANK[self.performance]}-{LEVEL_RANK[self.potential]}"


# -------- Plans --------

class ActionItem(CamelModel):
    id: str
    description: str
    due_date: UtcDatetime
    owner: Owner = "Employee"
    priority: Level = "medium"
    status: ItemStatus = "not_started"
    completed: bool = False
    completed_date: Optional[UtcDatetime] = None
    skill_area: Optional[str] = None
    estimated_hours: Optional[float] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def consistent_status(self):
        if self.completed:
            self.status = "completed"
        elif self.status == "completed":
            self.completed = True
        elif self.status == "overdue":
            # overdue is derived from the due date; it is not a resting state
            self.status = "not_started"
        return self


class StayInterviewNote(BaseModel):
    id: str
    question: str
    answer: str
    sentiment: Optional[Literal["positive", "neutral", "concerning"]] = None
    follow_up_needed: bool = False
    recorded_date: Optional[datetime] = None


class RetentionStrategy(BaseModel):
    id: str
    category: Literal["compensation", "career_growth", "work_life_balance", "recognition", "culture"]
    action: str
    target_date: Optional[date] = None
    status: Literal["planned", "in_progress", "completed"] = "planned"
    owner: str = "Manager"


class LTIPDetails(BaseModel):
    eligible: bool
    enrolled: Optional[bool] = None
    grant_date: Optional[date] = None
    vesting_schedule: Optional[str] = None
    phantom_shares: Optional[float] = None
    notes: Optional[str] = None


class RetentionPlanData(BaseModel):
    flight_risk_score: int
    risk_level: Level
    risk_factors: List[str] = Field(default_factory=list)
    stay_interview_notes: List[StayInterviewNote] = Field(default_factory=list)
    retention_strategies: List[RetentionStrategy] = Field(default_factory=list)
    ltip_details: Optional[LTIPDetails] = None
    last_stay_interview: Optional[date] = None
    next_stay_interview: Optional[date] = None
    compensation_review_date: Optional[date] = None
    career_aspirations: Optional[str] = None
    concerns: List[str] = Field(default_factory=list)


class EmployeePlan(BaseModel):
    id: Optional[str] = None
    employee_id: Optional[str] = None
    plan_type: PlanType = "development"
    title: str = ""
    objectives: List[str] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list)
    success_metrics: List[str] = Field(default_factory=list)
    timeline: str = ""
    notes: str = ""
    status: PlanStatus = "active"
    progress_percentage: int = 0
    next_review_date: Optional[date] = None
    last_reviewed: Optional[datetime] = None
    retention_data: Optional[RetentionPlanData] = None


# -------- People & reviews --------

class Department(BaseModel):
    id: str
    name: str


class Employee(BaseModel):
    id: str
    name: str
    created_at: UtcDatetime            # join date
    department_id: Optional[str] = None
    assessment: Optional[Assessment] = None


class PerformanceReview(BaseModel):
    id: Optional[str] = None
    employee_id: Optional[str] = None
    review_type: ReviewType
    status: str = "draft"
    # manager variant
    manager_performance_summary: Optional[str] = None
    # self variant
    humble_score: Optional[float] = None
    hungry_score: Optional[float] = None
    smart_score: Optional[float] = None


# -------- Views --------

class RiskFactor(BaseModel):
    risk: int = 0
    reason: str = ""


class RiskAssessment(CamelModel):
    employee_id: Optional[str] = None
    risk_score: int
    risk_level: Level
    factors: Dict[str, RiskFactor]


class ReviewAlignment(CamelModel):
    manager_score: Optional[int] = None
    self_score: Optional[int] = None
    pending_manager_review: bool = True
    pending_self_review: bool = True
    misaligned: bool = False

    @property
    def pending_review(self) -> bool:
        return self.pending_manager_review or self.pending_self_review


class EmployeeAlerts(CamelModel):
    employee_id: str
    pending_review: bool
    pending_manager_review: bool
    pending_self_review: bool
    misaligned: bool
    needs_plan: bool
    plan_overdue_count: int = 0


# -------- Narrative analysis result --------

class NarrativePlan(BaseModel):
    plan_type: PlanType
    title: str
    objectives: List[str] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list)
    timeline: str = "90 days"
    success_metrics: List[str] = Field(default_factory=list)
    notes: str = ""
    status: PlanStatus = "active"
    next_review_date: date


class NarrativeAnalysis(CamelModel):
    performance: Level
    potential: Level
    reasoning: str = ""
    confidence: Optional[Union[int, float]] = None
    strengths: List[str] = Field(default_factory=list)
    development_areas: List[str] = Field(default_factory=list)
    success_metrics: List[str] = Field(default_factory=list)
    summary: str = ""
    source: Literal["ai", "fallback"]
    plan: NarrativePlan

    @computed_field(alias="boxKey")
    @property
    def box_key(self) -> str:
        return f"{LEVEL_RANK[self.performance]}-{LEVEL_RANK[self.potential]}"

    @computed_field(alias="actionItems")
    @property
    def action_items(self) -> List[ActionItem]:
        return self.plan.action_items


# -------- Inbound payloads --------

class PlacementIn(BaseModel):
    x: int
    y: int


class TemplateRequest(BaseModel):
    performance: Optional[Level] = None
    potential: Optional[Level] = None
    employee_name: str = ""


class RiskRequest(BaseModel):
    employee: Employee
    has_plan: bool = False


class RetentionRequest(BaseModel):
    risk_factors: List[str] = Field(default_factory=list)
    risk_level: Level = "medium"


class AlignmentRequest(BaseModel):
    manager_review: Optional[PerformanceReview] = None
    self_review: Optional[PerformanceReview] = None


class EmployeeSnapshot(BaseModel):
    employee: Employee
    department: Optional[Department] = None
    manager_review: Optional[PerformanceReview] = None
    self_review: Optional[PerformanceReview] = None
    plan: Optional[EmployeePlan] = None


class AlertsRequest(BaseModel):
    employees: List[EmployeeSnapshot] = Field(default_factory=list)


class ToggleRequest(BaseModel):
    plan: EmployeePlan
    item_id: str


class StatusRequest(BaseModel):
    plan: EmployeePlan
    item_id: str
    status: ItemStatus


class ProgressRequest(BaseModel):
    action_items: List[ActionItem] = Field(default_factory=list)


class NarrativeRequest(BaseModel):
    employee_id: str
    employee_name: str
    review_text: str


# -------- Health --------

class Health(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
