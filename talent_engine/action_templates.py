# talent_engine/action_templates.py
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, List, Optional, Tuple

from talent_core.clock import Clock, utc_now, new_action_id
from talent_core.schemas import ActionItem


@dataclass(frozen=True)
class ActionItemTemplate:
    description: str
    skill_area: str
    priority: str
    days_to_complete: int
    estimated_hours: float
    owner: str


T = ActionItemTemplate

# (performance, potential) -> templates. Policy lives here, not in branching.
ACTION_TEMPLATES: Dict[Tuple[str, str], List[ActionItemTemplate]] = {
    # Rising Talent - need immediate performance support
    ("low", "high"): [
        T("Complete performance gap analysis with manager", "Performance Management", "high", 7, 3, "Manager"),
        T("Enroll in relevant skill-building training program", "Technical Skills", "high", 14, 20, "Employee"),
        T("Establish weekly coaching sessions with manager", "Coaching", "high", 7, 1, "Manager"),
        T("Set 3 measurable 30-day performance goals", "Goal Setting", "high", 7, 2, "Employee"),
        T("Identify and remove key obstacles to success", "Problem Solving", "high", 14, 4, "Manager"),
    ],
    # Emerging Leader - ready for development
    ("medium", "high"): [
        T("Take on stretch assignment or cross-functional project", "Leadership", "high", 30, 40, "Employee"),
        T("Complete leadership development assessment (360 feedback)", "Self-Awareness", "high", 21, 5, "HR"),
        T("Attend leadership training or executive education program", "Leadership", "medium", 90, 24, "Employee"),
        T("Shadow senior leader for one week", "Executive Presence", "medium", 45, 20, "Manager"),
        T("Present to executive team or lead strategic initiative", "Strategic Thinking", "medium", 60, 15, "Employee"),
        T("Expand network: 5 coffee chats with leaders outside your team", "Networking", "low", 60, 5, "Employee"),
    ],
    # Star - retention and succession
    ("high", "high"): [
        T("Create individualized succession plan and career roadmap", "Career Planning", "high", 14, 4, "Manager"),
        T("Assign to high-visibility, high-impact strategic project", "Strategic Leadership", "high", 30, 60, "Manager"),
        T("Begin executive coaching program with external coach", "Executive Development", "high", 21, 24, "HR"),
        T("Present promotion case to leadership team", "Career Advancement", "high", 45, 8, "Manager"),
        T("Conduct stay interview and address retention concerns", "Retention", "high", 14, 2, "Manager"),
        T("Explore board or advisory opportunities", "External Leadership", "low", 90, 10, "Employee"),
    ],
    # Performance improvement needed
    ("low", "medium"): [
        T("Document specific performance issues and expectations", "Performance Management", "high", 3, 2, "Manager"),
        T("Create 60-day Performance Improvement Plan (PIP)", "Performance Management", "high", 7, 4, "Manager"),
        T("Schedule bi-weekly check-ins to review progress", "Accountability", "high", 7, 2, "Manager"),
        T("Complete required training on performance gaps", "Skills Development", "high", 21, 12, "Employee"),
        T("Demonstrate measurable improvement in 2 key areas", "Performance", "high", 60, 40, "Employee"),
    ],
    # Core performer - maintain engagement
    ("medium", "medium"): [
        T("Set clear goals for continued steady contribution", "Goal Setting", "medium", 14, 2, "Employee"),
        T("Identify one skill area for professional development", "Skills Development", "medium", 21, 3, "Employee"),
        T("Take on mentorship role for junior team member", "Mentorship", "medium", 30, 10, "Employee"),
        T("Attend relevant conference or training program", "Professional Growth", "low", 90, 16, "Employee"),
        T("Recognize and appreciate contributions in team meeting", "Recognition", "medium", 14, 1, "Manager"),
    ],
    # Key player - recognize and reward
    ("high", "medium"): [
        T("Conduct compensation review and market adjustment", "Compensation", "high", 30, 2, "Manager"),
        T("Provide high-visibility project leadership opportunity", "Project Leadership", "high", 30, 30, "Manager"),
        T("Nominate for company recognition or award", "Recognition", "medium", 21, 1, "Manager"),
        T("Discuss career aspirations and lateral move opportunities", "Career Development", "medium", 30, 2, "Manager"),
        T("Invest in specialized training to deepen expertise", "Technical Excellence", "medium", 60, 20, "Employee"),
    ],
    # Underperformer - manage out compassionately
    ("low", "low"): [
        T("Document performance issues with specific examples", "Performance Management", "high", 3, 2, "Manager"),
        T("Consult with HR on formal PIP or transition plan", "HR Process", "high", 7, 2, "Manager"),
        T("Deliver clear feedback on performance expectations", "Direct Communication", "high", 3, 1, "Manager"),
        T("Explore alternative roles better suited to strengths", "Career Transition", "medium", 21, 3, "HR"),
        T("Set 30/60/90 day performance milestones", "Performance Management", "high", 7, 2, "Manager"),
    ],
    # Solid citizen - appreciate current contributions
    ("medium", "low"): [
        T("Clarify role expectations and success criteria", "Role Clarity", "medium", 14, 2, "Manager"),
        T("Recognize consistent contributions to team", "Recognition", "medium", 7, 1, "Manager"),
        T("Optimize current role for maximum contribution", "Role Optimization", "medium", 30, 4, "Manager"),
        T("Provide training to enhance current role effectiveness", "Skills Enhancement", "low", 60, 8, "Employee"),
    ],
    # Workhorse - value and retain in current role
    ("high", "low"): [
        T("Ensure competitive compensation for current role", "Compensation", "high", 30, 2, "Manager"),
        T("Provide clear recognition for expertise and reliability", "Recognition", "high", 7, 1, "Manager"),
        T("Optimize workload and remove non-value-add tasks", "Work Optimization", "medium", 21, 3, "Manager"),
        T("Invest in deep specialization training", "Technical Mastery", "medium", 60, 16, "Employee"),
        T("Create expert/mentor role leveraging specialized knowledge", "Knowledge Sharing", "low", 90, 10, "Manager"),
    ],
}

del T


def templates_for(performance: Optional[str], potential: Optional[str]) -> List[ActionItemTemplate]:
    perf = performance or "medium"
    pot = potential or "medium"
    return list(ACTION_TEMPLATES.get((perf, pot), []))


def stamp_templates(templates: List[ActionItemTemplate], clock: Clock = utc_now) -> List[ActionItem]:
    """Turn templates into concrete, dated action items (due = now + offset)."""
    now = clock()
    return [
        ActionItem(
            id=new_action_id(),
            description=t.description,
            due_date=now + timedelta(days=t.days_to_complete),
            owner=t.owner,
            priority=t.priority,
            status="not_started",
            completed=False,
            skill_area=t.skill_area,
            estimated_hours=t.estimated_hours,
        )
        for t in templates
    ]


def generate(performance: Optional[str], potential: Optional[str], employee_name: str = "",
             clock: Clock = utc_now) -> List[ActionItem]:
    # employee_name is accepted for parity with the narrative path; templates are name-agnostic
    return stamp_templates(templates_for(performance, potential), clock)


def plan_type_for(performance: Optional[str]) -> str:
    """Low performance gets a performance improvement plan; everything else a development plan."""
    return "performance_improvement" if performance == "low" else "development"
