# orchestrator/routes.py
import asyncio
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response

from analyzers.pipeline import CancellationToken, NarrativeAnalysisPipeline
from analyzers.registry import build_pipeline
from talent_core.aggregation.alert_aggregator import aggregate_alerts
from talent_core.clock import Clock, utc_now
from talent_core.schemas import (
    AlertsRequest, AlignmentRequest, NarrativeRequest, PlacementIn, ProgressRequest,
    RetentionRequest, RiskRequest, StatusRequest, TemplateRequest, ToggleRequest,
)
from talent_core.settings import settings
from talent_engine import action_templates, flight_risk, grid, plan_progress, retention, review_alignment

log = logging.getLogger("talent.api")
router = APIRouter(prefix="/api", tags=["engine"])

_pipeline = build_pipeline()


def get_pipeline() -> NarrativeAnalysisPipeline:
    return _pipeline


def get_clock() -> Clock:
    return utc_now


# ---------------------------------------------------------------- grid
@router.get("/grid/boxes")
def grid_boxes():
    return [{"key": k, **grid.BOX_METADATA[k]} for k in grid.BOX_RENDER_ORDER]


@router.post("/assessments/place")
def place(body: PlacementIn):
    """Drop on board coordinates -> assessment with a consistent box_key."""
    performance, potential = grid.from_grid_coordinates(body.x, body.y)
    a = grid.build_assessment(performance, potential)
    return {**a.model_dump(), "box": grid.box_metadata(a.box_key)}


# ---------------------------------------------------------------- plans
@router.post("/plans/templates")
def plan_templates(body: TemplateRequest, clock: Clock = Depends(get_clock)):
    perf = body.performance or "medium"
    pot = body.potential or "medium"
    return {
        "box_key": grid.to_box_key(perf, pot),
        "plan_type": action_templates.plan_type_for(perf),
        "action_items": action_templates.generate(perf, pot, body.employee_name, clock),
    }


@router.post("/plans/toggle")
def plan_toggle(body: ToggleRequest, clock: Clock = Depends(get_clock)):
    return plan_progress.toggle_completed(body.plan, body.item_id, clock)


@router.post("/plans/status")
def plan_status(body: StatusRequest, clock: Clock = Depends(get_clock)):
    return plan_progress.update_item_status(body.plan, body.item_id, body.status, clock)


@router.post("/plans/progress")
def plan_progress_view(body: ProgressRequest, clock: Clock = Depends(get_clock)):
    now = clock()
    items = body.action_items
    return {
        "progress": plan_progress.calculate_plan_progress(items),
        "statuses": {i.id: plan_progress.effective_status(i, now) for i in items},
        "overdue": [i.id for i in plan_progress.overdue_items(items, now)],
        "upcoming": [i.id for i in plan_progress.upcoming_items(items, now, settings.UPCOMING_WINDOW_DAYS)],
    }


# ---------------------------------------------------------------- risk & retention
@router.post("/risk/score")
def risk_score(body: RiskRequest, clock: Clock = Depends(get_clock)):
    return flight_risk.score(body.employee, body.has_plan, clock)


@router.post("/retention/actions")
def retention_actions(body: RetentionRequest, clock: Clock = Depends(get_clock)):
    return retention.build_retention_actions(body.risk_factors, body.risk_level, clock)


@router.post("/retention/plan")
def retention_plan(body: RiskRequest, clock: Clock = Depends(get_clock)):
    """Score, then build retention items from the contributing factors."""
    risk = flight_risk.score(body.employee, body.has_plan, clock)
    reasons = flight_risk.risk_factor_reasons(risk)
    return {
        "risk": risk,
        "risk_factors": reasons,
        "action_items": retention.build_retention_actions(reasons, risk.risk_level, clock),
    }


# ---------------------------------------------------------------- reviews & alerts
@router.post("/reviews/alignment")
def reviews_alignment(body: AlignmentRequest):
    return review_alignment.analyze(body.manager_review, body.self_review)


@router.post("/employees/alerts")
def employees_alerts(body: AlertsRequest, clock: Clock = Depends(get_clock)) -> Dict[str, Any]:
    return aggregate_alerts(body.employees, clock=clock)


# ---------------------------------------------------------------- narrative
@router.post("/narrative/analyze")
async def narrative_analyze(body: NarrativeRequest, request: Request,
                            pipeline: NarrativeAnalysisPipeline = Depends(get_pipeline)):
    token = CancellationToken()

    async def _watch_disconnect():
        while not token.cancelled:
            if await request.is_disconnected():
                token.cancel()
                return
            await asyncio.sleep(0.25)

    watcher = asyncio.create_task(_watch_disconnect())
    try:
        result = await pipeline.analyze(body.review_text, body.employee_name,
                                        employee_id=body.employee_id, cancel_token=token)
    finally:
        watcher.cancel()

    if result is None:
        # client went away; nothing to hand back
        return Response(status_code=499)
    log.info("narrative analysis for %s via %s -> %s", body.employee_id, result.source, result.box_key)
    return result
