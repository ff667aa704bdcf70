# -*- coding: utf-8 -*-
"""
Talent Engine Backend
 - 9-box placement, plan templates, plan follow-through
 - Flight risk + retention actions
 - Review alignment and employee alerts
 - Narrative review analysis (AI with keyword fallback)
 - Health/Ready
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from talent_core.settings import settings
from talent_core.schemas import Health
from analyzers.pipeline import AnalysisInProgress
from talent_engine.grid import InvalidCoordinate
from talent_engine.plan_progress import InvalidTransition, UnknownActionItem

from health import router as health_router
from orchestrator.routes import router as engine_router

logging.basicConfig(
    level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("talent.api")


# ==============================================================================
# App & CORS
# ==============================================================================
app = FastAPI(title=settings.APP_NAME, version=settings.VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS_LIST,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _json_on_crash(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        # convert crashes to JSON so the dashboard shows details
        log.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "internal_server_error", "error": str(e) if settings.DEBUG else None},
        )


# ==============================================================================
# Domain errors -> HTTP
# ==============================================================================
@app.exception_handler(InvalidCoordinate)
async def _invalid_coordinate(request: Request, exc: InvalidCoordinate):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(InvalidTransition)
async def _invalid_transition(request: Request, exc: InvalidTransition):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(AnalysisInProgress)
async def _analysis_in_progress(request: Request, exc: AnalysisInProgress):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(UnknownActionItem)
async def _unknown_item(request: Request, exc: UnknownActionItem):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# ==============================================================================
# Health
# ==============================================================================
@app.get("/health", response_model=Health)
def health():
    return Health(status="ok", version=settings.VERSION)


# ==============================================================================
# Mount routers
# ==============================================================================
app.include_router(health_router)
app.include_router(engine_router)
