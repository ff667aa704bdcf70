# -*- coding: utf-8 -*-
# health.py
from fastapi import APIRouter

from talent_core.settings import settings

router = APIRouter(prefix="/api")


@router.get("/health")
def health():  # app is up
    return {"ok": True}


@router.get("/ready")
def ready():  # app is up; reports which narrative path will serve requests
    remote = bool(settings.OPENROUTER_API_KEY)
    return {"ok": True, "narrative": "ai" if remote else "fallback", "model": settings.LLM_MODEL if remote else None}
