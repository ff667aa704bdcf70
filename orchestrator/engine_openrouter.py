# -*- coding: utf-8 -*-
# orchestrator/engine_openrouter.py
import asyncio
import json
import logging
import socket
import urllib.error
import urllib.request
from typing import Optional, Dict, Any

from talent_core.settings import settings

log = logging.getLogger("talent.transport")


class AnalysisServiceError(Exception):
    """Any failure of the remote text-analysis call; always recoverable via fallback."""


class ServiceUnavailable(AnalysisServiceError):
    pass


class ServiceTimeout(AnalysisServiceError):
    pass


class ServiceHTTPError(AnalysisServiceError):
    def __init__(self, status: int, detail: str = ""):
        super().__init__(f"text-analysis service returned HTTP {status}: {detail[:200]}")
        self.status = status


class ServiceResponseInvalid(AnalysisServiceError):
    pass


def _http_post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float) -> Dict[str, Any]:
    data = json.dumps(payload).encode()
    req = urllib.request.Request(url, data=data, headers=headers, method="POST")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read().decode()
    except urllib.error.HTTPError as e:
        raise ServiceHTTPError(e.code, e.read().decode(errors="ignore") if e.fp else "") from e
    except (socket.timeout, TimeoutError) as e:
        raise ServiceTimeout(str(e) or "read timed out") from e
    except (urllib.error.URLError, OSError) as e:
        raise ServiceUnavailable(str(e)) from e
    try:
        return json.loads(body)
    except ValueError as e:
        raise ServiceResponseInvalid(f"service body is not JSON: {e}") from e


def pick_model(model_hint: Optional[str] = None) -> str:
    return (model_hint or settings.LLM_MODEL or "openrouter/auto").strip()


def generate(*, system: str, prompt: str, model_hint: Optional[str] = None,
             max_tokens: Optional[int] = None, timeout: Optional[float] = None,
             extra: Optional[Dict[str, Any]] = None) -> str:
    """Blocking chat-completion call. Returns the message text or raises AnalysisServiceError."""
    api_key = settings.OPENROUTER_API_KEY
    if not api_key:
        raise ServiceUnavailable("OPENROUTER_API_KEY is not configured")
    payload: Dict[str, Any] = {
        "model": pick_model(model_hint),
        "messages": [{"role": "system", "content": system}, {"role": "user", "content": prompt}],
        "max_tokens": max_tokens or settings.LLM_MAX_TOKENS,
    }
    if extra:
        payload.update(extra)
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        "X-Title": settings.APP_NAME,
    }
    out = _http_post(settings.LLM_API_URL, payload, headers, timeout or settings.LLM_TIMEOUT_SECONDS)
    try:
        content = ((out.get("choices") or [{}])[0].get("message") or {}).get("content")
    except (AttributeError, IndexError, TypeError) as e:
        raise ServiceResponseInvalid(f"unexpected completion shape: {e}") from e
    if not content:
        raise ServiceResponseInvalid("completion carried no message content")
    log.debug("completion received (%d chars)", len(content))
    return content


async def generate_async(*, system: str, prompt: str, timeout: Optional[float] = None, **kwargs) -> str:
    """Run `generate` off the event loop with a hard deadline."""
    limit = timeout or settings.LLM_TIMEOUT_SECONDS
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(generate, system=system, prompt=prompt, timeout=limit, **kwargs),
            timeout=limit,
        )
    except asyncio.TimeoutError as e:
        raise ServiceTimeout(f"no response within {limit}s") from e
