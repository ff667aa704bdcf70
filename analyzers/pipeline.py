# analyzers/pipeline.py
import asyncio
import logging
from typing import Optional, Protocol, Set

from orchestrator.engine_openrouter import AnalysisServiceError
from talent_core.schemas import NarrativeAnalysis
from talent_core.settings import settings

log = logging.getLogger("talent.narrative")


class NarrativeAnalyzer(Protocol):
    name: str

    async def analyze(self, review_text: str, employee_name: str) -> NarrativeAnalysis: ...


class AnalysisInProgress(RuntimeError):
    """A second analysis for the same employee while one is still running."""


class CancellationToken:
    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class NarrativeAnalysisPipeline:
    """
    Try the primary analyzer under a deadline; on any service failure run the
    fallback. Service errors never reach the caller.

    Returns None only when the caller's token was cancelled mid-flight, in
    which case the result is dropped before anything is handed back.
    """

    def __init__(self, primary: NarrativeAnalyzer, fallback: NarrativeAnalyzer,
                 timeout: Optional[float] = None, max_chars: Optional[int] = None):
        self.primary = primary
        self.fallback = fallback
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        self.max_chars = max_chars or settings.MAX_REVIEW_CHARS
        self._in_flight: Set[str] = set()

    def is_running(self, employee_key: str) -> bool:
        return employee_key in self._in_flight

    async def analyze(self, review_text: str, employee_name: str, *, employee_id: Optional[str] = None,
                      cancel_token: Optional[CancellationToken] = None) -> Optional[NarrativeAnalysis]:
        key = employee_id or employee_name
        if key in self._in_flight:
            raise AnalysisInProgress(f"analysis already running for employee {key}")
        self._in_flight.add(key)
        try:
            text = (review_text or "")[: self.max_chars]
            result = await self._try_primary(text, employee_name)
            if result is None and not _cancelled(cancel_token):
                result = await self.fallback.analyze(text, employee_name)
            if _cancelled(cancel_token):
                log.info("analysis for %s discarded: caller cancelled", key)
                return None
            return result
        finally:
            self._in_flight.discard(key)

    async def _try_primary(self, text: str, employee_name: str) -> Optional[NarrativeAnalysis]:
        try:
            return await asyncio.wait_for(self.primary.analyze(text, employee_name), timeout=self.timeout)
        except asyncio.TimeoutError:
            log.warning("%s analyzer timed out after %ss; using %s", self.primary.name, self.timeout, self.fallback.name)
        except AnalysisServiceError as e:
            log.warning("%s analyzer failed (%s); using %s", self.primary.name, e, self.fallback.name)
        return None


def _cancelled(token: Optional[CancellationToken]) -> bool:
    return bool(token and token.cancelled)
