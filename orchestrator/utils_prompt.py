# orchestrator/utils_prompt.py
from pathlib import Path
import json, re
from typing import Any, Dict

from orchestrator.engine_openrouter import ServiceResponseInvalid

PROMPTS_DIR = Path(__file__).resolve().parents[1] / "analyzers" / "prompts"


def load_prompt(name: str, variant: str = "default") -> str:
    """
    Search order:
      1) analyzers/prompts/<name>.<variant>.md
      2) analyzers/prompts/<name>.default.md
    """
    for p in (PROMPTS_DIR / f"{name.lower()}.{variant}.md", PROMPTS_DIR / f"{name.lower()}.default.md"):
        if p.exists():
            return p.read_text(encoding="utf-8")
    return "You are an expert talent management consultant. Return ONLY the requested JSON object."


_FENCE_RE = re.compile(r"```(?:json)?\s*", re.I)
_JSON_BLOCK_RE = re.compile(r"\{[\s\S]*\}", re.M)


def parse_llm_json(text: str) -> Dict[str, Any]:
    """Strip markdown fences and parse the single JSON object the model returned."""
    if not text or not text.strip():
        raise ServiceResponseInvalid("empty completion")
    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        data = json.loads(cleaned)
    except ValueError:
        m = _JSON_BLOCK_RE.search(cleaned)
        if not m:
            raise ServiceResponseInvalid("no JSON object in completion")
        try:
            data = json.loads(m.group(0))
        except ValueError as e:
            raise ServiceResponseInvalid(f"malformed JSON in completion: {e}") from e
    if not isinstance(data, dict):
        raise ServiceResponseInvalid("completion JSON is not an object")
    return data
