# talent_core/settings.py
import json
from typing import Any, List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


def _as_origin_list(value: Union[str, List[str], None]) -> List[str]:
    """CSV string, JSON-list string or list -> trimmed, non-empty strings."""
    if not value:
        return []
    items: List[Any]
    if isinstance(value, list):
        items = value
    else:
        raw = str(value).strip()
        items = raw.split(",")
        if raw.startswith("[") and raw.endswith("]"):
            try:
                decoded = json.loads(raw)
            except ValueError:
                decoded = None
            if isinstance(decoded, list):
                items = decoded
    return [str(x).strip() for x in items if str(x).strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- core ----
    APP_NAME: str = "Talent Engine"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # dashboard origins; either env name works
    CORS_ORIGINS: Optional[Union[List[str], str]] = None
    ALLOWED_ORIGINS: Optional[Union[List[str], str]] = None

    # --- text-analysis service ---
    OPENROUTER_API_KEY: Optional[str] = None
    LLM_API_URL: str = OPENROUTER_URL
    LLM_MODEL: str = "anthropic/claude-sonnet-4"
    LLM_MAX_TOKENS: int = 4096
    LLM_TIMEOUT_SECONDS: float = 30.0

    # --- engine policy knobs ---
    MAX_REVIEW_CHARS: int = 16000
    NEXT_REVIEW_DAYS: int = 30
    UPCOMING_WINDOW_DAYS: int = 7

    @field_validator("CORS_ORIGINS", "ALLOWED_ORIGINS", mode="before")
    @classmethod
    def split_csv(cls, v: Any) -> List[str]:
        return _as_origin_list(v)

    @property
    def ALLOWED_ORIGINS_LIST(self) -> List[str]:
        merged = _as_origin_list(self.CORS_ORIGINS) + _as_origin_list(self.ALLOWED_ORIGINS)
        return list(dict.fromkeys(merged))


settings = Settings()
