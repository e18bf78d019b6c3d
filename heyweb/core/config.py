"""Backend settings resolved from the environment.

Sources (``.env`` is loaded by :mod:`heyweb.core.env_loader` first):
  - HEYWEB_LLM_API_KEY
  - HEYWEB_LLM_BASE_URL   -> https://openrouter.ai/api/v1
  - HEYWEB_LLM_MODEL      -> gpt-4o-mini
  - HEYWEB_LLM_TIMEOUT    -> 60 (seconds)
  - HEYWEB_FRONTEND_ORIGIN -> *
"""

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "gpt-4o-mini"


@dataclass(frozen=True)
class LLMSettings:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout: float = 60.0

    @property
    def endpoint(self) -> str:
        return self.base_url.rstrip("/") + "/chat/completions"

    def to_dict(self) -> dict:
        """Safe for display: the key is masked."""
        return {
            "api_key": "***" if self.api_key else "",
            "base_url": self.base_url,
            "model": self.model,
            "timeout": self.timeout,
        }


def _float_env(name: str, default: float) -> float:
    try:
        raw = os.getenv(name)
        if raw:
            return float(raw)
    except (TypeError, ValueError):
        pass
    return default


def get_llm_settings() -> LLMSettings:
    return LLMSettings(
        api_key=os.getenv("HEYWEB_LLM_API_KEY", "").strip(),
        base_url=os.getenv("HEYWEB_LLM_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        model=os.getenv("HEYWEB_LLM_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
        timeout=_float_env("HEYWEB_LLM_TIMEOUT", 60.0),
    )


def get_frontend_origins() -> list[str]:
    raw = os.getenv("HEYWEB_FRONTEND_ORIGIN", "*").strip() or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
