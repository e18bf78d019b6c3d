"""Client for the upstream OpenAI-compatible chat-completion service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx

from heyweb.core.concurrency import llm_slot
from heyweb.core.config import LLMSettings, get_llm_settings
from heyweb.core.logger import get_logger

logger = get_logger("heyweb.completion")


class UpstreamError(RuntimeError):
    """The completion service failed: network error, non-2xx or a malformed body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class CompletionResult:
    content: str
    raw: dict[str, Any] = field(default_factory=dict)


def extract_content(data: dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


class CompletionClient:
    def __init__(
        self,
        settings: LLMSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_llm_settings()
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    def complete(
        self,
        messages: Sequence[dict[str, str]],
        *,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> CompletionResult:
        if not self.settings.api_key:
            logger.warning("HEYWEB_LLM_API_KEY is empty; sending unauthenticated request")

        payload = {
            "model": self.settings.model,
            "messages": list(messages),
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        try:
            with llm_slot():
                with httpx.Client(timeout=self.settings.timeout, transport=self._transport) as client:
                    resp = client.post(self.settings.endpoint, headers=self._headers(), json=payload)
        except httpx.HTTPError as exc:
            logger.error("completion request failed: %s", exc)
            raise UpstreamError(f"completion request failed: {exc}") from exc

        if resp.status_code >= 400:
            logger.error("completion service returned HTTP %s: %s", resp.status_code, resp.text[:200])
            raise UpstreamError(f"completion service returned HTTP {resp.status_code}", resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError("completion service returned a non-JSON body", resp.status_code) from exc
        if not isinstance(data, dict):
            raise UpstreamError("completion service returned an unexpected body", resp.status_code)

        return CompletionResult(content=extract_content(data), raw=data)


def get_completion_client() -> CompletionClient:
    return CompletionClient()
