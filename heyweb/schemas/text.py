from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from heyweb.schemas.chat import CamelModel


class SummarizeRequest(CamelModel):
    text: str | None = None
    max_length: int = Field(default=300, ge=10, le=5000)
    include_key_points: bool = True


class SummarizeResponse(CamelModel):
    summary: str
    key_points: list[str] = Field(default_factory=list)


class TranslateRequest(CamelModel):
    text: str | None = None
    source_language: str | None = None
    target_language: str | None = None


class TranslateResponse(CamelModel):
    translated_text: str
    source_language: str
    target_language: str


class WebAutomationRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    action: str | None = None
    target: str | None = None
    field: str | None = None
    value: str | None = None
    direction: str | None = None


class WebAutomationResponse(BaseModel):
    success: bool
    action: str | None = None
    message: str
    received: dict[str, Any] = Field(default_factory=dict)
