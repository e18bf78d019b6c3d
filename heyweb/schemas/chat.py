from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from heyweb.schemas.actions import Action

Role = Literal["user", "assistant", "system"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    timestamp: datetime = Field(default_factory=_utc_now)

    def to_wire(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActiveTab(CamelModel):
    id: int | str | None = None
    url: str | None = None
    title: str | None = None


class ChatContext(CamelModel):
    active_tab: ActiveTab | None = None
    web_automation_enabled: bool = False
    current_time: datetime | None = None
    user_agent: str | None = None


class WireMessage(BaseModel):
    role: Role
    content: str


class ChatRequest(BaseModel):
    # Optional so that a missing field surfaces as 400 rather than 422.
    messages: list[WireMessage] | None = None
    context: ChatContext | None = None


class ChatResponse(BaseModel):
    assistant: str
    actions: list[Action] = Field(default_factory=list)
    raw: dict[str, Any] = Field(default_factory=dict)
