from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

WebCommand = Literal["click", "type", "scroll", "navigate"]
ScrollDirection = Literal["up", "down"]
SearchEngine = Literal["google", "bing", "youtube", "wikipedia"]
WindowTarget = Literal["_blank", "_self"]
SystemCommand = Literal["clear_history", "export_conversation", "open_settings"]


class _FrozenAction(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    def dedupe_key(self) -> str:
        return self.model_dump_json(exclude_none=True)


class WebAutomationAction(_FrozenAction):
    type: Literal["web_automation"] = "web_automation"
    command: WebCommand
    target: str | None = None
    value: str | None = None
    direction: ScrollDirection | None = None


class SearchAction(_FrozenAction):
    type: Literal["search"] = "search"
    query: str = Field(min_length=1)
    engine: SearchEngine = "google"


class NavigationAction(_FrozenAction):
    type: Literal["navigation"] = "navigation"
    url: str = Field(min_length=1)
    target: WindowTarget = "_blank"


class SystemAction(_FrozenAction):
    type: Literal["system"] = "system"
    command: SystemCommand


Action = Annotated[
    Union[WebAutomationAction, SearchAction, NavigationAction, SystemAction],
    Field(discriminator="type"),
]

ACTION_ADAPTER: TypeAdapter[Any] = TypeAdapter(Action)


def coerce_action(raw: Any) -> Any:
    """Validate a dict (e.g. decoded JSON) into one of the Action variants.

    Raises ``pydantic.ValidationError`` for unknown tags or bad fields.
    """
    if isinstance(raw, _FrozenAction):
        return raw
    return ACTION_ADAPTER.validate_python(raw)
