from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from heyweb.assistant.session import ConversationSession
    from heyweb.automation.browser import Browser, BrowserTab


class SkipAction(Exception):
    """The action cannot apply right now (e.g. automation is off)."""


@dataclass
class ExecutorContext:
    browser: "Browser | None" = None
    session: "ConversationSession | None" = None
    web_automation_enabled: bool = False
    export_dir: Path = field(default_factory=Path.cwd)
    on_open_settings: Callable[[], None] | None = None

    @property
    def active_tab(self) -> "BrowserTab | None":
        return self.browser.active_tab if self.browser is not None else None


class ActionExecutor(Protocol):
    name: str

    def run(self, action: Any, context: ExecutorContext) -> Any:
        ...
