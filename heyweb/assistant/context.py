from __future__ import annotations

import platform
from datetime import datetime, timezone

from heyweb import __version__
from heyweb.automation.browser import Browser
from heyweb.schemas.chat import ActiveTab, ChatContext

USER_AGENT = f"heyweb/{__version__} (Python {platform.python_version()}; {platform.system()})"


class ContextBuilder:
    """Snapshot of the environment sent alongside each chat request."""

    def __init__(self, browser: Browser | None = None, web_automation_enabled: bool = False) -> None:
        self.browser = browser
        self.web_automation_enabled = web_automation_enabled

    def build(self) -> ChatContext:
        tab = self.browser.active_tab if self.browser is not None else None
        active = ActiveTab(**tab.describe()) if tab is not None else None
        return ChatContext(
            active_tab=active,
            web_automation_enabled=self.web_automation_enabled,
            current_time=datetime.now(timezone.utc),
            user_agent=USER_AGENT,
        )
