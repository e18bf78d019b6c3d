from __future__ import annotations

from typing import Any

from heyweb.core.guardrails import is_safe_url, normalize_url
from heyweb.core.logger import get_logger
from heyweb.executors.base import ExecutorContext, SkipAction
from heyweb.schemas.actions import NavigationAction

logger = get_logger("heyweb.executors.navigation")


class NavigationExecutor:
    name = "navigation"

    def run(self, action: NavigationAction, context: ExecutorContext) -> Any:
        url = normalize_url(action.url)
        if not is_safe_url(url):
            logger.warning("refusing to open unsafe url %r", action.url)
            return {"success": False, "error": "Unsafe URL"}
        if context.browser is None:
            raise SkipAction("no browser attached")
        tab = context.browser.open(url, target=action.target)
        return {"success": True, "url": url, "tab": tab.id}
