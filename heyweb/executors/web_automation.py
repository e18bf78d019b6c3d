from __future__ import annotations

from typing import Any

from heyweb.automation.messaging import CLICK_ELEMENT, FILL_FORM, SCROLL_PAGE
from heyweb.core.guardrails import sanitize_target
from heyweb.executors.base import ExecutorContext, SkipAction
from heyweb.schemas.actions import WebAutomationAction


class WebAutomationExecutor:
    name = "web_automation"

    def run(self, action: WebAutomationAction, context: ExecutorContext) -> Any:
        if not context.web_automation_enabled:
            raise SkipAction("web automation is disabled")
        tab = context.active_tab
        if tab is None or context.browser is None:
            raise SkipAction("no active tab")

        if action.command == "click":
            return tab.send_message({"action": CLICK_ELEMENT, "target": sanitize_target(action.target)})
        if action.command == "type":
            return tab.send_message(
                {"action": FILL_FORM, "field": sanitize_target(action.target), "value": action.value or ""}
            )
        if action.command == "scroll":
            return tab.send_message({"action": SCROLL_PAGE, "direction": action.direction or "down"})
        return self._navigate(action.target or "", context)

    def _navigate(self, target: str, context: ExecutorContext) -> dict[str, Any]:
        browser = context.browser
        assert browser is not None
        if target == "back":
            ok = browser.go_back()
        elif target == "forward":
            ok = browser.go_forward()
        elif target == "refresh":
            ok = browser.reload()
        elif target == "new_tab":
            ok = browser.new_tab() is not None
        elif target == "close_tab":
            ok = browser.close_tab()
        else:
            return {"success": False, "error": f"Unknown navigation target: {target}"}
        return {"success": ok, "navigation": target}
