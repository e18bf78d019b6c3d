"""Message protocol between the assistant and a page executor."""

from __future__ import annotations

from typing import Any, Callable

from heyweb.automation.executor import DomExecutor
from heyweb.automation.page import Page

CLICK_ELEMENT = "CLICK_ELEMENT"
FILL_FORM = "FILL_FORM"
SCROLL_PAGE = "SCROLL_PAGE"
GET_PAGE_INFO = "GET_PAGE_INFO"
FIND_ELEMENTS = "FIND_ELEMENTS"

Handler = Callable[[DomExecutor, dict[str, Any]], Any]

HANDLERS: dict[str, Handler] = {
    CLICK_ELEMENT: lambda ex, req: ex.click(req.get("target", "")),
    FILL_FORM: lambda ex, req: ex.fill_field(req.get("field", ""), req.get("value", "")),
    SCROLL_PAGE: lambda ex, req: ex.scroll(req.get("direction", "down")),
    GET_PAGE_INFO: lambda ex, req: ex.get_page_info(),
    FIND_ELEMENTS: lambda ex, req: ex.find_elements_by_text(req.get("text", "")),
}


def handle_page_message(page: Page | None, request: dict[str, Any]) -> Any:
    if page is None:
        return {"success": False, "error": "Page unavailable"}
    handler = HANDLERS.get(str(request.get("action", "")))
    if handler is None:
        return {"success": False, "error": "Unknown action"}
    return handler(DomExecutor(page), request)
