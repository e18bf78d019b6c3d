"""Page-side automation: click, fill, scroll and inspect a ``Page``.

Every operation returns a plain result dict; misses are reported as
``{"success": False, "error": ...}`` and never raised.
"""

from __future__ import annotations

from typing import Any, Sequence

from heyweb.automation.finders import CLICK_FINDERS, FIELD_FINDERS, ElementFinder, locate
from heyweb.automation.page import Page
from heyweb.core.logger import get_logger

logger = get_logger("heyweb.executor")

SCROLL_STEP = 300
MAX_FOUND_ELEMENTS = 10
TEXT_SNIPPET = 50
MARKUP_SNIPPET = 100


class DomExecutor:
    def __init__(
        self,
        page: Page,
        click_finders: Sequence[ElementFinder] = CLICK_FINDERS,
        field_finders: Sequence[ElementFinder] = FIELD_FINDERS,
    ) -> None:
        self.page = page
        self.click_finders = click_finders
        self.field_finders = field_finders

    def click(self, target_text: str) -> dict[str, Any]:
        target = (target_text or "").strip()
        match = locate(self.page, target, self.click_finders) if target else None
        if match is None:
            logger.info("click: no element for %r on %s", target, self.page.url)
            return {"success": False, "error": "Element not found"}
        self.page.click(match.element)
        return {"success": True, "element": match.tag_name}

    def fill_field(self, field_name: str, value: str) -> dict[str, Any]:
        name = (field_name or "").strip()
        match = locate(self.page, name, self.field_finders) if name else None
        if match is None:
            logger.info("fill: no field for %r on %s", name, self.page.url)
            return {"success": False, "error": "Field not found"}
        self.page.set_value(match.element, "" if value is None else str(value))
        return {"success": True, "element": match.tag_name}

    def scroll(self, direction: str) -> dict[str, Any]:
        step = -SCROLL_STEP if direction == "up" else SCROLL_STEP
        self.page.scroll_by(step)
        return {"success": True, "direction": direction}

    def get_page_info(self) -> dict[str, Any]:
        return {
            "title": self.page.title,
            "url": self.page.url,
            "elements": {
                "buttons": len(self.page.select("button")),
                "inputs": len(self.page.select("input")),
                "links": len(self.page.select("a")),
            },
        }

    def find_elements_by_text(self, text: str) -> list[dict[str, str]]:
        needle = (text or "").lower()
        found: list[dict[str, str]] = []
        # find_all walks the tree depth-first in document order.
        for element in self.page.body.find_all(True):
            content = element.get_text()
            if needle not in content.lower():
                continue
            found.append(
                {
                    "tagName": element.name.upper(),
                    "text": content.strip()[:TEXT_SNIPPET],
                    "tag": str(element)[:MARKUP_SNIPPET],
                }
            )
            if len(found) >= MAX_FOUND_ELEMENTS:
                break
        return found
