"""An HTML document the executor can act on.

A ``Page`` wraps a BeautifulSoup tree with the bits of browser state the
automation code needs: the URL, the vertical scroll offset and a small
synchronous event bus so that clicks and form edits are observable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from bs4 import BeautifulSoup
from bs4.element import Tag

from heyweb.core.logger import get_logger

logger = get_logger("heyweb.page")

EventListener = Callable[["PageEvent"], None]
NavigationHandler = Callable[[str], None]


@dataclass
class PageEvent:
    type: str
    target: Tag
    detail: dict[str, Any] = field(default_factory=dict)
    bubbles: bool = True

    @property
    def tag_name(self) -> str:
        return self.target.name.upper()


def is_disabled(element: Tag) -> bool:
    if element.has_attr("disabled"):
        return True
    return str(element.get("aria-disabled", "")).lower() == "true"


def is_hidden(element: Tag) -> bool:
    if element.has_attr("hidden"):
        return True
    if element.name == "input" and str(element.get("type", "")).lower() == "hidden":
        return True
    style = str(element.get("style", "")).replace(" ", "").lower()
    return "display:none" in style or "visibility:hidden" in style


class Page:
    def __init__(self, html: str, url: str = "about:blank") -> None:
        self.soup = BeautifulSoup(html or "", "lxml")
        self.url = url
        self.scroll_y = 0
        self.events: list[PageEvent] = []
        self.navigation_handler: NavigationHandler | None = None
        self._listeners: dict[str, list[EventListener]] = {}

    @classmethod
    def from_file(cls, path: str | Path) -> "Page":
        file_path = Path(path).resolve()
        return cls(file_path.read_text(encoding="utf-8"), url=file_path.as_uri())

    @property
    def title(self) -> str:
        if self.soup.title is None:
            return ""
        return self.soup.title.get_text(strip=True)

    @property
    def body(self) -> Tag:
        return self.soup.body or self.soup

    def select(self, selector: str) -> list[Tag]:
        return self.soup.select(selector)

    def add_event_listener(self, event_type: str, listener: EventListener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def dispatch_event(self, event_type: str, target: Tag, **detail: Any) -> PageEvent:
        event = PageEvent(type=event_type, target=target, detail=detail)
        self.events.append(event)
        for listener in list(self._listeners.get(event_type, [])):
            try:
                listener(event)
            except Exception as exc:
                logger.warning("listener for %s raised: %s", event_type, exc)
        return event

    def events_of(self, event_type: str) -> list[PageEvent]:
        return [event for event in self.events if event.type == event_type]

    def click(self, element: Tag) -> PageEvent:
        event = self.dispatch_event("click", element)
        href = element.get("href") if element.name == "a" else None
        if href and self.navigation_handler is not None and not str(href).startswith("#"):
            self.navigation_handler(str(href))
        return event

    def set_value(self, element: Tag, value: str) -> None:
        if element.name == "textarea":
            element.string = value
        else:
            element["value"] = value
        self.dispatch_event("input", element, value=value)
        self.dispatch_event("change", element, value=value)

    def scroll_by(self, delta: int) -> int:
        self.scroll_y = max(0, self.scroll_y + delta)
        return self.scroll_y
