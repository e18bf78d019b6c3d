"""Tabs, per-tab history and page loading."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable
from urllib.parse import urljoin, urlparse
from urllib.request import url2pathname

import httpx

from heyweb.automation.messaging import handle_page_message
from heyweb.automation.page import Page
from heyweb.core.guardrails import normalize_url
from heyweb.core.logger import get_logger

logger = get_logger("heyweb.browser")

BLANK_URL = "about:blank"

PageLoader = Callable[[str], "Page | None"]


def resolve_location(source: str) -> str:
    """Turn an existing local path into a file:// URL, anything else into a web URL."""
    path = Path(source).expanduser()
    if path.exists():
        return path.resolve().as_uri()
    return normalize_url(source)


def load_page(url: str, timeout: float = 15.0, transport: httpx.BaseTransport | None = None) -> Page | None:
    """Load a page from a local path, a ``file://`` URL or over HTTP(S)."""
    if not url or url == BLANK_URL:
        return Page("<html><head><title></title></head><body></body></html>", url=BLANK_URL)

    parsed = urlparse(url)
    if parsed.scheme == "file":
        return _load_file(Path(url2pathname(parsed.path)))
    if parsed.scheme in ("http", "https"):
        try:
            with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as client:
                resp = client.get(url)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("page load failed for %s: %s", url, exc)
            return None
        return Page(resp.text, url=str(resp.url))
    return _load_file(Path(url))


def _load_file(path: Path) -> Page | None:
    try:
        return Page.from_file(path)
    except OSError as exc:
        logger.warning("page load failed for %s: %s", path, exc)
        return None


@dataclass
class BrowserTab:
    id: int
    history: list[str] = field(default_factory=list)
    index: int = -1
    page: Page | None = None

    @property
    def url(self) -> str:
        return self.history[self.index] if self.index >= 0 else BLANK_URL

    @property
    def title(self) -> str:
        return self.page.title if self.page is not None else ""

    def send_message(self, request: dict[str, Any]) -> Any:
        return handle_page_message(self.page, request)

    def describe(self) -> dict[str, Any]:
        return {"id": self.id, "url": self.url, "title": self.title}


class Browser:
    def __init__(self, loader: PageLoader | None = load_page) -> None:
        self._loader = loader
        self._ids = itertools.count(1)
        self.tabs: dict[int, BrowserTab] = {}
        self.active_tab_id: int | None = None

    @property
    def active_tab(self) -> BrowserTab | None:
        if self.active_tab_id is None:
            return None
        return self.tabs.get(self.active_tab_id)

    def _load(self, tab: BrowserTab) -> None:
        page = self._loader(tab.url) if self._loader is not None else None
        if page is not None:
            page.navigation_handler = lambda href, _tab=tab: self._follow_link(_tab, href)
        tab.page = page

    def _follow_link(self, tab: BrowserTab, href: str) -> None:
        self.navigate(tab, urljoin(tab.url, href))

    def navigate(self, tab: BrowserTab, url: str) -> BrowserTab:
        # Navigating drops any forward history.
        del tab.history[tab.index + 1 :]
        tab.history.append(url)
        tab.index = len(tab.history) - 1
        self._load(tab)
        logger.info("tab %s -> %s", tab.id, url)
        return tab

    def new_tab(self, url: str = BLANK_URL, activate: bool = True) -> BrowserTab:
        tab = BrowserTab(id=next(self._ids))
        self.tabs[tab.id] = tab
        if activate:
            self.active_tab_id = tab.id
        return self.navigate(tab, url)

    def open(self, url: str, target: str = "_blank") -> BrowserTab:
        tab = self.active_tab
        if target == "_self" and tab is not None:
            return self.navigate(tab, url)
        return self.new_tab(url)

    def close_tab(self, tab_id: int | None = None) -> bool:
        tab_id = self.active_tab_id if tab_id is None else tab_id
        if tab_id is None or tab_id not in self.tabs:
            return False
        del self.tabs[tab_id]
        if self.active_tab_id == tab_id:
            self.active_tab_id = next(reversed(self.tabs), None) if self.tabs else None
        return True

    def go_back(self) -> bool:
        return self._step(-1)

    def go_forward(self) -> bool:
        return self._step(1)

    def _step(self, delta: int) -> bool:
        tab = self.active_tab
        if tab is None:
            return False
        new_index = tab.index + delta
        if not 0 <= new_index < len(tab.history):
            return False
        tab.index = new_index
        self._load(tab)
        return True

    def reload(self) -> bool:
        tab = self.active_tab
        if tab is None:
            return False
        self._load(tab)
        return True
