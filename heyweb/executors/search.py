from __future__ import annotations

from typing import Any
from urllib.parse import quote

from heyweb.executors.base import ExecutorContext, SkipAction
from heyweb.schemas.actions import SearchAction

_UNRESERVED = "-_.!~*'()"

SEARCH_URLS = {
    "google": "https://www.google.com/search?q={q}",
    "bing": "https://www.bing.com/search?q={q}",
    "youtube": "https://www.youtube.com/results?search_query={q}",
    "wikipedia": "https://en.wikipedia.org/wiki/{q}",
}


def build_search_url(query: str, engine: str = "google") -> str:
    template = SEARCH_URLS.get(engine, SEARCH_URLS["google"])
    return template.format(q=quote(query, safe=_UNRESERVED))


class SearchExecutor:
    name = "search"

    def run(self, action: SearchAction, context: ExecutorContext) -> Any:
        url = build_search_url(action.query, action.engine)
        if context.browser is None:
            raise SkipAction("no browser attached")
        tab = context.browser.open(url, target="_blank")
        return {"success": True, "url": url, "tab": tab.id}
