import json
from typing import Any

import httpx
import pytest

from heyweb.automation.page import Page
from heyweb.core.config import LLMSettings
from heyweb.services.completion import CompletionClient

SHOP_HTML = """
<html>
  <head><title>Demo Shop</title></head>
  <body>
    <nav>
      <a href="/home">Home</a>
      <a href="/cart">Cart</a>
    </nav>
    <form>
      <input name="email" placeholder="Email address">
      <input name="q" aria-label="Search products" placeholder="Type to search">
      <input type="hidden" name="token" value="abc">
      <textarea name="comment" placeholder="Your comment"></textarea>
      <input type="submit" value="Subscribe">
      <button disabled>Submit</button>
      <a href="#">Submit feedback</a>
      <button>Sign in</button>
    </form>
    <div><span>Accept cookies</span></div>
  </body>
</html>
"""


@pytest.fixture(autouse=True)
def _isolated_history_db(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("HEYWEB_HISTORY_DB_PATH", str(tmp_path / "history.db"))


@pytest.fixture
def shop_page() -> Page:
    return Page(SHOP_HTML, url="https://shop.test/")


class FakeLLM:
    """Stand-in completion service served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.content: Any = "Hello! How can I help?"
        self.status_code = 200
        self.body: Any = None
        self.error: Exception | None = None
        self.requests: list[dict[str, Any]] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content or b"{}"))
        if self.error is not None:
            raise self.error
        if self.body is not None:
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(
            self.status_code,
            json={"id": "cmpl-1", "choices": [{"message": {"role": "assistant", "content": self.content}}]},
        )

    def client(self) -> CompletionClient:
        settings = LLMSettings(api_key="test-key", base_url="https://llm.test/v1", model="test-model")
        return CompletionClient(settings=settings, transport=httpx.MockTransport(self.handle))

    @property
    def last_payload(self) -> dict[str, Any]:
        return self.requests[-1]


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()
