"""Tests for tabs, history navigation and page loading."""

import httpx

from heyweb.automation.browser import BLANK_URL, Browser, load_page, resolve_location
from heyweb.automation.page import Page

PAGES = {
    "https://shop.test/": '<html><head><title>Shop</title></head><body><a href="/cart">Cart</a></body></html>',
    "https://shop.test/cart": "<html><head><title>Your cart</title></head><body></body></html>",
}


def _loader(url: str) -> Page:
    return Page(PAGES.get(url, "<html><body></body></html>"), url=url)


def test_new_tab_becomes_active_and_loads_page() -> None:
    browser = Browser(loader=_loader)
    tab = browser.new_tab("https://shop.test/")
    assert browser.active_tab is tab
    assert tab.title == "Shop"
    assert tab.describe() == {"id": tab.id, "url": "https://shop.test/", "title": "Shop"}


def test_open_blank_creates_tab_and_self_reuses_it() -> None:
    browser = Browser(loader=_loader)
    first = browser.new_tab("https://shop.test/")
    second = browser.open("https://example.com", target="_blank")
    assert second is not first
    assert len(browser.tabs) == 2

    same = browser.open("https://shop.test/cart", target="_self")
    assert same is second
    assert same.url == "https://shop.test/cart"


def test_back_forward_and_reload() -> None:
    browser = Browser(loader=_loader)
    tab = browser.new_tab("https://shop.test/")
    browser.navigate(tab, "https://shop.test/cart")

    assert browser.go_back() is True
    assert tab.url == "https://shop.test/"
    assert tab.title == "Shop"
    assert browser.go_back() is False

    assert browser.go_forward() is True
    assert tab.url == "https://shop.test/cart"
    assert browser.go_forward() is False
    assert browser.reload() is True


def test_navigate_drops_forward_history() -> None:
    browser = Browser(loader=_loader)
    tab = browser.new_tab("https://a.test/")
    browser.navigate(tab, "https://b.test/")
    browser.go_back()
    browser.navigate(tab, "https://c.test/")
    assert tab.history == ["https://a.test/", "https://c.test/"]
    assert browser.go_forward() is False


def test_close_tab_activates_remaining_tab() -> None:
    browser = Browser(loader=None)
    first = browser.new_tab()
    second = browser.new_tab()
    assert browser.close_tab() is True
    assert second.id not in browser.tabs
    assert browser.active_tab is first
    assert browser.close_tab(999) is False
    browser.close_tab()
    assert browser.active_tab is None
    assert browser.go_back() is False


def test_tab_without_page_answers_page_unavailable() -> None:
    browser = Browser(loader=None)
    tab = browser.new_tab("https://shop.test/")
    assert tab.page is None
    assert tab.send_message({"action": "GET_PAGE_INFO"}) == {"success": False, "error": "Page unavailable"}


def test_clicking_a_link_navigates_the_tab() -> None:
    browser = Browser(loader=_loader)
    tab = browser.new_tab("https://shop.test/")
    result = tab.send_message({"action": "CLICK_ELEMENT", "target": "cart"})
    assert result == {"success": True, "element": "A"}
    assert tab.url == "https://shop.test/cart"
    assert tab.title == "Your cart"


def test_load_page_over_http() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, html="<html><head><title>Remote</title></head><body></body></html>")

    page = load_page("https://remote.test/", transport=httpx.MockTransport(handler))
    assert page is not None
    assert page.title == "Remote"
    assert page.url == "https://remote.test/"


def test_load_page_http_error_returns_none() -> None:
    page = load_page("https://remote.test/missing", transport=httpx.MockTransport(lambda r: httpx.Response(404)))
    assert page is None


def test_load_page_from_local_file(tmp_path) -> None:
    html_file = tmp_path / "form.html"
    html_file.write_text("<html><head><title>Local form</title></head><body></body></html>", encoding="utf-8")

    url = resolve_location(str(html_file))
    assert url.startswith("file://")
    page = load_page(url)
    assert page is not None
    assert page.title == "Local form"
    assert load_page(str(tmp_path / "nope.html")) is None


def test_blank_and_bare_domains() -> None:
    assert load_page(BLANK_URL).url == BLANK_URL
    assert resolve_location("example.com") == "https://example.com"
