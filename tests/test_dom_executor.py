"""Tests for element lookup and page-side operations."""

from heyweb.automation.executor import DomExecutor
from heyweb.automation.finders import CLICK_FINDERS, FIELD_FINDERS, css_quote, locate
from heyweb.automation.messaging import handle_page_message
from heyweb.automation.page import Page


def test_click_prefers_aria_label_over_button_text() -> None:
    page = Page('<body><button>Search</button><input aria-label="Search products"></body>')
    result = DomExecutor(page).click("search")
    assert result == {"success": True, "element": "INPUT"}
    assert page.events_of("click")[0].target.get("aria-label") == "Search products"


def test_click_button_by_text(shop_page: Page) -> None:
    result = DomExecutor(shop_page).click("sign in")
    assert result == {"success": True, "element": "BUTTON"}
    clicked = shop_page.events_of("click")
    assert len(clicked) == 1
    assert clicked[0].target.get_text() == "Sign in"


def test_click_passes_over_disabled_elements(shop_page: Page) -> None:
    match = locate(shop_page, "submit", CLICK_FINDERS)
    assert match is not None
    assert match.tag_name == "A"
    assert match.strategy == "link-text"


def test_click_input_by_value(shop_page: Page) -> None:
    match = locate(shop_page, "subscribe", CLICK_FINDERS)
    assert match is not None
    assert (match.tag_name, match.strategy) == ("INPUT", "input-value")


def test_click_falls_back_to_own_text(shop_page: Page) -> None:
    result = DomExecutor(shop_page).click("Accept cookies")
    assert result == {"success": True, "element": "SPAN"}


def test_click_miss_reports_not_found(shop_page: Page) -> None:
    assert DomExecutor(shop_page).click("checkout") == {"success": False, "error": "Element not found"}
    assert DomExecutor(shop_page).click("   ") == {"success": False, "error": "Element not found"}
    assert shop_page.events_of("click") == []


def test_click_target_with_quotes_does_not_raise(shop_page: Page) -> None:
    result = DomExecutor(shop_page).click('weird "target\\')
    assert result == {"success": False, "error": "Element not found"}


def test_css_quote_escapes() -> None:
    assert css_quote('a"b') == '"a\\"b"'


def test_fill_field_emits_one_input_and_one_change(shop_page: Page) -> None:
    result = DomExecutor(shop_page).fill_field("email", "jane@example.com")
    assert result == {"success": True, "element": "INPUT"}
    assert shop_page.select("input[name=email]")[0]["value"] == "jane@example.com"
    assert [e.type for e in shop_page.events] == ["input", "change"]


def test_fill_field_by_placeholder_and_textarea(shop_page: Page) -> None:
    executor = DomExecutor(shop_page)
    assert executor.fill_field("type to search", "headphones")["success"] is True
    assert shop_page.select("input[name=q]")[0]["value"] == "headphones"

    assert executor.fill_field("comment", "Great shop") == {"success": True, "element": "TEXTAREA"}
    assert shop_page.select("textarea")[0].get_text() == "Great shop"


def test_fill_field_skips_hidden_inputs(shop_page: Page) -> None:
    result = DomExecutor(shop_page).fill_field("token", "x")
    assert result == {"success": False, "error": "Field not found"}
    assert shop_page.events == []


def test_field_finders_declared_order() -> None:
    assert [f.name for f in FIELD_FINDERS] == [
        "input-name",
        "input-placeholder",
        "input-aria-label",
        "textarea-name",
        "textarea-placeholder",
        "textarea-aria-label",
    ]


def test_scroll_never_goes_above_top(shop_page: Page) -> None:
    executor = DomExecutor(shop_page)
    assert executor.scroll("down") == {"success": True, "direction": "down"}
    assert shop_page.scroll_y == 300
    executor.scroll("up")
    executor.scroll("up")
    assert shop_page.scroll_y == 0


def test_get_page_info(shop_page: Page) -> None:
    info = DomExecutor(shop_page).get_page_info()
    assert info == {
        "title": "Demo Shop",
        "url": "https://shop.test/",
        "elements": {"buttons": 2, "inputs": 4, "links": 3},
    }


def test_find_elements_caps_results_and_snippets() -> None:
    items = "".join(f"<p>Item {i} {'x' * 80}</p>" for i in range(15))
    page = Page(f"<html><body>{items}</body></html>")
    found = DomExecutor(page).find_elements_by_text("ITEM")
    assert len(found) == 10
    assert all(len(f["text"]) <= 50 for f in found)
    assert all(len(f["tag"]) <= 100 for f in found)
    assert found[0]["tagName"] == "P"
    assert found[0]["text"].startswith("Item 0")


def test_find_elements_walks_depth_first() -> None:
    page = Page("<body><div id='a'><span>news</span></div><p>news</p></body>")
    found = DomExecutor(page).find_elements_by_text("news")
    assert [f["tagName"] for f in found] == ["DIV", "SPAN", "P"]


def test_message_protocol_routes_actions(shop_page: Page) -> None:
    assert handle_page_message(shop_page, {"action": "CLICK_ELEMENT", "target": "sign in"})["success"] is True
    assert handle_page_message(shop_page, {"action": "FILL_FORM", "field": "email", "value": "a@b.c"})["success"]
    assert handle_page_message(shop_page, {"action": "SCROLL_PAGE", "direction": "down"})["direction"] == "down"
    assert handle_page_message(shop_page, {"action": "GET_PAGE_INFO"})["title"] == "Demo Shop"
    assert isinstance(handle_page_message(shop_page, {"action": "FIND_ELEMENTS", "text": "cart"}), list)


def test_message_protocol_unknown_action_and_missing_page(shop_page: Page) -> None:
    assert handle_page_message(shop_page, {"action": "SELF_DESTRUCT"}) == {"success": False, "error": "Unknown action"}
    assert handle_page_message(None, {"action": "GET_PAGE_INFO"}) == {"success": False, "error": "Page unavailable"}


def test_event_listeners_observe_dispatch(shop_page: Page) -> None:
    seen = []
    shop_page.add_event_listener("change", lambda event: seen.append(event.detail["value"]))
    DomExecutor(shop_page).fill_field("email", "x@y.z")
    assert seen == ["x@y.z"]


class _BrokenFinder:
    name = "broken"

    def find(self, page: Page, text: str):
        raise RuntimeError("strategy blew up")


def test_raising_finder_is_skipped_and_later_finders_run(shop_page: Page) -> None:
    match = locate(shop_page, "sign in", [_BrokenFinder(), *CLICK_FINDERS])
    assert match is not None
    assert match.tag_name == "BUTTON"
    assert match.strategy == "button-text"


def test_click_survives_selector_syntax_error() -> None:
    page = Page("<body><button>log\nin</button></body>")
    result = DomExecutor(page).click("log\nin")
    assert result == {"success": True, "element": "BUTTON"}
