"""Page command - run one automation operation against a local or remote page."""

from typing import Any, Optional

import typer

from heyweb.automation.browser import Browser, resolve_location
from heyweb.automation.messaging import (
    CLICK_ELEMENT,
    FILL_FORM,
    FIND_ELEMENTS,
    GET_PAGE_INFO,
    SCROLL_PAGE,
)
from heyweb.cli.renderer import print_json, render_error


def build_request(
    info: bool,
    find: Optional[str],
    click: Optional[str],
    fill: Optional[str],
    scroll: Optional[str],
) -> dict[str, Any]:
    if click:
        return {"action": CLICK_ELEMENT, "target": click}
    if fill:
        field, sep, value = fill.partition("=")
        if not sep:
            raise typer.BadParameter("--fill expects FIELD=VALUE")
        return {"action": FILL_FORM, "field": field.strip(), "value": value}
    if scroll:
        return {"action": SCROLL_PAGE, "direction": scroll}
    if find:
        return {"action": FIND_ELEMENTS, "text": find}
    return {"action": GET_PAGE_INFO}


def page(
    source: str = typer.Argument(..., help="HTML file path or http(s) URL."),
    info: bool = typer.Option(False, "--info", help="Show title, URL and element counts (default)."),
    find: Optional[str] = typer.Option(None, "--find", help="List elements containing TEXT."),
    click: Optional[str] = typer.Option(None, "--click", help="Click the element matching TEXT."),
    fill: Optional[str] = typer.Option(None, "--fill", help="Fill a field: FIELD=VALUE."),
    scroll: Optional[str] = typer.Option(None, "--scroll", help="Scroll up or down."),
) -> None:
    """Inspect or drive a page with the automation executor."""
    if scroll and scroll not in ("up", "down"):
        raise typer.BadParameter("--scroll must be 'up' or 'down'")
    request = build_request(info, find, click, fill, scroll)

    browser = Browser()
    tab = browser.new_tab(resolve_location(source))
    if tab.page is None:
        render_error(f"Could not load {source}")
        raise typer.Exit(code=1)

    result = tab.send_message(request)
    print_json(result)
    if isinstance(result, dict) and result.get("success") is False:
        raise typer.Exit(code=1)
