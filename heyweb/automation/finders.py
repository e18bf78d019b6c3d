"""Element lookup strategies.

Finders are tried in declaration order and the first accepted element wins,
so the order of ``CLICK_FINDERS`` / ``FIELD_FINDERS`` is behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence

from bs4.element import Tag

from heyweb.automation.page import Page, is_disabled, is_hidden
from heyweb.core.logger import get_logger

logger = get_logger("heyweb.finders")


@dataclass(frozen=True)
class ElementMatch:
    tag_name: str
    selector: str
    strategy: str
    element: Tag = field(compare=False, repr=False)


class ElementFinder(Protocol):
    name: str

    def find(self, page: Page, text: str) -> ElementMatch | None:
        ...


def css_quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def own_text(element: Tag) -> str:
    return "".join(element.find_all(string=True, recursive=False))


def mentions(element: Tag, needle: str) -> bool:
    """Text content, aria-label, placeholder or value contains ``needle``."""
    needle = needle.lower()
    if needle in element.get_text().lower():
        return True
    for attr in ("aria-label", "placeholder", "value"):
        raw = element.get(attr)
        if raw and needle in str(raw).lower():
            return True
    return False


Predicate = Callable[[Tag, str], bool]


def _clickable(element: Tag, needle: str) -> bool:
    return not is_disabled(element) and mentions(element, needle)


def _fillable(element: Tag, _needle: str) -> bool:
    return not is_disabled(element) and not is_hidden(element)


class SelectorFinder:
    """CSS template filled with the quoted target, then filtered."""

    def __init__(self, name: str, template: str, accept: Predicate = _clickable) -> None:
        self.name = name
        self.template = template
        self.accept = accept

    def selector_for(self, text: str) -> str:
        return self.template.format(q=css_quote(text))

    def find(self, page: Page, text: str) -> ElementMatch | None:
        selector = self.selector_for(text)
        for element in page.select(selector):
            if self.accept(element, text):
                return ElementMatch(element.name.upper(), selector, self.name, element)
        return None


class TagTextFinder:
    """Elements of one tag whose full text contains the target."""

    def __init__(self, name: str, tag_selector: str) -> None:
        self.name = name
        self.tag_selector = tag_selector

    def find(self, page: Page, text: str) -> ElementMatch | None:
        needle = text.lower()
        for element in page.select(self.tag_selector):
            if needle in element.get_text().lower() and _clickable(element, text):
                return ElementMatch(element.name.upper(), self.tag_selector, self.name, element)
        return None


class OwnTextFinder:
    """Any element under body whose own text nodes contain the target."""

    name = "own-text"

    def find(self, page: Page, text: str) -> ElementMatch | None:
        needle = text.lower()
        for element in page.body.find_all(True):
            if needle in own_text(element).lower() and _clickable(element, text):
                return ElementMatch(element.name.upper(), "*", self.name, element)
        return None


CLICK_FINDERS: tuple[ElementFinder, ...] = (
    SelectorFinder("aria-label", "[aria-label*={q} i]"),
    SelectorFinder("placeholder", "[placeholder*={q} i]"),
    TagTextFinder("button-text", "button"),
    TagTextFinder("link-text", "a"),
    SelectorFinder("input-value", "input[value*={q} i]"),
    TagTextFinder("label-text", "label"),
    OwnTextFinder(),
)

FIELD_FINDERS: tuple[ElementFinder, ...] = tuple(
    SelectorFinder(f"{tag}-{attr}", f"{tag}[{attr}*={{q}} i]", accept=_fillable)
    for tag in ("input", "textarea")
    for attr in ("name", "placeholder", "aria-label")
)


def locate(page: Page, text: str, finders: Sequence[ElementFinder]) -> ElementMatch | None:
    """First match in finder order. A finder that raises is skipped."""
    for finder in finders:
        try:
            match = finder.find(page, text)
        except Exception as exc:
            logger.warning("finder %s failed for %r: %s", getattr(finder, "name", finder), text, exc)
            continue
        if match is not None:
            logger.debug("located %s via %s", match.tag_name, match.strategy)
            return match
    return None
