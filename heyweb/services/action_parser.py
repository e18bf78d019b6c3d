"""Extract structured actions from free-form assistant replies.

The completion service is only prompted to answer in natural language, so
actions are recovered afterwards with an ordered list of declarative
matchers. Every match of every matcher yields one action; a single reply can
therefore produce none, one or several (including repeats).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence

from heyweb.core.guardrails import normalize_url
from heyweb.core.logger import get_logger
from heyweb.schemas.actions import (
    Action,
    NavigationAction,
    SearchAction,
    SystemAction,
    WebAutomationAction,
)

logger = get_logger("heyweb.action_parser")

_FLAGS = re.IGNORECASE

_ROLE_NOUNS = r"(?:button|link|icon|tab|menu|field|box|option|item|checkbox)s?"
_ROLE_CUT_RE = re.compile(rf"^(.*?)\s+{_ROLE_NOUNS}\b.*$", _FLAGS)
_TRAILING_CLAUSE_RE = re.compile(
    r"\s+(?:for\s+(?:you|me)|so\s+(?:that|you)|and\s+then|then|now|please|right\s+away)\b.*$",
    _FLAGS,
)
_PURPOSE_CLAUSE_RE = re.compile(
    r"\s+to\s+(?:continue|proceed|confirm|finish|submit|send|save|start|open|go|log\s+in|sign\s+in)\b.*$",
    _FLAGS,
)
_TRAILING_PUNCT = ".,;:!?)\"'”’"


class ExtractionError(ValueError):
    """A matcher fired but its groups could not form a valid action."""


def _clean_phrase(raw: str | None) -> str:
    text = re.sub(r"\s+", " ", raw or "").strip()
    text = _TRAILING_CLAUSE_RE.sub("", text)
    return text.strip().strip(_TRAILING_PUNCT).strip()


def clean_target(raw: str | None) -> str:
    """Reduce "login button for you" to "login"."""
    text = _clean_phrase(raw)
    text = _PURPOSE_CLAUSE_RE.sub("", text).strip()
    match = _ROLE_CUT_RE.match(text)
    if match and match.group(1).strip():
        text = match.group(1)
    text = re.sub(r"^(?:the|an?)\b\s*", "", text.strip(), flags=_FLAGS)
    return text.strip()


def _required(value: str, what: str) -> str:
    if not value:
        raise ExtractionError(f"empty {what}")
    return value


@dataclass(frozen=True)
class ActionMatcher:
    """One entry of the action grammar: a pattern plus its variant builder."""

    name: str
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str]], Action]

    def extract(self, text: str) -> Iterator[Action]:
        for match in self.pattern.finditer(text):
            try:
                yield self.build(match)
            except Exception as exc:
                logger.warning(
                    "matcher %s skipped %r: %s", self.name, match.group(0)[:80], exc
                )


def _build_click(m: re.Match[str]) -> Action:
    return WebAutomationAction(command="click", target=_required(clean_target(m.group(1)), "click target"))


def _build_type(m: re.Match[str]) -> Action:
    return WebAutomationAction(
        command="type",
        target=_required(clean_target(m.group(1)), "field name"),
        value=_required(_clean_phrase(m.group(2)), "value"),
    )


def _build_type_into(m: re.Match[str]) -> Action:
    return WebAutomationAction(
        command="type",
        target=_required(clean_target(m.group(2)), "field name"),
        value=_required(m.group(1).strip(), "value"),
    )


def _build_scroll(m: re.Match[str]) -> Action:
    return WebAutomationAction(command="scroll", direction=m.group(1).lower())


def _build_history_nav(m: re.Match[str]) -> Action:
    word = (m.group(1) or m.group(2) or "").lower()
    target = "refresh" if word == "reload" else word
    return WebAutomationAction(command="navigate", target=_required(target, "navigation target"))


def _build_new_tab(m: re.Match[str]) -> Action:
    return WebAutomationAction(command="navigate", target="new_tab")


def _build_close_tab(m: re.Match[str]) -> Action:
    return WebAutomationAction(command="navigate", target="close_tab")


def _build_search(m: re.Match[str]) -> Action:
    return SearchAction(query=_required(_clean_phrase(m.group(1)), "query"))


def _build_engine_search(m: re.Match[str]) -> Action:
    return SearchAction(
        engine=m.group(1).lower(),
        query=_required(_clean_phrase(m.group(2)), "query"),
    )


def _build_open_website(m: re.Match[str]) -> Action:
    url = normalize_url(m.group(1).rstrip(_TRAILING_PUNCT))
    return NavigationAction(url=_required(url, "url"))


def _system(command: str) -> Callable[[re.Match[str]], Action]:
    def build(_m: re.Match[str]) -> Action:
        return SystemAction(command=command)

    return build


ACTION_MATCHERS: tuple[ActionMatcher, ...] = (
    ActionMatcher(
        "click",
        re.compile(r"\bclick\s+(?:on\s+)?(?:the\s+)?[\"'“]?([a-z0-9][a-z0-9 \t]*)", _FLAGS),
        _build_click,
    ),
    ActionMatcher(
        "type",
        re.compile(
            r"\btype\s+(?:in(?:to)?\s+)?(?:the\s+)?([a-z0-9][a-z0-9 ]*?)\s+as\s+([a-z0-9@._+\-][a-z0-9@._+\- ]*)",
            _FLAGS,
        ),
        _build_type,
    ),
    ActionMatcher(
        "type_into",
        re.compile(
            r"\btype\s+[\"'“]([^\"'”\n]+)[\"'”]\s+in(?:to)?\s+(?:the\s+)?([a-z0-9][a-z0-9 ]*)",
            _FLAGS,
        ),
        _build_type_into,
    ),
    ActionMatcher(
        "scroll",
        re.compile(r"\bscroll\s+(?:the\s+page\s+)?(up|down)\b", _FLAGS),
        _build_scroll,
    ),
    ActionMatcher(
        "history_navigation",
        re.compile(
            r"\b(?:(?:go|navigate)\s+(back|forward)|(refresh|reload)(?:\s+(?:the|this)\s+page)?)\b",
            _FLAGS,
        ),
        _build_history_nav,
    ),
    ActionMatcher(
        "new_tab",
        re.compile(r"\bopen\s+(?:a\s+)?new\s+tab\b", _FLAGS),
        _build_new_tab,
    ),
    ActionMatcher(
        "close_tab",
        re.compile(r"\bclose\s+(?:the\s+|this\s+)?(?:current\s+)?tab\b", _FLAGS),
        _build_close_tab,
    ),
    ActionMatcher(
        "search",
        re.compile(
            r"\bsearch(?:ing)?\s+(?:the\s+web\s+|online\s+)?for\s+([a-z0-9][a-z0-9 ]*)",
            _FLAGS,
        ),
        _build_search,
    ),
    ActionMatcher(
        "engine_search",
        re.compile(
            r"\b(?:search|find)\s+(?:on\s+)?(google|bing|youtube|wikipedia)\s+(?:for\s+)?([a-z0-9][a-z0-9 ]*)",
            _FLAGS,
        ),
        _build_engine_search,
    ),
    ActionMatcher(
        "open_website",
        re.compile(
            r"\b(?:open|visit|go\s+to|navigate\s+to)\s+(?:the\s+)?(?:website\s+|site\s+)?"
            r"((?:https?://)?[a-z0-9][a-z0-9.-]*\.[a-z]{2,}(?::\d+)?(?:/[^\s\"'<>]*)?)",
            _FLAGS,
        ),
        _build_open_website,
    ),
    ActionMatcher(
        "clear_history",
        re.compile(r"\bclear\s+(?:the\s+)?(?:conversation\s+|chat\s+)?history\b", _FLAGS),
        _system("clear_history"),
    ),
    ActionMatcher(
        "export_conversation",
        re.compile(r"\bexport\s+(?:the\s+|this\s+|our\s+)?(?:conversation|chat)\b", _FLAGS),
        _system("export_conversation"),
    ),
    ActionMatcher(
        "open_settings",
        re.compile(r"\bopen\s+(?:the\s+)?settings\b", _FLAGS),
        _system("open_settings"),
    ),
)


def parse_actions(
    response_text: str, matchers: Sequence[ActionMatcher] = ACTION_MATCHERS
) -> list[Action]:
    if not response_text:
        return []
    actions: list[Action] = []
    for matcher in matchers:
        actions.extend(matcher.extract(response_text))
    return actions


def dedupe_actions(actions: Iterable[Action]) -> list[Action]:
    """Drop repeated identical actions, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Action] = []
    for action in actions:
        key = action.dedupe_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(action)
    return unique
