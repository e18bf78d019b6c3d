"""Backend side of a chat turn: prompt assembly, completion call, action extraction."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from heyweb.core.guardrails import sanitize_text
from heyweb.core.logger import get_logger
from heyweb.schemas.chat import ChatContext, ChatResponse, WireMessage
from heyweb.services.action_parser import parse_actions
from heyweb.services.completion import CompletionClient

logger = get_logger("heyweb.chat_service")

CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1000
EMPTY_REPLY_FALLBACK = "Sorry, I could not process your request."

SYSTEM_PROMPT = """You are HeyWeb!, a voice-first AI assistant that helps users interact with websites and get information through natural conversation.

Your capabilities include:
1. Web Automation: Click buttons, fill forms, scroll pages, navigate browser
2. Search: Search the web, YouTube, Wikipedia, etc.
3. Information: Answer questions, provide explanations, give recommendations
4. System Actions: Clear history, export conversations, open settings

When users speak naturally, you should:
1. Understand their intent and context
2. Provide a helpful verbal response
3. Phrase what you will do with the action words below so it can be executed

Available action types:
- web_automation: { type: "web_automation", command: "click|type|scroll|navigate", target: "element_name", value: "text_to_type", direction: "up|down" }
- search: { type: "search", query: "search_term", engine: "google|bing|youtube|wikipedia" }
- navigation: { type: "navigation", url: "https://example.com", target: "_blank|_self" }
- system: { type: "system", command: "clear_history|export_conversation|open_settings" }

Examples:
User: "Show me the latest news about AI"
Response: "I'll search for latest artificial intelligence news."

User: "Click the login button"
Response: "I'll click the login button for you."

User: "Log me in as jane@example.com"
Response: "I'll type in email as jane@example.com."

User: "What's the weather like today?"
Response: "I'll search for current weather today."

Keep responses conversational and natural. Always provide a verbal response."""


def _format_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def build_system_prompt(context: ChatContext | None) -> str:
    prompt = SYSTEM_PROMPT
    if context is None:
        return prompt

    extra = ""
    if context.web_automation_enabled and context.active_tab is not None:
        extra += f"\nCurrent web page: {context.active_tab.url or 'Unknown'}"
        extra += "\nWeb automation is active on this page."
    if context.current_time is not None:
        extra += f"\nCurrent time: {_format_time(context.current_time)}"
    return prompt + extra


def build_chat_messages(
    messages: Sequence[WireMessage], context: ChatContext | None
) -> list[dict[str, str]]:
    payload = [{"role": "system", "content": build_system_prompt(context)}]
    for message in messages:
        content = sanitize_text(message.content).sanitized
        payload.append({"role": message.role, "content": content})
    return payload


def run_chat(
    client: CompletionClient,
    messages: Sequence[WireMessage],
    context: ChatContext | None = None,
) -> ChatResponse:
    """Run one chat turn. ``UpstreamError`` propagates to the route."""
    result = client.complete(
        build_chat_messages(messages, context),
        temperature=CHAT_TEMPERATURE,
        max_tokens=CHAT_MAX_TOKENS,
    )
    assistant = result.content or EMPTY_REPLY_FALLBACK
    if not result.content:
        logger.warning("completion returned no content; using fallback reply")

    actions = parse_actions(assistant)
    logger.info("chat turn: history=%s actions=%s", len(messages), len(actions))
    return ChatResponse(assistant=assistant, actions=actions, raw=result.raw)
