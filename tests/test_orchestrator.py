"""Tests for the conversation orchestrator."""

from typing import Any

import pytest

from heyweb.assistant.context import ContextBuilder
from heyweb.assistant.dispatcher import ActionDispatcher
from heyweb.assistant.orchestrator import (
    EMPTY_REPLY,
    ERROR_REPLY,
    ERROR_SPOKEN,
    ConversationOrchestrator,
    State,
)
from heyweb.assistant.session import ConversationSession
from heyweb.assistant.speech import SilentBackend, SpeechSynthesizer
from heyweb.assistant.voice_input import SpeechCaptureError
from heyweb.automation.browser import Browser
from heyweb.cli.client import HTTPStatusError, NetworkError
from heyweb.schemas.actions import WebAutomationAction
from heyweb.schemas.chat import Message


class FakeAPI:
    def __init__(self, reply: Any = None, error: Exception | None = None) -> None:
        self.reply = reply if reply is not None else {"assistant": "Done.", "actions": [], "raw": {}}
        self.error = error
        self.calls: list[tuple[str, dict]] = []
        self.during_call = None

    def post(self, path: str, json: dict | None = None, **kwargs) -> Any:
        self.calls.append((path, json))
        if self.during_call is not None:
            self.during_call()
        if self.error is not None:
            raise self.error
        return self.reply


class RecordingDispatcher(ActionDispatcher):
    def __init__(self) -> None:
        super().__init__()
        self.batches: list[list] = []

    def dispatch(self, actions, context):
        self.batches.append(list(actions))
        return []


def _orchestrator(api: FakeAPI, session: ConversationSession | None = None, **kwargs) -> ConversationOrchestrator:
    backend = SilentBackend()
    orch = ConversationOrchestrator(
        api=api,
        session=session or ConversationSession(messages=[]),
        dispatcher=kwargs.pop("dispatcher", RecordingDispatcher()),
        context_builder=kwargs.pop("context_builder", ContextBuilder()),
        speaker=SpeechSynthesizer(backend),
        **kwargs,
    )
    orch.backend = backend  # type: ignore[attr-defined]
    return orch


def _spoken(orch: ConversationOrchestrator) -> list[str]:
    orch.speaker.wait_idle()
    return orch.backend.spoken  # type: ignore[attr-defined]


def test_typed_turn_appends_dispatches_and_speaks() -> None:
    api = FakeAPI(
        {
            "assistant": "I'll click the login button for you.",
            "actions": [{"type": "web_automation", "command": "click", "target": "login"}],
            "raw": {},
        }
    )
    states: list[State] = []
    orch = _orchestrator(api, on_state_change=states.append)

    result = orch.handle_user_utterance("  log me in  ")

    assert result is not None and not result.failed
    assert [(m.role, m.content) for m in orch.session.messages] == [
        ("user", "log me in"),
        ("assistant", "I'll click the login button for you."),
    ]
    assert orch.dispatcher.batches == [[WebAutomationAction(command="click", target="login")]]
    assert _spoken(orch) == ["I'll click the login button for you."]
    assert states == [State.PROCESSING, State.IDLE]
    assert orch.state is State.IDLE
    assert api.calls[0][0] == "/api/chat"


def test_context_window_is_last_ten_of_long_history() -> None:
    history = [Message(role="user" if i % 2 else "assistant", content=f"m{i}") for i in range(1000)]
    api = FakeAPI()
    orch = _orchestrator(api, session=ConversationSession(messages=history))

    orch.handle_user_utterance("latest")

    sent = api.calls[0][1]["messages"]
    assert len(sent) == 10
    assert sent[-1] == {"role": "user", "content": "latest"}
    assert sent[0]["content"] == "m991"
    assert len(orch.session) == 1002


def test_payload_carries_camel_case_context() -> None:
    browser = Browser(loader=None)
    browser.new_tab("https://shop.test/")
    api = FakeAPI()
    orch = _orchestrator(api, context_builder=ContextBuilder(browser, web_automation_enabled=True))

    orch.handle_user_utterance("hello")

    context = api.calls[0][1]["context"]
    assert context["webAutomationEnabled"] is True
    assert context["activeTab"]["url"] == "https://shop.test/"
    assert "currentTime" in context
    assert context["userAgent"].startswith("heyweb/")


def test_identical_actions_are_deduped_per_turn() -> None:
    click = {"type": "web_automation", "command": "click", "target": "login"}
    api = FakeAPI({"assistant": "ok", "actions": [click, click, {"type": "bogus"}], "raw": {}})
    orch = _orchestrator(api)

    orch.handle_user_utterance("go")

    assert orch.dispatcher.batches == [[WebAutomationAction(command="click", target="login")]]


@pytest.mark.parametrize(
    "error",
    [NetworkError("connection refused"), HTTPStatusError("HTTP 500", status_code=500)],
)
def test_failures_append_fallback_and_speak_short_error(error: Exception) -> None:
    orch = _orchestrator(FakeAPI(error=error))

    result = orch.handle_user_utterance("hello")

    assert result is not None and result.failed
    assert orch.session.messages[-1].content == ERROR_REPLY
    assert _spoken(orch) == [ERROR_SPOKEN]
    assert orch.dispatcher.batches == []
    assert orch.state is State.IDLE


def test_malformed_body_uses_fallback() -> None:
    orch = _orchestrator(FakeAPI(reply=["not", "a", "dict"]))
    result = orch.handle_user_utterance("hello")
    assert result.failed
    assert orch.session.messages[-1].content == ERROR_REPLY


def test_empty_assistant_text_uses_default_reply() -> None:
    orch = _orchestrator(FakeAPI({"assistant": "", "actions": []}))
    result = orch.handle_user_utterance("hello")
    assert result.assistant == EMPTY_REPLY


def test_blank_utterance_is_ignored() -> None:
    api = FakeAPI()
    orch = _orchestrator(api)
    assert orch.handle_user_utterance("   ") is None
    assert api.calls == []
    assert len(orch.session) == 0


def test_second_utterance_during_processing_is_rejected() -> None:
    api = FakeAPI()
    orch = _orchestrator(api)
    nested: list = []
    api.during_call = lambda: nested.append(orch.handle_user_utterance("interrupting"))

    result = orch.handle_user_utterance("first")

    assert result is not None
    assert nested == [None]
    assert len(api.calls) == 1
    assert [m.content for m in orch.session.messages] == ["first", "Done."]


def test_voice_turn_state_machine() -> None:
    states: list[State] = []
    orch = _orchestrator(FakeAPI(), on_state_change=states.append)

    assert orch.start_listening() is True
    assert orch.start_listening() is False
    assert orch.on_transcript("what is", final=False) is None
    assert orch.transcript == "what is"
    result = orch.on_transcript("what is new", final=True)

    assert result is not None
    assert states == [State.LISTENING, State.PROCESSING, State.IDLE]
    assert orch.session.messages[0].content == "what is new"


def test_transcript_ignored_when_not_listening() -> None:
    api = FakeAPI()
    orch = _orchestrator(api)
    assert orch.on_transcript("hello", final=True) is None
    assert api.calls == []


@pytest.mark.parametrize(
    "code,expected",
    [
        ("not-allowed", "Microphone access denied"),
        ("no-speech", "No speech detected"),
        ("audio-capture", "Audio capture error"),
        ("network", "Network error"),
        ("aborted", "Speech recognition error: aborted"),
    ],
)
def test_recognition_errors_notify_and_return_to_idle(code: str, expected: str) -> None:
    notices: list[str] = []
    orch = _orchestrator(FakeAPI(), notifier=notices.append)
    orch.start_listening()

    orch.on_recognition_error(code)

    assert len(notices) == 1 and notices[0].startswith(expected)
    assert orch.state is State.IDLE


def test_cancel_listening() -> None:
    orch = _orchestrator(FakeAPI())
    orch.start_listening()
    orch.cancel_listening()
    assert orch.state is State.IDLE


class _Listener:
    def __init__(self, text: str = "", code: str | None = None) -> None:
        self.text = text
        self.code = code

    def capture(self) -> str:
        if self.code:
            raise SpeechCaptureError(self.code)
        return self.text


def test_listen_once_runs_a_turn_or_reports_capture_error() -> None:
    notices: list[str] = []
    api = FakeAPI()
    orch = _orchestrator(api, notifier=notices.append)

    assert orch.listen_once(_Listener(code="no-speech")) is None
    assert notices == ["No speech detected."]
    assert orch.state is State.IDLE

    result = orch.listen_once(_Listener(text="scroll down"))
    assert result is not None
    assert orch.last_utterance == "scroll down"
    assert len(api.calls) == 1
