"""Conversation orchestrator: one user turn from utterance to spoken reply.

State machine:
    IDLE -> LISTENING -> PROCESSING -> IDLE   (voice)
    IDLE -> PROCESSING -> IDLE                (typed)

At most one turn is processed at a time; an utterance that arrives while
a turn is in flight is rejected.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from heyweb.assistant.context import ContextBuilder
from heyweb.assistant.dispatcher import ActionDispatcher, DispatchOutcome
from heyweb.assistant.session import CONTEXT_WINDOW, ConversationSession
from heyweb.assistant.speech import SpeechSynthesizer
from heyweb.assistant.voice_input import SpeechCaptureError, describe_recognition_error
from heyweb.cli.client import APIClient, APIError
from heyweb.core.logger import get_logger
from heyweb.executors.base import ExecutorContext
from heyweb.schemas.actions import coerce_action
from heyweb.services.action_parser import dedupe_actions

logger = get_logger("heyweb.orchestrator")

ERROR_REPLY = "I encountered an error processing your request. Please try again."
ERROR_SPOKEN = "I encountered an error. Please try again."
EMPTY_REPLY = "Sorry, I could not process your request."

Notifier = Callable[[str], None]


class State(Enum):
    IDLE = auto()
    LISTENING = auto()
    PROCESSING = auto()


@dataclass(frozen=True)
class TurnResult:
    assistant: str
    actions: list[Any] = field(default_factory=list)
    outcomes: list[DispatchOutcome] = field(default_factory=list)
    failed: bool = False


def _log_notification(message: str) -> None:
    logger.info("notify: %s", message)


class ConversationOrchestrator:
    def __init__(
        self,
        api: APIClient,
        session: ConversationSession,
        dispatcher: ActionDispatcher,
        context_builder: ContextBuilder,
        speaker: SpeechSynthesizer | None = None,
        notifier: Notifier | None = None,
        export_dir: Path | None = None,
        on_open_settings: Callable[[], None] | None = None,
        on_state_change: Callable[[State], None] | None = None,
        context_window: int = CONTEXT_WINDOW,
    ) -> None:
        self.api = api
        self.session = session
        self.dispatcher = dispatcher
        self.context_builder = context_builder
        self.speaker = speaker or SpeechSynthesizer()
        self.notifier = notifier or _log_notification
        self.export_dir = export_dir or Path.cwd()
        self.on_open_settings = on_open_settings
        self.on_state_change = on_state_change
        self.context_window = context_window
        self.transcript = ""
        self.last_utterance = ""
        self._state = State.IDLE
        self._turn_lock = threading.Lock()

    @property
    def state(self) -> State:
        return self._state

    @state.setter
    def state(self, new_state: State) -> None:
        old = self._state
        self._state = new_state
        if old is not new_state:
            logger.info("orchestrator: %s -> %s", old.name, new_state.name)
        if self.on_state_change:
            try:
                self.on_state_change(new_state)
            except Exception as exc:
                logger.warning("state listener failed: %s", exc)

    @property
    def web_automation_enabled(self) -> bool:
        return self.context_builder.web_automation_enabled

    @web_automation_enabled.setter
    def web_automation_enabled(self, enabled: bool) -> None:
        self.context_builder.web_automation_enabled = enabled

    def executor_context(self) -> ExecutorContext:
        return ExecutorContext(
            browser=self.context_builder.browser,
            session=self.session,
            web_automation_enabled=self.context_builder.web_automation_enabled,
            export_dir=self.export_dir,
            on_open_settings=self.on_open_settings,
        )

    def build_payload(self) -> dict[str, Any]:
        context = self.context_builder.build()
        return {
            "messages": [m.to_wire() for m in self.session.context_window(self.context_window)],
            "context": context.model_dump(mode="json", by_alias=True, exclude_none=True),
        }

    def handle_user_utterance(self, text: str) -> Optional[TurnResult]:
        text = (text or "").strip()
        if not text:
            if self.state is State.LISTENING:
                self.state = State.IDLE
            return None
        if not self._turn_lock.acquire(blocking=False):
            logger.warning("turn already in progress; ignoring %r", text[:80])
            return None
        try:
            self.transcript = ""
            self.last_utterance = text
            self.state = State.PROCESSING
            return self._run_turn(text)
        finally:
            self.state = State.IDLE
            self._turn_lock.release()

    def _run_turn(self, text: str) -> TurnResult:
        self.session.append("user", text)
        try:
            data = self.api.post("/api/chat", json=self.build_payload())
            assistant, actions = self._read_reply(data)
        except (APIError, ValueError) as exc:
            logger.error("chat request failed: %s", exc)
            self.session.append("assistant", ERROR_REPLY)
            self.speaker.speak(ERROR_SPOKEN)
            return TurnResult(assistant=ERROR_REPLY, failed=True)

        self.session.append("assistant", assistant)
        actions = dedupe_actions(actions)
        outcomes = self.dispatcher.dispatch(actions, self.executor_context())
        self.speaker.speak(assistant)
        return TurnResult(assistant=assistant, actions=actions, outcomes=outcomes)

    def _read_reply(self, data: Any) -> tuple[str, list[Any]]:
        if not isinstance(data, dict):
            raise ValueError(f"unexpected chat response: {type(data).__name__}")
        assistant = data.get("assistant")
        if not isinstance(assistant, str) or not assistant.strip():
            assistant = EMPTY_REPLY

        raw_actions = data.get("actions") or []
        if not isinstance(raw_actions, list):
            raise ValueError("chat response actions is not a list")
        actions: list[Any] = []
        for raw in raw_actions:
            try:
                actions.append(coerce_action(raw))
            except ValidationError:
                logger.warning("dropping unrecognized action %r", raw)
        return assistant, actions

    # Voice path

    def start_listening(self) -> bool:
        if self.state is not State.IDLE:
            logger.info("cannot listen while %s", self.state.name)
            return False
        self.transcript = ""
        self.state = State.LISTENING
        return True

    def on_transcript(self, text: str, final: bool = False) -> Optional[TurnResult]:
        if self.state is not State.LISTENING:
            return None
        self.transcript = text
        if not final:
            return None
        return self.handle_user_utterance(text)

    def on_recognition_error(self, code: str) -> str:
        message = describe_recognition_error(code)
        logger.warning("speech recognition error: %s", code)
        self.notifier(message)
        self.transcript = ""
        self.state = State.IDLE
        return message

    def cancel_listening(self) -> None:
        if self.state is State.LISTENING:
            self.transcript = ""
            self.state = State.IDLE

    def listen_once(self, listener: Any) -> Optional[TurnResult]:
        """Capture one utterance with ``listener.capture()`` and process it."""
        if not self.start_listening():
            return None
        try:
            text = listener.capture()
        except SpeechCaptureError as exc:
            self.on_recognition_error(exc.code)
            return None
        return self.on_transcript(text, final=True)
