"""Conversation state for one assistant session."""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Iterable

from heyweb.assistant.history_store import HistoryStore
from heyweb.core.logger import get_logger
from heyweb.schemas.chat import Message, Role

logger = get_logger("heyweb.session")

CONTEXT_WINDOW = 10


class ConversationSession:
    """Append-only message list, optionally mirrored to a ``HistoryStore``.

    The full history stays in memory; only the trailing window is sent to
    the backend with each request.
    """

    def __init__(
        self,
        session_id: str | None = None,
        store: HistoryStore | None = None,
        messages: Iterable[Message] = (),
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.store = store
        self._messages: list[Message] = list(messages)
        if store is not None and not self._messages:
            self._messages = store.load(self.session_id)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self._messages.append(message)
        if self.store is not None:
            self.store.append(self.session_id, message)
        return message

    def context_window(self, size: int = CONTEXT_WINDOW) -> list[Message]:
        if size <= 0:
            return []
        return self._messages[-size:]

    def clear(self) -> None:
        self._messages.clear()
        if self.store is not None:
            self.store.clear(self.session_id)
        logger.info("session %s history cleared", self.session_id)

    def to_export(self) -> list[dict[str, str]]:
        return [
            {"role": m.role, "content": m.content, "timestamp": m.timestamp.isoformat()}
            for m in self._messages
        ]

    def export(self, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(self.to_export(), ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info("exported %s messages to %s", len(self._messages), target)
        return target
