"""Local sqlite persistence for conversation history."""

import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from heyweb.core.logger import get_logger
from heyweb.schemas.chat import Message

DB_PATH = Path("data/history/heyweb.db")
logger = get_logger("heyweb.history_store")


def default_db_path() -> Path:
    custom_path = os.getenv("HEYWEB_HISTORY_DB_PATH", "").strip()
    if custom_path:
        return Path(custom_path)
    return DB_PATH


class HistoryStore:
    def __init__(self, db_path: str | Path | None = None) -> None:
        self.db_path = Path(db_path) if db_path is not None else default_db_path()
        self._create_tables()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _create_tables(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS messages (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    session_id TEXT NOT NULL,
                    role TEXT NOT NULL,
                    content TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_messages_session ON messages(session_id, id)")
            conn.commit()

    def append(self, session_id: str, message: Message) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO messages (session_id, role, content, created_at) VALUES (?, ?, ?, ?)",
                (session_id, message.role, message.content, message.timestamp.isoformat()),
            )
            conn.commit()

    def load(self, session_id: str) -> list[Message]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT role, content, created_at FROM messages WHERE session_id = ? ORDER BY id",
                (session_id,),
            ).fetchall()
        messages: list[Message] = []
        for role, content, created_at in rows:
            try:
                timestamp = datetime.fromisoformat(created_at)
            except ValueError:
                timestamp = datetime.now(timezone.utc)
            messages.append(Message(role=role, content=content, timestamp=timestamp))
        return messages

    def clear(self, session_id: str) -> int:
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM messages WHERE session_id = ?", (session_id,))
            conn.commit()
            removed = cur.rowcount
        logger.info("cleared %s messages from session %s", removed, session_id)
        return removed

    def list_sessions(self) -> list[dict[str, object]]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT session_id, COUNT(*), MAX(created_at)
                FROM messages GROUP BY session_id ORDER BY MAX(id) DESC
                """
            ).fetchall()
        return [
            {"session_id": session_id, "message_count": count, "updated_at": updated_at}
            for session_id, count, updated_at in rows
        ]
