import json

from heyweb.assistant.history_store import HistoryStore, default_db_path
from heyweb.assistant.session import ConversationSession


def test_session_mirrors_messages_to_store(tmp_path) -> None:
    store = HistoryStore(tmp_path / "h.db")
    session = ConversationSession(session_id="s1", store=store)
    session.append("user", "hello")
    session.append("assistant", "hi!")

    reloaded = ConversationSession(session_id="s1", store=store)
    assert [(m.role, m.content) for m in reloaded.messages] == [("user", "hello"), ("assistant", "hi!")]
    assert store.list_sessions()[0]["session_id"] == "s1"
    assert store.list_sessions()[0]["message_count"] == 2


def test_clear_removes_only_that_session(tmp_path) -> None:
    store = HistoryStore(tmp_path / "h.db")
    a = ConversationSession(session_id="a", store=store)
    b = ConversationSession(session_id="b", store=store)
    a.append("user", "one")
    b.append("user", "two")

    a.clear()

    assert len(a) == 0
    assert store.load("a") == []
    assert [m.content for m in store.load("b")] == ["two"]


def test_context_window_bounds(tmp_path) -> None:
    session = ConversationSession(messages=[])
    for i in range(25):
        session.append("user", f"m{i}")
    assert [m.content for m in session.context_window()] == [f"m{i}" for i in range(15, 25)]
    assert [m.content for m in session.context_window(3)] == ["m22", "m23", "m24"]
    assert session.context_window(0) == []
    assert len(session) == 25


def test_export_writes_json(tmp_path) -> None:
    session = ConversationSession(messages=[])
    session.append("user", "héllo")
    path = session.export(tmp_path / "out" / "heyweb-conversation.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data[0]["role"] == "user"
    assert data[0]["content"] == "héllo"
    assert "timestamp" in data[0]


def test_default_db_path_from_env(tmp_path) -> None:
    assert default_db_path() == tmp_path / "history.db"
