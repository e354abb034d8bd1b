"""Tests for ChatSessionManager and the /api/chat/sessions endpoints"""
from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError

from portfolio.app.models.chat import ChatSession, Message
from portfolio.app.schemas.chat import DeviceInfo, MessageOut
from portfolio.app.services.chat_session_service import ChatSessionManager
from portfolio.app.utils.ids import new_id, now_ms


def _msg(role="user", content="hello"):
    return MessageOut(id=new_id(), role=role, content=content, timestamp=now_ms())


def test_init_anonymous_creates_session(db_session):
    manager = ChatSessionManager(db_session)
    device = DeviceInfo(userAgent="Mozilla/5.0", platform="Linux", screenSize="1280x720")
    session_id = manager.init_session(device)

    assert session_id
    assert manager.session_id == session_id
    row = db_session.get(ChatSession, session_id)
    assert row.user_email == "anonymous"
    assert row.start_time > 0
    assert row.end_time is None
    assert row.device_info == {"userAgent": "Mozilla/5.0", "platform": "Linux", "screenSize": "1280x720"}


def test_anonymous_never_resumes(db_session):
    first = ChatSessionManager(db_session, user_email="anonymous").init_session()
    second = ChatSessionManager(db_session, user_email="anonymous").init_session()
    assert first != second


def test_resume_loads_messages_in_timestamp_order(db_session):
    first = ChatSessionManager(db_session, user_email="visitor@example.com")
    session_id = first.init_session()
    contents = ["one", "two", "three"]
    for i, text in enumerate(contents):
        assert first.save_message(_msg("user" if i % 2 == 0 else "assistant", text), session_id)

    resumed = ChatSessionManager(db_session, user_email="visitor@example.com")
    assert resumed.init_session() == session_id
    assert [m.content for m in resumed.messages] == contents
    timestamps = [m.timestamp for m in resumed.messages]
    assert timestamps == sorted(timestamps)


def test_resume_picks_most_recent_session(db_session):
    db_session.add(ChatSession(id="old", start_time=1000, user_email="v@example.com"))
    db_session.add(ChatSession(id="new", start_time=2000, user_email="v@example.com"))
    db_session.commit()
    assert ChatSessionManager(db_session, user_email="v@example.com").init_session() == "new"


def test_save_message_updates_session_metadata(db_session):
    manager = ChatSessionManager(db_session)
    session_id = manager.init_session()
    message = _msg(content="What are your skills?")
    assert manager.save_message(message, session_id) is True

    row = db_session.query(Message).filter(Message.message_id == message.id).one()
    assert row.session_id == session_id
    session = db_session.get(ChatSession, session_id)
    assert session.last_message == "What are your skills?"
    assert session.last_activity_time == row.timestamp


def test_save_message_failure_is_swallowed_and_counted(db_session):
    manager = ChatSessionManager(db_session)
    session_id = manager.init_session()
    with patch.object(db_session, "commit", side_effect=SQLAlchemyError("disk full")):
        assert manager.save_message(_msg(), session_id) is False
    assert manager.persistence_failures == 1


def test_save_message_without_session_is_noop(db_session):
    manager = ChatSessionManager(db_session)
    assert manager.save_message(_msg(), None) is False
    assert db_session.query(Message).count() == 0


def test_save_message_to_unknown_session_writes_nothing(db_session):
    manager = ChatSessionManager(db_session)
    assert manager.save_message(_msg(), "no-such-session") is False
    assert manager.persistence_failures == 1
    assert db_session.query(Message).count() == 0
    assert db_session.query(ChatSession).count() == 0


def test_end_session_twice_keeps_first_end_time(db_session):
    manager = ChatSessionManager(db_session)
    session_id = manager.init_session()
    manager.end_session(session_id)
    first_end = db_session.get(ChatSession, session_id).end_time
    assert first_end is not None

    manager.end_session(session_id)
    assert db_session.get(ChatSession, session_id).end_time == first_end


def test_end_session_without_session_is_noop(db_session):
    ChatSessionManager(db_session).end_session()
    assert db_session.query(ChatSession).count() == 0


def test_feedback_round_trip(db_session, session_factory):
    manager = ChatSessionManager(db_session)
    session_id = manager.init_session()
    reply = _msg("assistant", "I know Python.")
    manager.messages.append(reply)
    manager.save_message(reply, session_id)

    assert manager.record_feedback(reply.id, session_id, True) is True
    assert manager.messages[0].feedback.helpful is True

    fresh = session_factory()
    try:
        row = fresh.query(Message).filter(Message.message_id == reply.id).one()
        assert row.feedback["helpful"] is True
        assert row.feedback["messageId"] == reply.id
    finally:
        fresh.close()


def test_feedback_remote_miss_keeps_local_state(db_session):
    manager = ChatSessionManager(db_session)
    session_id = manager.init_session()
    local = _msg("assistant", "never saved")
    manager.messages.append(local)

    assert manager.record_feedback(local.id, session_id, False) is False
    assert manager.messages[0].feedback.helpful is False


# --- REST surface ---


def test_sessions_api_flow(client, db_session):
    r = client.post(
        "/api/chat/sessions",
        json={"userEmail": "api@example.com"},
        headers={"User-Agent": "Mozilla/5.0 (iPhone) Mobile"},
    )
    assert r.status_code == 200
    session_id = r.json()["sessionId"]
    assert r.json()["messages"] == []

    r = client.post(f"/api/chat/sessions/{session_id}/messages", json={"id": "m1", "role": "user", "content": "hi"})
    assert r.json() == {"ok": True, "id": "m1"}

    r = client.post(f"/api/chat/sessions/{session_id}/messages/m1/feedback", json={"helpful": True})
    assert r.json() == {"ok": True}

    r = client.post(f"/api/chat/sessions/{session_id}/end")
    assert r.json() == {"ok": True}

    r = client.post("/api/chat/sessions", json={"userEmail": "api@example.com"})
    data = r.json()
    assert data["sessionId"] == session_id
    assert len(data["messages"]) == 1
    assert data["messages"][0]["feedback"]["helpful"] is True

    session = db_session.get(ChatSession, session_id)
    assert session.end_time is not None
    assert session.device_info["userAgent"] == "Mozilla/5.0 (iPhone) Mobile"


def test_sessions_api_rejects_unknown_role(client):
    r = client.post("/api/chat/sessions/abc/messages", json={"role": "tool", "content": "x"})
    assert r.status_code == 422


def test_sessions_api_store_failure_is_503(client):
    with patch("sqlalchemy.orm.Session.commit", side_effect=SQLAlchemyError("database is locked")):
        r = client.post("/api/chat/sessions", json={})
    assert r.status_code == 503
    assert r.json()["detail"] == "Chat session store unavailable"


def test_sessions_api_message_for_unknown_session(client, db_session):
    r = client.post("/api/chat/sessions/missing/messages", json={"id": "m1", "role": "user", "content": "hi"})
    assert r.json() == {"ok": False, "id": "m1"}
    assert db_session.query(Message).count() == 0
