"""Tests for the admin conversations endpoints"""
import pytest

from portfolio.app.models.chat import ChatSession, Message
from portfolio.app.services.conversation_service import device_type
from portfolio.app.utils.ids import now_ms

DAY_MS = 24 * 60 * 60 * 1000


@pytest.fixture
def conversations(db_session):
    now = now_ms()
    db_session.add_all([
        ChatSession(
            id="s-short",
            start_time=now - 1000,
            end_time=now,
            user_email="ann@example.com",
            user_name="Ann",
            device_info={"userAgent": "Mozilla/5.0 (iPhone) Mobile Safari"},
            last_activity_time=now,
        ),
        ChatSession(
            id="s-long",
            start_time=now - 60 * DAY_MS,
            end_time=now - 60 * DAY_MS + 600000,
            user_email="anonymous",
            device_info={"userAgent": "Mozilla/5.0 (X11; Linux x86_64)"},
            last_activity_time=now - 60 * DAY_MS + 600000,
        ),
    ])
    db_session.add_all([
        Message(message_id="m1", session_id="s-short", role="user", content="What are your skills?", timestamp=now - 900),
        Message(message_id="m2", session_id="s-short", role="assistant", content="Python and Go.", timestamp=now - 800),
        Message(message_id="m3", session_id="s-long", role="user", content="Tell me about Kubernetes", timestamp=now - 60 * DAY_MS + 10),
    ])
    db_session.commit()


def test_list_conversations_recent_first(admin_client, conversations):
    data = admin_client.get("/api/admin/conversations").json()
    assert [c["id"] for c in data] == ["s-short", "s-long"]

    short = data[0]
    assert short["messageCount"] == 2
    assert short["duration"] == 1000
    assert short["deviceType"] == "mobile"
    assert [m["id"] for m in short["messages"]] == ["m1", "m2"]
    assert data[1]["deviceType"] == "desktop"


@pytest.mark.parametrize(
    "sort, expected",
    [
        ("oldest", ["s-long", "s-short"]),
        ("longest", ["s-long", "s-short"]),
        ("shortest", ["s-short", "s-long"]),
    ],
)
def test_list_conversations_sort(admin_client, conversations, sort, expected):
    data = admin_client.get("/api/admin/conversations", params={"sort": sort}).json()
    assert [c["id"] for c in data] == expected


def test_list_conversations_search_matches_content_and_user(admin_client, conversations):
    by_content = admin_client.get("/api/admin/conversations", params={"search": "kubernetes"}).json()
    assert [c["id"] for c in by_content] == ["s-long"]

    by_name = admin_client.get("/api/admin/conversations", params={"search": "ann"}).json()
    assert [c["id"] for c in by_name] == ["s-short"]


def test_list_conversations_date_range(admin_client, conversations):
    data = admin_client.get("/api/admin/conversations", params={"range": "week"}).json()
    assert [c["id"] for c in data] == ["s-short"]


def test_list_conversations_rejects_unknown_sort(admin_client, conversations):
    assert admin_client.get("/api/admin/conversations", params={"sort": "random"}).status_code == 422


def test_export_conversation(admin_client, conversations):
    data = admin_client.get("/api/admin/conversations/s-short/export").json()
    assert data["session"]["userName"] == "Ann"
    assert data["session"]["startTime"].endswith("+00:00")
    assert [m["role"] for m in data["messages"]] == ["user", "assistant"]
    assert admin_client.get("/api/admin/conversations/nope/export").status_code == 404


def test_delete_conversation_removes_messages(admin_client, conversations, session_factory):
    assert admin_client.delete("/api/admin/conversations/s-short").json() == {"ok": True}

    fresh = session_factory()
    try:
        assert fresh.get(ChatSession, "s-short") is None
        assert fresh.query(Message).filter(Message.session_id == "s-short").count() == 0
        assert fresh.query(Message).count() == 1
    finally:
        fresh.close()

    assert admin_client.delete("/api/admin/conversations/s-short").status_code == 404


@pytest.mark.parametrize(
    "ua, expected",
    [
        ("", "unknown"),
        ("Mozilla/5.0 (Linux; Android 14) Mobile", "mobile"),
        ("Mozilla/5.0 (iPad; CPU OS 17_0)", "tablet"),
        ("Mozilla/5.0 (Windows NT 10.0; Win64; x64)", "desktop"),
        ("curl/8.4.0", "unknown"),
    ],
)
def test_device_type(ua, expected):
    assert device_type(ua) == expected
