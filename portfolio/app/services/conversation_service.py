"""
Admin view over stored chat conversations - listing with filters, export, bulk delete.
"""
from datetime import datetime, timezone
from typing import Literal

from sqlalchemy.orm import Session

from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.chat import ChatSession, Message
from portfolio.app.schemas.chat import message_model_to_out
from portfolio.app.utils.ids import now_ms

logger = get_logger("services.conversation")

DateRange = Literal["all", "week", "month"]
SortOrder = Literal["recent", "oldest", "longest", "shortest"]

_DAY_MS = 24 * 60 * 60 * 1000
_RANGE_MS = {"week": 7 * _DAY_MS, "month": 30 * _DAY_MS}


def device_type(user_agent: str) -> str:
    """Rough device class from a user agent string."""
    if not user_agent:
        return "unknown"
    ua = user_agent.lower()
    if "mobile" in ua:
        return "mobile"
    if "tablet" in ua or "ipad" in ua:
        return "tablet"
    if "desktop" in ua or "electron" in ua:
        return "desktop"
    return "desktop" if "mozilla" in ua else "unknown"


def _session_messages(db: Session, session_id: str) -> list[Message]:
    return (
        db.query(Message)
        .filter(Message.session_id == session_id)
        .order_by(Message.timestamp.asc(), Message.id.asc())
        .all()
    )


def _conversation_dict(session: ChatSession, messages: list[Message]) -> dict:
    device = session.device_info or {}
    duration = (
        session.end_time - session.start_time
        if session.end_time and session.start_time
        else None
    )
    return {
        "id": session.id,
        "startTime": session.start_time,
        "endTime": session.end_time,
        "userEmail": session.user_email,
        "userName": session.user_name,
        "deviceInfo": device,
        "lastMessage": session.last_message,
        "lastActivityTime": session.last_activity_time or session.start_time,
        "messages": [message_model_to_out(m).model_dump() for m in messages],
        "messageCount": len(messages),
        "duration": duration,
        "deviceType": device_type(device.get("userAgent", "")),
    }


def list_conversations(
    db: Session,
    search: str = "",
    date_range: DateRange = "all",
    sort: SortOrder = "recent",
) -> list[dict]:
    """All sessions with their messages, filtered and sorted for the admin screen."""
    sessions = db.query(ChatSession).order_by(ChatSession.start_time.desc()).all()
    conversations = [_conversation_dict(s, _session_messages(db, s.id)) for s in sessions]

    term = (search or "").strip().lower()
    if term:
        conversations = [
            c for c in conversations
            if any(term in (m["content"] or "").lower() for m in c["messages"])
            or term in (c["userEmail"] or "").lower()
            or term in (c["userName"] or "").lower()
        ]

    if date_range in _RANGE_MS:
        cutoff = now_ms() - _RANGE_MS[date_range]
        conversations = [c for c in conversations if c["startTime"] >= cutoff]

    if sort == "recent":
        conversations.sort(key=lambda c: c["lastActivityTime"], reverse=True)
    elif sort == "oldest":
        conversations.sort(key=lambda c: c["startTime"])
    elif sort == "longest":
        conversations.sort(key=lambda c: c["duration"] or 0, reverse=True)
    elif sort == "shortest":
        conversations.sort(key=lambda c: c["duration"] or 0)
    return conversations


def _iso(ms: int | None) -> str | None:
    if ms is None:
        return None
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).isoformat()


def export_conversation(db: Session, session_id: str) -> dict | None:
    """JSON-ready export of one session and its transcript."""
    session = db.get(ChatSession, session_id)
    if not session:
        return None
    conv = _conversation_dict(session, _session_messages(db, session_id))
    return {
        "session": {
            "id": conv["id"],
            "userName": conv["userName"],
            "userEmail": conv["userEmail"],
            "startTime": _iso(conv["startTime"]),
            "endTime": _iso(conv["endTime"]),
            "duration": conv["duration"],
            "deviceInfo": conv["deviceInfo"],
        },
        "messages": [
            {
                "role": m["role"],
                "content": m["content"],
                "timestamp": _iso(m["timestamp"]),
                "feedback": m["feedback"],
            }
            for m in conv["messages"]
        ],
    }


def delete_conversation(db: Session, session_id: str) -> bool:
    """Delete all messages of the session, then the session itself."""
    session = db.get(ChatSession, session_id)
    if not session:
        return False
    deleted = (
        db.query(Message)
        .filter(Message.session_id == session_id)
        .delete(synchronize_session=False)
    )
    db.delete(session)
    db.commit()
    logger.info("Conversation deleted session_id=%s messages=%d", session_id, deleted)
    return True
