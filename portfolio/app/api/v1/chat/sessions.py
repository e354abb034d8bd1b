"""
Chat session endpoints for browser clients - init/resume, save message, end, feedback.
Message, end and feedback writes are best-effort and report failure as {"ok": false};
a session that cannot be started is a 503.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from portfolio.app.core.dependencies import get_db
from portfolio.app.schemas.chat import (
    DeviceInfo,
    FeedbackIn,
    MessageOut,
    MessageSaveIn,
    SessionInitIn,
    SessionInitOut,
)
from portfolio.app.services.chat_session_service import ChatSessionManager
from portfolio.app.utils.ids import new_id, now_ms

router = APIRouter()


@router.post("", response_model=SessionInitOut)
def init_session(
    payload: SessionInitIn,
    request: Request,
    db: Session = Depends(get_db),
):
    """Resume the latest session for userEmail or start a new one."""
    manager = ChatSessionManager(db, user_email=payload.userEmail, user_name=payload.userName)
    device = payload.deviceInfo or DeviceInfo(userAgent=request.headers.get("user-agent", ""))
    session_id = manager.init_session(device)
    if session_id is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Chat session store unavailable",
        )
    return SessionInitOut(sessionId=session_id, messages=manager.messages)


@router.post("/{session_id}/messages")
def save_message(
    session_id: str,
    payload: MessageSaveIn,
    db: Session = Depends(get_db),
) -> dict:
    manager = ChatSessionManager(db)
    message = MessageOut(
        id=payload.id or new_id(),
        role=payload.role,
        content=payload.content,
        timestamp=now_ms(),
    )
    ok = manager.save_message(message, session_id)
    return {"ok": ok, "id": message.id}


@router.post("/{session_id}/end")
def end_session(session_id: str, db: Session = Depends(get_db)) -> dict:
    ChatSessionManager(db).end_session(session_id)
    return {"ok": True}


@router.post("/{session_id}/messages/{message_id}/feedback")
def record_feedback(
    session_id: str,
    message_id: str,
    payload: FeedbackIn,
    db: Session = Depends(get_db),
) -> dict:
    ok = ChatSessionManager(db).record_feedback(message_id, session_id, payload.helpful)
    return {"ok": ok}
