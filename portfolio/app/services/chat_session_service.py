"""
Chat session manager - find-or-create a session, persist messages, end sessions, record feedback.

Persistence here is a best-effort side channel: the chat must never block or fail because a
write failed. Every write failure is logged, rolled back and counted in
`persistence_failures` instead of being raised.

Find-or-create is not transactional. Two managers for the same email can both miss the
lookup and each create a session.
"""
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio.app.core.config import ANONYMOUS_EMAIL
from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.chat import ChatSession, Message
from portfolio.app.schemas.chat import DeviceInfo, Feedback, MessageOut, message_model_to_out
from portfolio.app.utils.ids import new_id, now_ms

logger = get_logger("services.chat_session")


class ChatSessionManager:
    """Holds the transient copy of one visitor's chat (session id + ordered messages)."""

    def __init__(self, db: Session, user_email: str | None = None, user_name: str | None = None):
        self.db = db
        self.user_email = (user_email or "").strip() or None
        self.user_name = (user_name or "").strip() or None
        self.session_id: str | None = None
        self.messages: list[MessageOut] = []
        self.persistence_failures = 0

    def _record_failure(self, action: str, error: Exception, **context: Any) -> None:
        self.persistence_failures += 1
        try:
            self.db.rollback()
        except SQLAlchemyError as rollback_error:
            logger.debug("Rollback after %s failed: %s", action, rollback_error)
        logger.error(
            "Chat persistence failed action=%s failures=%d context=%s error=%s",
            action,
            self.persistence_failures,
            context,
            error,
        )

    def init_session(self, device_info: DeviceInfo | dict | None = None) -> str | None:
        """
        Resume the most recent session for a known email (loading its messages in
        timestamp order) or create a new one. Returns the session id, or None when
        the store could not be reached.
        """
        try:
            if self.user_email and self.user_email != ANONYMOUS_EMAIL:
                recent = (
                    self.db.query(ChatSession)
                    .filter(ChatSession.user_email == self.user_email)
                    .order_by(ChatSession.start_time.desc())
                    .first()
                )
                if recent:
                    rows = (
                        self.db.query(Message)
                        .filter(Message.session_id == recent.id)
                        .order_by(Message.timestamp.asc(), Message.id.asc())
                        .all()
                    )
                    self.session_id = recent.id
                    self.messages = [message_model_to_out(r) for r in rows]
                    logger.info(
                        "Chat session resumed session_id=%s email=%s messages=%d",
                        recent.id,
                        self.user_email,
                        len(self.messages),
                    )
                    return recent.id

            if isinstance(device_info, DeviceInfo):
                device = device_info.model_dump()
            else:
                device = DeviceInfo(**(device_info or {})).model_dump()

            session = ChatSession(
                id=new_id(),
                start_time=now_ms(),
                user_email=self.user_email or ANONYMOUS_EMAIL,
                user_name=self.user_name,
                device_info=device,
            )
            self.db.add(session)
            self.db.commit()
            self.session_id = session.id
            logger.info("Chat session created session_id=%s email=%s", session.id, session.user_email)
            return session.id
        except SQLAlchemyError as e:
            self._record_failure("init_session", e, email=self.user_email)
            return None

    def save_message(self, message: MessageOut, session_id: str | None) -> bool:
        """
        Append the message under session_id with a store-assigned timestamp, then
        update the session's lastMessage/lastActivityTime. The two writes are
        separate commits. Returns False (never raises) on failure.
        """
        if not session_id:
            logger.warning("Chat message not saved: no session message_id=%s", message.id)
            return False
        try:
            session = self.db.get(ChatSession, session_id)
            if session is None:
                raise LookupError(f"chat session {session_id} not found")
            timestamp = now_ms()
            self.db.add(
                Message(
                    message_id=message.id,
                    session_id=session_id,
                    role=message.role,
                    content=message.content,
                    timestamp=timestamp,
                    feedback=message.feedback.model_dump() if message.feedback else None,
                )
            )
            self.db.commit()

            session.last_message = message.content
            session.last_activity_time = timestamp
            self.db.commit()
            return True
        except (SQLAlchemyError, LookupError) as e:
            self._record_failure("save_message", e, session_id=session_id, message_id=message.id)
            return False

    def end_session(self, session_id: str | None = None) -> None:
        """Stamp endTime on the session. No-op without a session id or if already ended."""
        sid = session_id or self.session_id
        if not sid:
            return
        try:
            session = self.db.get(ChatSession, sid)
            if session is None or session.end_time is not None:
                return
            session.end_time = now_ms()
            self.db.commit()
            logger.info("Chat session ended session_id=%s", sid)
        except SQLAlchemyError as e:
            self._record_failure("end_session", e, session_id=sid)

    def record_feedback(self, message_id: str, session_id: str | None, helpful: bool) -> bool:
        """
        Attach feedback locally first, then patch the stored message found by
        (message_id, session_id). Local and stored state may diverge if the patch fails.
        """
        feedback = Feedback(helpful=helpful, timestamp=now_ms(), messageId=message_id)
        for msg in self.messages:
            if msg.id == message_id:
                msg.feedback = feedback

        if not session_id:
            return False
        try:
            row = (
                self.db.query(Message)
                .filter(Message.message_id == message_id, Message.session_id == session_id)
                .first()
            )
            if row is None:
                logger.warning(
                    "Feedback target not found message_id=%s session_id=%s", message_id, session_id
                )
                return False
            row.feedback = feedback.model_dump()
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            self._record_failure("record_feedback", e, session_id=session_id, message_id=message_id)
            return False
