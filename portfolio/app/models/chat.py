"""
Chat session and message documents.
Times are epoch milliseconds; messages keep the client-generated id in message_id.
"""
from sqlalchemy import JSON, BigInteger, Column, ForeignKey, Integer, String, Text

from portfolio.app.core.config import ANONYMOUS_EMAIL
from portfolio.app.db.base import Base
from portfolio.app.utils.ids import new_id


class ChatSession(Base):
    __tablename__ = "chat_sessions"

    id = Column(String(36), primary_key=True, default=new_id)

    start_time = Column(BigInteger, nullable=False)
    end_time = Column(BigInteger, nullable=True)
    user_email = Column(String(255), default=ANONYMOUS_EMAIL, nullable=False, index=True)
    user_name = Column(String(255), nullable=True)
    device_info = Column(JSON, default=dict)  # {userAgent, platform, screenSize}

    last_message = Column(Text, nullable=True)
    last_activity_time = Column(BigInteger, nullable=True)


class Message(Base):
    __tablename__ = "messages"

    # Insertion order breaks ties between messages saved in the same millisecond
    id = Column(Integer, primary_key=True, index=True)
    message_id = Column(String(64), nullable=False, index=True)
    session_id = Column(String(36), ForeignKey("chat_sessions.id"), nullable=False, index=True)

    role = Column(String(20), nullable=False)  # system | user | assistant
    content = Column(Text, default="")
    timestamp = Column(BigInteger, nullable=False)
    feedback = Column(JSON, nullable=True)  # {helpful, timestamp, messageId}
