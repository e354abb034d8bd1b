"""
Chat Pydantic schemas - gateway parameters/envelopes and session payloads
"""
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from portfolio.app.core.config import (
    CHAT_DEFAULT_MAX_TOKENS,
    CHAT_DEFAULT_TEMPERATURE,
    CHAT_DEFAULT_TOP_P,
    settings,
)

Role = Literal["system", "user", "assistant"]


class ChatMessageIn(BaseModel):
    role: Role
    content: str


class ChatParams(BaseModel):
    """Sampling parameters for one completion; unset fields take the gateway defaults."""
    model: Optional[str] = None
    temperature: float = CHAT_DEFAULT_TEMPERATURE
    max_tokens: int = CHAT_DEFAULT_MAX_TOKENS
    top_p: float = CHAT_DEFAULT_TOP_P
    stream: bool = False
    stop: Optional[Union[str, List[str]]] = None
    timeout_ms: int = Field(default_factory=lambda: settings.chat_default_timeout_ms, gt=0)

    model_config = {"extra": "ignore"}

    @field_validator("model", mode="before")
    @classmethod
    def _model_name(cls, v):
        return v if isinstance(v, str) else None

    @field_validator("temperature", "max_tokens", "top_p", "stream", "timeout_ms", mode="before")
    @classmethod
    def _null_is_default(cls, v, info):
        if v is not None:
            return v
        if info.field_name == "timeout_ms":
            return settings.chat_default_timeout_ms
        return cls.model_fields[info.field_name].default


class Usage(BaseModel):
    promptTokens: int = 0
    completionTokens: int = 0
    totalTokens: int = 0


class ChatResponse(BaseModel):
    message: str
    model: Optional[str] = None
    usage: Optional[Usage] = None


class ErrorEnvelope(BaseModel):
    error: str
    code: Optional[str] = None
    details: Optional[Any] = None


# --- Sessions ---

class DeviceInfo(BaseModel):
    userAgent: str = ""
    platform: str = ""
    screenSize: str = ""


class Feedback(BaseModel):
    helpful: bool
    timestamp: int
    messageId: str


class MessageOut(BaseModel):
    id: str
    role: Role
    content: str
    timestamp: int
    feedback: Optional[Feedback] = None


class SessionInitIn(BaseModel):
    userEmail: Optional[str] = None
    userName: Optional[str] = None
    deviceInfo: Optional[DeviceInfo] = None


class SessionInitOut(BaseModel):
    sessionId: str
    messages: List[MessageOut] = Field(default_factory=list)


class MessageSaveIn(BaseModel):
    id: Optional[str] = None
    role: Role
    content: str


class FeedbackIn(BaseModel):
    helpful: bool


def message_model_to_out(msg) -> MessageOut:
    return MessageOut(
        id=msg.message_id,
        role=msg.role,
        content=msg.content or "",
        timestamp=msg.timestamp,
        feedback=Feedback.model_validate(msg.feedback) if msg.feedback else None,
    )
