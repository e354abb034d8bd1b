"""
Shape checks for inbound /api/chat bodies. Pure precondition: nothing is transformed.
"""
from typing import Any

from portfolio.app.core.config import CHAT_ALLOWED_ROLES


class ChatRequestError(ValueError):
    """Raised when a chat request body fails validation (VALIDATION_ERROR)."""


def validate_chat_request(body: Any) -> None:
    if body is None:
        raise ChatRequestError("Request body is missing")

    messages = body.get("messages") if isinstance(body, dict) else None
    if messages is None or not isinstance(messages, list):
        raise ChatRequestError("Invalid request format: messages array is required")

    if len(messages) == 0:
        raise ChatRequestError("Messages array cannot be empty")

    for index, msg in enumerate(messages):
        if not isinstance(msg, dict) or not msg.get("role") or not msg.get("content"):
            raise ChatRequestError(
                f"Message at index {index} is missing required fields (role, content)"
            )
        if msg["role"] not in CHAT_ALLOWED_ROLES:
            raise ChatRequestError(f"Invalid role at message index {index}: {msg['role']}")
