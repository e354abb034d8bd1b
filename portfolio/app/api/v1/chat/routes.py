"""
Completion gateway endpoint - POST /api/chat

Validates the transcript, applies default sampling parameters, calls the provider with a
timeout, and maps every outcome onto {message, model, usage} or {error, code, details}.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import ValidationError

from portfolio.app.core.logging_config import get_logger
from portfolio.app.schemas.chat import ChatParams
from portfolio.app.services.chat_completion import (
    classify_error,
    request_completion,
    stream_completion,
)
from portfolio.app.services.chat_validation import ChatRequestError, validate_chat_request

logger = get_logger("api.chat")
router = APIRouter()


def _error(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content)


@router.post("")
async def chat(request: Request):
    try:
        body = await request.json()
    except ValueError as e:
        return _error(400, {"error": "Invalid JSON in request body", "details": str(e) or "Unknown parsing error"})

    try:
        validate_chat_request(body)
        params = ChatParams.model_validate(body)
    except ChatRequestError as e:
        return _error(400, {"error": str(e), "code": "VALIDATION_ERROR"})
    except ValidationError as e:
        return _error(400, {
            "error": "Request validation failed",
            "code": "VALIDATION_ERROR",
            "details": e.errors(include_url=False, include_context=False, include_input=False),
        })

    messages = body["messages"]
    try:
        if params.stream:
            events = await stream_completion(messages, params)
            return StreamingResponse(
                events,
                media_type="text/event-stream",
                headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
            )
        result = await request_completion(messages, params)
        return result.model_dump(exclude_none=True)
    except Exception as e:
        logger.error("Chat API error: %s", e)
        status_code, envelope = classify_error(e)
        return _error(status_code, envelope.model_dump(exclude_none=True))
