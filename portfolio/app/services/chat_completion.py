"""
Completion gateway - forwards a validated transcript to the OpenAI chat completions API.

Non-streaming calls race the provider against `timeout_ms`; streaming calls are relayed
as server-sent events. Failures are classified into the stable error envelope by
classify_error().
"""
import asyncio
import json
import re
from typing import Any, AsyncIterator

from openai import AsyncOpenAI, RateLimitError

from portfolio.app.core.config import CHAT_ALLOWED_MODELS, settings
from portfolio.app.core.logging_config import get_logger
from portfolio.app.schemas.chat import ChatParams, ChatResponse, ErrorEnvelope, Usage

logger = get_logger("services.chat_completion")

_RATE_LIMIT_RE = re.compile(r"\brate\b|\blimit", re.IGNORECASE)


class CompletionTimeout(TimeoutError):
    """The provider call lost the race against timeout_ms."""


def resolve_model(requested: str | None) -> str:
    """Use the requested model if it is on the allow-list, otherwise the configured default."""
    if requested and requested in CHAT_ALLOWED_MODELS:
        return requested
    return settings.openai_model


def _get_openai_client() -> AsyncOpenAI:
    """Get configured OpenAI client. The key is read per request."""
    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY is not configured in environment variables")
    return AsyncOpenAI(api_key=settings.openai_api_key)


def _completion_kwargs(messages: list[dict], params: ChatParams, model: str) -> dict:
    kwargs: dict[str, Any] = {
        "model": model,
        "messages": [{"role": m["role"], "content": m["content"]} for m in messages],
        "temperature": params.temperature,
        "max_tokens": params.max_tokens,
        "top_p": params.top_p,
    }
    if params.stop is not None:
        kwargs["stop"] = params.stop
    return kwargs


def normalize_usage(usage: Any) -> Usage | None:
    """Map provider token usage onto {promptTokens, completionTokens, totalTokens}."""
    if usage is None:
        return None
    prompt = getattr(usage, "prompt_tokens", 0) or 0
    completion = getattr(usage, "completion_tokens", 0) or 0
    return Usage(promptTokens=prompt, completionTokens=completion, totalTokens=prompt + completion)


async def request_completion(messages: list[dict], params: ChatParams) -> ChatResponse:
    """Run one non-streaming completion, bounded by params.timeout_ms."""
    client = _get_openai_client()
    model = resolve_model(params.model)

    logger.info(
        "Completion requested model=%s messages=%d timeout_ms=%d",
        model,
        len(messages),
        params.timeout_ms,
    )
    try:
        resp = await asyncio.wait_for(
            client.chat.completions.create(**_completion_kwargs(messages, params, model)),
            timeout=params.timeout_ms / 1000,
        )
    except asyncio.TimeoutError:
        raise CompletionTimeout("Request timed out") from None

    text = None
    if resp is not None and resp.choices:
        text = resp.choices[0].message.content
    if not text:
        raise RuntimeError("Invalid or empty response from completion API")

    usage = normalize_usage(getattr(resp, "usage", None))
    logger.info(
        "Completion success model=%s chars=%d total_tokens=%s",
        model,
        len(text),
        usage.totalTokens if usage else None,
    )
    return ChatResponse(message=text, model=model, usage=usage)


def _sse(data: dict) -> str:
    return f"data: {json.dumps(data)}\n\n"


async def stream_completion(messages: list[dict], params: ChatParams) -> AsyncIterator[str]:
    """
    Open a streaming completion and return an iterator of SSE frames.

    Opening errors (missing key, provider rejection) raise here so the caller can
    map them to a normal error response; errors after the first frame are sent in-band.
    """
    client = _get_openai_client()
    model = resolve_model(params.model)
    stream = await client.chat.completions.create(
        **_completion_kwargs(messages, params, model), stream=True
    )

    async def events() -> AsyncIterator[str]:
        try:
            async for chunk in stream:
                delta = chunk.choices[0].delta.content if chunk.choices else None
                if delta:
                    yield _sse({"type": "content", "content": delta, "model": model})
            yield _sse({"type": "done", "model": model})
        except Exception as e:
            logger.warning("Completion stream failed model=%s error=%s", model, e)
            yield _sse({"type": "error", "error": str(e) or "Stream error occurred"})

    return events()


def classify_error(exc: Exception) -> tuple[int, ErrorEnvelope]:
    """Map an unhandled gateway failure to (HTTP status, error envelope)."""
    message = str(exc)
    if "timed out" in message:
        return 504, ErrorEnvelope(error="Request timed out", code="TIMEOUT")
    if "OPENAI_API_KEY" in message:
        return 500, ErrorEnvelope(error="API configuration error", code="CONFIG_ERROR")
    if isinstance(exc, RateLimitError) or _RATE_LIMIT_RE.search(message):
        return 429, ErrorEnvelope(error="Rate limit exceeded", code="RATE_LIMIT")
    return 500, ErrorEnvelope(error=message or "Unknown error occurred", code="SERVER_ERROR")
