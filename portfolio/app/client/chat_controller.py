"""
Chat controller - the conversation state behind the chat widget.

Drives the completion gateway over HTTP and persists every message through a
ChatSessionManager. Errors never surface as exceptions: a failed completion becomes an
assistant message in the transcript, and persistence failures are counted by the manager.
"""
from typing import Literal, Sequence

import httpx

from portfolio.app.core.config import settings
from portfolio.app.core.logging_config import get_logger
from portfolio.app.schemas.chat import DeviceInfo, MessageOut
from portfolio.app.schemas.content import ProfilePayload, ProjectPayload, SkillPayload
from portfolio.app.services.chat_prompt import generate_system_prompt
from portfolio.app.services.chat_session_service import ChatSessionManager
from portfolio.app.utils.ids import new_id, now_ms

logger = get_logger("client.chat")

Mode = Literal["minimized", "open"]

FALLBACK_REPLY = "I'm sorry, I'm having trouble connecting right now. Please try again later."
SUGGESTED_QUESTIONS = (
    "What are your skills?",
    "Tell me about your featured project",
    "What technologies do you work with?",
    "How can I get in touch?",
)


class ChatGatewayError(Exception):
    """The gateway answered with an error envelope or could not be reached."""


class ChatController:
    def __init__(
        self,
        session_manager: ChatSessionManager,
        http_client: httpx.Client | None = None,
        profile: ProfilePayload | None = None,
        projects: Sequence[ProjectPayload] = (),
        skills: Sequence[SkillPayload] = (),
        device_info: DeviceInfo | None = None,
        chat_path: str = "/api/chat",
    ):
        self.session_manager = session_manager
        self.http_client = http_client or httpx.Client(
            base_url=settings.gateway_base_url, timeout=settings.http_request_timeout
        )
        self.profile = profile
        self.projects = list(projects)
        self.skills = list(skills)
        self.device_info = device_info or DeviceInfo()
        self.chat_path = chat_path

        self.mode: Mode = "minimized"
        self.input = ""
        self.is_loading = False

    @property
    def messages(self) -> list[MessageOut]:
        return self.session_manager.messages

    @property
    def session_id(self) -> str | None:
        return self.session_manager.session_id

    def open(self) -> None:
        """minimized -> open; starts or resumes a session if none is held yet."""
        if self.mode == "open":
            return
        self.mode = "open"
        if not self.session_manager.session_id:
            self.session_manager.init_session(self.device_info)

    def close(self) -> None:
        """open -> minimized; stamps the session's end time first."""
        if self.mode == "minimized":
            return
        self.session_manager.end_session()
        self.mode = "minimized"

    def submit(self, text: str | None = None) -> MessageOut | None:
        """
        Send the current input (or `text`). Returns the assistant reply, or None when the
        submission was rejected (blank input or a request already in flight).
        """
        content = (self.input if text is None else text).strip()
        if not content or self.is_loading:
            return None

        history = [{"role": m.role, "content": m.content} for m in self.messages]
        user_message = MessageOut(id=new_id(), role="user", content=content, timestamp=now_ms())
        self.messages.append(user_message)
        self.input = ""
        self.is_loading = True
        try:
            session_id = self.session_manager.session_id or self.session_manager.init_session(
                self.device_info
            )
            self.session_manager.save_message(user_message, session_id)

            try:
                reply_text = self._request_completion(history + [{"role": "user", "content": content}])
            except (ChatGatewayError, httpx.HTTPError, ValueError) as e:
                logger.warning("Chat completion failed session_id=%s error=%s", session_id, e)
                detail = str(e)
                reply_text = f"Sorry, I couldn't get a response: {detail}" if detail else FALLBACK_REPLY

            reply = MessageOut(id=new_id(), role="assistant", content=reply_text, timestamp=now_ms())
            self.messages.append(reply)
            self.session_manager.save_message(reply, session_id)
            return reply
        finally:
            self.is_loading = False

    def _request_completion(self, transcript: list[dict]) -> str:
        system_prompt = generate_system_prompt(self.profile, self.projects, self.skills)
        resp = self.http_client.post(
            self.chat_path,
            json={"messages": [{"role": "system", "content": system_prompt}, *transcript]},
        )
        data = resp.json()
        if not isinstance(data, dict):
            raise ChatGatewayError(f"Unexpected response from chat service (status {resp.status_code})")
        if resp.status_code != 200:
            raise ChatGatewayError(data.get("error") or f"Chat request failed with status {resp.status_code}")
        message = data.get("message")
        if not message:
            raise ChatGatewayError("Empty response from chat service")
        return message

    def toggle_feedback(self, message_id: str, helpful: bool) -> None:
        self.session_manager.record_feedback(message_id, self.session_manager.session_id, helpful)

    def render(self) -> str:
        """Plain-text view of the conversation, as the widget would show it."""
        name = settings.chat_assistant_name
        lines = []
        if not self.messages:
            lines.append(f"{name}: Hi! I'm {name}, your AI assistant. How can I help you today?")
        for m in self.messages:
            speaker = "You" if m.role == "user" else name
            marker = ""
            if m.feedback is not None:
                marker = " [helpful]" if m.feedback.helpful else " [not helpful]"
            lines.append(f"{speaker}: {m.content}{marker}")
        if self.is_loading:
            lines.append(f"{name} is typing...")
        if not any(m.role == "user" for m in self.messages):
            lines.append("Try asking:")
            lines.extend(f"  - {q}" for q in SUGGESTED_QUESTIONS)
        return "\n".join(lines)
