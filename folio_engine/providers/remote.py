"""HTTP client for the portfolio chatbot backend."""

from __future__ import annotations

from typing import Any

from ..config import DEFAULT_CHATBOT_API_KEY, DEFAULT_CHATBOT_API_URL
from ..store.rest import request_json
from .base import AssistantReply


CHAT_MESSAGE_PATH = "/api/v1/chat/message"
VISITOR_USER_ID = "portfolio_visitor"


class RemoteAssistantProvider:
    name = "remote"

    def __init__(
        self,
        api_base: str | None = None,
        api_key: str | None = None,
        timeout_s: float = 30.0,
    ) -> None:
        self.api_base = (api_base or DEFAULT_CHATBOT_API_URL).rstrip("/")
        self.api_key = api_key or DEFAULT_CHATBOT_API_KEY
        self.timeout_s = timeout_s

    def send(self, message: str, session_id: str | None = None) -> AssistantReply:
        response = request_json(
            "POST",
            f"{self.api_base}{CHAT_MESSAGE_PATH}",
            {"X-API-Key": self.api_key},
            build_chat_payload(message, session_id),
            timeout_s=self.timeout_s,
            label="Chat API request",
        )
        if not isinstance(response, dict):
            raise RuntimeError(f"Chat API returned unexpected payload: {response!r}")
        return AssistantReply.from_payload(response)


def build_chat_payload(message: str, session_id: str | None) -> dict[str, Any]:
    payload: dict[str, Any] = {"message": message, "user_id": VISITOR_USER_ID}
    if session_id:
        payload["session_id"] = session_id
    return payload
