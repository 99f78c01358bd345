"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .utils import getenv_flag, getenv_float


DEFAULT_CHATBOT_API_URL = "http://localhost:8000"
DEFAULT_CHATBOT_API_KEY = "dev-api-key-12345"
DEFAULT_EMAIL_FROM = "Portfolio <noreply@example.com>"


@dataclass(frozen=True)
class Settings:
    chatbot_api_url: str = DEFAULT_CHATBOT_API_URL
    chatbot_api_key: str = DEFAULT_CHATBOT_API_KEY
    chatbot_timeout_s: float = 30.0
    assistant: str = "remote"
    supabase_url: str | None = None
    supabase_key: str | None = None
    resend_api_key: str | None = None
    email_from: str = DEFAULT_EMAIL_FROM
    email_to: str | None = None
    events_enabled: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        assistant = (os.getenv("FOLIO_ASSISTANT") or "remote").strip().lower()
        if assistant not in {"remote", "dryrun"}:
            assistant = "remote"
        return cls(
            chatbot_api_url=(os.getenv("FOLIO_CHATBOT_API_URL") or DEFAULT_CHATBOT_API_URL).rstrip("/"),
            chatbot_api_key=os.getenv("FOLIO_CHATBOT_API_KEY") or DEFAULT_CHATBOT_API_KEY,
            chatbot_timeout_s=getenv_float("FOLIO_CHATBOT_TIMEOUT", 30.0),
            assistant=assistant,
            supabase_url=_optional("SUPABASE_URL"),
            supabase_key=_optional("SUPABASE_KEY"),
            resend_api_key=_optional("RESEND_API_KEY"),
            email_from=os.getenv("EMAIL_FROM") or DEFAULT_EMAIL_FROM,
            email_to=_optional("EMAIL_TO"),
            events_enabled=getenv_flag("FOLIO_EVENTS", False),
        )


def _optional(key: str) -> str | None:
    value = (os.getenv(key) or "").strip()
    return value or None
