"""Transactional e-mail notifier for new contact messages."""

from __future__ import annotations

from typing import Any, Protocol

from .rest import request_json


RESEND_API_URL = "https://api.resend.com/emails"


class ContactNotifier(Protocol):
    def notify(self, name: str, email: str, message: str) -> Any:
        ...


def notification_subject(name: str) -> str:
    return f"New Contact Form Message from {name}"


def notification_text(name: str, email: str, message: str) -> str:
    return (
        "New Contact Form Submission\n\n"
        f"From: {name}\n"
        f"Email: {email}\n\n"
        "Message:\n"
        f"{message}\n\n"
        f"Reply to: {email}\n"
    )


class ResendNotifier:
    def __init__(
        self,
        api_key: str,
        sender: str,
        recipient: str,
        api_url: str = RESEND_API_URL,
        timeout_s: float = 15.0,
    ) -> None:
        if not api_key:
            raise RuntimeError("Resend API key missing. Set RESEND_API_KEY.")
        if not recipient:
            raise RuntimeError("Notification recipient missing. Set EMAIL_TO.")
        self.api_key = api_key
        self.sender = sender
        self.recipient = recipient
        self.api_url = api_url
        self.timeout_s = timeout_s

    def notify(self, name: str, email: str, message: str) -> Any:
        payload = {
            "from": self.sender,
            "to": self.recipient,
            "reply_to": email,
            "subject": notification_subject(name),
            "text": notification_text(name, email, message),
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        return request_json(
            "POST", self.api_url, headers, payload, timeout_s=self.timeout_s, label="Resend notification"
        )
