"""Dry-run assistant provider (offline)."""

from __future__ import annotations

import hashlib
import uuid

from ..utils import now_utc_iso
from .base import AssistantReply


_CANNED_REPLIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("skill", "experience"),
        "Henry is a product designer and front-end developer with experience across "
        "design systems, accessibility and React/TypeScript builds.",
    ),
    (
        ("project", "portfolio", "worked on"),
        "Notable projects include this portfolio and its live-styling chatbot, plus "
        "several case studies on the projects page.",
    ),
    (
        ("philosophy", "approach", "process"),
        "His design approach starts with research, moves fast through prototypes and "
        "keeps accessibility in scope from the first sketch.",
    ),
    (
        ("technolog", "stack", "tech"),
        "Day to day he works with React, TypeScript and Next.js, with Chakra UI for "
        "the component layer.",
    ),
)

_FALLBACK_REPLY = "I'm running offline right now, but feel free to try the live demos."


class DryRunAssistantProvider:
    name = "dryrun"

    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []

    def send(self, message: str, session_id: str | None = None) -> AssistantReply:
        self.calls.append((message, session_id))
        lowered = message.lower()
        reply = _FALLBACK_REPLY
        intent = "general"
        for keywords, text in _CANNED_REPLIES:
            if any(word in lowered for word in keywords):
                reply = text
                intent = keywords[0]
                break
        digest = hashlib.sha256(message.encode("utf-8")).hexdigest()[:12]
        return AssistantReply(
            response=reply,
            session_id=session_id or f"dryrun-{uuid.uuid4().hex[:12]}",
            message_id=f"msg-{digest}",
            timestamp=now_utc_iso(),
            intent=intent,
            confidence=1.0,
            model_used="dryrun",
        )
