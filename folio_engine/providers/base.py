"""Assistant provider base classes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Protocol


@dataclass
class AssistantSource:
    document: str
    relevance_score: float
    excerpt: str
    category: str | None = None


@dataclass
class AssistantReply:
    response: str
    session_id: str
    message_id: str
    timestamp: str
    intent: str | None = None
    confidence: float | None = None
    model_used: str | None = None
    sources: list[AssistantSource] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AssistantReply":
        response = payload.get("response")
        session_id = payload.get("session_id")
        if not isinstance(response, str) or not session_id:
            raise RuntimeError(f"Chat API returned an incomplete reply: {payload}")
        sources: list[AssistantSource] = []
        for item in payload.get("sources") or []:
            if not isinstance(item, Mapping):
                continue
            sources.append(
                AssistantSource(
                    document=str(item.get("document") or ""),
                    relevance_score=_as_float(item.get("relevance_score")) or 0.0,
                    excerpt=str(item.get("excerpt") or ""),
                    category=item.get("category"),
                )
            )
        return cls(
            response=response,
            session_id=str(session_id),
            message_id=str(payload.get("message_id") or ""),
            timestamp=str(payload.get("timestamp") or ""),
            intent=payload.get("intent"),
            confidence=_as_float(payload.get("confidence")),
            model_used=payload.get("model_used"),
            sources=sources,
        )


class AssistantProvider(Protocol):
    name: str

    def send(self, message: str, session_id: str | None = None) -> AssistantReply:
        ...


class ProviderRegistry:
    def __init__(self, providers: Iterable[AssistantProvider]) -> None:
        self._providers = {provider.name: provider for provider in providers}

    def get(self, name: str) -> AssistantProvider | None:
        return self._providers.get(name)


def _as_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
