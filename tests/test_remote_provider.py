from __future__ import annotations

import io
import json
from urllib.error import HTTPError, URLError

import pytest

from folio_engine.config import Settings
from folio_engine.providers import default_assistant
from folio_engine.providers.remote import RemoteAssistantProvider, build_chat_payload


class DummyResponse:
    def __init__(self, payload: dict, status: int = 200) -> None:
        self._payload = payload
        self.status = status

    def read(self) -> bytes:
        return json.dumps(self._payload).encode("utf-8")

    def __enter__(self) -> "DummyResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False


REPLY = {
    "response": "Henry designs accessible interfaces.",
    "session_id": "sess-42",
    "message_id": "msg-1",
    "intent": "skills",
    "confidence": 0.92,
    "model_used": "gpt-4",
    "sources": [
        {"document": "henry_portfolio.md", "relevance_score": 0.8, "excerpt": "...", "category": "skills"},
    ],
    "timestamp": "2026-01-01T12:00:00Z",
}


def test_remote_provider_posts_message(monkeypatch) -> None:
    captured = {}

    def fake_urlopen(req, timeout=0):
        captured["url"] = req.full_url
        captured["method"] = req.get_method()
        captured["body"] = json.loads(req.data.decode("utf-8"))
        captured["api_key"] = req.get_header("X-api-key")
        captured["content_type"] = req.get_header("Content-type")
        captured["timeout"] = timeout
        return DummyResponse(REPLY)

    monkeypatch.setattr("folio_engine.store.rest.urlopen", fake_urlopen)

    provider = RemoteAssistantProvider(api_base="https://bot.test/", api_key="key-1", timeout_s=5.0)
    reply = provider.send("what are his skills?", "sess-41")

    assert captured["url"] == "https://bot.test/api/v1/chat/message"
    assert captured["method"] == "POST"
    assert captured["body"] == {
        "message": "what are his skills?",
        "session_id": "sess-41",
        "user_id": "portfolio_visitor",
    }
    assert captured["api_key"] == "key-1"
    assert captured["content_type"] == "application/json"
    assert captured["timeout"] == 5.0
    assert reply.response == "Henry designs accessible interfaces."
    assert reply.session_id == "sess-42"
    assert reply.confidence == pytest.approx(0.92)
    assert reply.sources[0].document == "henry_portfolio.md"


def test_first_turn_omits_session_id() -> None:
    assert build_chat_payload("hi", None) == {"message": "hi", "user_id": "portfolio_visitor"}


def test_remote_provider_http_error(monkeypatch) -> None:
    def fake_urlopen(req, timeout=0):
        raise HTTPError(req.full_url, 401, "Unauthorized", {}, io.BytesIO(b'{"detail":"bad key"}'))

    monkeypatch.setattr("folio_engine.store.rest.urlopen", fake_urlopen)
    provider = RemoteAssistantProvider(api_base="https://bot.test", api_key="wrong")
    with pytest.raises(RuntimeError, match=r"Chat API request failed \(401\)"):
        provider.send("hello")


def test_remote_provider_transport_errors(monkeypatch) -> None:
    def refused(req, timeout=0):
        raise URLError("connection refused")

    monkeypatch.setattr("folio_engine.store.rest.urlopen", refused)
    provider = RemoteAssistantProvider(api_base="https://bot.test")
    with pytest.raises(RuntimeError, match="Chat API request failed"):
        provider.send("hello")

    def slow(req, timeout=0):
        raise TimeoutError("timed out")

    monkeypatch.setattr("folio_engine.store.rest.urlopen", slow)
    with pytest.raises(RuntimeError, match="timed out"):
        provider.send("hello")


def test_remote_provider_rejects_incomplete_reply(monkeypatch) -> None:
    monkeypatch.setattr(
        "folio_engine.store.rest.urlopen",
        lambda req, timeout=0: DummyResponse({"message_id": "x"}),
    )
    provider = RemoteAssistantProvider(api_base="https://bot.test")
    with pytest.raises(RuntimeError, match="incomplete reply"):
        provider.send("hello")


def test_default_assistant_selection() -> None:
    assert default_assistant(Settings(assistant="dryrun")).name == "dryrun"
    remote = default_assistant(Settings(chatbot_api_url="https://bot.test", chatbot_api_key="k"))
    assert isinstance(remote, RemoteAssistantProvider)
    assert remote.api_base == "https://bot.test"
