from __future__ import annotations

import json
import sys
from pathlib import Path
from urllib.error import URLError

import pytest

from folio_engine import cli
from folio_engine.chat.action_registry import CONFIRMATIONS
from folio_engine.chat.router import FALLBACK_MESSAGE


class DummyResponse:
    def __init__(self, payload) -> None:
        self._payload = payload

    def read(self) -> bytes:
        return json.dumps(self._payload).encode("utf-8")

    def __enter__(self) -> "DummyResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in (
        "FOLIO_ASSISTANT",
        "FOLIO_EVENTS",
        "SUPABASE_URL",
        "SUPABASE_KEY",
        "RESEND_API_KEY",
        "EMAIL_TO",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda *args, **kwargs: False)


def _run(monkeypatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["folio", *argv])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    return excinfo.value.code


def test_say_action_turn_exits_zero(monkeypatch, capsys) -> None:
    code = _run(monkeypatch, "say", "--assistant", "dryrun", "--message", "make text bigger")
    out = capsys.readouterr().out
    assert code == 0
    assert CONFIRMATIONS["increase_font_size"] in out


def test_say_exits_one_when_remote_fails(monkeypatch, capsys) -> None:
    def refused(req, timeout=0):
        raise URLError("connection refused")

    monkeypatch.setattr("folio_engine.store.rest.urlopen", refused)
    code = _run(monkeypatch, "say", "--assistant", "remote", "--message", "who is Henry?")
    assert code == 1
    assert FALLBACK_MESSAGE in capsys.readouterr().out


def test_contact_saves_and_logs(monkeypatch, capsys, tmp_path: Path) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://db.test")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    urls: list[str] = []

    def fake_urlopen(req, timeout=0):
        urls.append(req.full_url)
        return DummyResponse([{"id": 9}])

    monkeypatch.setattr("folio_engine.store.rest.urlopen", fake_urlopen)
    events_path = tmp_path / "events.jsonl"
    code = _run(
        monkeypatch,
        "--events",
        str(events_path),
        "contact",
        "--name",
        "Ada",
        "--email",
        "ada@example.com",
        "--message",
        "Hello!",
    )
    assert code == 0
    assert "Message saved (id=9)." in capsys.readouterr().out
    assert urls == ["https://db.test/rest/v1/contact_messages"]
    event = json.loads(events_path.read_text(encoding="utf-8"))
    assert event["type"] == "contact_submitted"
    assert event["contact_id"] == 9


def test_contact_rejects_bad_email(monkeypatch, capsys) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://db.test")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    code = _run(monkeypatch, "contact", "--name", "Ada", "--email", "nope", "--message", "hi")
    assert code == 1
    assert "Invalid email" in capsys.readouterr().out


def test_content_prints_rows(monkeypatch, capsys) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://db.test")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    urls: list[str] = []

    def fake_urlopen(req, timeout=0):
        urls.append(req.full_url)
        return DummyResponse([{"id": 1, "title": "Chatbot"}])

    monkeypatch.setattr("folio_engine.store.rest.urlopen", fake_urlopen)
    code = _run(monkeypatch, "content", "projectsv2")
    assert code == 0
    assert json.loads(capsys.readouterr().out) == [{"id": 1, "title": "Chatbot"}]
    assert urls == ["https://db.test/rest/v1/projectsv2?select=*&order=id.asc"]


def test_inbox_requires_configuration(monkeypatch, capsys) -> None:
    code = _run(monkeypatch, "inbox")
    assert code == 1
    assert "SUPABASE_URL" in capsys.readouterr().out


def test_upload_missing_file(monkeypatch, capsys, tmp_path: Path) -> None:
    missing = tmp_path / "logo.png"
    code = _run(monkeypatch, "upload-image", "--file", str(missing), "--owner", "Acme", "--kind", "logo")
    assert code == 1
    assert "file not found" in capsys.readouterr().out


def test_no_command_prints_help(monkeypatch, capsys) -> None:
    assert _run(monkeypatch) == 1
    assert "usage: folio" in capsys.readouterr().out
