from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from folio_engine.runs.events import EventWriter
from folio_engine.store.contact import (
    list_contact_messages,
    mark_contact_status,
    submit_contact,
    validate_contact,
)
from folio_engine.store.notify import ResendNotifier, notification_subject


class FakeTables:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.created: list[tuple[str, dict[str, Any]]] = []
        self.updated: list[tuple[str, int, dict[str, Any]]] = []
        self.listed: list[tuple[str, str | None, bool]] = []

    def create(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        if self.fail:
            raise RuntimeError("Table store POST contact_messages failed (500): down")
        self.created.append((table, row))
        return {"id": 11, **row}

    def update(self, table: str, row_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        self.updated.append((table, row_id, changes))
        return {"id": row_id, **changes}

    def list(self, table: str, order: str | None = None, descending: bool = False) -> list[dict[str, Any]]:
        self.listed.append((table, order, descending))
        return [{"id": 2, "name": "Grace"}, {"id": 1, "name": "Ada"}]


class FakeNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    def notify(self, name: str, email: str, message: str) -> None:
        if self.fail:
            raise RuntimeError("Resend notification failed (500): boom")
        self.sent.append((name, email, message))


PAYLOAD = {"name": "Ada", "email": "ada@example.com", "message": "Loved the portfolio!"}


def test_submit_contact_stores_and_notifies() -> None:
    tables = FakeTables()
    notifier = FakeNotifier()
    contact = submit_contact(tables, notifier, PAYLOAD)
    table, row = tables.created[0]
    assert table == "contact_messages"
    assert row["status"] == "unread"
    assert row["created_at"]
    assert "id" not in row
    assert contact.id == 11
    assert notifier.sent == [("Ada", "ada@example.com", "Loved the portfolio!")]


def test_notification_failure_does_not_fail_submission(tmp_path: Path) -> None:
    events_path = tmp_path / "events.jsonl"
    contact = submit_contact(
        FakeTables(), FakeNotifier(fail=True), PAYLOAD, events=EventWriter(events_path, "run-1")
    )
    assert contact.id == 11
    events = [json.loads(line) for line in events_path.read_text(encoding="utf-8").splitlines()]
    assert [event["type"] for event in events] == ["contact_submitted", "contact_notification_failed"]
    assert events[0]["contact_id"] == 11
    assert "ada@example.com" not in events_path.read_text(encoding="utf-8")


def test_storage_failure_propagates() -> None:
    notifier = FakeNotifier()
    with pytest.raises(RuntimeError, match="failed"):
        submit_contact(FakeTables(fail=True), notifier, PAYLOAD)
    assert notifier.sent == []


def test_validate_contact_requires_fields() -> None:
    with pytest.raises(ValueError, match="name, message"):
        validate_contact({"email": "ada@example.com", "message": "  "})
    with pytest.raises(ValueError, match="Invalid email"):
        validate_contact({"name": "Ada", "email": "nope", "message": "hi"})


def test_mark_contact_status() -> None:
    tables = FakeTables()
    mark_contact_status(tables, 5, "archived")
    assert tables.updated == [("contact_messages", 5, {"status": "archived"})]
    with pytest.raises(ValueError):
        mark_contact_status(tables, 5, "deleted")


def test_resend_notifier_payload(monkeypatch) -> None:
    captured = {}

    class Response:
        def read(self) -> bytes:
            return b'{"id": "email-1"}'

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb) -> bool:
            return False

    def fake_urlopen(req, timeout=0):
        captured["url"] = req.full_url
        captured["auth"] = req.get_header("Authorization")
        captured["body"] = json.loads(req.data.decode("utf-8"))
        return Response()

    monkeypatch.setattr("folio_engine.store.rest.urlopen", fake_urlopen)
    notifier = ResendNotifier("re_key", "Portfolio <noreply@example.com>", "me@example.com")
    result = notifier.notify("Ada", "ada@example.com", "Hello")
    assert result == {"id": "email-1"}
    assert captured["url"] == "https://api.resend.com/emails"
    assert captured["auth"] == "Bearer re_key"
    assert captured["body"]["subject"] == notification_subject("Ada") == "New Contact Form Message from Ada"
    assert "Reply to: ada@example.com" in captured["body"]["text"]


def test_list_contact_messages_newest_first() -> None:
    tables = FakeTables()
    rows = list_contact_messages(tables)
    assert [row["id"] for row in rows] == [2, 1]
    assert tables.listed == [("contact_messages", "created_at", True)]


def test_submission_survives_broken_event_log(tmp_path: Path) -> None:
    notifier = FakeNotifier()
    contact = submit_contact(FakeTables(), notifier, PAYLOAD, events=EventWriter(tmp_path, "run-1"))
    assert contact.id == 11
    assert len(notifier.sent) == 1
