"""Contact form submissions."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

from ..runs.events import emit_quietly
from ..utils import now_utc_iso
from .notify import ContactNotifier
from .tables import COLLECTIONS, CONTACT_MESSAGES, TableClient


CONTACT_STATUSES = ("unread", "read", "archived")


@dataclass
class ContactMessage:
    name: str
    email: str
    message: str
    status: str = "unread"
    created_at: str | None = None
    id: int | None = None

    def to_row(self) -> dict[str, Any]:
        row = asdict(self)
        if row["id"] is None:
            row.pop("id")
        return row


def validate_contact(payload: Mapping[str, Any]) -> ContactMessage:
    missing = [key for key in ("name", "email", "message") if not str(payload.get(key) or "").strip()]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")
    email = str(payload["email"]).strip()
    if "@" not in email:
        raise ValueError(f"Invalid email address: {email}")
    return ContactMessage(
        name=str(payload["name"]).strip(),
        email=email,
        message=str(payload["message"]).strip(),
    )


def submit_contact(
    tables: TableClient,
    notifier: ContactNotifier | None,
    payload: Mapping[str, Any],
    events: Any | None = None,
) -> ContactMessage:
    """Store a contact message, then notify; notification failures are logged only."""
    contact = validate_contact(payload)
    contact.status = "unread"
    contact.created_at = now_utc_iso()
    stored = tables.create(CONTACT_MESSAGES, contact.to_row())
    if stored.get("id") is not None:
        contact.id = stored["id"]
    emit_quietly(events, "contact_submitted", contact_id=contact.id)
    if notifier is None:
        return contact
    try:
        notifier.notify(contact.name, contact.email, contact.message)
    except Exception as exc:
        emit_quietly(events, "contact_notification_failed", contact_id=contact.id, error=str(exc))
    return contact


def list_contact_messages(tables: TableClient) -> list[dict[str, Any]]:
    order, descending = COLLECTIONS[CONTACT_MESSAGES]
    return tables.list(CONTACT_MESSAGES, order=order, descending=descending)


def mark_contact_status(tables: TableClient, contact_id: int, status: str) -> dict[str, Any]:
    if status not in CONTACT_STATUSES:
        raise ValueError(f"Unknown contact status: {status}")
    return tables.update(CONTACT_MESSAGES, contact_id, {"status": status})
