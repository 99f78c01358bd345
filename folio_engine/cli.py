"""Folio CLI entrypoints."""

from __future__ import annotations

import argparse
import json
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Any

from .chat.loop import ChatLoop, format_suggestions, format_turn
from .chat.router import DialogueRouter
from .config import Settings
from .providers import default_assistant
from .runs.events import EventWriter, NullEventWriter
from .store.contact import list_contact_messages, submit_contact
from .store.images import ASSET_KINDS, StorageClient
from .store.notify import ResendNotifier
from .store.tables import COLLECTIONS, SINGLETONS, TableClient, read_content
from .utils import load_dotenv


DEFAULT_EVENTS_PATH = Path(".folio") / "events.jsonl"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="folio", description="Portfolio chat widget engine")
    parser.add_argument("--events", help="Path to events.jsonl (enables event logging)")
    sub = parser.add_subparsers(dest="command")

    chat = sub.add_parser("chat", help="Interactive chat loop")
    chat.add_argument("--assistant", choices=("remote", "dryrun"), help="Assistant backend")

    say = sub.add_parser("say", help="Run a single chat turn")
    say.add_argument("--message", required=True)
    say.add_argument("--assistant", choices=("remote", "dryrun"), help="Assistant backend")

    contact = sub.add_parser("contact", help="Submit a contact form message")
    contact.add_argument("--name", required=True)
    contact.add_argument("--email", required=True)
    contact.add_argument("--message", required=True)

    upload = sub.add_parser("upload-image", help="Upload a project image")
    upload.add_argument("--file", required=True, help="Image file path")
    upload.add_argument("--owner", required=True, help="Owning company or project name")
    upload.add_argument("--kind", required=True, choices=ASSET_KINDS)

    content = sub.add_parser("content", help="Print rows of a portfolio table")
    content.add_argument("table", choices=sorted([*COLLECTIONS, *SINGLETONS]))

    sub.add_parser("inbox", help="List contact form messages, newest first")

    return parser


def _events(args: argparse.Namespace, settings: Settings) -> Any:
    if args.events:
        return EventWriter(Path(args.events), str(uuid.uuid4()))
    if settings.events_enabled:
        return EventWriter(DEFAULT_EVENTS_PATH, str(uuid.uuid4()))
    return NullEventWriter()


def _settings_for(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    assistant = getattr(args, "assistant", None)
    if assistant:
        settings = replace(settings, assistant=assistant)
    return settings


def _router(args: argparse.Namespace) -> DialogueRouter:
    settings = _settings_for(args)
    return DialogueRouter(default_assistant(settings), events=_events(args, settings))


def _handle_chat(args: argparse.Namespace) -> int:
    ChatLoop(_router(args)).run()
    return 0


def _handle_say(args: argparse.Namespace) -> int:
    router = _router(args)
    result = router.route(args.message)
    text = format_turn(result)
    if text:
        print(text)
    suggestions = router.suggestions()
    if suggestions:
        print(format_suggestions(suggestions))
    return 1 if result.remote_failed else 0


def _tables(settings: Settings) -> TableClient | None:
    try:
        return TableClient(settings.supabase_url or "", settings.supabase_key or "")
    except RuntimeError as exc:
        print(str(exc))
        return None


def _print_rows(rows: list[dict[str, Any]]) -> None:
    print(json.dumps(rows, indent=2, ensure_ascii=False))


def _handle_contact(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    events = _events(args, settings)
    tables = _tables(settings)
    if tables is None:
        return 1
    notifier = None
    if settings.resend_api_key and settings.email_to:
        notifier = ResendNotifier(settings.resend_api_key, settings.email_from, settings.email_to)
    payload = {"name": args.name, "email": args.email, "message": args.message}
    try:
        contact = submit_contact(tables, notifier, payload, events=events)
    except (ValueError, RuntimeError) as exc:
        print(f"Contact submission failed: {exc}")
        return 1
    print(f"Message saved (id={contact.id}).")
    return 0


def _handle_content(args: argparse.Namespace) -> int:
    tables = _tables(Settings.from_env())
    if tables is None:
        return 1
    try:
        rows = read_content(tables, args.table)
    except RuntimeError as exc:
        print(f"Read failed: {exc}")
        return 1
    _print_rows(rows)
    return 0


def _handle_inbox(args: argparse.Namespace) -> int:
    tables = _tables(Settings.from_env())
    if tables is None:
        return 1
    try:
        rows = list_contact_messages(tables)
    except RuntimeError as exc:
        print(f"Read failed: {exc}")
        return 1
    _print_rows(rows)
    return 0


def _handle_upload(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    path = Path(args.file)
    if not path.exists():
        print(f"Upload failed: file not found ({path})")
        return 1
    try:
        storage = StorageClient(settings.supabase_url or "", settings.supabase_key or "")
        url = storage.upload(path, args.owner, args.kind)
    except (ValueError, RuntimeError) as exc:
        print(f"Upload failed: {exc}")
        return 1
    print(url)
    return 0


def main() -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args()
    if args.command == "chat":
        raise SystemExit(_handle_chat(args))
    if args.command == "say":
        raise SystemExit(_handle_say(args))
    if args.command == "contact":
        raise SystemExit(_handle_contact(args))
    if args.command == "upload-image":
        raise SystemExit(_handle_upload(args))
    if args.command == "content":
        raise SystemExit(_handle_content(args))
    if args.command == "inbox":
        raise SystemExit(_handle_inbox(args))
    parser.print_help()
    raise SystemExit(1)


if __name__ == "__main__":
    main()
