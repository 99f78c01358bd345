"""Slash command registry for the terminal chat."""

from __future__ import annotations

COMMANDS = {
    "/help": "Show help",
    "/state": "Show font and spacing scale",
    "/css": "Print the live override stylesheet",
    "/suggest": "Show quick-action suggestions",
    "/session": "Show the assistant session id",
    "/quit": "Leave the chat",
}


def help_text() -> str:
    width = max(len(name) for name in COMMANDS)
    lines = [f"{name.ljust(width)}  {desc}" for name, desc in COMMANDS.items()]
    lines.append("Anything else is sent to the assistant, e.g. 'make text bigger'.")
    return "\n".join(lines)
