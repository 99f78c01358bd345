"""Interactive chat loop wrapper."""

from __future__ import annotations

from .commands import help_text
from .router import DialogueRouter, TurnResult
from .suggestions import Suggestion


def format_suggestions(suggestions: list[Suggestion]) -> str:
    lines = [f"  [{idx}] {item.label}  ->  {item.message}" for idx, item in enumerate(suggestions, start=1)]
    return "\n".join(lines)


def format_turn(result: TurnResult) -> str:
    lines: list[str] = []
    for message in result.appended:
        if message.role == "user":
            continue
        lines.append(message.content)
    return "\n".join(lines)


class ChatLoop:
    def __init__(self, router: DialogueRouter) -> None:
        self.router = router
        self._last_suggestions: list[Suggestion] = []

    def run(self) -> None:
        print(self.router.transcript[0].content)
        self._show_suggestions()
        while True:
            try:
                line = input("> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle_line(line):
                break

    def handle_line(self, line: str) -> bool:
        """Handle one line of input; returns False when the loop should stop."""
        raw = line.strip()
        if not raw:
            return True
        if raw in {"/quit", "/exit"}:
            return False
        if raw == "/help":
            print(help_text())
            return True
        if raw == "/state":
            state = self.router.engine.state
            print(f"Font scale: {state.font_scale_percent}%  Spacing scale: {state.spacing_scale_percent}%")
            return True
        if raw == "/css":
            css = self.router.engine.layer.render_css()
            print(css or "(no overrides)")
            return True
        if raw == "/suggest":
            self._show_suggestions()
            return True
        if raw == "/session":
            print(f"Session: {self.router.session_id or '(none yet)'}")
            return True
        if raw.startswith("/"):
            print(f"Unknown command {raw.split()[0]}. Type /help for commands.")
            return True
        # A bare number picks one of the suggestions shown last.
        if raw.isdigit() and self._last_suggestions:
            idx = int(raw) - 1
            if 0 <= idx < len(self._last_suggestions):
                raw = self._last_suggestions[idx].message
                print(f"> {raw}")
        result = self.router.route(raw)
        text = format_turn(result)
        if text:
            print(text)
        self._show_suggestions()
        return True

    def _show_suggestions(self) -> None:
        self._last_suggestions = self.router.suggestions()
        if self._last_suggestions:
            print(format_suggestions(self._last_suggestions))
