from __future__ import annotations

from folio_engine.chat.loop import ChatLoop
from folio_engine.chat.router import DialogueRouter
from folio_engine.providers.dryrun import DryRunAssistantProvider


def _loop() -> tuple[ChatLoop, DryRunAssistantProvider]:
    assistant = DryRunAssistantProvider()
    return ChatLoop(DialogueRouter(assistant)), assistant


def test_loop_routes_text_and_prints_confirmation(capsys) -> None:
    loop, assistant = _loop()
    assert loop.handle_line("make text bigger")
    out = capsys.readouterr().out
    assert "Text size increased" in out
    assert "More Spacing" in out
    assert assistant.calls == []


def test_loop_slash_commands(capsys) -> None:
    loop, _ = _loop()
    loop.handle_line("increase spacing")
    capsys.readouterr()
    loop.handle_line("/state")
    assert "Spacing scale: 125%" in capsys.readouterr().out
    loop.handle_line("/css")
    assert "chatbot-spacing-override" in capsys.readouterr().out
    loop.handle_line("/bogus")
    assert "Unknown command /bogus" in capsys.readouterr().out
    assert loop.handle_line("/quit") is False


def test_loop_numbered_suggestion_sends_its_message(capsys) -> None:
    loop, assistant = _loop()
    loop._show_suggestions()
    capsys.readouterr()
    # Welcome suggestion 4 asks about Henry's skills.
    loop.handle_line("4")
    out = capsys.readouterr().out
    assert "what are Henry's skills?" in out
    assert assistant.calls and assistant.calls[0][0] == "what are Henry's skills?"


def test_loop_run_exits_on_eof(monkeypatch, capsys) -> None:
    loop, _ = _loop()
    lines = iter(["change background to blue"])

    def fake_input(prompt: str = "") -> str:
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    loop.run()
    out = capsys.readouterr().out
    assert "Background updated" in out
    assert loop.router.session_id is None
