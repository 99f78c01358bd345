"""Contextual quick-action suggestions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .action_schema import Message


@dataclass(frozen=True)
class Suggestion:
    label: str
    message: str


@dataclass(frozen=True)
class SuggestionCase:
    name: str
    source: Literal["user", "assistant"]
    keywords: tuple[str, ...]
    suggestions: tuple[Suggestion, ...]


WELCOME_SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion("🎨 Blue Background", "change background to blue"),
    Suggestion("🟢 Green Theme", "change background to green"),
    Suggestion("📝 Make Text Bigger", "make text bigger"),
    Suggestion("❓ Tell me about Henry", "what are Henry's skills?"),
)

DEFAULT_SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion("🎨 Try Demo", "change background to blue"),
    Suggestion("💼 His Projects", "what projects has he worked on?"),
    Suggestion("🔧 Skills", "what are his skills?"),
    Suggestion("🎯 Philosophy", "what is his design philosophy?"),
)

# First matching case wins.
SUGGESTION_CASES: tuple[SuggestionCase, ...] = (
    SuggestionCase(
        "color",
        "user",
        ("background", "color"),
        (
            Suggestion("🔴 Try Red", "change background to red"),
            Suggestion("🟣 Try Purple", "change background to purple"),
            Suggestion("📝 Bigger Text", "make text bigger"),
            Suggestion("🔄 Reset", "reset everything"),
        ),
    ),
    SuggestionCase(
        "typography",
        "user",
        ("bigger", "smaller", "font"),
        (
            Suggestion("📏 More Spacing", "increase spacing"),
            Suggestion("🎨 Change Color", "change background to teal"),
            Suggestion("📉 Smaller Text", "make text smaller"),
            Suggestion("🔄 Reset", "reset everything"),
        ),
    ),
    SuggestionCase(
        "skills",
        "assistant",
        ("design", "skill", "experience"),
        (
            Suggestion("💼 Notable Projects", "what are Henry's notable projects?"),
            Suggestion("🎨 Design Philosophy", "tell me about his design philosophy"),
            Suggestion("🚀 Try a Demo", "change background to blue"),
            Suggestion("🔧 Technical Skills", "what are his technical skills?"),
        ),
    ),
    SuggestionCase(
        "projects",
        "assistant",
        ("project", "portfolio", "chatbot"),
        (
            Suggestion("🎨 See It In Action", "change background to purple"),
            Suggestion("💡 Design Process", "what is his design process?"),
            Suggestion("🔧 Tech Stack", "what technologies does he use?"),
            Suggestion("📝 More About Henry", "tell me more about Henry"),
        ),
    ),
    SuggestionCase(
        "philosophy",
        "assistant",
        ("philosophy", "believe", "approach"),
        (
            Suggestion("🎯 See Examples", "show me his projects"),
            Suggestion("♿ Accessibility", "how does he handle accessibility?"),
            Suggestion("🎨 Live Demo", "change background to teal"),
            Suggestion("💼 Work Experience", "what is his experience?"),
        ),
    ),
    SuggestionCase(
        "tech",
        "assistant",
        ("react", "typescript", "next", "technical"),
        (
            Suggestion("🎨 Design Skills", "what are his design skills?"),
            Suggestion("🚀 See Demo", "change background to orange"),
            Suggestion("📚 More Tech", "what other technologies does he know?"),
            Suggestion("💼 Projects", "show me his projects"),
        ),
    ),
    SuggestionCase(
        "reset",
        "user",
        ("reset",),
        (
            Suggestion("🎨 Try Blue", "change background to blue"),
            Suggestion("🟢 Try Green", "change background to green"),
            Suggestion("❓ Ask Questions", "what are Henry's skills?"),
            Suggestion("📝 Typography", "make text bigger"),
        ),
    ),
    SuggestionCase(
        "spacing",
        "user",
        ("spacing",),
        (
            Suggestion("🎨 Color Theme", "change background to purple"),
            Suggestion("📝 Font Size", "make text bigger"),
            Suggestion("❓ About Henry", "tell me about Henry"),
            Suggestion("🔄 Reset", "reset everything"),
        ),
    ),
)


def _text(message: Message | str | None) -> str:
    if message is None:
        return ""
    if isinstance(message, Message):
        return message.content.lower()
    return str(message).lower()


def match_case(
    last_assistant: Message | str | None,
    preceding_user: Message | str | None,
    transcript_length: int,
) -> str:
    """Name of the case that fires: ``welcome``, a case name, or ``default``."""
    if transcript_length == 1:
        return "welcome"
    texts = {"user": _text(preceding_user), "assistant": _text(last_assistant)}
    for case in SUGGESTION_CASES:
        haystack = texts[case.source]
        if any(word in haystack for word in case.keywords):
            return case.name
    return "default"


_CASES_BY_NAME = {case.name: case.suggestions for case in SUGGESTION_CASES}


def suggest(
    last_assistant: Message | str | None,
    preceding_user: Message | str | None,
    transcript_length: int,
) -> list[Suggestion]:
    name = match_case(last_assistant, preceding_user, transcript_length)
    if name == "welcome":
        return list(WELCOME_SUGGESTIONS)
    if name == "default":
        return list(DEFAULT_SUGGESTIONS)
    return list(_CASES_BY_NAME[name])
