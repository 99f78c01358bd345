"""Action and message schema for the chat widget."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from ..utils import now_utc_iso


ACTION_TYPES: tuple[str, ...] = (
    "change_background",
    "change_text_color",
    "change_accent",
    "increase_font_size",
    "decrease_font_size",
    "reset_font_size",
    "increase_spacing",
    "decrease_spacing",
    "reset_spacing",
    "reset_styles",
)

Role = Literal["user", "assistant"]


@dataclass
class Action:
    type: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Message:
    role: Role
    content: str
    timestamp: str = field(default_factory=now_utc_iso)
