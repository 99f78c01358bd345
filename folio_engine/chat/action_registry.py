"""Shared action-detection rules and confirmation templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class ActionRule:
    """Keyword guard for one action type.

    The rule fires when every group in ``groups`` has at least one keyword in
    the text, or when any single keyword in ``alternatives`` is present.
    """

    action: str
    groups: tuple[tuple[str, ...], ...] = ()
    alternatives: tuple[str, ...] = ()
    needs_color: bool = False

    def matches(self, lowered: str) -> bool:
        if any(word in lowered for word in self.alternatives):
            return True
        if not self.groups:
            return False
        return all(any(word in lowered for word in group) for group in self.groups)


_FONT = ("text", "font")

# Evaluated independently and in this order; the order is also the order of
# the resulting actions.
ACTION_RULES: tuple[ActionRule, ...] = (
    ActionRule("change_background", groups=(("background",), ("to",)), needs_color=True),
    ActionRule("change_text_color", groups=(("text",), ("color",)), needs_color=True),
    ActionRule("change_accent", groups=(("accent",), ("to",)), needs_color=True),
    ActionRule("increase_font_size", groups=(("bigger", "increase", "larger"), _FONT)),
    ActionRule("decrease_font_size", groups=(("smaller", "decrease", "reduce"), _FONT)),
    ActionRule("reset_font_size", groups=(("reset",), ("font", "text size"))),
    ActionRule("increase_spacing", groups=(("increase", "more", "add"), ("spacing",))),
    ActionRule("decrease_spacing", groups=(("decrease", "less", "reduce"), ("spacing",))),
    ActionRule("reset_spacing", groups=(("reset",), ("spacing",))),
    ActionRule(
        "reset_styles",
        groups=(("reset",), ("styles", "everything", "all")),
        alternatives=("original", "default"),
    ),
)


CONFIRMATIONS: dict[str, str] = {
    "change_background": "🎨 Background updated! Try another color or ask me about Henry's work.",
    "change_text_color": "🖋️ Text color updated! Try a background to match or ask me anything.",
    "change_accent": "✨ Accent color updated! Buttons and highlights now use the new color.",
    "increase_font_size": "📝 Text size increased! You can make it bigger again or try other demos.",
    "decrease_font_size": "📉 Text size decreased! Try adjusting other elements or ask questions.",
    "reset_font_size": "🔤 Text size back to normal! Try other demos or ask about Henry.",
    "increase_spacing": "↔️ Added more spacing! See the difference? Try other visual changes.",
    "decrease_spacing": "↔️ Reduced spacing! Like the tighter layout? Try more adjustments.",
    "reset_spacing": "📐 Spacing back to normal! Want to try something else?",
    "reset_styles": "🔄 All styles reset! Ready to try new demos or learn about Henry?",
}


def action_label(action_type: str) -> str:
    return action_type.replace("change_", "").replace("_", " ")


def confirmation_for(action_types: Sequence[str]) -> str | None:
    """Confirmation text for a turn, keyed on its first action."""
    if not action_types:
        return None
    template = CONFIRMATIONS.get(action_types[0])
    if template is not None:
        return template
    names = ", ".join(action_label(name) for name in action_types)
    return f"✓ Done! I've changed the {names}."
