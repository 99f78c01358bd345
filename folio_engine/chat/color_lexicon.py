"""Brand and common color names understood by the chat widget."""

from __future__ import annotations


# Declaration order is the tie-break: the first name found in the text wins.
COLOR_LEXICON: tuple[tuple[str, str], ...] = (
    # brand
    ("teal", "#107c7c"),
    ("accent", "#107c7c"),
    ("primary", "#212529"),
    ("secondary", "#495057"),
    ("light", "#F8F9FA"),
    ("white", "#FFFFFF"),
    ("dark", "#212529"),
    ("gray", "#6C757D"),
    ("grey", "#6C757D"),
    ("success", "#228B67"),
    ("warning", "#E0A800"),
    ("error", "#B23A48"),
    # common
    ("red", "#ef4444"),
    ("blue", "#3b82f6"),
    ("green", "#22c55e"),
    ("yellow", "#eab308"),
    ("purple", "#a855f7"),
    ("pink", "#ec4899"),
    ("orange", "#f97316"),
    ("black", "#000000"),
)

COLOR_NAMES: tuple[str, ...] = tuple(name for name, _ in COLOR_LEXICON)


def resolve_color(text: str) -> str | None:
    """Return the hex code of the first lexicon color named anywhere in ``text``."""
    if not text:
        return None
    lowered = text.lower()
    for name, code in COLOR_LEXICON:
        if name in lowered:
            return code
    return None
