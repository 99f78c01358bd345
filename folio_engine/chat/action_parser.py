"""Parse chat utterances into live-styling actions."""

from __future__ import annotations

from .action_registry import ACTION_RULES
from .action_schema import Action
from .color_lexicon import resolve_color


def parse_actions(text: str) -> list[Action]:
    if not isinstance(text, str):
        return []
    lowered = text.lower()
    if not lowered.strip():
        return []
    actions: list[Action] = []
    for rule in ACTION_RULES:
        if not rule.matches(lowered):
            continue
        if rule.needs_color:
            color = resolve_color(lowered)
            # No resolvable color: drop the intent silently.
            if color is None:
                continue
            actions.append(Action(type=rule.action, params={"color": color}))
            continue
        actions.append(Action(type=rule.action, params={}))
    return actions


def action_types(actions: list[Action]) -> list[str]:
    return [action.type for action in actions]
