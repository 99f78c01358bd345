"""Live style engine.

Actions are applied to a :class:`PresentationLayer`, a managed stand-in for the
page's stylesheet. Global changes live in named overrides keyed by a stable id
so re-applying an action of the same kind replaces the previous override
instead of stacking another one. Font and spacing scales are cumulative and
saturate at their bounds.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from ..runs.events import emit_quietly
from .action_schema import ACTION_TYPES, Action


OVERRIDE_STYLE_ID = "chatbot-override-styles"
SPACING_STYLE_ID = "chatbot-spacing-override"

BACKGROUND_SELECTOR = 'body, html, main, [class*="chakra"]'
TEXT_SELECTOR = "p, h1, h2, h3, h4, h5, h6, span"
ACCENT_SELECTOR = "[data-accent], .accent, button"

FONT_SCALE_MIN = 60
FONT_SCALE_MAX = 200
FONT_SCALE_STEP = 20
SPACING_SCALE_MIN = 50
SPACING_SCALE_MAX = 200
SPACING_SCALE_STEP = 25
BASELINE_SCALE = 100


@dataclass(frozen=True)
class StyleState:
    font_scale_percent: int = BASELINE_SCALE
    spacing_scale_percent: int = BASELINE_SCALE


@dataclass
class PresentationLayer:
    overrides: dict[str, str] = field(default_factory=dict)
    inline: dict[str, dict[str, str]] = field(default_factory=dict)
    root_font_size: str | None = None
    reload_count: int = 0

    def set_override(self, style_id: str, css: str) -> None:
        self.overrides.pop(style_id, None)
        self.overrides[style_id] = css

    def remove_override(self, style_id: str) -> bool:
        return self.overrides.pop(style_id, None) is not None

    def set_inline(self, selector: str, prop: str, value: str) -> None:
        self.inline.setdefault(selector, {})[prop] = f"{value} !important"

    def set_root_font_size(self, percent: int) -> None:
        self.root_font_size = f"{percent}%"

    def reload(self) -> None:
        self.overrides.clear()
        self.inline.clear()
        self.root_font_size = None
        self.reload_count += 1

    def render_css(self) -> str:
        blocks: list[str] = []
        if self.root_font_size is not None:
            blocks.append(f"html {{ font-size: {self.root_font_size}; }}")
        for selector, props in self.inline.items():
            body = " ".join(f"{prop}: {value};" for prop, value in props.items())
            blocks.append(f"{selector} {{ {body} }}")
        for style_id, css in self.overrides.items():
            blocks.append(f"/* {style_id} */\n{css}")
        return "\n".join(blocks)


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def background_css(color: str) -> str:
    return f"{BACKGROUND_SELECTOR} {{ background-color: {color} !important; }}"


def spacing_css(percent: int) -> str:
    factor = percent / 100
    return (
        "* { "
        f"padding: calc(var(--chakra-space-4, 1rem) * {factor}) !important; "
        f"margin: calc(var(--chakra-space-4, 1rem) * {factor}) !important; "
        "}"
    )


def _require_color(params: dict[str, Any]) -> str:
    color = params.get("color")
    if not color:
        raise ValueError("color action without a color")
    return str(color)


def _set_font(layer: PresentationLayer, state: StyleState, percent: int) -> StyleState:
    layer.set_root_font_size(percent)
    return replace(state, font_scale_percent=percent)


def _set_spacing(layer: PresentationLayer, state: StyleState, percent: int) -> StyleState:
    layer.set_override(SPACING_STYLE_ID, spacing_css(percent))
    return replace(state, spacing_scale_percent=percent)


def apply_action(action: Action, state: StyleState, layer: PresentationLayer) -> tuple[str, StyleState]:
    """Apply ``action`` to ``layer`` and return ``(description, new_state)``.

    Unknown action types are left alone and described as ``"ignored"``.
    """
    kind = action.type
    params = action.params or {}
    if kind == "change_background":
        color = _require_color(params)
        layer.set_override(OVERRIDE_STYLE_ID, background_css(color))
        return f"background set to {color}", state
    if kind == "change_text_color":
        color = _require_color(params)
        layer.set_inline(TEXT_SELECTOR, "color", color)
        return f"text color set to {color}", state
    if kind == "change_accent":
        color = _require_color(params)
        layer.set_inline(ACCENT_SELECTOR, "background-color", color)
        return f"accent color set to {color}", state
    if kind == "increase_font_size":
        percent = clamp(state.font_scale_percent + FONT_SCALE_STEP, FONT_SCALE_MIN, FONT_SCALE_MAX)
        return f"font size {percent}%", _set_font(layer, state, percent)
    if kind == "decrease_font_size":
        percent = clamp(state.font_scale_percent - FONT_SCALE_STEP, FONT_SCALE_MIN, FONT_SCALE_MAX)
        return f"font size {percent}%", _set_font(layer, state, percent)
    if kind == "reset_font_size":
        return "font size reset", _set_font(layer, state, BASELINE_SCALE)
    if kind == "increase_spacing":
        percent = clamp(state.spacing_scale_percent + SPACING_SCALE_STEP, SPACING_SCALE_MIN, SPACING_SCALE_MAX)
        return f"spacing {percent}%", _set_spacing(layer, state, percent)
    if kind == "decrease_spacing":
        percent = clamp(state.spacing_scale_percent - SPACING_SCALE_STEP, SPACING_SCALE_MIN, SPACING_SCALE_MAX)
        return f"spacing {percent}%", _set_spacing(layer, state, percent)
    if kind == "reset_spacing":
        layer.remove_override(SPACING_STYLE_ID)
        return "spacing reset", replace(state, spacing_scale_percent=BASELINE_SCALE)
    if kind == "reset_styles":
        layer.remove_override(OVERRIDE_STYLE_ID)
        layer.remove_override(SPACING_STYLE_ID)
        layer.reload()
        return "all styles reset", StyleState()
    return "ignored", state


@dataclass(frozen=True)
class StyleEffect:
    action: Action
    description: str
    state: StyleState
    applied: bool = True


class StyleEngine:
    def __init__(
        self,
        layer: PresentationLayer | None = None,
        state: StyleState | None = None,
        events: Any | None = None,
    ) -> None:
        self.layer = layer or PresentationLayer()
        self.state = state or StyleState()
        self.events = events

    def apply(self, action: Action) -> StyleEffect:
        if action.type not in ACTION_TYPES:
            self._emit("action_ignored", action=action.type, reason="unknown action type")
            return StyleEffect(action=action, description="ignored", state=self.state, applied=False)
        try:
            description, new_state = apply_action(action, self.state, self.layer)
        except Exception as exc:
            self._emit("action_failed", action=action.type, error=str(exc))
            return StyleEffect(action=action, description="failed", state=self.state, applied=False)
        self.state = new_state
        self._emit(
            "action_applied",
            action=action.type,
            params=dict(action.params or {}),
            description=description,
            font_scale_percent=new_state.font_scale_percent,
            spacing_scale_percent=new_state.spacing_scale_percent,
        )
        return StyleEffect(action=action, description=description, state=new_state)

    def apply_all(self, actions: Iterable[Action]) -> list[StyleEffect]:
        return [self.apply(action) for action in actions]

    def _emit(self, event_type: str, **payload: Any) -> None:
        emit_quietly(self.events, event_type, **payload)
