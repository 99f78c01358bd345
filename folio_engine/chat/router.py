"""Per-turn dialogue routing between local actions and the remote assistant.

A turn walks ``idle -> submitted -> [actions_applied] -> remote_skipped`` or
``remote_pending -> remote_succeeded | remote_failed`` and always ends back in
``idle``. Local style actions are applied before the remote call is issued, so
a failed call never rolls them back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..providers.base import AssistantProvider
from ..runs.events import emit_quietly
from ..utils import now_utc_iso
from .action_parser import action_types, parse_actions
from .action_registry import confirmation_for
from .action_schema import Action, Message
from .style_engine import StyleEffect, StyleEngine
from .suggestions import Suggestion, suggest


WELCOME_MESSAGE = (
    "Hi! 👋 I'm Henry's AI assistant.\n\n"
    "I can:\n"
    "• Answer questions about Henry's skills, projects, and experience\n"
    "• Show you live interactive demos of this portfolio\n"
    "• Change colors, fonts, and layout in real-time\n\n"
    "Click any suggestion below or ask me anything!"
)

FALLBACK_MESSAGE = (
    "Sorry, I'm having trouble connecting to my backend. "
    "The action was executed, but I couldn't fetch additional information."
)

QUESTION_MARKERS: tuple[str, ...] = ("?", "who", "what", "tell me")

PHASE_IDLE = "idle"
PHASE_SUBMITTED = "submitted"
PHASE_ACTIONS_APPLIED = "actions_applied"
PHASE_REMOTE_SKIPPED = "remote_skipped"
PHASE_REMOTE_PENDING = "remote_pending"
PHASE_REMOTE_SUCCEEDED = "remote_succeeded"
PHASE_REMOTE_FAILED = "remote_failed"


@dataclass
class TurnResult:
    actions: list[Action] = field(default_factory=list)
    effects: list[StyleEffect] = field(default_factory=list)
    appended: list[Message] = field(default_factory=list)
    remote_called: bool = False
    remote_failed: bool = False
    phases: list[str] = field(default_factory=list)

    @property
    def handled(self) -> bool:
        return bool(self.appended)


def has_question_marker(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in QUESTION_MARKERS)


def should_call_remote(text: str, actions: list[Action]) -> bool:
    """Skip the assistant only for pure action turns without a question marker."""
    if not actions:
        return True
    return has_question_marker(text)


class DialogueRouter:
    def __init__(
        self,
        assistant: AssistantProvider,
        engine: StyleEngine | None = None,
        events: Any | None = None,
        welcome: str = WELCOME_MESSAGE,
    ) -> None:
        self.assistant = assistant
        self.events = events
        self.engine = engine or StyleEngine(events=events)
        self.transcript: list[Message] = [Message(role="assistant", content=welcome)]
        self.session_id: str | None = None
        self.phase = PHASE_IDLE
        self.busy = False

    def route(self, utterance: str) -> TurnResult:
        result = TurnResult()
        if not utterance or not utterance.strip() or self.busy:
            return result
        self.busy = True
        try:
            self._run_turn(utterance, result)
        finally:
            self.busy = False
            self._enter(PHASE_IDLE, result)
            self._emit(
                "turn_finished",
                actions=action_types(result.actions),
                remote_called=result.remote_called,
                remote_failed=result.remote_failed,
                phases=list(result.phases),
            )
        return result

    def _run_turn(self, utterance: str, result: TurnResult) -> None:
        self._enter(PHASE_SUBMITTED, result)
        self._emit("turn_started", message=utterance, session_id=self.session_id)
        self._append(Message(role="user", content=utterance), result)

        actions = parse_actions(utterance)
        result.actions = actions
        if actions:
            result.effects = self.engine.apply_all(actions)
            confirmation = confirmation_for(action_types(actions))
            if confirmation:
                self._append(Message(role="assistant", content=confirmation), result)
            self._enter(PHASE_ACTIONS_APPLIED, result)
            self._emit(
                "actions_applied",
                actions=action_types(actions),
                font_scale_percent=self.engine.state.font_scale_percent,
                spacing_scale_percent=self.engine.state.spacing_scale_percent,
            )

        if not should_call_remote(utterance, actions):
            self._enter(PHASE_REMOTE_SKIPPED, result)
            self._emit("remote_call_skipped", actions=action_types(actions))
            return

        self._enter(PHASE_REMOTE_PENDING, result)
        result.remote_called = True
        try:
            reply = self.assistant.send(utterance, self.session_id)
        except Exception as exc:
            result.remote_failed = True
            self._enter(PHASE_REMOTE_FAILED, result)
            self._emit("remote_call_failed", provider=self.assistant.name, error=str(exc))
            self._append(Message(role="assistant", content=FALLBACK_MESSAGE), result)
            return
        if not self.session_id:
            self.session_id = reply.session_id
        self._append(
            Message(role="assistant", content=reply.response, timestamp=reply.timestamp or now_utc_iso()),
            result,
        )
        self._enter(PHASE_REMOTE_SUCCEEDED, result)
        self._emit(
            "remote_call_succeeded",
            provider=self.assistant.name,
            session_id=self.session_id,
            message_id=reply.message_id,
            intent=reply.intent,
            confidence=reply.confidence,
        )

    def suggestions(self) -> list[Suggestion]:
        """Quick actions for the latest assistant message."""
        if self.busy or not self.transcript:
            return []
        last = self.transcript[-1]
        if last.role != "assistant":
            return []
        preceding_user = None
        for message in reversed(self.transcript[:-1]):
            if message.role == "user":
                preceding_user = message
                break
        return suggest(last, preceding_user, len(self.transcript))

    def _append(self, message: Message, result: TurnResult) -> None:
        self.transcript.append(message)
        result.appended.append(message)

    def _enter(self, phase: str, result: TurnResult) -> None:
        self.phase = phase
        result.phases.append(phase)

    def _emit(self, event_type: str, **payload: Any) -> None:
        emit_quietly(self.events, event_type, **payload)
