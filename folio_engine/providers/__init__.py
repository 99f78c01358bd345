"""Assistant provider registry."""

from __future__ import annotations

from ..config import Settings
from .base import AssistantProvider, ProviderRegistry
from .dryrun import DryRunAssistantProvider
from .remote import RemoteAssistantProvider


def default_registry(settings: Settings | None = None) -> ProviderRegistry:
    settings = settings or Settings.from_env()
    return ProviderRegistry(
        [
            DryRunAssistantProvider(),
            RemoteAssistantProvider(
                api_base=settings.chatbot_api_url,
                api_key=settings.chatbot_api_key,
                timeout_s=settings.chatbot_timeout_s,
            ),
        ]
    )


def default_assistant(settings: Settings | None = None) -> AssistantProvider:
    settings = settings or Settings.from_env()
    provider = default_registry(settings).get(settings.assistant)
    if provider is None:
        raise RuntimeError(f"Unknown assistant provider: {settings.assistant}")
    return provider
