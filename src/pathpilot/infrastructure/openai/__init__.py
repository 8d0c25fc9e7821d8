"""Hosted Assistants API adapter."""

from pathpilot.config import ProviderConfig

from .client import OpenAIAssistantsClient


def build_provider(provider_config: ProviderConfig) -> OpenAIAssistantsClient:
    """Return an ``AssistantProvider`` for *provider_config*."""
    return OpenAIAssistantsClient(
        base_url=provider_config.base_url,
        api_key=provider_config.api_key,
        timeout_s=provider_config.timeout_s,
        beta_header=provider_config.beta_header,
    )


__all__ = ["OpenAIAssistantsClient", "build_provider"]
