"""Configuration: schema, loading from env/file, and shared constants."""

from .schema import DEFAULT_CONFIG, AssistantConfig, PathPilotConfig, ProviderConfig
from .loader import load_config
from .constants import (
    ASSISTANTS_BETA_HEADER,
    MAX_TEXT_IN_LOG_CHARS,
    OPENAI_BASE_URL,
    PROVIDER_HTTP_TIMEOUT_S,
    RUN_POLL_INTERVAL_S,
    RUN_TIMEOUT_S,
)

__all__ = [
    "DEFAULT_CONFIG", "AssistantConfig", "PathPilotConfig", "ProviderConfig",
    "load_config",
    "ASSISTANTS_BETA_HEADER", "MAX_TEXT_IN_LOG_CHARS", "OPENAI_BASE_URL",
    "PROVIDER_HTTP_TIMEOUT_S", "RUN_POLL_INTERVAL_S", "RUN_TIMEOUT_S",
]
