"""Configuration schema: provider endpoint, assistant table and polling limits."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import (
    ASSISTANTS_BETA_HEADER,
    OPENAI_BASE_URL,
    PROVIDER_HTTP_TIMEOUT_S,
    RUN_POLL_INTERVAL_S,
    RUN_TIMEOUT_S,
)


class ProviderConfig(BaseModel):
    """Hosted Assistants API endpoint."""
    model_config = ConfigDict(frozen=True)

    base_url: str = Field(OPENAI_BASE_URL, description="Assistants API base URL (threads, messages, runs).")
    api_key: str = Field("", description="Bearer token. Filled from OPENAI_API_KEY when empty.")
    timeout_s: float = Field(PROVIDER_HTTP_TIMEOUT_S, gt=0, description="HTTP timeout for one provider call.")
    beta_header: str = Field(ASSISTANTS_BETA_HEADER, description="Value sent as the OpenAI-Beta header.")


class AssistantConfig(BaseModel):
    """One selectable assistant role."""
    model_config = ConfigDict(frozen=True)

    assistant_id: str = Field(..., description="Provider-side assistant id (asst_...).")
    name: str = ""
    description: str = ""


class PathPilotConfig(BaseModel):
    """Root config: provider, assistant table and run polling limits."""
    model_config = ConfigDict(frozen=True)

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    assistants: Dict[str, AssistantConfig]
    default_assistant: str = "path-planner"
    poll_interval_s: float = Field(RUN_POLL_INTERVAL_S, gt=0)
    run_timeout_s: float = Field(RUN_TIMEOUT_S, gt=0)
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed by the HTTP API's CORS middleware.",
    )

    @model_validator(mode="after")
    def _default_assistant_declared(self) -> "PathPilotConfig":
        """Reject an empty assistant table or a default role that is not in it.

        Either mistake would otherwise only surface as an AssistantConfigError
        on the first request.
        """
        if not self.assistants:
            raise ValueError("assistants must not be empty: at least one assistant must be defined.")
        if self.default_assistant not in self.assistants:
            raise ValueError(
                f"default_assistant {self.default_assistant!r} is not defined in assistants "
                f"({', '.join(sorted(self.assistants))})."
            )
        return self


DEFAULT_CONFIG = PathPilotConfig(
    assistants={
        "path-planner": AssistantConfig(
            assistant_id="asst_c4kI5II18ObMEAfs5fAxDSPH",
            name="Decision Bot",
            description="Inspiration: Decisive by Chip & Dan Heath",
        ),
        "atomic-habits": AssistantConfig(
            assistant_id="asst_u1UIib7yww7O7AzxHy5rBBpx",
            name="Habit Doctor",
            description="Inspiration: Atomic Habits by James Clear",
        ),
        "essentialist": AssistantConfig(
            assistant_id="asst_essentialist",
            name="Essentialist",
            description="Inspiration: Essentialism by Greg McKeown",
        ),
        "flow-zone": AssistantConfig(
            assistant_id="asst_flow_zone",
            name="Flow Zone",
            description="Inspiration: Flow by Mihaly Csikszentmihalyi",
        ),
    },
)
