"""Domain layer: entities, value objects and the directive parser. No I/O."""

from .models import (
    DecisionRequest,
    DecisionResponse,
    MessageContent,
    PlanDirective,
    Run,
    RunStatus,
    ThreadMessage,
    build_decision_request,
)
from .errors import (
    AssistantConfigError,
    PathPilotError,
    ProviderError,
    RunCancelledError,
    RunFailedError,
    RunTimeoutError,
    UnexpectedRunStatusError,
)

__all__ = [
    "DecisionRequest",
    "DecisionResponse",
    "MessageContent",
    "PlanDirective",
    "Run",
    "RunStatus",
    "ThreadMessage",
    "build_decision_request",
    "AssistantConfigError",
    "PathPilotError",
    "ProviderError",
    "RunCancelledError",
    "RunFailedError",
    "RunTimeoutError",
    "UnexpectedRunStatusError",
]
