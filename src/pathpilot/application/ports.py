"""Ports (abstract interfaces) used by the application layer.

Each port is a ``Protocol`` so the orchestrator depends only on the *shape* of
the collaborator.  Infrastructure adapters satisfy these shapes; the
application never imports from infrastructure.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from pathpilot.config import AssistantConfig
from pathpilot.domain import Run, ThreadMessage


class AssistantProvider(Protocol):
    """Hosted conversational-assistant API (threads, messages, runs).

    Every method raises ``ProviderError`` on failure, with the provider's error
    body preserved in ``details``.
    """

    async def create_thread(self) -> str:
        """Create an empty conversation and return its id."""
        ...

    async def add_message(self, thread_id: str, content: str, *, role: str = "user") -> str:
        """Append a message to the conversation and return the message id."""
        ...

    async def create_run(
        self,
        thread_id: str,
        assistant_id: str,
        *,
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> Run: ...

    async def retrieve_run(self, thread_id: str, run_id: str) -> Run: ...

    async def list_messages(self, thread_id: str, *, limit: int = 20) -> List[ThreadMessage]:
        """Messages of the conversation, newest first."""
        ...


class AssistantRegistry(Protocol):
    """Resolve an assistant selector to its configured provider assistant."""

    def resolve(self, selector: str) -> AssistantConfig:
        """Raise ``AssistantConfigError`` when ``selector`` is not configured."""
        ...

    @property
    def tool_definitions(self) -> List[Dict[str, Any]]:
        """OpenAI-format tool definitions offered to every run (the plan-complete signal)."""
        ...

    def list_ids(self) -> List[str]: ...
