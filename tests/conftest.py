"""Pytest fixtures and helpers for pathpilot tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

from pathpilot.config import AssistantConfig, PathPilotConfig
from pathpilot.domain import MessageContent, ProviderError, Run, ThreadMessage

# Repo root (parent of tests/)
REPO_ROOT = Path(__file__).resolve().parent.parent

PLAN_REPLY = (
    "Consider X, Y, Z.\n\n"
    "<function_calls>\n"
    "<invoke name=\"PathPlan_response\">\n"
    "<parameter name=\"is_pathPlan\">true</parameter>\n"
    "</invoke>\n"
    "</function_calls>"
)


class FakeProvider:
    """In-memory ``AssistantProvider`` that records every call.

    ``statuses`` is the sequence returned by successive ``retrieve_run`` calls;
    the last one repeats.  ``fail_on`` maps a method name to a ``ProviderError``
    raised when that method is called.
    """

    def __init__(
        self,
        *,
        statuses: Sequence[str] = ("completed",),
        reply: Optional[str] = "Hello",
        content_type: str = "text",
        thread_id: str = "conv_1",
        last_error: Optional[str] = None,
        fail_on: Optional[Dict[str, ProviderError]] = None,
    ):
        self.statuses = list(statuses)
        self.reply = reply
        self.content_type = content_type
        self.thread_id = thread_id
        self.last_error = last_error
        self.fail_on = fail_on or {}
        self.calls: List[tuple] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise self.fail_on[name]

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)

    @property
    def call_names(self) -> List[str]:
        return [c[0] for c in self.calls]

    async def create_thread(self) -> str:
        self._record("create_thread")
        return self.thread_id

    async def add_message(self, thread_id: str, content: str, *, role: str = "user") -> str:
        self._record("add_message", thread_id, content, role)
        return "msg_user"

    async def create_run(self, thread_id, assistant_id, *, tools=None) -> Run:
        self._record("create_run", thread_id, assistant_id, tools)
        return Run(id="run_1", thread_id=thread_id, status="queued")

    async def retrieve_run(self, thread_id: str, run_id: str) -> Run:
        self._record("retrieve_run", thread_id, run_id)
        status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        last_error = self.last_error if status == "failed" else None
        return Run(id=run_id, thread_id=thread_id, status=status, last_error=last_error)

    async def list_messages(self, thread_id: str, *, limit: int = 20) -> List[ThreadMessage]:
        self._record("list_messages", thread_id, limit)
        if self.reply is None:
            return []
        part = MessageContent(type=self.content_type, text=self.reply if self.content_type == "text" else None)
        return [ThreadMessage(id="msg_assistant", role="assistant", content=[part])]


@pytest.fixture
def make_provider():
    """Factory for ``FakeProvider`` instances."""
    return FakeProvider


@pytest.fixture
def fast_config() -> PathPilotConfig:
    """Two assistants and a near-zero poll interval so polling tests run instantly."""
    return PathPilotConfig(
        assistants={
            "path-planner": AssistantConfig(assistant_id="asst_planner", name="Decision Bot"),
            "atomic-habits": AssistantConfig(assistant_id="asst_habits", name="Habit Doctor"),
        },
        poll_interval_s=0.001,
        run_timeout_s=5.0,
    )


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Clear the load_config cache and reset ``_env`` before and after every test.

    Each test then sees a fresh config load, so monkeypatching
    PATHPILOT_CONFIG_PATH or OPENAI_API_KEY does not bleed between tests.
    """
    from pathpilot.config import loader as config_loader
    config_loader.load_config.cache_clear()
    config_loader._env = None
    yield
    config_loader.load_config.cache_clear()
    config_loader._env = None


@pytest.fixture
def plan_reply() -> str:
    """Assistant reply ending in a PathPlan_response(true) directive."""
    return PLAN_REPLY
