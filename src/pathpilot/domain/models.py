"""Domain models: runs, thread messages, directives and decision request/response. Pure data, no I/O."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class RunStatus(str, Enum):
    """Run statuses reported by the Assistants API."""
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"


PENDING_STATUSES = frozenset({RunStatus.QUEUED.value, RunStatus.IN_PROGRESS.value})


@dataclass(frozen=True)
class Run:
    """Snapshot of a provider run. ``status`` is kept as the raw string so unknown values survive."""
    id: str
    thread_id: str
    status: str
    last_error: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status in PENDING_STATUSES


@dataclass(frozen=True)
class MessageContent:
    """One content part of a thread message (``type`` is e.g. ``text`` or ``image_file``)."""
    type: str
    text: Optional[str] = None


@dataclass(frozen=True)
class ThreadMessage:
    id: str
    role: str
    content: List[MessageContent] = field(default_factory=list)

    @property
    def text(self) -> Optional[str]:
        """Text of the first content part, or None when it is not plain text."""
        if not self.content or self.content[0].type != "text":
            return None
        return self.content[0].text or ""


@dataclass(frozen=True)
class PlanDirective:
    """The function invocation found inside a ``<function_calls>`` block.

    ``parameter_name`` is whatever the first ``<parameter>`` was called.  It is
    recorded for logging and tests only: completion is decided by
    ``function_name`` and ``value``, so a reply using another name than
    ``is_pathPlan`` still counts.
    """
    function_name: str
    parameter_name: str
    value: bool


@dataclass
class DecisionRequest:
    """User prompt plus optional conversation handle and assistant selector."""
    prompt: str
    thread_id: Optional[str] = None
    assistant_id: Optional[str] = None


def build_decision_request(
    prompt: str,
    thread_id: Optional[str],
    assistant_id: Optional[str],
) -> DecisionRequest:
    """Construct a DecisionRequest from external input.

    Empty or whitespace-only ``thread_id`` / ``assistant_id`` mean "not given",
    so the CLI (where Typer supplies ``""``) and the HTTP API (``Optional[str]``)
    normalise the same way.
    """
    return DecisionRequest(
        prompt=prompt,
        thread_id=(thread_id or "").strip() or None,
        assistant_id=(assistant_id or "").strip() or None,
    )


@dataclass(frozen=True)
class DecisionResponse:
    """Result of one decision turn: cleaned text, plan-complete flag and conversation handle."""
    response: str
    is_complete: bool
    thread_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "response": self.response,
            "isComplete": self.is_complete,
            "threadId": self.thread_id,
        }
