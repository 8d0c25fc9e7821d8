"""Domain and application errors."""

from __future__ import annotations

from typing import Any, Optional


class PathPilotError(Exception):
    """Base for pathpilot errors."""
    pass


class AssistantConfigError(PathPilotError):
    """Assistant selector is not present in the configured assistant table."""

    def __init__(self, selector: str):
        super().__init__(f"Invalid assistant ID: {selector}")
        self.selector = selector


class ProviderError(PathPilotError):
    """A call to the hosted assistant provider failed.

    ``details`` keeps the provider's structured error body (or raw text) so the
    HTTP layer can forward it and inspect it for known substrings.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    @property
    def is_thread_not_found(self) -> bool:
        return "no thread found" in self.message.lower()


class RunFailedError(PathPilotError):
    """The provider run reached ``failed``."""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason or "Unknown error"
        super().__init__(f"Run failed: {self.reason}")


class UnexpectedRunStatusError(PathPilotError):
    """The run left the pending states with a status other than ``completed`` or ``failed``."""

    def __init__(self, status: str):
        super().__init__(f"Run ended with unexpected status: {status}")
        self.status = status


class RunTimeoutError(PathPilotError):
    """The run was still pending when the polling deadline passed."""

    def __init__(self, thread_id: str, run_id: str, timeout_s: float):
        super().__init__(
            f"Run {run_id} on thread {thread_id} did not finish within {timeout_s:g}s"
        )
        self.thread_id = thread_id
        self.run_id = run_id
        self.timeout_s = timeout_s


class RunCancelledError(PathPilotError):
    """Polling stopped because the caller went away."""
    pass
