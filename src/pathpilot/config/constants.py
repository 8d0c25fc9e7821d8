"""Named constants for values that appear in multiple places or need explanation."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Run polling
# ---------------------------------------------------------------------------

# Delay between two run-status fetches while the run is queued or in progress.
RUN_POLL_INTERVAL_S: float = 1.0

# Wall-clock ceiling for one run.  Assistant turns normally finish in 5-30 s;
# past this the request fails with RunTimeoutError instead of polling forever.
RUN_TIMEOUT_S: float = 90.0

# ---------------------------------------------------------------------------
# Provider HTTP
# ---------------------------------------------------------------------------

OPENAI_BASE_URL: str = "https://api.openai.com/v1"

# Value of the ``OpenAI-Beta`` header required by the Assistants API.
ASSISTANTS_BETA_HEADER: str = "assistants=v2"

# HTTP timeout for a single provider call (create thread, add message, ...).
# Run polling is bounded separately by RUN_TIMEOUT_S.
PROVIDER_HTTP_TIMEOUT_S: float = 60.0

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

# Prompts and replies are truncated to this many characters in log lines.
MAX_TEXT_IN_LOG_CHARS: int = 80
