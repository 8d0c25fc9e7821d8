"""Decide use case: drive one assistant turn to completion.

Flow: resolve assistant → reuse or create thread → append the user prompt →
start a run offering the ``PathPlan_response`` tool → poll the run until it
leaves the pending states → read the newest message → parse and strip the
in-band directive → return ``DecisionResponse``.

Dependencies are injected (ports only); this module never imports from
``infrastructure`` or ``interfaces``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pathpilot.application.ports import AssistantProvider, AssistantRegistry
from pathpilot.config import PathPilotConfig
from pathpilot.config.constants import MAX_TEXT_IN_LOG_CHARS
from pathpilot.domain import (
    DecisionRequest,
    DecisionResponse,
    Run,
    RunCancelledError,
    RunFailedError,
    RunStatus,
    RunTimeoutError,
    UnexpectedRunStatusError,
)
from pathpilot.domain.directive import (
    PLAN_FUNCTION_NAME,
    find_directive_block,
    is_plan_complete,
    strip_directive,
)

logger = logging.getLogger(__name__)


async def _sleep_or_cancel(delay: float, cancel_event: Optional[asyncio.Event]) -> bool:
    """Sleep ``delay`` seconds; return True early if ``cancel_event`` gets set."""
    if cancel_event is None:
        await asyncio.sleep(delay)
        return False
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return False
    return True


async def wait_for_run(
    provider: AssistantProvider,
    run: Run,
    *,
    poll_interval_s: float,
    timeout_s: float,
    cancel_event: Optional[asyncio.Event] = None,
) -> Run:
    """Poll ``run`` until it is no longer queued or in progress.

    Returns the completed run.

    Raises:
        RunFailedError: status ``failed``; carries ``last_error`` when present.
        UnexpectedRunStatusError: any other non-pending status than ``completed``
            (``requires_action``, ``cancelled``, ``expired``, ...).
        RunTimeoutError: still pending after ``timeout_s`` seconds.
        RunCancelledError: ``cancel_event`` was set while waiting.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_s

    current = await provider.retrieve_run(run.thread_id, run.id)
    logger.debug("Run %s initial status: %s", run.id, current.status)

    while current.is_pending:
        remaining = deadline - loop.time()
        if remaining <= 0:
            logger.warning("Run %s still %s after %.1fs; giving up", run.id, current.status, timeout_s)
            raise RunTimeoutError(run.thread_id, run.id, timeout_s)
        if cancel_event is not None and cancel_event.is_set():
            raise RunCancelledError(f"Polling of run {run.id} cancelled")
        if await _sleep_or_cancel(min(poll_interval_s, remaining), cancel_event):
            logger.info("Client went away; stopped polling run %s", run.id)
            raise RunCancelledError(f"Polling of run {run.id} cancelled")
        current = await provider.retrieve_run(run.thread_id, run.id)
        logger.debug("Run %s status: %s", run.id, current.status)

    if current.status == RunStatus.FAILED.value:
        logger.error("Run %s failed: %s", run.id, current.last_error)
        raise RunFailedError(current.last_error)
    if current.status != RunStatus.COMPLETED.value:
        raise UnexpectedRunStatusError(current.status)
    return current


async def decide(
    request: DecisionRequest,
    *,
    provider: AssistantProvider,
    registry: AssistantRegistry,
    config: PathPilotConfig,
    cancel_event: Optional[asyncio.Event] = None,
) -> DecisionResponse:
    """Run one assistant turn for ``request`` and return the cleaned reply.

    Args:
        request: Prompt (non-empty), optional thread id, optional assistant selector.
        provider: Hosted assistant API (``AssistantProvider`` port).
        registry: Assistant table (``AssistantRegistry`` port).
        config: Supplies the default selector and polling limits.
        cancel_event: Set by the caller (e.g. on client disconnect) to stop polling.

    Returns:
        ``DecisionResponse`` whose ``thread_id`` is the thread used for this turn.

    Raises:
        AssistantConfigError: Unknown selector; raised before any provider call.
        ProviderError: Any provider call failed.
        RunFailedError, UnexpectedRunStatusError, RunTimeoutError, RunCancelledError:
            See ``wait_for_run``.
    """
    selector = request.assistant_id or config.default_assistant
    assistant = registry.resolve(selector)

    if request.thread_id:
        thread_id = request.thread_id
        logger.info("Using existing thread %s", thread_id)
    else:
        thread_id = await provider.create_thread()
        logger.info("Created new thread %s", thread_id)

    logger.debug("Adding message to thread %s: %r", thread_id, request.prompt[:MAX_TEXT_IN_LOG_CHARS])
    await provider.add_message(thread_id, request.prompt, role="user")

    run = await provider.create_run(
        thread_id,
        assistant.assistant_id,
        tools=registry.tool_definitions,
    )
    logger.info("Created run %s with assistant %s (%s)", run.id, selector, assistant.assistant_id)

    await wait_for_run(
        provider,
        run,
        poll_interval_s=config.poll_interval_s,
        timeout_s=config.run_timeout_s,
        cancel_event=cancel_event,
    )

    messages = await provider.list_messages(thread_id, limit=1)
    raw_text = messages[0].text if messages else None
    if raw_text is None:
        logger.warning("Newest message on thread %s has no text content", thread_id)
        return DecisionResponse(response="", is_complete=False, thread_id=thread_id)

    is_complete = is_plan_complete(raw_text, PLAN_FUNCTION_NAME)
    if find_directive_block(raw_text) is not None:
        logger.info("%s directive on thread %s: %s", PLAN_FUNCTION_NAME, thread_id, is_complete)
    else:
        logger.debug("No directive block in reply on thread %s", thread_id)

    return DecisionResponse(
        response=strip_directive(raw_text),
        is_complete=is_complete,
        thread_id=thread_id,
    )
