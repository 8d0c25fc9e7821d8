"""HTTP API: FastAPI app wired to the decide use case."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pathpilot.application.decide import decide
from pathpilot.config import load_config
from pathpilot.config.constants import MAX_TEXT_IN_LOG_CHARS
from pathpilot.domain import (
    AssistantConfigError,
    PathPilotError,
    ProviderError,
    RunCancelledError,
    RunFailedError,
    RunTimeoutError,
    UnexpectedRunStatusError,
    build_decision_request,
)
from pathpilot.infrastructure.assistants import ConfigAssistantRegistry
from pathpilot.infrastructure.openai import build_provider

logger = logging.getLogger(__name__)

# Interval at which an in-flight /api/decide request checks for client disconnect.
_DISCONNECT_POLL_S = 0.5


@asynccontextmanager
async def _lifespan(app: FastAPI):  # noqa: ARG001
    config = load_config()
    if not config.provider.api_key:
        logger.warning("No provider API key configured; set OPENAI_API_KEY")
    yield


app = FastAPI(title="pathpilot", lifespan=_lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=load_config().cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


class DecideRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str
    thread_id: Optional[str] = Field(None, alias="threadId")
    assistant_id: Optional[str] = Field(None, alias="assistantId")

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("prompt must not be empty")
        return v


def _error_response(status_code: int, error: str, details: Any = None, **extra: Any) -> JSONResponse:
    content = {"error": error, "details": details if details is not None else "No additional details available"}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def _map_error(exc: PathPilotError) -> JSONResponse:
    """Map an orchestrator error to a status code and ``{error, details}`` body."""
    if isinstance(exc, AssistantConfigError):
        return _error_response(500, str(exc), {"assistantId": exc.selector})
    if isinstance(exc, RunTimeoutError):
        return _error_response(
            504,
            "The assistant is still working on this. Please try again in a moment.",
            {"threadId": exc.thread_id, "runId": exc.run_id, "timeoutSeconds": exc.timeout_s},
        )
    if isinstance(exc, ProviderError):
        if exc.is_thread_not_found:
            return _error_response(502, exc.message, exc.details, threadExpired=True)
        return _error_response(502, exc.message, exc.details)
    if isinstance(exc, RunFailedError):
        return _error_response(502, str(exc), {"reason": exc.reason})
    if isinstance(exc, UnexpectedRunStatusError):
        return _error_response(502, str(exc), {"status": exc.status})
    if isinstance(exc, RunCancelledError):
        return _error_response(499, str(exc))
    return _error_response(500, str(exc))


async def _watch_disconnect(request: Request, cancel_event: asyncio.Event) -> None:
    """Set ``cancel_event`` once the client has gone away."""
    while not cancel_event.is_set():
        if await request.is_disconnected():
            logger.info("Client disconnected from %s", request.url.path)
            cancel_event.set()
            return
        await asyncio.sleep(_DISCONNECT_POLL_S)


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/api/assistants")
def list_assistants():
    """Selectable assistant roles: ``[{id, name, description}]``."""
    return ConfigAssistantRegistry(load_config()).describe()


@app.post("/api/decide")
async def decide_endpoint(req: DecideRequest, request: Request):
    logger.info(
        "POST /api/decide prompt=%r thread=%s assistant=%s",
        req.prompt[:MAX_TEXT_IN_LOG_CHARS], req.thread_id, req.assistant_id,
    )
    config = load_config()
    provider = build_provider(config.provider)
    registry = ConfigAssistantRegistry(config)
    decision_request = build_decision_request(req.prompt, req.thread_id, req.assistant_id)

    cancel_event = asyncio.Event()
    watcher = asyncio.create_task(_watch_disconnect(request, cancel_event))
    try:
        result = await decide(
            decision_request,
            provider=provider,
            registry=registry,
            config=config,
            cancel_event=cancel_event,
        )
    except PathPilotError as e:
        logger.error("POST /api/decide failed: %s: %s", type(e).__name__, e)
        return _map_error(e)
    finally:
        watcher.cancel()

    logger.info(
        "POST /api/decide completed thread=%s complete=%s",
        result.thread_id, result.is_complete,
    )
    return result.to_dict()
