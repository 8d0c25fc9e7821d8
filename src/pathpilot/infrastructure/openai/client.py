"""Assistants API client (threads, messages, runs) over plain HTTP.

Speaks the OpenAI Assistants v2 wire format with ``httpx``.  Every non-2xx
response and every transport failure is converted to ``ProviderError`` with
the provider's error message and body preserved, so callers can inspect it
(e.g. for "No thread found").
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from pathpilot.config.constants import (
    ASSISTANTS_BETA_HEADER,
    OPENAI_BASE_URL,
    PROVIDER_HTTP_TIMEOUT_S,
)
from pathpilot.domain import MessageContent, ProviderError, Run, ThreadMessage

logger = logging.getLogger(__name__)


class OpenAIAssistantsClient:
    """``AssistantProvider`` implementation for the OpenAI Assistants API.

    ``transport`` is passed through to ``httpx.AsyncClient``; tests inject an
    ``httpx.MockTransport`` there.
    """

    def __init__(
        self,
        base_url: str = OPENAI_BASE_URL,
        api_key: str = "",
        timeout_s: float = PROVIDER_HTTP_TIMEOUT_S,
        beta_header: str = ASSISTANTS_BETA_HEADER,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout_s
        self._beta_header = beta_header
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"OpenAI-Beta": self._beta_header}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            ) as client:
                r = await client.request(method, url, headers=self._headers(), json=json, params=params)
        except httpx.HTTPError as e:
            raise ProviderError(f"Assistant provider unreachable ({url}): {e}") from e

        if r.is_error:
            message, details = _extract_error(r)
            raise ProviderError(message, status_code=r.status_code, details=details)
        try:
            data = r.json()
        except ValueError as e:
            raise ProviderError(
                f"Provider returned a non-JSON body for {method} {path}",
                status_code=r.status_code,
                details=r.text,
            ) from e
        if not isinstance(data, dict):
            raise ProviderError(
                f"Provider returned an unexpected body for {method} {path}",
                status_code=r.status_code,
                details=data,
            )
        return data

    async def create_thread(self) -> str:
        data = await self._request("POST", "/threads", json={})
        return _require_id(data, "thread")

    async def add_message(self, thread_id: str, content: str, *, role: str = "user") -> str:
        data = await self._request(
            "POST",
            f"/threads/{thread_id}/messages",
            json={"role": role, "content": content},
        )
        return _require_id(data, "message")

    async def create_run(
        self,
        thread_id: str,
        assistant_id: str,
        *,
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> Run:
        payload: Dict[str, Any] = {"assistant_id": assistant_id}
        if tools:
            payload["tools"] = tools
        data = await self._request("POST", f"/threads/{thread_id}/runs", json=payload)
        return parse_run(data, thread_id)

    async def retrieve_run(self, thread_id: str, run_id: str) -> Run:
        data = await self._request("GET", f"/threads/{thread_id}/runs/{run_id}")
        return parse_run(data, thread_id)

    async def list_messages(self, thread_id: str, *, limit: int = 20) -> List[ThreadMessage]:
        data = await self._request(
            "GET",
            f"/threads/{thread_id}/messages",
            params={"limit": limit, "order": "desc"},
        )
        return [parse_message(m) for m in data.get("data") or []]


def _extract_error(response: httpx.Response) -> tuple[str, Any]:
    """Return (human-readable message, structured body) for an error response."""
    try:
        body = response.json()
    except ValueError:
        text = response.text or ""
        return (text or f"Provider returned HTTP {response.status_code}"), text or None
    message = ""
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict):
            message = err.get("message") or ""
        elif isinstance(err, str):
            message = err
    return (message or f"Provider returned HTTP {response.status_code}"), body


def _require_id(data: Dict[str, Any], kind: str) -> str:
    """Return ``data["id"]``, or raise ProviderError when the object has none."""
    object_id = data.get("id")
    if not object_id:
        raise ProviderError(f"Provider returned a {kind} without an id", details=data)
    return object_id


def parse_run(data: Dict[str, Any], thread_id: str) -> Run:
    """Parse a run object; ``last_error`` is reduced to its message."""
    last_error = data.get("last_error")
    if isinstance(last_error, dict):
        last_error = last_error.get("message")
    return Run(
        id=_require_id(data, "run"),
        thread_id=data.get("thread_id") or thread_id,
        status=data.get("status") or "",
        last_error=last_error or None,
    )


def parse_message(data: Dict[str, Any]) -> ThreadMessage:
    """Parse a thread message; only ``text`` parts keep their value."""
    parts: List[MessageContent] = []
    for part in data.get("content") or []:
        kind = part.get("type") or ""
        text: Optional[str] = None
        if kind == "text":
            text = (part.get("text") or {}).get("value") or ""
        parts.append(MessageContent(type=kind, text=text))
    return ThreadMessage(id=data.get("id") or "", role=data.get("role") or "", content=parts)
