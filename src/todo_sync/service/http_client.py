# src/todo_sync/service/http_client.py

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..core.errors import NetworkFailure, ParseFailure, ServerError
from ..tasks.task_models import TaskRecord

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Best-effort server-side message from an error body ({"message": ...} or {"error": ...})."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()[:200]
    if isinstance(body, dict):
        for key in ("message", "error"):
            val = body.get(key)
            if isinstance(val, str) and val.strip():
                return val.strip()
    return ""


def _make_timeout_obj(timeout_s: float | None) -> Any:
    if timeout_s is None:
        return httpx.USE_CLIENT_DEFAULT
    return httpx.Timeout(timeout_s)


class HttpTaskService:
    """
    Task Service over HTTP (JSON bodies).

    Routes (relative to base_url):
    - GET    {todos_path}       -> list
    - POST   {todos_path}       -> create {text}
    - PUT    {todos_path}/{id}  -> update {completed}
    - DELETE {todos_path}/{id}  -> delete

    Each call raises NetworkFailure, ServerError or ParseFailure; nothing else escapes.
    No retries: a failed call is reported once and the caller decides.
    """

    def __init__(
        self,
        *,
        base_url: str,
        todos_path: str = "/api/todos",
        api_token: str | None = None,
        timeout_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._todos_path = "/" + todos_path.strip().strip("/")
        self._timeout = _make_timeout_obj(timeout_seconds)

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"

        if client is None:
            self._client = httpx.AsyncClient(base_url=base_url, headers=headers)
            self._owns_client = True
        else:
            # Injected clients (tests, shared pools) keep their own lifecycle.
            client.headers.update(headers)
            self._client = client
            self._owns_client = False

    @classmethod
    def from_settings(cls, settings: Any) -> HttpTaskService:
        return cls(
            base_url=settings.base_url,
            todos_path=settings.todos_path,
            api_token=settings.api_token,
            timeout_seconds=settings.http_timeout_seconds,
        )

    def _item_path(self, task_id: str) -> str:
        return f"{self._todos_path}/{quote(str(task_id), safe='')}"

    async def _request(self, method: str, path: str, *, body: dict[str, Any] | None = None) -> httpx.Response:
        try:
            response = await self._client.request(method, path, json=body, timeout=self._timeout)
        except httpx.DecodingError as e:
            # Body arrived but its Content-Encoding could not be undone.
            raise ParseFailure(f"{method} {path} returned an undecodable body: {e}") from e
        except httpx.RequestError as e:
            raise NetworkFailure(f"{method} {path} failed: {e.__class__.__name__}: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)

        if not response.is_success:
            raise ServerError(response.status_code, _error_message(response))
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseFailure(f"Malformed JSON from Task Service: {e}") from e

    async def list_tasks(self) -> list[TaskRecord]:
        response = await self._request("GET", self._todos_path)
        data = self._json(response)
        if not isinstance(data, list):
            raise ParseFailure(f"Expected a list of tasks, got {type(data).__name__}")
        return [TaskRecord.from_wire(item) for item in data]

    async def create_task(self, *, text: str) -> TaskRecord:
        response = await self._request("POST", self._todos_path, body={"text": text})
        return TaskRecord.from_wire(self._json(response))

    async def update_task(self, task_id: str, *, completed: bool) -> TaskRecord:
        response = await self._request("PUT", self._item_path(task_id), body={"completed": bool(completed)})
        return TaskRecord.from_wire(self._json(response))

    async def delete_task(self, task_id: str) -> None:
        # Response body (usually {"id": ...} or a message) is not needed.
        await self._request("DELETE", self._item_path(task_id))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
