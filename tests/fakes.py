# tests/fakes.py

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

import httpx

from todo_sync.core.errors import ServerError, TaskServiceError
from todo_sync.tasks.task_models import TaskRecord


@dataclass(slots=True)
class FakeTaskService:
    """
    In-memory authoritative Task Service used by session tests.

    - Keeps records newest-first, like the real list endpoint
    - Hands out copies so local and server records never alias
    - Captures calls for assertions
    - `fail` maps an operation name ("list", "create", "update", "delete")
      to the error the next call of that kind should raise
    """

    records: list[TaskRecord] = field(default_factory=list)
    calls: list[tuple[str, tuple]] = field(default_factory=list)
    fail: dict[str, TaskServiceError] = field(default_factory=dict)
    closed: bool = False
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def _maybe_fail(self, op: str) -> None:
        err = self.fail.pop(op, None)
        if err is not None:
            raise err

    def _find(self, task_id: str) -> TaskRecord:
        for r in self.records:
            if r.id == task_id:
                return r
        raise ServerError(404, "Todo not found")

    def seed(self, *texts: str) -> list[TaskRecord]:
        """Insert records directly (oldest first), bypassing call capture."""
        for text in texts:
            now = datetime.now(UTC)
            self.records.insert(0, TaskRecord(id=str(next(self._ids)), text=text, created_at=now, updated_at=now))
        return [replace(r) for r in self.records]

    async def list_tasks(self) -> list[TaskRecord]:
        self.calls.append(("list", ()))
        self._maybe_fail("list")
        return [replace(r) for r in self.records]

    async def create_task(self, *, text: str) -> TaskRecord:
        self.calls.append(("create", (text,)))
        self._maybe_fail("create")
        now = datetime.now(UTC)
        record = TaskRecord(id=str(next(self._ids)), text=text, completed=False, created_at=now, updated_at=now)
        self.records.insert(0, record)
        return replace(record)

    async def update_task(self, task_id: str, *, completed: bool) -> TaskRecord:
        self.calls.append(("update", (task_id, completed)))
        self._maybe_fail("update")
        record = replace(
            self._find(task_id),
            completed=self.normalize_completed(completed),
            updated_at=datetime.now(UTC),
        )
        self.records = [record if r.id == task_id else r for r in self.records]
        return record

    async def delete_task(self, task_id: str) -> None:
        self.calls.append(("delete", (task_id,)))
        self._maybe_fail("delete")
        record = self._find(task_id)
        self.records.remove(record)

    async def aclose(self) -> None:
        self.closed = True

    def normalize_completed(self, completed: bool) -> bool:
        return completed


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by `handler(request) -> httpx.Response`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://tasks.test")
