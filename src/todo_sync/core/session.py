# src/todo_sync/core/session.py

from __future__ import annotations

"""
Client synchronization layer.

TodoSession keeps an ordered, newest-first list of task records that mirrors the
Task Service. Local state changes only after the server acknowledges a call;
on failure the list is left as it was and a single shared error slot is set.

Scheduling model: one event loop, suspension only at network I/O. Overlapping
calls are not sequenced, so responses apply in completion order.
"""

import logging
from dataclasses import replace
from types import TracebackType

from ..tasks.task_models import TaskFilter, TaskRecord, TaskStats
from .errors import TaskServiceError
from .ports import TaskService

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch todos"
ADD_FAILED = "Failed to add todo"
UPDATE_FAILED = "Failed to update todo"
DELETE_FAILED = "Failed to delete todo"
EMPTY_TEXT = "Todo text cannot be empty"


class TodoSession:
    def __init__(self, service: TaskService) -> None:
        self._service = service
        self._todos: list[TaskRecord] = []
        self._loading = False
        self._error: str | None = None
        self._initialized = False

    # ---- lifecycle ----

    async def init(self) -> tuple[TaskRecord, ...]:
        """Initial full fetch. Call once per session; later calls are no-ops."""
        if self._initialized:
            logger.debug("Session already initialized (%d todos).", len(self._todos))
            return self.todos()
        self._initialized = True
        return await self.fetch_all()

    def reset(self) -> None:
        """Drop local state (e.g. on logout). The next init() fetches again."""
        self._todos = []
        self._error = None
        self._loading = False
        self._initialized = False

    async def aclose(self) -> None:
        await self._service.aclose()

    async def __aenter__(self) -> TodoSession:
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ---- accessors ----

    @property
    def initialized(self) -> bool:
        return self._initialized

    def todos(self) -> tuple[TaskRecord, ...]:
        return tuple(self._todos)

    def get(self, task_id: str) -> TaskRecord | None:
        for todo in self._todos:
            if todo.id == task_id:
                return todo
        return None

    def is_loading(self) -> bool:
        return self._loading

    def error(self) -> str | None:
        return self._error

    def clear_error(self) -> None:
        self._error = None

    def filtered(self, task_filter: TaskFilter = TaskFilter.ALL) -> tuple[TaskRecord, ...]:
        return tuple(t for t in self._todos if t.matches(task_filter))

    def stats(self) -> TaskStats:
        return TaskStats.of(self._todos)

    # ---- operations ----

    def _fail(self, message: str, exc: TaskServiceError) -> None:
        self._error = message
        logger.warning("%s: %s", message, exc, exc_info=True)

    async def fetch_all(self) -> tuple[TaskRecord, ...]:
        self._loading = True
        try:
            records = await self._service.list_tasks()
        except TaskServiceError as e:
            self._fail(FETCH_FAILED, e)
            return self.todos()
        finally:
            self._loading = False

        unique: list[TaskRecord] = []
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                logger.warning("Dropping duplicate todo id=%s from fetch.", record.id)
                continue
            seen.add(record.id)
            unique.append(record)

        self._todos = unique
        self._error = None
        logger.info("Fetched %d todos.", len(unique))
        return self.todos()

    async def create(self, text: str) -> TaskRecord | None:
        text = (text or "").strip()
        if not text:
            self._error = EMPTY_TEXT
            logger.info("Rejected empty todo text.")
            return None

        try:
            record = await self._service.create_task(text=text)
        except TaskServiceError as e:
            self._fail(ADD_FAILED, e)
            return None

        # Keep ids unique even if the same record somehow arrived via a concurrent fetch.
        self._todos = [record, *(t for t in self._todos if t.id != record.id)]
        logger.info("Added todo id=%s.", record.id)
        return record

    async def update(self, task_id: str, completed: bool) -> TaskRecord | None:
        try:
            echoed = await self._service.update_task(task_id, completed=bool(completed))
        except TaskServiceError as e:
            self._fail(UPDATE_FAILED, e)
            return None

        # Apply against the current list (it may have changed while we were suspended).
        local = self.get(task_id)
        if local is None:
            logger.info("Updated todo id=%s is not in the local list; nothing to apply.", task_id)
            return echoed

        updated = replace(local, completed=echoed.completed)
        self._todos = [updated if t.id == task_id else t for t in self._todos]
        logger.info("Updated todo id=%s completed=%s.", task_id, updated.completed)
        return updated

    async def delete(self, task_id: str) -> bool:
        try:
            await self._service.delete_task(task_id)
        except TaskServiceError as e:
            self._fail(DELETE_FAILED, e)
            return False

        self._todos = [t for t in self._todos if t.id != task_id]
        logger.info("Deleted todo id=%s.", task_id)
        return True
