# src/todo_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The session depends on a Protocol instead of the concrete HTTP client.
This keeps the transport swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import TaskRecord


class TaskService(Protocol):
    """
    Remote CRUD store for task records.

    Every method raises a TaskServiceError subclass on failure
    (NetworkFailure / ServerError / ParseFailure) and nothing else.
    """

    async def list_tasks(self) -> list[TaskRecord]: ...

    async def create_task(self, *, text: str) -> TaskRecord: ...

    async def update_task(self, task_id: str, *, completed: bool) -> TaskRecord: ...

    async def delete_task(self, task_id: str) -> None: ...

    async def aclose(self) -> None: ...
