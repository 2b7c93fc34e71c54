# src/todo_sync/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from ..core.errors import ParseFailure


class TaskFilter(StrEnum):
    """Read-only views over the local collection."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        if not raw:
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.ALL


def _parse_ts(raw: Any) -> datetime | None:
    """
    Parse a store-assigned timestamp.

    The document store emits ISO-8601 with a trailing "Z"; missing or unparseable
    values become None (timestamps are informational only).
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    s = raw.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


@dataclass(slots=True, frozen=True)
class TaskRecord:
    id: str
    text: str
    completed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_wire(cls, data: Any) -> TaskRecord:
        """
        Decode one record from a Task Service JSON object.

        Accepts both "id" and the document-store "_id".
        Raises ParseFailure on anything that cannot become a valid record.
        """
        if not isinstance(data, dict):
            raise ParseFailure(f"Task record must be an object, got {type(data).__name__}")

        raw_id = data.get("id", data.get("_id"))
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
            raise ParseFailure(f"Task record has no usable id: {raw_id!r}")
        task_id = str(raw_id).strip()
        if not task_id:
            raise ParseFailure("Task record has an empty id")

        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ParseFailure(f"Task record {task_id} has no text")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ParseFailure(f"Task record {task_id} has non-boolean completed: {completed!r}")

        return cls(
            id=task_id,
            text=text,
            completed=completed,
            created_at=_parse_ts(data.get("createdAt")),
            updated_at=_parse_ts(data.get("updatedAt")),
        )

    def matches(self, task_filter: TaskFilter) -> bool:
        if task_filter is TaskFilter.COMPLETED:
            return self.completed
        if task_filter is TaskFilter.PENDING:
            return not self.completed
        return True


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    completed: int
    pending: int

    @classmethod
    def of(cls, records: list[TaskRecord] | tuple[TaskRecord, ...]) -> TaskStats:
        total = len(records)
        completed = sum(1 for r in records if r.completed)
        return cls(total=total, completed=completed, pending=total - completed)
