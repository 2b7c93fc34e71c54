# tests/test_task_models.py

from __future__ import annotations

from datetime import UTC

import pytest

from todo_sync.core.errors import ParseFailure
from todo_sync.tasks.task_models import TaskFilter, TaskRecord, TaskStats


def test_from_wire_normalizes_document_store_record() -> None:
    record = TaskRecord.from_wire(
        {
            "_id": "665f1c2e",
            "text": "buy milk",
            "completed": True,
            "createdAt": "2024-06-04T10:00:00.000Z",
            "updatedAt": "2024-06-05T08:30:00.000Z",
            "__v": 0,
        }
    )

    assert record.id == "665f1c2e"
    assert record.completed is True
    assert record.created_at is not None and record.created_at.tzinfo == UTC
    assert record.updated_at is not None and record.updated_at.day == 5


def test_from_wire_prefers_id_and_defaults_completed() -> None:
    record = TaskRecord.from_wire({"id": 42, "_id": "ignored", "text": "x"})

    assert record.id == "42"
    assert record.completed is False
    assert record.created_at is None


def test_unparseable_timestamps_become_none() -> None:
    record = TaskRecord.from_wire({"id": "1", "text": "x", "createdAt": "yesterday", "updatedAt": 17})

    assert record.created_at is None
    assert record.updated_at is None


@pytest.mark.parametrize(
    "payload",
    [
        None,
        ["id", "1"],
        {"text": "no id"},
        {"id": "", "text": "blank id"},
        {"id": True, "text": "bool id"},
        {"id": "1"},
        {"id": "1", "text": ""},
        {"id": "1", "text": "   "},
        {"id": "1", "text": "x", "completed": 1},
        {"id": "1", "text": "x", "completed": None},
    ],
)
def test_from_wire_rejects_bad_payloads(payload) -> None:
    with pytest.raises(ParseFailure):
        TaskRecord.from_wire(payload)


def test_task_filter_parse() -> None:
    assert TaskFilter.parse(None) is TaskFilter.ALL
    assert TaskFilter.parse(" Completed ") is TaskFilter.COMPLETED
    assert TaskFilter.parse("pending") is TaskFilter.PENDING
    assert TaskFilter.parse("whatever") is TaskFilter.ALL


def test_stats_counts() -> None:
    records = [
        TaskRecord(id="1", text="a", completed=True),
        TaskRecord(id="2", text="b"),
        TaskRecord(id="3", text="c"),
    ]

    assert TaskStats.of(records) == TaskStats(total=3, completed=1, pending=2)
    assert TaskStats.of([]) == TaskStats(total=0, completed=0, pending=0)
