# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from todo_sync.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("todo_sync.core.session", logging.DEBUG, True),
        ("todo_sync", logging.INFO, True),
        ("py.warnings", logging.WARNING, True),
        ("py.warnings", logging.INFO, False),
        ("httpx", logging.WARNING, True),
        ("httpx", logging.INFO, False),
        ("httpcore.connection", logging.WARNING, False),
        ("httpcore.connection", logging.ERROR, True),
        ("todo_sync_other", logging.INFO, False),
        ("asyncio", logging.WARNING, False),
    ],
)
def test_console_filter_thresholds(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown
