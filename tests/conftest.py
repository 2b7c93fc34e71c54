# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from todo_sync.cli.commands import ConsoleContext
from todo_sync.core.session import TodoSession

from .fakes import FakeTaskService


@pytest.fixture()
def settings(tmp_path) -> SimpleNamespace:
    """
    Minimal settings object compatible with HttpTaskService.from_settings and the CLI.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-sync-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        base_url="http://tasks.test",
        todos_path="/api/todos",
        api_token=None,
        http_timeout_seconds=None,
    )


@pytest.fixture()
def service() -> FakeTaskService:
    return FakeTaskService()


@pytest.fixture()
def session(service: FakeTaskService) -> TodoSession:
    return TodoSession(service)


@pytest.fixture()
def ctx(session: TodoSession, settings: SimpleNamespace) -> ConsoleContext:
    return ConsoleContext(session=session, app_name=settings.app_name, base_url=settings.base_url)

