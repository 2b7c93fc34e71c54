# src/todo_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the session over the HTTP Task Service,
runs the initial fetch, then hands control to the console REPL.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.commands import ConsoleContext
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..core.session import TodoSession
from ..logging_setup import setup_logging
from ..service.http_client import HttpTaskService

logger = logging.getLogger(__name__)


def build_session(settings: Settings) -> TodoSession:
    """Composition root: wire the concrete Task Service into a session."""
    return TodoSession(HttpTaskService.from_settings(settings))


async def run(settings: Settings) -> None:
    session = build_session(settings)
    ctx = ConsoleContext(session=session, app_name=settings.app_name, base_url=settings.base_url)

    try:
        await session.init()
        err = session.error()
        if err is not None:
            print(f"[WARN] {err} (is the Task Service at {settings.base_url} running?)")
            session.clear_error()
        else:
            print(f"Loaded {len(session.todos())} todos from {settings.base_url}.")

        await run_console_loop(ctx)
    finally:
        await session.aclose()


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s against %s...", settings.app_name, settings.base_url)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
