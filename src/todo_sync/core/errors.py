# src/todo_sync/core/errors.py

"""
Task Service failure taxonomy.

Every failure the Task Service client can produce is one of these three kinds.
The session catches the base class at each operation boundary; anything else
is a programming error and propagates.
"""

from __future__ import annotations


class TaskServiceError(RuntimeError):
    """Base class for Task Service failures."""


class NetworkFailure(TaskServiceError):
    """The request could not be sent or no response was received."""


class ServerError(TaskServiceError):
    """The Task Service answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"Task Service returned HTTP {status_code}{detail}")


class ParseFailure(TaskServiceError):
    """The response body was malformed or did not decode into task records."""
