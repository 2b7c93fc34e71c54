# src/todo_sync/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from ..core.session import TodoSession
from ..tasks.task_models import TaskFilter, TaskRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConsoleContext:
    """What command handlers work on: the session plus the last listing shown."""

    session: TodoSession
    app_name: str = "todo-sync"
    base_url: str = ""
    last_listing: list[str] = field(default_factory=list)


CommandHandler = Callable[[ConsoleContext, list[str]], Awaitable[str]]


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, ctx: ConsoleContext, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(ctx, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _format_todo(pos: int, todo: TaskRecord) -> str:
    mark = "x" if todo.completed else " "
    return f"{pos:>3}. [{mark}] {todo.text}  (id={todo.id})"


def _resolve_id(ctx: ConsoleContext, ref: str) -> str | None:
    """A 1-based position from the last /list, or a raw id."""
    if ref.isdigit():
        pos = int(ref)
        if 1 <= pos <= len(ctx.last_listing):
            return ctx.last_listing[pos - 1]
    if ctx.session.get(ref) is not None:
        return ref
    return None


def _with_error(ctx: ConsoleContext, reply: str) -> str:
    """Append (and consume) the session error slot."""
    err = ctx.session.error()
    if err is None:
        return reply
    ctx.session.clear_error()
    return f"{reply}\n  [error] {err}" if reply else f"[error] {err}"


async def cmd_help(ctx: ConsoleContext, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(ctx: ConsoleContext, args: list[str]) -> str:
    """
    /list            -> all todos
    /list completed  -> only completed
    /list pending    -> only pending
    """
    task_filter = TaskFilter.parse(args[0] if args else None)
    todos = ctx.session.filtered(task_filter)
    ctx.last_listing = [t.id for t in todos]
    if not todos:
        if task_filter is TaskFilter.ALL:
            return _with_error(ctx, "No tasks yet. Add your first task with /add <text>.")
        return _with_error(ctx, f"No {task_filter.value} tasks.")
    lines = [f"Todos ({task_filter.value}):"]
    lines.extend(_format_todo(i, t) for i, t in enumerate(todos, start=1))
    return _with_error(ctx, "\n".join(lines))


async def cmd_add(ctx: ConsoleContext, args: list[str]) -> str:
    record = await ctx.session.create(" ".join(args))
    if record is None:
        return _with_error(ctx, "")
    return f"Added: {record.text} (id={record.id})"


async def _set_completed(ctx: ConsoleContext, args: list[str], completed: bool | None) -> str:
    if not args:
        return "Usage: /done <n|id>, /undo <n|id> or /toggle <n|id>."
    task_id = _resolve_id(ctx, args[0])
    if task_id is None:
        return f"No todo matches {args[0]!r}. Use /list to see positions."

    if completed is None:
        current = ctx.session.get(task_id)
        completed = not (current.completed if current else False)

    record = await ctx.session.update(task_id, completed)
    if record is None:
        return _with_error(ctx, "")
    state = "completed" if record.completed else "pending"
    return f"Marked {state}: {record.text}"


async def cmd_done(ctx: ConsoleContext, args: list[str]) -> str:
    return await _set_completed(ctx, args, True)


async def cmd_undo(ctx: ConsoleContext, args: list[str]) -> str:
    return await _set_completed(ctx, args, False)


async def cmd_toggle(ctx: ConsoleContext, args: list[str]) -> str:
    return await _set_completed(ctx, args, None)


async def cmd_rm(ctx: ConsoleContext, args: list[str]) -> str:
    if not args:
        return "Usage: /rm <n|id>."
    task_id = _resolve_id(ctx, args[0])
    if task_id is None:
        return f"No todo matches {args[0]!r}. Use /list to see positions."

    if not await ctx.session.delete(task_id):
        return _with_error(ctx, "")
    ctx.last_listing = [i for i in ctx.last_listing if i != task_id]
    return f"Deleted todo id={task_id}."


async def cmd_refresh(ctx: ConsoleContext, args: list[str]) -> str:
    todos = await ctx.session.fetch_all()
    return _with_error(ctx, f"Fetched {len(todos)} todos.")


async def cmd_stats(ctx: ConsoleContext, args: list[str]) -> str:
    s = ctx.session.stats()
    return f"Total: {s.total}  Completed: {s.completed}  Pending: {s.pending}"


async def cmd_status(ctx: ConsoleContext, args: list[str]) -> str:
    err = ctx.session.error()
    return (
        "Status:\n"
        f"  App: {ctx.app_name}\n"
        f"  Task Service: {ctx.base_url or '(not set)'}\n"
        f"  Initialized: {'yes' if ctx.session.initialized else 'no'}\n"
        f"  Todos in memory: {len(ctx.session.todos())}\n"
        f"  Last error: {err or '-'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List todos: /list [all|completed|pending].", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a todo: /add <text>.")
registry.register("done", cmd_done, help_text="Mark completed: /done <n|id>.")
registry.register("undo", cmd_undo, help_text="Mark pending: /undo <n|id>.")
registry.register("toggle", cmd_toggle, help_text="Flip completion: /toggle <n|id>.")
registry.register("rm", cmd_rm, help_text="Delete a todo: /rm <n|id>.", aliases=["del"])
registry.register("refresh", cmd_refresh, help_text="Re-fetch all todos from the Task Service.")
registry.register("stats", cmd_stats, help_text="Show total/completed/pending counts.")
registry.register("status", cmd_status, help_text="Show connection and session status.")
