# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import cast

from ..core.manager import TaskManagerView, format_date
from ..core.results import ActionResult
from ..core.state import AppState
from ..tasks.task_models import Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

STATUS_OPTION = "--status="

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
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

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_task(task: Task) -> str:
    box = "[x]" if task.is_complete else "[ ]"
    return f"{task.id:>4}. {box} {task.title}  ({task.status.label}, created {format_date(task.created_at)})"


def render_list(view: TaskManagerView) -> str:
    tasks = view.filtered_tasks()
    if not tasks:
        title, hint = view.empty_message()
        return f"{title}. {hint}."
    header = f"Tasks matching {view.search_term!r}:" if view.search_term else "Tasks:"
    return "\n".join([header, *(render_task(t) for t in tasks)])


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _split_status(args: list[str]) -> tuple[TaskStatus | None, list[str]]:
    """
    Pull a `--status=<value>` option out of the args.

    Every other word belongs to the title, including words that happen to
    spell a status. Raises ValueError for an unknown status value.
    """
    status: TaskStatus | None = None
    rest: list[str] = []
    for arg in args:
        if arg.lower().startswith(STATUS_OPTION):
            status = TaskStatus.parse(arg[len(STATUS_OPTION):])
        else:
            rest.append(arg)
    return status, rest


def _after_mutation(view: TaskManagerView, result: ActionResult, ok_text: str) -> str:
    if not result.ok:
        return result.message
    return f"{ok_text}\n{render_list(view)}"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    view = state.view
    try:
        stored = state.task_store.count_tasks()
    except Exception:
        logger.exception("count_tasks failed.")
        stored = "unavailable"
    search = view.search_term or "(none)"
    return (
        "Status:\n"
        f"  Stored tasks: {stored}\n"
        f"  Cached tasks: {len(view.cache)}\n"
        f"  Search: {search}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_list(state.view)


def cmd_refresh(state: AppState, args: list[str]) -> str:
    result = state.view.reload()
    if not result.ok:
        return result.message
    return render_list(state.view)


def cmd_search(state: AppState, args: list[str]) -> str:
    """
    /search term  -> filter list by title (case-insensitive)
    /search       -> clear the filter
    """
    state.view.set_search(" ".join(args))
    return render_list(state.view)


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add [--status=pending|complete] title..."""
    usage = "Usage: /add [--status=pending|complete] <title>"
    try:
        status, rest = _split_status(args)
    except ValueError as e:
        return f"{e}. {usage}"
    view = state.view
    view.open_add_dialog()
    result = view.add_task(" ".join(rest), status or TaskStatus.PENDING)
    if not result.ok:
        view.close_add_dialog()
        return f"{result.message} {usage}"
    return _after_mutation(view, result, "Task added.")


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit id [--status=pending|complete] title..."""
    usage = "Usage: /edit <id> [--status=pending|complete] <title>"
    if not args or _parse_id(args[0]) is None:
        return usage

    view = state.view
    task = view.cache.find(cast(int, _parse_id(args[0])))
    if task is None:
        return f"Task id {args[0]} not found."

    try:
        status, rest = _split_status(args[1:])
    except ValueError as e:
        return f"{e}. {usage}"
    view.open_edit_dialog(task)
    result = view.submit_edit(" ".join(rest), status)
    if not result.ok:
        view.close_edit_dialog()
        return result.message
    return _after_mutation(view, result, "Task updated.")


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if not args or _parse_id(args[0]) is None:
        return "Usage: /toggle <id>"

    view = state.view
    task = view.cache.find(cast(int, _parse_id(args[0])))
    if task is None:
        return f"Task id {args[0]} not found."
    return _after_mutation(view, view.toggle_status(task), "Status updated.")


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args or _parse_id(args[0]) is None:
        return "Usage: /delete <id>"

    view = state.view
    task = view.cache.find(cast(int, _parse_id(args[0])))
    if task is None:
        return f"Task id {args[0]} not found."

    if not view.item(task).request_delete(view):
        return "Delete already pending. Use /confirm or /cancel."
    return (
        f'Delete task "{task.title}"? This action cannot be undone.\n'
        "Use /confirm to delete or /cancel to keep it."
    )


def cmd_confirm(state: AppState, args: list[str]) -> str:
    view = state.view
    if not view.delete_dialog_open:
        return "Nothing to confirm."
    return _after_mutation(view, view.confirm_delete(), "Task deleted.")


def cmd_cancel(state: AppState, args: list[str]) -> str:
    view = state.view
    view.close_delete_dialog()
    view.close_edit_dialog()
    view.close_add_dialog()
    return "Cancelled."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task counts and the active search.")
registry.register("list", cmd_list, help_text="Show tasks (newest first).", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks from storage.")
registry.register("search", cmd_search, help_text="Filter by title: /search <term> (empty clears).")
registry.register("add", cmd_add, help_text="Add a task: /add [--status=pending|complete] <title>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> [--status=pending|complete] <title>.")
registry.register("toggle", cmd_toggle, help_text="Toggle pending/complete: /toggle <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task (asks for confirmation): /delete <id>.", aliases=["rm"])
registry.register("confirm", cmd_confirm, help_text="Confirm a pending delete.")
registry.register("cancel", cmd_cancel, help_text="Cancel a pending delete/edit.")
