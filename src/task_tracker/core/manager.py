# src/task_tracker/core/manager.py

"""
Task manager view.

Holds everything a front end needs to render the task list:
- the task cache (refetched in full after every mutation),
- the search term (client-side filter over the cache),
- add / edit / delete dialog state,
- per-item state (delete in progress).

Front ends (web page, console) call the methods here and render the
resulting state. Mutations return an ActionResult instead of raising, so
callers can show a message and the view can reset its transient flags.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..tasks.task_models import Task, TaskStatus
from .ports import TaskRepo
from .results import ActionResult
from .task_cache import TaskCache
from .task_item import TaskItemView

logger = logging.getLogger(__name__)

EMPTY_TITLE = "No tasks found"
EMPTY_HINT_SEARCH = "Try adjusting your search terms"
EMPTY_HINT_FRESH = "Create your first task to get started"


def format_date(ts: float) -> str:
    """Local time as e.g. 'Oct 19, 2026, 03:02 PM'."""
    dt = datetime.fromtimestamp(ts)
    return f"{dt:%b} {dt.day}, {dt:%Y, %I:%M %p}"


def matches_search(task: Task, term: str) -> bool:
    if not term:
        return True
    return term.lower() in task.title.lower()


class TaskManagerView:
    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo
        self.cache = TaskCache(repo)
        self.loading = True
        self.search_term = ""

        # add dialog
        self.add_dialog_open = False
        self.new_title = ""
        self.new_status = TaskStatus.PENDING

        # edit dialog
        self.edit_dialog_open = False
        self.editing_task: Task | None = None
        self.edit_title = ""
        self.edit_status = TaskStatus.PENDING

        # delete dialog
        self.delete_dialog_open = False
        self.delete_task_id: int | None = None

        self._items: dict[int, TaskItemView] = {}

    # ---- loading ----

    def load(self) -> ActionResult:
        result = self.reload()
        self.loading = False
        return result

    def reload(self) -> ActionResult:
        result = self.cache.refresh()
        if result.ok:
            live = {t.id for t in self.cache.tasks}
            self._items = {tid: item for tid, item in self._items.items() if tid in live}
        return result

    # ---- search / rendering helpers ----

    def set_search(self, term: str | None) -> None:
        self.search_term = term or ""

    def filtered_tasks(self) -> list[Task]:
        term = self.search_term
        return [t for t in self.cache.tasks if matches_search(t, term)]

    def item(self, task: Task) -> TaskItemView:
        existing = self._items.get(task.id)
        if existing is None:
            existing = TaskItemView(task=task)
            self._items[task.id] = existing
        else:
            existing.task = task
        return existing

    def items(self) -> list[TaskItemView]:
        return [self.item(t) for t in self.filtered_tasks()]

    def empty_message(self) -> tuple[str, str]:
        hint = EMPTY_HINT_SEARCH if self.search_term else EMPTY_HINT_FRESH
        return EMPTY_TITLE, hint

    # ---- add ----

    def open_add_dialog(self) -> None:
        self.add_dialog_open = True

    def close_add_dialog(self) -> None:
        self.add_dialog_open = False

    def add_task(self, title: str | None = None, status: TaskStatus | None = None) -> ActionResult:
        if title is not None:
            self.new_title = title
        if status is not None:
            self.new_status = status

        clean = self.new_title.strip()
        if not clean:
            return ActionResult.failure("Task title is required.")

        try:
            created = self._repo.add_task(clean, self.new_status)
        except Exception:
            logger.exception("Failed to add task.")
            return ActionResult.failure("Failed to add task.")

        self.new_title = ""
        self.new_status = TaskStatus.PENDING
        self.add_dialog_open = False
        self.reload()
        return ActionResult.success(created)

    # ---- edit ----

    def open_edit_dialog(self, task: Task) -> None:
        self.editing_task = task
        self.edit_title = task.title
        self.edit_status = task.status
        self.edit_dialog_open = True

    def close_edit_dialog(self) -> None:
        self.edit_dialog_open = False

    def _clear_edit(self) -> None:
        self.editing_task = None
        self.edit_title = ""
        self.edit_status = TaskStatus.PENDING
        self.edit_dialog_open = False

    def submit_edit(self, title: str | None = None, status: TaskStatus | None = None) -> ActionResult:
        if title is not None:
            self.edit_title = title
        if status is not None:
            self.edit_status = status

        task = self.editing_task
        clean = self.edit_title.strip()
        if task is None:
            return ActionResult.failure("No task selected.")
        if not clean:
            return ActionResult.failure("Task title is required.")

        try:
            updated = self._repo.update_task(task.id, clean, self.edit_status)
        except Exception:
            logger.exception("Failed to update task id=%s", task.id)
            return ActionResult.failure("Failed to update task.")

        self._clear_edit()
        self.reload()
        return ActionResult.success(updated)

    # ---- toggle ----

    def toggle_status(self, task: Task) -> ActionResult:
        new_status = task.status.toggled()
        try:
            updated = self._repo.update_task_status(task.id, new_status)
        except Exception:
            logger.exception("Failed to update task status id=%s", task.id)
            return ActionResult.failure("Failed to update task status.")

        self.reload()
        return ActionResult.success(updated)

    # ---- delete ----

    def open_delete_dialog(self, task_id: int) -> None:
        # Only one confirmation at a time: a newer request supersedes the old one.
        if self.delete_task_id is not None and self.delete_task_id != task_id:
            previous = self._items.get(self.delete_task_id)
            if previous is not None:
                previous.reset()
        self.delete_task_id = task_id
        self.delete_dialog_open = True

    def close_delete_dialog(self) -> None:
        if self.delete_task_id is not None:
            item = self._items.get(self.delete_task_id)
            if item is not None:
                item.reset()
        self.delete_task_id = None
        self.delete_dialog_open = False

    def confirm_delete(self) -> ActionResult:
        task_id = self.delete_task_id
        if task_id is None:
            return ActionResult.failure("No task selected for deletion.")

        try:
            deleted = self._repo.delete_task(task_id)
        except Exception:
            logger.exception("Failed to delete task id=%s", task_id)
            item = self._items.get(task_id)
            if item is not None:
                item.reset()
            return ActionResult.failure("Failed to delete task.")

        self._items.pop(task_id, None)
        self.delete_dialog_open = False
        self.delete_task_id = None
        self.reload()
        return ActionResult.success(deleted)
