# src/task_tracker/core/task_cache.py

from __future__ import annotations

import logging

from ..tasks.task_models import Task
from .ports import TaskRepo
from .results import ActionResult

logger = logging.getLogger(__name__)


class TaskCache:
    """
    In-memory copy of the full task list.

    The only way to change the contents is refresh(), which replaces the
    whole list with what storage returns. A failed refresh keeps the
    previous snapshot.
    """

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo
        self._tasks: tuple[Task, ...] = ()
        self._loaded = False

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._tasks)

    def find(self, task_id: int) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def refresh(self) -> ActionResult:
        try:
            fetched = self._repo.list_tasks()
        except Exception:
            logger.exception("Failed to load tasks.")
            return ActionResult.failure("Failed to load tasks.")

        self._tasks = tuple(fetched)
        self._loaded = True
        logger.debug("Task cache refreshed: %d tasks", len(self._tasks))
        return ActionResult.success()
