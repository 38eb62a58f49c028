# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The view depends on a Protocol instead of the concrete SQLite store.
This keeps storage swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import Task, TaskStatus


class TaskRepo(Protocol):
    """Data-access operations; methods targeting one id return None on no match."""

    def list_tasks(self) -> list[Task]: ...
    def add_task(self, title: str, status: TaskStatus = TaskStatus.PENDING) -> Task: ...
    def get_task(self, task_id: int) -> Task | None: ...
    def update_task(
            self,
            task_id: int,
            title: str,
            status: TaskStatus | None = None,
    ) -> Task | None: ...
    def update_task_status(self, task_id: int, status: TaskStatus) -> Task | None: ...
    def delete_task(self, task_id: int) -> Task | None: ...
    def count_tasks(self) -> int: ...
