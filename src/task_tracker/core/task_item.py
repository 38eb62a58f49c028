# src/task_tracker/core/task_item.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..tasks.task_models import Task, TaskStatus

if TYPE_CHECKING:
    from .manager import TaskManagerView


@dataclass(slots=True)
class TaskItemView:
    """Rendering state for one row of the list."""

    task: Task
    is_deleting: bool = False

    @property
    def is_complete(self) -> bool:
        return self.task.status is TaskStatus.COMPLETE

    @property
    def badge(self) -> str:
        return self.task.status.label

    def request_delete(self, manager: TaskManagerView) -> bool:
        """
        Start the delete flow for this task (opens the confirmation dialog).

        A second request while one is in flight is ignored.
        Returns True when the dialog was opened.
        """
        if self.is_deleting:
            return False
        self.is_deleting = True
        manager.open_delete_dialog(self.task.id)
        return True

    def reset(self) -> None:
        self.is_deleting = False
