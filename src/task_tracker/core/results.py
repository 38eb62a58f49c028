# src/task_tracker/core/results.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import Task


@dataclass(slots=True, frozen=True)
class ActionResult:
    """
    Outcome of a view action.

    ok=True with task=None is a valid success (e.g. delete of an id that was
    already gone). ok=False carries a short user-facing message.
    """

    ok: bool
    message: str = ""
    task: Task | None = None

    @classmethod
    def success(cls, task: Task | None = None, message: str = "") -> ActionResult:
        return cls(ok=True, message=message, task=task)

    @classmethod
    def failure(cls, message: str) -> ActionResult:
        return cls(ok=False, message=message)

    def __bool__(self) -> bool:
        return self.ok
