# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task completion status.

    The set is closed: storage and the view only ever deal in these two values.
    """

    PENDING = "pending"
    COMPLETE = "complete"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(raw)
        except ValueError:
            return cls.PENDING

    @classmethod
    def parse(cls, raw: str | TaskStatus) -> TaskStatus:
        """Strict parse for user input; raises ValueError on unknown values."""
        if isinstance(raw, cls):
            return raw
        value = str(raw or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown status {raw!r} (expected one of: {allowed})") from None

    def toggled(self) -> TaskStatus:
        return TaskStatus.COMPLETE if self is TaskStatus.PENDING else TaskStatus.PENDING

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    title: str
    status: TaskStatus
    created_at: float

    @property
    def is_complete(self) -> bool:
        return self.status is TaskStatus.COMPLETE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "created_at": self.created_at,
        }
