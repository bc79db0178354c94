"""Task value object as supplied by the task store (read-only input for recurrence)"""
from dataclasses import dataclass
from datetime import date
from enum import Enum


class TaskStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    PENDING = "pending"
    IN_PROGRESS = "in-progress"

    @classmethod
    def parse(cls, value: "str | TaskStatus | None") -> "TaskStatus":
        """Map a stored status string to TaskStatus; unknown values read as ACTIVE."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.ACTIVE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.ACTIVE


@dataclass(frozen=True)
class Task:
    id: str
    title: str = ""
    due_date: date | None = None
    status: TaskStatus = TaskStatus.ACTIVE
    completed: bool = False
