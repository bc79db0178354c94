"""RecurringTaskInstance - one computed occurrence of a recurring task (never persisted here)"""
from dataclasses import dataclass
from datetime import date

from tasker.domain.task import TaskStatus


@dataclass(frozen=True)
class RecurringTaskInstance:
    id: str
    task_id: str
    date: date
    is_generated: bool
    original_task_id: str
    occurrence_number: int  # 0 = anchor (the task's own due date)
    status: TaskStatus
    completed: bool


@dataclass(frozen=True)
class RecurringStatistics:
    total_instances: int
    completed_instances: int
    pending_instances: int
    next_instance_date: date | None = None


def instance_id(task_id: str, occurrence_number: int) -> str:
    """Id of a generated occurrence; the anchor keeps the task id."""
    if occurrence_number == 0:
        return task_id
    return f"{task_id}-instance-{occurrence_number}"
