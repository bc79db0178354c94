"""
Task store reader - loads Task and RecurringTaskConfig value objects.

Read-only: generated occurrences are never written back.
"""
from sqlalchemy.orm import Session

from tasker.domain.recurrence import RecurrencePattern, RecurringTaskConfig
from tasker.domain.task import Task, TaskStatus
from tasker.infrastructure.db.models import TaskModel, TaskRecurrenceModel


def task_from_row(row: TaskModel) -> Task:
    status = TaskStatus.parse(row.status)
    return Task(
        id=str(row.task_id),
        title=row.title,
        due_date=row.due_date,
        status=status,
        completed=row.completed_at is not None or status is TaskStatus.COMPLETED,
    )


def config_from_row(row: TaskRecurrenceModel) -> RecurringTaskConfig:
    # Unknown stored patterns are kept as-is so validation can report them
    pattern = RecurrencePattern.parse(row.pattern) or row.pattern
    return RecurringTaskConfig(
        pattern=pattern,
        start_date=row.start_date,
        end_date=row.end_date,
        max_occurrences=row.max_occurrences,
        custom_interval=row.custom_interval,
        custom_unit=row.custom_unit,
    )


class RecurringTaskReader:
    def __init__(self, db: Session):
        self.db = db

    def get_task(self, account_id: int, task_id: int) -> Task | None:
        row = self.db.query(TaskModel).filter(
            TaskModel.account_id == account_id,
            TaskModel.task_id == task_id,
        ).first()
        return task_from_row(row) if row else None

    def get_config(self, task_id: int) -> RecurringTaskConfig | None:
        row = self.db.query(TaskRecurrenceModel).filter(
            TaskRecurrenceModel.task_id == task_id
        ).first()
        return config_from_row(row) if row else None

    def load(self, account_id: int, task_id: int) -> tuple[Task, RecurringTaskConfig] | None:
        """Task and its recurrence config, or None if either is missing."""
        task = self.get_task(account_id, task_id)
        if task is None:
            return None
        config = self.get_config(task_id)
        if config is None:
            return None
        return task, config
