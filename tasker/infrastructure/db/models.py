"""
SQLAlchemy ORM models (task store tables read by the recurrence engine)
"""
from datetime import date as date_type
from sqlalchemy import String, DateTime, Integer, Text, TIMESTAMP, Date, func
from sqlalchemy.orm import Mapped, mapped_column

from tasker.infrastructure.db.session import Base


class TaskModel(Base):
    """Read model: tasks"""
    __tablename__ = "tasks"

    task_id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, server_default="active")  # active/completed/archived/pending/in-progress
    due_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    completed_at: Mapped[DateTime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    archived_at: Mapped[DateTime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)


class TaskRecurrenceModel(Base):
    """Read model: recurrence config of a task (one per task)"""
    __tablename__ = "task_recurrences"

    task_id: Mapped[int] = mapped_column(primary_key=True)

    pattern: Mapped[str] = mapped_column(String(16), nullable=False)  # daily/weekly/monthly/yearly/custom
    start_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    end_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)
    max_occurrences: Mapped[int | None] = mapped_column(Integer, nullable=True)
    custom_interval: Mapped[int] = mapped_column(Integer, nullable=False, server_default="1")
    custom_unit: Mapped[str | None] = mapped_column(String(16), nullable=True)  # custom only, e.g. "weeks"

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
