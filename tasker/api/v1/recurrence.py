"""
Recurring task API endpoints (validation, preview, occurrences, statistics)
"""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from tasker.api.deps import get_db, get_account_id, get_recurring_service
from tasker.application.recurrence_format import format_pattern, describe_end_condition
from tasker.application.recurring_tasks import RecurringTaskService, completion_rate
from tasker.application.task_store import RecurringTaskReader
from tasker.config import get_settings
from tasker.domain.recurrence import RecurrencePattern, RecurringTaskConfig
from tasker.domain.recurring_instance import RecurringStatistics, RecurringTaskInstance
from tasker.domain.task import Task, TaskStatus


router = APIRouter(prefix="/api/v1/recurrence", tags=["recurrence"])


# === Request/Response models ===

class RecurrenceConfigIn(BaseModel):
    pattern: str | None = None  # daily, weekly, monthly, yearly, custom
    start_date: date | None = None
    end_date: date | None = None
    max_occurrences: int | None = None
    custom_interval: int | None = 1
    custom_unit: str | None = None

    def to_config(self) -> RecurringTaskConfig:
        return RecurringTaskConfig(
            pattern=RecurrencePattern.parse(self.pattern) or self.pattern,
            start_date=self.start_date,
            end_date=self.end_date,
            max_occurrences=self.max_occurrences,
            custom_interval=self.custom_interval,
            custom_unit=self.custom_unit,
        )


class TaskIn(BaseModel):
    id: str
    title: str = ""
    due_date: date | None = None
    status: str = "active"
    completed: bool = False

    def to_task(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            due_date=self.due_date,
            status=TaskStatus.parse(self.status),
            completed=self.completed,
        )


class PreviewRequest(BaseModel):
    task: TaskIn
    config: RecurrenceConfigIn
    limit: int | None = None


class ValidationResponse(BaseModel):
    valid: bool
    errors: list[str]
    warnings: list[str]


class InstanceResponse(BaseModel):
    id: str
    task_id: str
    date: date
    is_generated: bool
    original_task_id: str
    occurrence_number: int
    status: str
    completed: bool


class StatisticsResponse(BaseModel):
    total_instances: int
    completed_instances: int
    pending_instances: int
    next_instance_date: date | None = None


class PreviewResponse(BaseModel):
    description: str
    end_condition: str
    instances: list[InstanceResponse]
    statistics: StatisticsResponse
    completion_rate: float


# === Helper functions ===

def _resolve_limit(limit: int | None) -> int:
    settings = get_settings()
    if limit is None:
        return settings.DEFAULT_PREVIEW_LIMIT
    if limit < 1 or limit > settings.MAX_PREVIEW_LIMIT:
        raise HTTPException(
            status_code=422,
            detail=f"limit must be between 1 and {settings.MAX_PREVIEW_LIMIT}",
        )
    return limit


def _instance_out(i: RecurringTaskInstance) -> InstanceResponse:
    return InstanceResponse(
        id=i.id,
        task_id=i.task_id,
        date=i.date,
        is_generated=i.is_generated,
        original_task_id=i.original_task_id,
        occurrence_number=i.occurrence_number,
        status=TaskStatus.parse(i.status).value,
        completed=i.completed,
    )


def _stats_out(s: RecurringStatistics) -> StatisticsResponse:
    return StatisticsResponse(
        total_instances=s.total_instances,
        completed_instances=s.completed_instances,
        pending_instances=s.pending_instances,
        next_instance_date=s.next_instance_date,
    )


def _load_or_404(db: Session, account_id: int, task_id: int) -> tuple[Task, RecurringTaskConfig]:
    reader = RecurringTaskReader(db)
    task = reader.get_task(account_id, task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    config = reader.get_config(task_id)
    if config is None:
        raise HTTPException(status_code=404, detail="Task is not recurring")
    return task, config


# === Endpoints ===

@router.post("/validate", response_model=ValidationResponse)
def validate_recurrence(
    req: RecurrenceConfigIn,
    service: RecurringTaskService = Depends(get_recurring_service),
):
    """Validate a recurrence config, reporting every error at once"""
    result = service.validate(req.to_config())
    return ValidationResponse(valid=result.valid, errors=result.errors, warnings=result.warnings)


@router.post("/preview", response_model=PreviewResponse)
def preview_recurrence(
    req: PreviewRequest,
    service: RecurringTaskService = Depends(get_recurring_service),
):
    """Preview occurrences for an unsaved task + config (task creation form)"""
    limit = _resolve_limit(req.limit)
    task = req.task.to_task()
    config = req.config.to_config()

    instances = service.generate(task, config, limit)
    return PreviewResponse(
        description=format_pattern(config),
        end_condition=describe_end_condition(config),
        instances=[_instance_out(i) for i in instances],
        statistics=_stats_out(service.statistics(instances)),
        completion_rate=completion_rate(task, instances),
    )


@router.get("/tasks/{task_id}/occurrences", response_model=list[InstanceResponse])
def list_occurrences(
    task_id: int,
    limit: int | None = Query(default=None),
    account_id: int = Depends(get_account_id),
    db: Session = Depends(get_db),
    service: RecurringTaskService = Depends(get_recurring_service),
):
    """Occurrences of a stored recurring task, anchor first"""
    cap = _resolve_limit(limit)
    task, config = _load_or_404(db, account_id, task_id)
    return [_instance_out(i) for i in service.generate(task, config, cap)]


@router.get("/tasks/{task_id}/statistics", response_model=StatisticsResponse)
def task_statistics(
    task_id: int,
    limit: int | None = Query(default=None),
    account_id: int = Depends(get_account_id),
    db: Session = Depends(get_db),
    service: RecurringTaskService = Depends(get_recurring_service),
):
    cap = _resolve_limit(limit)
    task, config = _load_or_404(db, account_id, task_id)
    return _stats_out(service.statistics(service.generate(task, config, cap)))
