"""
Recurring tasks - config validation, occurrence generation and statistics.

All functions are pure: "today" is always passed in explicitly, nothing is
persisted, every call returns a fresh list. Generation never raises; bad
input degrades to empty/zero results. Only validate_config reports problems,
as a list of messages.
"""
import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Callable, Iterable

from tasker.config import Settings, get_settings
from tasker.domain.recurrence import (
    SAFETY_HORIZON_YEARS,
    RecurrencePattern,
    RecurringTaskConfig,
    StepFunction,
    next_date,
    should_stop,
)
from tasker.domain.recurring_instance import RecurringStatistics, RecurringTaskInstance, instance_id
from tasker.domain.task import Task, TaskStatus


logger = logging.getLogger(__name__)

LONG_DURATION_DAYS = 365 * 5
LARGE_OCCURRENCES = 100
LARGE_INTERVAL = 100


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _as_date(value: date | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


# ── Validation ────────────────────────────────────────────────────────────────

def validate_config(config: RecurringTaskConfig, today: date) -> ValidationResult:
    """Check a config before it is saved. Collects every error, never raises."""
    errors: list[str] = []

    if config.pattern is None or config.pattern == "":
        errors.append("Pattern is required")
    elif RecurrencePattern.parse(config.pattern) is None:
        errors.append(f"Unknown recurrence pattern: {config.pattern}")

    if config.start_date is None:
        errors.append("Start date is required")

    if config.max_occurrences is not None and config.max_occurrences < 1:
        errors.append("Maximum occurrences must be at least 1")

    if config.custom_interval is not None and config.custom_interval < 1:
        errors.append("Custom interval must be at least 1")

    end_date = _as_date(config.end_date)
    if end_date is not None and end_date < _as_date(today):
        errors.append("End date cannot be in the past")

    return ValidationResult(valid=not errors, errors=errors, warnings=collect_warnings(config))


def collect_warnings(config: RecurringTaskConfig) -> list[str]:
    """Advisory notes for a config; they never make it invalid."""
    warnings: list[str] = []
    start_date = _as_date(config.start_date)
    end_date = _as_date(config.end_date)

    if start_date is not None and end_date is not None:
        if end_date < start_date:
            warnings.append("End date is before start date")
        elif (end_date - start_date).days > LONG_DURATION_DAYS:
            warnings.append("Long recurring duration - consider setting an end condition")

    if config.max_occurrences is not None and config.max_occurrences > LARGE_OCCURRENCES:
        warnings.append("Large number of occurrences may impact performance")

    if config.custom_interval is not None and config.custom_interval > LARGE_INTERVAL:
        warnings.append("Large interval values may cause performance issues")

    pattern = RecurrencePattern.parse(config.pattern)
    if config.custom_unit and pattern is not None and pattern is not RecurrencePattern.CUSTOM:
        warnings.append("Custom unit is ignored unless pattern is custom")

    return warnings


# ── Generation ────────────────────────────────────────────────────────────────

def generate_instances(
    task: Task,
    config: RecurringTaskConfig,
    requested_cap: int,
    today: date,
    *,
    horizon_years: int = SAFETY_HORIZON_YEARS,
    custom_step: StepFunction | None = None,
) -> list[RecurringTaskInstance]:
    """Anchor occurrence (the task's due date) followed by generated occurrences.

    Stops at the first of: `requested_cap` instances, config.max_occurrences
    instances (anchor included), a candidate after config.end_date, or a
    candidate after today + `horizon_years`.
    """
    anchor_date = _as_date(task.due_date)
    if anchor_date is None or requested_cap < 1:
        return []

    today = _as_date(today)
    if isinstance(config.end_date, datetime):
        config = replace(config, end_date=config.end_date.date())

    instances = [RecurringTaskInstance(
        id=task.id,
        task_id=task.id,
        date=anchor_date,
        is_generated=False,
        original_task_id=task.id,
        occurrence_number=0,
        status=task.status,
        completed=task.completed,
    )]

    current = anchor_date
    while len(instances) < requested_cap:
        try:
            candidate = next_date(current, config, custom_step)
        except (OverflowError, ValueError):
            logger.debug("Task %s: step past the calendar from %s, stopping", task.id, current)
            break
        if candidate <= current:
            logger.debug("Task %s: step did not advance from %s, stopping", task.id, current)
            break
        if should_stop(candidate, config, len(instances), today, horizon_years):
            break

        n = len(instances)
        instances.append(RecurringTaskInstance(
            id=instance_id(task.id, n),
            task_id=instance_id(task.id, n),
            date=candidate,
            is_generated=True,
            original_task_id=task.id,
            occurrence_number=n,
            status=TaskStatus.ACTIVE,
            completed=False,
        ))
        current = candidate

    logger.debug("Task %s: generated %d instance(s)", task.id, len(instances))
    return instances


def next_occurrence_date(
    task: Task,
    config: RecurringTaskConfig,
    today: date,
    *,
    horizon_years: int = SAFETY_HORIZON_YEARS,
    custom_step: StepFunction | None = None,
) -> date | None:
    """Date of the first generated occurrence after the anchor, if any."""
    instances = generate_instances(
        task, config, 2, today, horizon_years=horizon_years, custom_step=custom_step,
    )
    if len(instances) > 1:
        return instances[1].date
    return None


def instances_between(
    instances: Iterable[RecurringTaskInstance], start: date, end: date,
) -> list[RecurringTaskInstance]:
    """Instances dated within [start, end] (inclusive), e.g. for a calendar page."""
    return [i for i in instances if start <= i.date <= end]


# ── Statistics ────────────────────────────────────────────────────────────────

def get_statistics(instances: list[RecurringTaskInstance], today: date) -> RecurringStatistics:
    completed = [i for i in instances if i.completed]
    pending = [i for i in instances if not i.completed and i.status != TaskStatus.ARCHIVED]
    today = _as_date(today)
    upcoming = [i.date for i in instances if not i.completed and i.date > today]

    return RecurringStatistics(
        total_instances=len(instances),
        completed_instances=len(completed),
        pending_instances=len(pending),
        next_instance_date=min(upcoming) if upcoming else None,
    )


def completion_rate(task: Task, instances: list[RecurringTaskInstance]) -> float:
    """Share of completed instances, 0.0 for an empty list."""
    if not instances:
        return 0.0
    done = sum(1 for i in instances if i.completed)
    return done / len(instances)


# ── Service ───────────────────────────────────────────────────────────────────

class RecurringTaskService:
    """Binds the pure functions above to settings and a clock."""

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Callable[[], date] = date.today,
        custom_step: StepFunction | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._clock = clock
        self._custom_step = custom_step

    def today(self) -> date:
        return self._clock()

    def validate(self, config: RecurringTaskConfig) -> ValidationResult:
        result = validate_config(config, self.today())
        if not result.valid:
            logger.info("Recurrence config rejected: %s", "; ".join(result.errors))
        return result

    def generate(
        self, task: Task, config: RecurringTaskConfig, requested_cap: int | None = None,
    ) -> list[RecurringTaskInstance]:
        cap = self._settings.DEFAULT_PREVIEW_LIMIT if requested_cap is None else requested_cap
        return generate_instances(
            task, config, cap, self.today(),
            horizon_years=self._settings.SAFETY_HORIZON_YEARS,
            custom_step=self._custom_step,
        )

    def next_occurrence(self, task: Task, config: RecurringTaskConfig) -> date | None:
        return next_occurrence_date(
            task, config, self.today(),
            horizon_years=self._settings.SAFETY_HORIZON_YEARS,
            custom_step=self._custom_step,
        )

    def statistics(self, instances: list[RecurringTaskInstance]) -> RecurringStatistics:
        return get_statistics(instances, self.today())

    def upcoming(
        self, task: Task, config: RecurringTaskConfig, days: int, requested_cap: int | None = None,
    ) -> list[RecurringTaskInstance]:
        """Occurrences from today through today + `days`."""
        today = self.today()
        return instances_between(
            self.generate(task, config, requested_cap), today, today + timedelta(days=days),
        )
