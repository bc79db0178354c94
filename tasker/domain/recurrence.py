"""
Recurring task configuration and calendar stepping.

Uses date only (no timezone).

Patterns:
- DAILY: every N days
- WEEKLY: every N weeks
- MONTHLY: every N months, clipped to the last day of the target month
- YEARLY: every N years (Feb 29 -> Feb 28 on non-leap years)
- CUSTOM: every N weeks unless the caller supplies a custom step
  (see custom_unit_step for a step driven by custom_unit)

Termination (first match wins): max_occurrences, end_date, safety horizon.
"""
import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable


SAFETY_HORIZON_YEARS = 10


class RecurrencePattern(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value) -> "RecurrencePattern | None":
        """Enum member or its wire value (any case). None for anything else."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class RecurringTaskConfig:
    pattern: RecurrencePattern | str | None
    start_date: date | None
    end_date: date | None = None
    max_occurrences: int | None = None  # total instances, anchor included
    custom_interval: int | None = 1
    custom_unit: str | None = None  # CUSTOM only, e.g. "weeks"

    @property
    def interval(self) -> int:
        """Step multiplier; anything below 1 steps by 1."""
        if self.custom_interval is None or self.custom_interval < 1:
            return 1
        return self.custom_interval


StepFunction = Callable[[date, RecurringTaskConfig], date]


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, n: int) -> date:
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    last = last_day_of_month(year, month)
    day = min(d.day, last)
    return date(year, month, day)


def add_years(d: date, n: int) -> date:
    return add_months(d, 12 * n)


def _add_weekdays(d: date, n: int) -> date:
    """n business days after d; a weekend start counts from the Friday before."""
    if d.weekday() >= 5:
        d -= timedelta(days=d.weekday() - 4)
    weeks, rem = divmod(n, 5)
    out = d + timedelta(weeks=weeks, days=rem)
    if d.weekday() + rem >= 5:
        out += timedelta(days=2)
    return out


_UNIT_STEPS: dict[str, Callable[[date, int], date]] = {
    "day": lambda d, n: d + timedelta(days=n),
    "weekday": _add_weekdays,
    "week": lambda d, n: d + timedelta(weeks=n),
    "fortnight": lambda d, n: d + timedelta(weeks=2 * n),
    "biweekly": lambda d, n: d + timedelta(weeks=2 * n),
    "month": add_months,
    "quarter": lambda d, n: add_months(d, 3 * n),
    "quarterly": lambda d, n: add_months(d, 3 * n),
    "year": add_years,
}


def normalize_unit(unit: str | None) -> str | None:
    """'Weeks' -> 'week', 'weekdays' -> 'weekday'. None for blank input."""
    if not unit or not unit.strip():
        return None
    u = unit.strip().lower()
    if u.endswith("s") and u[:-1] in _UNIT_STEPS:
        u = u[:-1]
    return u


def custom_unit_step(current: date, config: RecurringTaskConfig) -> date:
    """Step for CUSTOM configs honoring custom_unit; unknown units step by weeks."""
    step = _UNIT_STEPS.get(normalize_unit(config.custom_unit) or "week", _UNIT_STEPS["week"])
    return step(current, config.interval)


def next_date(
    current: date,
    config: RecurringTaskConfig,
    custom_step: StepFunction | None = None,
) -> date:
    """Next candidate date after `current`."""
    n = config.interval
    pattern = RecurrencePattern.parse(config.pattern)
    if pattern is RecurrencePattern.DAILY:
        return current + timedelta(days=n)
    if pattern is RecurrencePattern.WEEKLY:
        return current + timedelta(weeks=n)
    if pattern is RecurrencePattern.MONTHLY:
        return add_months(current, n)
    if pattern is RecurrencePattern.YEARLY:
        return add_years(current, n)
    # CUSTOM and unrecognised patterns
    if custom_step is not None:
        return custom_step(current, config)
    return current + timedelta(weeks=n)


def safety_horizon(today: date, years: int = SAFETY_HORIZON_YEARS) -> date:
    """today + `years` years; date.max when that is past the calendar."""
    try:
        return add_years(today, years)
    except ValueError:
        return date.max


def should_stop(
    candidate: date,
    config: RecurringTaskConfig,
    current_count: int,
    today: date,
    horizon_years: int = SAFETY_HORIZON_YEARS,
) -> bool:
    """Whether `candidate` must not be appended to a list of `current_count` instances."""
    if config.max_occurrences is not None and current_count >= config.max_occurrences:
        return True
    if config.end_date is not None and candidate > config.end_date:
        return True
    if candidate > safety_horizon(today, horizon_years):
        return True
    return False
