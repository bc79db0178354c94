"""Human-readable descriptions of recurring task configs (display only)"""
from tasker.domain.recurrence import RecurrencePattern, RecurringTaskConfig, normalize_unit


_PLAIN = {
    RecurrencePattern.DAILY: ("Daily", "days"),
    RecurrencePattern.WEEKLY: ("Weekly", "weeks"),
    RecurrencePattern.MONTHLY: ("Monthly", "months"),
    RecurrencePattern.YEARLY: ("Yearly", "years"),
}

_UNIT_PLAIN = {
    "day": RecurrencePattern.DAILY,
    "week": RecurrencePattern.WEEKLY,
    "month": RecurrencePattern.MONTHLY,
    "year": RecurrencePattern.YEARLY,
}


def _every(pattern: RecurrencePattern, interval: int) -> str:
    single, plural = _PLAIN[pattern]
    if interval == 1:
        return single
    return f"Every {interval} {plural}"


def _format_custom(config: RecurringTaskConfig) -> str:
    unit = normalize_unit(config.custom_unit)
    if unit is None:
        return "Custom pattern"
    if unit in _UNIT_PLAIN:
        return _every(_UNIT_PLAIN[unit], config.interval)
    if unit == "weekday":
        return "Weekdays (Mon-Fri)"
    if unit in ("fortnight", "biweekly"):
        return "Bi-weekly" if config.interval == 1 else f"Every {config.interval * 2} weeks"
    if unit in ("quarter", "quarterly"):
        return "Quarterly" if config.interval == 1 else f"Every {config.interval * 3} months"
    return "Custom pattern"


def format_pattern(config: RecurringTaskConfig) -> str:
    pattern = RecurrencePattern.parse(config.pattern)
    if pattern is None:
        return str(config.pattern or "")
    if pattern is RecurrencePattern.CUSTOM:
        return _format_custom(config)
    return _every(pattern, config.interval)


def _occurrences(max_occurrences: int) -> str:
    # generation always yields the anchor
    n = max(max_occurrences, 1)
    return "1 occurrence" if n == 1 else f"{n} occurrences"


def describe_end_condition(config: RecurringTaskConfig) -> str:
    if config.end_date is not None:
        return f"Ends on {config.end_date.isoformat()}"
    if config.max_occurrences is not None:
        return f"Ends after {_occurrences(config.max_occurrences)}"
    return "Never ends"


def summarize(config: RecurringTaskConfig) -> str:
    """One-line summary, e.g. 'Weekly task for 5 occurrences'."""
    parts = [f"{format_pattern(config)} task"]
    if config.end_date is not None:
        parts.append(f"ending {config.end_date.isoformat()}")
    elif config.max_occurrences is not None:
        parts.append(f"for {_occurrences(config.max_occurrences)}")
    else:
        parts.append("with no end date")
    return " ".join(parts)
