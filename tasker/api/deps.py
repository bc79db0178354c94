"""
FastAPI dependencies (DB session, account, recurrence service)
"""
from datetime import date
from typing import Callable

from fastapi import Header

from tasker.config import get_settings
from tasker.infrastructure.db.session import get_db as _get_db
from tasker.application.recurring_tasks import RecurringTaskService
from tasker.domain.recurrence import custom_unit_step


# Re-export so routes import everything from one place
get_db = _get_db


def get_account_id(x_account_id: int = Header(default=1)) -> int:
    """
    Account of the caller. Authentication lives in front of this service;
    it forwards the resolved account in the X-Account-Id header.
    """
    return x_account_id


def build_recurring_service(clock: Callable[[], date] = date.today) -> RecurringTaskService:
    """Service used by the API: custom patterns step by their custom_unit,
    matching the description format_pattern gives them."""
    return RecurringTaskService(get_settings(), clock=clock, custom_step=custom_unit_step)


def get_recurring_service() -> RecurringTaskService:
    """Service bound to the real clock (override in tests to freeze today)"""
    return build_recurring_service()
