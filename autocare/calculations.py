"""Helper functions for overdue and priority calculations."""

import math
from datetime import date, datetime
from dateutil.relativedelta import relativedelta
from typing import Optional

from .errors import ConfigurationError
from .priority import PriorityLevel

# Inclusive lower bounds on percent of interval elapsed, most urgent first.
PRIORITY_THRESHOLDS = (
    (150, PriorityLevel.CRITICAL),
    (125, PriorityLevel.HIGH),
    (100, PriorityLevel.MEDIUM),
)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def classify_priority(elapsed: float, interval: float) -> PriorityLevel:
    """
    Map how far past its interval a service is to a priority level.

    Negative elapsed values (odometer rollback, bad data entry) count as
    zero, so they classify as LOW rather than overdue.
    """
    if interval is None or interval <= 0:
        raise ConfigurationError(f"Interval must be positive (got {interval})")
    elapsed = max(elapsed, 0)
    percentage = (elapsed / interval) * 100
    for threshold, level in PRIORITY_THRESHOLDS:
        if percentage >= threshold:
            return level
    return PriorityLevel.LOW


def mileage_elapsed(current_miles: float, last_miles: Optional[float]) -> float:
    """
    Distance driven since the last service, never negative.

    - With history: current - last
    - Without history: measured from odometer zero
    """
    if last_miles is None:
        last_miles = 0
    return max(current_miles - last_miles, 0)


def months_elapsed(last_date: Optional[date], now: date) -> float:
    """
    Calendar months between last service and now (fractional days / 30).

    Returns infinity when there is no service date, so the time axis is
    always due, and 0 when the service date is after now.
    """
    if last_date is None:
        return math.inf
    last_date = _as_date(last_date)
    now = _as_date(now)
    if last_date >= now:
        return 0.0
    delta = relativedelta(now, last_date)
    return delta.years * 12 + delta.months + delta.days / 30
