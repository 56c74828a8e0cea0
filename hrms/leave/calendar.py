"""Working-day arithmetic for leave ranges."""

from __future__ import annotations

from datetime import date, timedelta

from hrms.common.constants import WEEKEND_DAYS


def count_working_days(start: date, end: date) -> int:
    """Count the days in the inclusive range [start, end] that are not
    Saturday or Sunday.

    Pure function of its two calendar dates. An all-weekend range yields 0;
    so does an empty range (``start > end``), which callers reject before
    getting here.
    """
    working_days = 0
    current = start
    while current <= end:
        if current.weekday() not in WEEKEND_DAYS:
            working_days += 1
        current += timedelta(days=1)
    return working_days
