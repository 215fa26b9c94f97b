from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import sunday_based_weekday
from ..core.constants import (
    DEFAULT_SHORT_DAY_OF_WEEK,
    DEFAULT_STANDARD_DAILY_MINUTES,
    NON_WORKING_WEEKDAY,
    SHORT_DAY_MINUTES,
    SHORT_DAY_THRESHOLD,
)


def target_minutes(
    day: date,
    short_day_of_week: Optional[int] = DEFAULT_SHORT_DAY_OF_WEEK,
    standard_daily_minutes: Optional[int] = DEFAULT_STANDARD_DAILY_MINUTES,
) -> int:
    """Expected worked minutes for ``day`` under a weekly schedule.

    Sunday is always off. The configured short day gets SHORT_DAY_MINUTES
    (never more than the standard day). Every other weekday gets the
    standard daily minutes.
    """
    if short_day_of_week is None:
        short_day_of_week = DEFAULT_SHORT_DAY_OF_WEEK
    if standard_daily_minutes is None or standard_daily_minutes < 0:
        standard_daily_minutes = DEFAULT_STANDARD_DAILY_MINUTES

    weekday = sunday_based_weekday(day)
    if weekday == NON_WORKING_WEEKDAY:
        return 0
    if weekday == short_day_of_week:
        return min(SHORT_DAY_MINUTES, int(standard_daily_minutes))
    return int(standard_daily_minutes)


def is_short_day(target: int) -> bool:
    return 0 < target <= SHORT_DAY_THRESHOLD
