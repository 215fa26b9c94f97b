from __future__ import annotations

from typing import Optional

from ...punches.normalizer import punch_to_minutes
from ...schedules.resolver import target_minutes
from ..model import DailyRecord, DailyStats
from .base import DailyStatsCalculator


def _segment(start: Optional[int], end: Optional[int]) -> int:
    if start is None or end is None or end <= start:
        return 0
    return end - start


class SegmentedStatsCalculator(DailyStatsCalculator):
    """Standard rule: up to three worked segments split by lunch and snack.

    A: entry -> lunch start (or entry -> exit when no break was punched)
    B: lunch end -> snack start (or lunch end -> exit)
    C: snack end -> exit

    A segment with a missing or earlier end is dropped, it is not flagged.
    A day only produces a balance once it is closed (exit punched, or worked
    already above target); open days give 0.
    """

    def worked_minutes(self, record: DailyRecord) -> int:
        entry = punch_to_minutes(record.entry)
        lunch_start = punch_to_minutes(record.lunch_start)
        lunch_end = punch_to_minutes(record.lunch_end)
        snack_start = punch_to_minutes(record.snack_start)
        snack_end = punch_to_minutes(record.snack_end)
        exit_ = punch_to_minutes(record.exit)

        no_breaks = all(p is None for p in (lunch_start, lunch_end, snack_start, snack_end))

        worked = 0
        if lunch_start is not None:
            worked += _segment(entry, lunch_start)
        elif no_breaks:
            worked += _segment(entry, exit_)

        if snack_start is not None:
            worked += _segment(lunch_end, snack_start)
        else:
            worked += _segment(lunch_end, exit_)

        worked += _segment(snack_end, exit_)

        return max(worked, 0)

    def daily_stats(
        self,
        record: DailyRecord,
        short_day_of_week: Optional[int] = None,
        standard_daily_minutes: Optional[int] = None,
    ) -> DailyStats:
        worked = self.worked_minutes(record)
        target = target_minutes(record.work_date, short_day_of_week, standard_daily_minutes)

        closed = punch_to_minutes(record.exit) is not None or worked > target
        balance = worked - target if closed else 0
        return DailyStats(total=worked, balance=balance)


_default_calculator = SegmentedStatsCalculator()


def daily_stats(
    record: DailyRecord,
    short_day_of_week: Optional[int] = None,
    standard_daily_minutes: Optional[int] = None,
) -> DailyStats:
    return _default_calculator.daily_stats(record, short_day_of_week, standard_daily_minutes)
