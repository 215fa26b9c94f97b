from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import DailyRecord, DailyStats


class DailyStatsCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked/balance minutes)."""

    @abstractmethod
    def daily_stats(
        self,
        record: DailyRecord,
        short_day_of_week: Optional[int] = None,
        standard_daily_minutes: Optional[int] = None,
    ) -> DailyStats:
        raise NotImplementedError
