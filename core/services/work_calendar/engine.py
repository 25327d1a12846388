# core/services/work_calendar/engine.py
from __future__ import annotations

from datetime import date, timedelta

from core.domain.calendar import ensure_whole_days
from core.domain.dates import DateLike, as_day
from core.models import WorkingWeek

_ONE_DAY = timedelta(days=1)


def add_working_days(reference: DateLike, offset: int, working_days_per_week: int) -> date:
    """
    Move `offset` working days away from `reference` (backwards when negative).

    A zero offset returns the reference day itself, even when it falls on a
    non-working day.
    """
    return WorkCalendarEngine(WorkingWeek(working_days_per_week)).add_working_days(reference, offset)


class WorkCalendarEngine:
    def __init__(self, week: WorkingWeek | None = None):
        self._week: WorkingWeek = week or WorkingWeek()

    @property
    def week(self) -> WorkingWeek:
        return self._week

    @property
    def working_days_per_week(self) -> int:
        return self._week.working_days_per_week

    def is_working_day(self, d: DateLike) -> bool:
        return self._week.is_working_day(as_day(d))

    def next_working_day(self, d: DateLike, include_today: bool = True) -> date:
        current = as_day(d)
        if not include_today:
            current += _ONE_DAY
        while not self._week.is_working_day(current):
            current += _ONE_DAY
        return current

    def add_working_days(self, start: DateLike, working_days: int) -> date:
        current = as_day(start)
        working_days = ensure_whole_days(working_days, field="working_days")
        if working_days == 0:
            return current

        step = _ONE_DAY if working_days > 0 else -_ONE_DAY
        days_remaining = abs(working_days)
        while days_remaining > 0:
            current += step
            if self._week.is_working_day(current):
                days_remaining -= 1
        return current

    def working_days_between(self, start: DateLike, end: DateLike) -> int:
        current = as_day(start)
        last = as_day(end)
        if last < current:
            return 0
        count = 0
        while current <= last:
            if self._week.is_working_day(current):
                count += 1
            current += _ONE_DAY
        return count


__all__ = ["WorkCalendarEngine", "add_working_days"]
