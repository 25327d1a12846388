from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import FrozenSet

from core.domain.dates import as_day
from core.exceptions import ValidationError

DAYS_PER_WEEK = 7


def ensure_whole_days(value: int, *, field: str = "lag_days") -> int:
    """Reject day counts that are not plain integers instead of truncating them."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{field} must be a whole number of days, got {value!r}.",
            code="INVALID_LAG",
        )
    return value


@dataclass(frozen=True)
class WorkingWeek:
    """
    Weekly working pattern of a schedule.
    The first N weekdays (0=Monday) are working days; there are no holidays.
    """

    working_days_per_week: int = 5

    def __post_init__(self) -> None:
        value = self.working_days_per_week
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(
                f"working_days_per_week must be an integer, got {value!r}.",
                code="INVALID_WORKING_WEEK",
            )
        if not 1 <= value <= DAYS_PER_WEEK:
            raise ValidationError(
                f"working_days_per_week must be between 1 and {DAYS_PER_WEEK}, got {value}.",
                code="INVALID_WORKING_WEEK",
            )

    @property
    def working_weekdays(self) -> FrozenSet[int]:
        return frozenset(range(self.working_days_per_week))

    def is_working_day(self, d: date | datetime) -> bool:
        return as_day(d).weekday() < self.working_days_per_week


__all__ = ["DAYS_PER_WEEK", "WorkingWeek", "ensure_whole_days"]
