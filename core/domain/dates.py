from __future__ import annotations

from datetime import date, datetime
from typing import Union

from core.exceptions import ValidationError

DateLike = Union[date, datetime, str]


def as_day(value: DateLike) -> date:
    """
    Normalize a date-like value to its calendar day.
    Time-of-day is dropped so two instants on the same day compare equal.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            pass
    raise ValidationError(f"Unsupported date value: {value!r}", code="INVALID_DATE")


def ensure_date_range(start: DateLike, end: DateLike) -> tuple[date, date]:
    start_day = as_day(start)
    end_day = as_day(end)
    if end_day < start_day:
        raise ValidationError(
            f"Task end date ({end_day}) can not be before start date ({start_day})",
            code="TASK_INVALID_DATE",
        )
    return start_day, end_day


__all__ = ["DateLike", "as_day", "ensure_date_range"]
