from __future__ import annotations

import os

from core.exceptions import ValidationError
from core.models import WorkingWeek

DEFAULT_WORKING_DAYS_PER_WEEK = 5


def default_working_days_per_week() -> int:
    """
    Working days per week for new schedules, from PM_DEFAULT_WORKING_DAYS.
    Unset or blank means 5; any other value must be an integer in 1..7.
    """
    raw = (os.getenv("PM_DEFAULT_WORKING_DAYS", "") or "").strip()
    if not raw:
        return DEFAULT_WORKING_DAYS_PER_WEEK
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(
            f"PM_DEFAULT_WORKING_DAYS must be an integer, got {raw!r}.",
            code="INVALID_WORKING_WEEK",
        ) from None
    return WorkingWeek(value).working_days_per_week


__all__ = ["DEFAULT_WORKING_DAYS_PER_WEEK", "default_working_days_per_week"]
