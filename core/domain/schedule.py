from __future__ import annotations

from dataclasses import dataclass

from core.domain.calendar import WorkingWeek
from core.domain.identifiers import generate_id


@dataclass
class Schedule:
    id: str
    name: str
    working_days_per_week: int = 5

    @staticmethod
    def create(name: str, working_days_per_week: int = 5) -> "Schedule":
        WorkingWeek(working_days_per_week)
        return Schedule(
            id=generate_id(),
            name=name.strip() or "Schedule",
            working_days_per_week=working_days_per_week,
        )


__all__ = ["Schedule"]
