from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from core.domain.calendar import ensure_whole_days
from core.domain.dates import DateLike, as_day, ensure_date_range
from core.domain.enums import coerce_dependency_type
from core.models import DateAnchor, DependencyType, LinkDirection, WorkingWeek
from core.services.scheduling.messages import violation_message
from core.services.work_calendar.engine import WorkCalendarEngine


@dataclass(frozen=True)
class DependencyLink:
    """The task on the other side of a dependency, with its current window."""

    start_date: DateLike
    end_date: DateLike
    dependency_type: DependencyType
    lag_days: int = 0
    code: Optional[str] = None


@dataclass(frozen=True)
class PredecessorLink(DependencyLink):
    """Something the task being changed depends on."""


@dataclass(frozen=True)
class SuccessorLink(DependencyLink):
    """Something that depends on the task being changed."""


@dataclass(frozen=True)
class DependencyViolation:
    direction: LinkDirection
    dependency_type: DependencyType
    lag_days: int
    constrained: DateAnchor
    checked_date: date
    min_date: date
    code: Optional[str] = None


@dataclass(frozen=True)
class DateValidationResult:
    is_valid: bool
    message: str = ""
    violation: Optional[DependencyViolation] = None

    @staticmethod
    def valid() -> "DateValidationResult":
        return DateValidationResult(is_valid=True)

    @staticmethod
    def invalid(violation: DependencyViolation, locale: Optional[str] = None) -> "DateValidationResult":
        return DateValidationResult(
            is_valid=False,
            message=violation_message(
                direction=violation.direction,
                constrained=violation.constrained,
                dependency_type=violation.dependency_type,
                lag_days=violation.lag_days,
                min_date=violation.min_date,
                code=violation.code,
                locale=locale,
            ),
            violation=violation,
        )


def pick_anchor(anchor: DateAnchor, start: date, end: date) -> date:
    if anchor is DateAnchor.START:
        return start
    return end


def minimum_date(
    calendar: WorkCalendarEngine,
    dependency_type: DependencyType,
    upstream_start: date,
    upstream_end: date,
    lag_days: int,
) -> date:
    """Earliest day the downstream side's constrained date may fall on."""
    reference = pick_anchor(dependency_type.anchor, upstream_start, upstream_end)
    return calendar.add_working_days(reference, ensure_whole_days(lag_days))


def validate_task_dates(
    new_start: DateLike,
    new_end: DateLike,
    predecessors: Iterable[PredecessorLink],
    successors: Iterable[SuccessorLink],
    working_days_per_week: int,
    *,
    locale: Optional[str] = None,
) -> DateValidationResult:
    """
    Check a proposed (start, end) window against every dependency of the task.

    Predecessors are checked first, then successors; the first violation found
    is reported. A constrained date equal to the minimum is accepted.
    """
    calendar = WorkCalendarEngine(WorkingWeek(working_days_per_week))
    start, end = ensure_date_range(new_start, new_end)

    for p in predecessors:
        dep_type = coerce_dependency_type(p.dependency_type)
        min_date = minimum_date(calendar, dep_type, as_day(p.start_date), as_day(p.end_date), p.lag_days)
        checked = pick_anchor(dep_type.constrained, start, end)
        if checked < min_date:
            return DateValidationResult.invalid(
                DependencyViolation(
                    direction=LinkDirection.PREDECESSOR,
                    dependency_type=dep_type,
                    lag_days=p.lag_days,
                    constrained=dep_type.constrained,
                    checked_date=checked,
                    min_date=min_date,
                    code=p.code,
                ),
                locale=locale,
            )

    for s in successors:
        dep_type = coerce_dependency_type(s.dependency_type)
        min_date = minimum_date(calendar, dep_type, start, end, s.lag_days)
        checked = pick_anchor(dep_type.constrained, as_day(s.start_date), as_day(s.end_date))
        if checked < min_date:
            return DateValidationResult.invalid(
                DependencyViolation(
                    direction=LinkDirection.SUCCESSOR,
                    dependency_type=dep_type,
                    lag_days=s.lag_days,
                    constrained=dep_type.constrained,
                    checked_date=checked,
                    min_date=min_date,
                    code=s.code,
                ),
                locale=locale,
            )

    return DateValidationResult.valid()


__all__ = [
    "DependencyLink",
    "PredecessorLink",
    "SuccessorLink",
    "DependencyViolation",
    "DateValidationResult",
    "pick_anchor",
    "minimum_date",
    "validate_task_dates",
]
