from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional

from core.domain.dates import DateLike, as_day, ensure_date_range
from core.models import DateAnchor, WorkingWeek
from core.services.scheduling.graph import ScheduleGraph
from core.services.scheduling.validation import (
    DateValidationResult,
    minimum_date,
    validate_task_dates,
)
from core.services.work_calendar.engine import WorkCalendarEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskDateShift:
    task_id: str
    code: str
    before_start: date
    before_end: date
    after_start: date
    after_end: date

    @property
    def shift_days(self) -> int:
        return (self.after_start - self.before_start).days


@dataclass
class PropagationResult:
    task_id: str
    start_date: date
    end_date: date
    shifts: List[TaskDateShift] = field(default_factory=list)
    windows: Dict[str, tuple[date, date]] = field(default_factory=dict)

    @property
    def shifted_task_ids(self) -> list[str]:
        return [shift.task_id for shift in self.shifts]

    def shift_for(self, task_id: str) -> Optional[TaskDateShift]:
        for shift in self.shifts:
            if shift.task_id == task_id:
                return shift
        return None


def check_date_change(
    graph: ScheduleGraph,
    task_id: str,
    new_start: DateLike,
    new_end: DateLike,
    working_days_per_week: int,
    *,
    include_successors: bool = True,
    locale: Optional[str] = None,
) -> DateValidationResult:
    predecessors, successors = graph.links_for(task_id)
    return validate_task_dates(
        new_start,
        new_end,
        predecessors,
        successors if include_successors else [],
        working_days_per_week,
        locale=locale,
    )


def propagate_date_change(
    graph: ScheduleGraph,
    task_id: str,
    new_start: DateLike,
    new_end: DateLike,
    working_days_per_week: int,
) -> PropagationResult:
    """
    Move one task and push every dependent task later just enough to keep all
    of its incoming links satisfied.

    Breadth-first over successor edges. A shifted task keeps its calendar
    length and is re-queued so its own successors are re-checked. Tasks are
    never pulled earlier. The graph itself is not modified.
    """
    calendar = WorkCalendarEngine(WorkingWeek(working_days_per_week))
    origin = graph.index_of(task_id)
    start, end = ensure_date_range(new_start, new_end)

    windows: Dict[int, tuple[date, date]] = {origin: (start, end)}

    def window(idx: int) -> tuple[date, date]:
        current = windows.get(idx)
        if current is None:
            task = graph.tasks[idx]
            current = (as_day(task.start_date), as_day(task.end_date))
        return current

    first_shift_order: List[int] = []
    queue = deque([origin])
    while queue:
        idx = queue.popleft()
        for edge in graph.successors[idx]:
            succ = edge.successor
            succ_start, succ_end = window(succ)
            delta = _required_shift(graph, calendar, succ, succ_start, succ_end, window)
            if delta <= 0:
                continue
            if succ not in windows:
                first_shift_order.append(succ)
            offset = timedelta(days=delta)
            windows[succ] = (succ_start + offset, succ_end + offset)
            queue.append(succ)

    result = PropagationResult(task_id=graph.tasks[origin].id, start_date=start, end_date=end)
    for idx in first_shift_order:
        task = graph.tasks[idx]
        after_start, after_end = windows[idx]
        result.shifts.append(
            TaskDateShift(
                task_id=task.id,
                code=task.label,
                before_start=as_day(task.start_date),
                before_end=as_day(task.end_date),
                after_start=after_start,
                after_end=after_end,
            )
        )
    result.windows = {graph.tasks[idx].id: win for idx, win in windows.items()}

    logger.debug(
        "Propagated %s to %s..%s: %d dependent task(s) shifted",
        result.task_id,
        start,
        end,
        len(result.shifts),
    )
    return result


def _required_shift(graph, calendar, idx, start, end, window) -> int:
    required = 0
    for edge in graph.predecessors[idx]:
        pred_start, pred_end = window(edge.predecessor)
        min_date = minimum_date(calendar, edge.dependency_type, pred_start, pred_end, edge.lag_days)
        checked = start if edge.dependency_type.constrained is DateAnchor.START else end
        required = max(required, (min_date - checked).days)
    return required


__all__ = [
    "TaskDateShift",
    "PropagationResult",
    "check_date_change",
    "propagate_date_change",
]
