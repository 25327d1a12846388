from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.domain.dates import DateLike
from core.events.domain_events import schedule_events
from core.exceptions import ValidationError
from core.interfaces import DependencyRepository, ScheduleRepository, TaskRepository
from core.models import Schedule, Task
from core.services.scheduling.graph import ScheduleGraph
from core.services.scheduling.propagation import (
    PropagationResult,
    check_date_change,
    propagate_date_change,
)
from core.services.scheduling.validation import DateValidationResult

logger = logging.getLogger(__name__)


class ScheduleDatesMixin:
    _session: Session
    _schedule_repo: ScheduleRepository
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _locale: Optional[str]

    def validate_task_dates(self, task_id: str, new_start: DateLike, new_end: DateLike) -> DateValidationResult:
        task = self.get_task(task_id)
        schedule = self.get_schedule(task.schedule_id)
        graph = self._load_graph(schedule)
        return check_date_change(
            graph,
            task_id,
            new_start,
            new_end,
            schedule.working_days_per_week,
            locale=self._locale,
        )

    def preview_date_change(self, task_id: str, new_start: DateLike, new_end: DateLike) -> PropagationResult:
        """Dependent-task shifts a cascading update would make; nothing is written."""
        task = self.get_task(task_id)
        schedule = self.get_schedule(task.schedule_id)
        graph = self._load_graph(schedule)
        self._ensure_predecessors_allow(graph, schedule, task_id, new_start, new_end)
        return propagate_date_change(graph, task_id, new_start, new_end, schedule.working_days_per_week)

    def update_task_dates(
        self,
        task_id: str,
        new_start: DateLike,
        new_end: DateLike,
        cascade: bool = False,
    ) -> PropagationResult:
        """
        Persist a new window for one task.

        Without cascade any broken dependency rejects the change. With cascade
        predecessors are still enforced, and dependent tasks are shifted later
        and saved in the same transaction.
        """
        task = self.get_task(task_id)
        schedule = self.get_schedule(task.schedule_id)
        graph = self._load_graph(schedule)

        if cascade:
            self._ensure_predecessors_allow(graph, schedule, task_id, new_start, new_end)
        else:
            result = check_date_change(
                graph,
                task_id,
                new_start,
                new_end,
                schedule.working_days_per_week,
                locale=self._locale,
            )
            if not result.is_valid:
                raise ValidationError(result.message, code="DEPENDENCY_VIOLATION")

        propagation = propagate_date_change(
            graph, task_id, new_start, new_end, schedule.working_days_per_week
        )

        try:
            for changed_id, (start, end) in propagation.windows.items():
                changed: Task = graph.task(changed_id)
                changed.start_date = start
                changed.end_date = end
                self._task_repo.update(changed)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error updating dates of task {task_id}: {exc}")
            raise

        logger.info(
            f"Updated task {task.code} to {propagation.start_date}..{propagation.end_date}; "
            f"{len(propagation.shifts)} dependent task(s) shifted"
        )
        schedule_events.tasks_changed.emit(schedule.id)
        return propagation

    def _load_graph(self, schedule: Schedule) -> ScheduleGraph:
        return ScheduleGraph(
            self._task_repo.list_by_schedule(schedule.id),
            self._dependency_repo.list_by_schedule(schedule.id),
        )

    def _ensure_predecessors_allow(
        self,
        graph: ScheduleGraph,
        schedule: Schedule,
        task_id: str,
        new_start: DateLike,
        new_end: DateLike,
    ) -> None:
        result = check_date_change(
            graph,
            task_id,
            new_start,
            new_end,
            schedule.working_days_per_week,
            include_successors=False,
            locale=self._locale,
        )
        if not result.is_valid:
            raise ValidationError(result.message, code="DEPENDENCY_VIOLATION")


__all__ = ["ScheduleDatesMixin"]
