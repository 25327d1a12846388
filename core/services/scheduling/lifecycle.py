from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from core.domain.dates import ensure_date_range
from core.events.domain_events import schedule_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import DependencyRepository, ScheduleRepository, TaskRepository
from core.models import Schedule, Task, WorkingWeek
from core.services.scheduling.policy import default_working_days_per_week

logger = logging.getLogger(__name__)


class ScheduleLifecycleMixin:
    _session: Session
    _schedule_repo: ScheduleRepository
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def create_schedule(self, name: str, working_days_per_week: Optional[int] = None) -> Schedule:
        if working_days_per_week is None:
            working_days_per_week = default_working_days_per_week()
        schedule = Schedule.create(name=name, working_days_per_week=working_days_per_week)
        try:
            self._schedule_repo.add(schedule)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error creating schedule: {exc}")
            raise
        logger.info(
            f"Created schedule {schedule.id} - {schedule.name} "
            f"({schedule.working_days_per_week} working days/week)"
        )
        schedule_events.schedule_changed.emit(schedule.id)
        return schedule

    def set_working_days_per_week(self, schedule_id: str, working_days_per_week: int) -> Schedule:
        schedule = self.get_schedule(schedule_id)
        WorkingWeek(working_days_per_week)
        schedule.working_days_per_week = working_days_per_week
        try:
            self._schedule_repo.update(schedule)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        schedule_events.schedule_changed.emit(schedule.id)
        return schedule

    def get_schedule(self, schedule_id: str) -> Schedule:
        schedule = self._schedule_repo.get(schedule_id)
        if not schedule:
            raise NotFoundError("Schedule not found.", code="SCHEDULE_NOT_FOUND")
        return schedule

    def add_task(
        self,
        schedule_id: str,
        code: str,
        name: str,
        start_date: date,
        end_date: date,
    ) -> Task:
        self.get_schedule(schedule_id)
        if not (code or "").strip():
            raise ValidationError("Task code cannot be empty.", code="TASK_CODE_EMPTY")
        if not (name or "").strip():
            raise ValidationError("Task name cannot be empty.", code="TASK_NAME_EMPTY")
        start, end = ensure_date_range(start_date, end_date)

        task = Task.create(
            schedule_id=schedule_id,
            code=code.strip(),
            name=name.strip(),
            start_date=start,
            end_date=end,
        )
        try:
            self._task_repo.add(task)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error creating task: {exc}")
            raise
        logger.info(f"Created task {task.id} - {task.code} for schedule {schedule_id}")
        schedule_events.tasks_changed.emit(schedule_id)
        return task

    def delete_task(self, task_id: str) -> None:
        task = self.get_task(task_id)
        try:
            self._dependency_repo.delete_for_task(task_id)
            self._task_repo.delete(task_id)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error deleting task {task_id}: {exc}")
            raise
        schedule_events.tasks_changed.emit(task.schedule_id)

    def get_task(self, task_id: str) -> Task:
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        return task

    def list_tasks(self, schedule_id: str) -> List[Task]:
        tasks = self._task_repo.list_by_schedule(schedule_id)
        return sorted(tasks, key=lambda t: (t.start_date, t.code))


__all__ = ["ScheduleLifecycleMixin"]
