from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, ScheduleRepository, TaskRepository
from core.services.scheduling.dates import ScheduleDatesMixin
from core.services.scheduling.dependency import ScheduleDependencyMixin
from core.services.scheduling.lifecycle import ScheduleLifecycleMixin


class ScheduleService(
    ScheduleLifecycleMixin,
    ScheduleDependencyMixin,
    ScheduleDatesMixin,
):
    def __init__(
        self,
        session: Session,
        schedule_repo: ScheduleRepository,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        locale: Optional[str] = None,
    ):
        self._session: Session = session
        self._schedule_repo: ScheduleRepository = schedule_repo
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._locale: Optional[str] = locale


__all__ = ["ScheduleService"]
