from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from sqlalchemy.orm import Session

from core.domain.calendar import ensure_whole_days
from core.domain.enums import coerce_dependency_type
from core.events.domain_events import schedule_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import DependencyType, TaskDependency
from core.services.scheduling.graph import ScheduleGraph

logger = logging.getLogger(__name__)


@dataclass
class DependencyDiagnostic:
    is_valid: bool
    code: str
    summary: str
    detail: str = ""

    @property
    def message(self) -> str:
        if self.detail:
            return f"{self.summary}\n{self.detail}"
        return self.summary


class ScheduleDependencyMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def add_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> TaskDependency:
        dependency_type = coerce_dependency_type(dependency_type)
        lag_days = ensure_whole_days(lag_days)
        diagnostic = self.get_dependency_diagnostics(predecessor_id, successor_id)
        if not diagnostic.is_valid:
            if diagnostic.code == "TASK_NOT_FOUND":
                raise NotFoundError(diagnostic.message, code=diagnostic.code)
            if diagnostic.code == "DEPENDENCY_CYCLE":
                raise BusinessRuleError(diagnostic.message, code=diagnostic.code)
            raise ValidationError(diagnostic.message, code=diagnostic.code)

        pred = self._task_repo.get(predecessor_id)
        dep = TaskDependency.create(predecessor_id, successor_id, dependency_type, lag_days)
        try:
            self._dependency_repo.add(dep)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error adding dependency {predecessor_id} -> {successor_id}: {exc}")
            raise
        logger.info(
            f"Added {dep.dependency_type.value} dependency {dep.id} "
            f"({predecessor_id} -> {successor_id}, lag {dep.lag_days})"
        )
        schedule_events.tasks_changed.emit(pred.schedule_id)
        return dep

    def remove_dependency(self, dep_id: str) -> None:
        dep = self._dependency_repo.get(dep_id)
        if not dep:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")
        pred = self._task_repo.get(dep.predecessor_task_id)
        try:
            self._dependency_repo.delete(dep_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        if pred:
            schedule_events.tasks_changed.emit(pred.schedule_id)

    def list_dependencies_for_task(self, task_id: str) -> List[TaskDependency]:
        return self._dependency_repo.list_by_task(task_id)

    def get_dependency_diagnostics(self, predecessor_id: str, successor_id: str) -> DependencyDiagnostic:
        if predecessor_id == successor_id:
            return DependencyDiagnostic(
                is_valid=False,
                code="DEPENDENCY_SELF",
                summary="A task cannot depend on itself.",
                detail="Select two different tasks for predecessor and successor.",
            )

        predecessor = self._task_repo.get(predecessor_id)
        successor = self._task_repo.get(successor_id)
        if not predecessor:
            return DependencyDiagnostic(
                is_valid=False,
                code="TASK_NOT_FOUND",
                summary="Predecessor task not found.",
                detail=f"Task id '{predecessor_id}' does not exist.",
            )
        if not successor:
            return DependencyDiagnostic(
                is_valid=False,
                code="TASK_NOT_FOUND",
                summary="Successor task not found.",
                detail=f"Task id '{successor_id}' does not exist.",
            )
        if predecessor.schedule_id != successor.schedule_id:
            return DependencyDiagnostic(
                is_valid=False,
                code="DEPENDENCY_CROSS_SCHEDULE",
                summary="Tasks are in different schedules.",
                detail="Dependencies are allowed only between tasks of the same schedule.",
            )

        deps = self._dependency_repo.list_by_schedule(predecessor.schedule_id)
        if any(
            dep.predecessor_task_id == predecessor_id and dep.successor_task_id == successor_id
            for dep in deps
        ):
            return DependencyDiagnostic(
                is_valid=False,
                code="DEPENDENCY_DUPLICATE",
                summary="Dependency already exists.",
                detail="The selected predecessor->successor relationship already exists.",
            )

        graph = ScheduleGraph(self._task_repo.list_by_schedule(predecessor.schedule_id), deps)
        path = graph.find_path(successor_id, predecessor_id)
        if path:
            cycle_text = " -> ".join(graph.task(task_id).label for task_id in [predecessor_id, *path])
            return DependencyDiagnostic(
                is_valid=False,
                code="DEPENDENCY_CYCLE",
                summary="This link would create a circular dependency.",
                detail=f"Cycle path: {cycle_text}",
            )

        return DependencyDiagnostic(
            is_valid=True,
            code="DEPENDENCY_VALID",
            summary="Dependency is valid.",
        )


__all__ = ["DependencyDiagnostic", "ScheduleDependencyMixin"]
