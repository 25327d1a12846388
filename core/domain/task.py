from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from core.domain.enums import DependencyType
from core.domain.identifiers import generate_id


@dataclass
class Task:
    id: str
    schedule_id: str
    code: str
    name: str
    start_date: date
    end_date: date

    @property
    def label(self) -> str:
        return self.code or self.name or self.id

    @staticmethod
    def create(schedule_id: str, code: str, name: str, start_date: date, end_date: date) -> "Task":
        return Task(
            id=generate_id(),
            schedule_id=schedule_id,
            code=code,
            name=name,
            start_date=start_date,
            end_date=end_date,
        )


@dataclass
class TaskDependency:
    id: str
    predecessor_task_id: str
    successor_task_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0  # negative for lead time

    @staticmethod
    def create(
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> "TaskDependency":
        return TaskDependency(
            id=generate_id(),
            predecessor_task_id=predecessor_id,
            successor_task_id=successor_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
        )


__all__ = ["Task", "TaskDependency"]
