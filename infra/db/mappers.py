from __future__ import annotations

from core.models import Schedule, Task, TaskDependency
from infra.db.models import ScheduleORM, TaskDependencyORM, TaskORM


def schedule_to_orm(schedule: Schedule) -> ScheduleORM:
    return ScheduleORM(
        id=schedule.id,
        name=schedule.name,
        working_days_per_week=schedule.working_days_per_week,
    )


def schedule_from_orm(obj: ScheduleORM) -> Schedule:
    return Schedule(
        id=obj.id,
        name=obj.name,
        working_days_per_week=obj.working_days_per_week,
    )


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        schedule_id=task.schedule_id,
        code=task.code,
        name=task.name,
        start_date=task.start_date,
        end_date=task.end_date,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        schedule_id=obj.schedule_id,
        code=obj.code,
        name=obj.name,
        start_date=obj.start_date,
        end_date=obj.end_date,
    )


def dependency_to_orm(dependency: TaskDependency) -> TaskDependencyORM:
    return TaskDependencyORM(
        id=dependency.id,
        predecessor_task_id=dependency.predecessor_task_id,
        successor_task_id=dependency.successor_task_id,
        dependency_type=dependency.dependency_type,
        lag_days=dependency.lag_days,
    )


def dependency_from_orm(obj: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(
        id=obj.id,
        predecessor_task_id=obj.predecessor_task_id,
        successor_task_id=obj.successor_task_id,
        dependency_type=obj.dependency_type,
        lag_days=obj.lag_days,
    )


__all__ = [
    "schedule_to_orm",
    "schedule_from_orm",
    "task_to_orm",
    "task_from_orm",
    "dependency_to_orm",
    "dependency_from_orm",
]
