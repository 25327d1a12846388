# core/models.py
from core.domain import (
    DAYS_PER_WEEK,
    DateAnchor,
    DependencyType,
    LinkDirection,
    Schedule,
    Task,
    TaskDependency,
    WorkingWeek,
    generate_id,
)

__all__ = [
    "generate_id",
    "DAYS_PER_WEEK",
    "WorkingWeek",
    "DateAnchor",
    "DependencyType",
    "LinkDirection",
    "Schedule",
    "Task",
    "TaskDependency",
]
