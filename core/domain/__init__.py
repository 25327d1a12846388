from core.domain.calendar import DAYS_PER_WEEK, WorkingWeek
from core.domain.dates import DateLike, as_day, ensure_date_range
from core.domain.enums import DateAnchor, DependencyType, LinkDirection
from core.domain.identifiers import generate_id
from core.domain.schedule import Schedule
from core.domain.task import Task, TaskDependency

__all__ = [
    "generate_id",
    "DateLike",
    "as_day",
    "ensure_date_range",
    "DAYS_PER_WEEK",
    "WorkingWeek",
    "DateAnchor",
    "DependencyType",
    "LinkDirection",
    "Schedule",
    "Task",
    "TaskDependency",
]
