from .work_calendar import WorkCalendarEngine, add_working_days
from .scheduling import ScheduleGraph, ScheduleService, propagate_date_change, validate_task_dates

__all__ = [
    "WorkCalendarEngine",
    "add_working_days",
    "ScheduleGraph",
    "ScheduleService",
    "propagate_date_change",
    "validate_task_dates",
]
