from core.services.work_calendar.engine import WorkCalendarEngine, add_working_days

__all__ = ["WorkCalendarEngine", "add_working_days"]
