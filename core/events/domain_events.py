"""Notify listeners when schedules or their task windows change."""
from core.events.signal import Signal


class ScheduleEvents:
    def __init__(self) -> None:
        self.schedule_changed: Signal[str] = Signal()  # schedule_id
        self.tasks_changed: Signal[str] = Signal()     # schedule_id


# SINGLE global instance
schedule_events = ScheduleEvents()
