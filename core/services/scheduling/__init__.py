from .graph import ScheduleEdge, ScheduleGraph
from .propagation import PropagationResult, TaskDateShift, check_date_change, propagate_date_change
from .service import ScheduleService
from .validation import (
    DateValidationResult,
    DependencyViolation,
    PredecessorLink,
    SuccessorLink,
    validate_task_dates,
)

__all__ = [
    "ScheduleEdge",
    "ScheduleGraph",
    "PropagationResult",
    "TaskDateShift",
    "check_date_change",
    "propagate_date_change",
    "ScheduleService",
    "DateValidationResult",
    "DependencyViolation",
    "PredecessorLink",
    "SuccessorLink",
    "validate_task_dates",
]
