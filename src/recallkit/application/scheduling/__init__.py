# Application Scheduling Package
from .dispatch import dispatch_grade
from .legacy import calculate_ease, create_state, grade_performance, legacy_grade_for
from .schedulers import DispatchScheduler, LegacyScheduler

__all__ = [
    "DispatchScheduler",
    "LegacyScheduler",
    "calculate_ease",
    "create_state",
    "dispatch_grade",
    "grade_performance",
    "legacy_grade_for",
]
