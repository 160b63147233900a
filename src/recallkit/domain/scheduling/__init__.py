# Domain Scheduling Package
from .models import FsrsCardState, Grade, GradeAction, GradeHandlers, MemoryState
from .ports import Scheduler

__all__ = [
    "FsrsCardState",
    "Grade",
    "GradeAction",
    "GradeHandlers",
    "MemoryState",
    "Scheduler",
]
