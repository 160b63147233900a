"""
Domain models for review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from recallkit.domain.constants import DEFAULT_EASE


class Grade(IntEnum):
    """Learner feedback on a retrieval attempt (four-grade scale)."""

    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4


@dataclass(frozen=True)
class MemoryState:
    """
    Legacy ease-based memory state for a card.

    Attributes:
        repetitions: Consecutive successful reviews since the last lapse.
        interval: Current review interval in days.
        ease: Multiplier applied to the interval on success (never below 1.3).
        lapses: Total number of failed reviews.
        next_review_at: When the card is next due, if it has been reviewed.
    """

    repetitions: int = 0
    interval: int = 1
    ease: float = DEFAULT_EASE
    lapses: int = 0
    next_review_at: datetime | None = None


@dataclass(frozen=True)
class FsrsCardState:
    """
    Stability/difficulty state handed to and returned by the FSRS adapter.

    Attributes:
        stability: Days until recall probability drops to the target retention.
        difficulty: Card difficulty on FSRS's 1-10 scale.
        reps: Total review count.
        lapses: Failed reviews of an already reviewed card.
        last_review: Timestamp of the previous review (None for new cards).
        due: Next due timestamp.
        scheduled_days: Interval assigned by the last review, in days.
    """

    stability: float = 0.0
    difficulty: float = 0.0
    reps: int = 0
    lapses: int = 0
    last_review: datetime | None = None
    due: datetime | None = None
    scheduled_days: float = 0.0

    @property
    def is_new(self) -> bool:
        return self.reps == 0 or self.stability <= 0


GradeAction = Callable[[], Awaitable[None]]


@dataclass(frozen=True)
class GradeHandlers:
    """The four host-supplied grading actions, one per Grade."""

    again: GradeAction
    hard: GradeAction
    good: GradeAction
    easy: GradeAction
