"""
Legacy ease-based scheduler.

Pure computation module with no I/O. Grades are on a 0-4 scale where
3 and above count as a successful recall.
"""

import math
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from recallkit.domain.constants import (
    EASE_DECAY,
    FIRST_INTERVAL_DAYS,
    GRADE_REWARD,
    MAX_LEGACY_GRADE,
    MIN_EASE,
    MIN_LEGACY_GRADE,
    NONLINEAR_ADJUSTMENT,
    PASSING_GRADE,
    SECOND_INTERVAL_DAYS,
)
from recallkit.domain.scheduling.models import Grade, MemoryState

# GOOD and EASY share the top of the legacy scale: grade 4 is the point
# where ease stops shrinking.
_LEGACY_GRADES = {
    Grade.AGAIN: 0,
    Grade.HARD: 3,
    Grade.GOOD: 4,
    Grade.EASY: 4,
}


def legacy_grade_for(grade: Grade) -> int:
    """Map a four-grade value onto the legacy 0-4 scale."""
    return _LEGACY_GRADES[Grade(grade)]


def calculate_ease(ease: float, grade: int) -> float:
    """
    ease' = ease - 0.8 + 0.28 * grade - 0.02 * grade^2, floored at 1.3.
    """
    new_ease = ease - EASE_DECAY + GRADE_REWARD * grade - NONLINEAR_ADJUSTMENT * grade * grade
    return max(MIN_EASE, new_ease)


def create_state(**overrides) -> MemoryState:
    """Memory state for a card that has never been reviewed."""
    return MemoryState(**overrides)


def grade_performance(
    state: MemoryState,
    grade: int,
    now: datetime | None = None,
) -> MemoryState:
    """
    Apply one review to a card's memory state.

    Args:
        state: Current memory state (left untouched).
        grade: Performance on the 0-4 scale.
        now: Review time; defaults to the current UTC time.

    Returns:
        A new MemoryState with next_review_at set `interval` days after `now`.

    Raises:
        ValueError: If grade is outside 0-4.
    """
    if isinstance(grade, bool) or not MIN_LEGACY_GRADE <= grade <= MAX_LEGACY_GRADE:
        raise ValueError(f"Legacy grade must be between 0 and 4, got {grade!r}")
    if now is None:
        now = datetime.now(timezone.utc)

    ease = calculate_ease(state.ease, grade)

    if grade >= PASSING_GRADE:
        repetitions = state.repetitions + 1
        if repetitions == 1:
            interval = FIRST_INTERVAL_DAYS
        elif repetitions == 2:
            interval = SECOND_INTERVAL_DAYS
        else:
            # Grows by the ease the card had before this review
            interval = math.ceil(state.interval * state.ease)
        lapses = state.lapses
    else:
        repetitions = 0
        interval = FIRST_INTERVAL_DAYS
        lapses = state.lapses + 1

    return replace(
        state,
        repetitions=repetitions,
        interval=interval,
        ease=ease,
        lapses=lapses,
        next_review_at=now + timedelta(days=interval),
    )
