"""
FSRS grading adapter: builds the four grading actions on fsrs-rs-python.

The stability/difficulty computation belongs entirely to the library; this
adapter only converts card state in and out and binds one action per Grade.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any

from fsrs_rs_python import DEFAULT_PARAMETERS, FSRS, MemoryState

from recallkit.domain.constants import (
    DEFAULT_DESIRED_RETENTION,
    FSRS_DIFFICULTY_RANGE,
    FSRS_MIN_STABILITY,
)
from recallkit.domain.scheduling.models import FsrsCardState, Grade, GradeHandlers

logger = logging.getLogger(__name__)

CardSink = Callable[[FsrsCardState], Awaitable[None]]


class FsrsGradingAdapter:
    """Adapter from FsrsCardState to the fsrs-rs-python scheduler."""

    def __init__(
        self,
        parameters: list[float] | None = None,
        desired_retention: float = DEFAULT_DESIRED_RETENTION,
        engine: Any | None = None,
    ):
        self.desired_retention = desired_retention
        self.engine = engine or FSRS(parameters=parameters or list(DEFAULT_PARAMETERS))

    def _memory_state(self, card: FsrsCardState) -> MemoryState | None:
        if card.is_new:
            return None
        low, high = FSRS_DIFFICULTY_RANGE
        return MemoryState(
            stability=max(FSRS_MIN_STABILITY, float(card.stability)),
            difficulty=max(low, min(high, float(card.difficulty))),
        )

    def review(
        self,
        card: FsrsCardState,
        grade: Grade,
        now: datetime | None = None,
    ) -> FsrsCardState:
        """Compute the card's state after answering it with `grade` at `now`."""
        grade = Grade(grade)
        if now is None:
            now = datetime.now(timezone.utc)

        if card.last_review is not None:
            days_elapsed = max(0, round((now - card.last_review).total_seconds() / 86400.0))
        else:
            days_elapsed = 0

        next_states = self.engine.next_states(
            self._memory_state(card), self.desired_retention, days_elapsed
        )
        selected = {
            Grade.AGAIN: next_states.again,
            Grade.HARD: next_states.hard,
            Grade.GOOD: next_states.good,
            Grade.EASY: next_states.easy,
        }[grade]

        interval = float(selected.interval)
        lapses = card.lapses + 1 if grade is Grade.AGAIN and not card.is_new else card.lapses
        logger.debug(
            f"FSRS {grade.name}: elapsed={days_elapsed}d interval={interval:.2f}d "
            f"S={selected.memory.stability:.2f} D={selected.memory.difficulty:.2f}"
        )

        return replace(
            card,
            stability=selected.memory.stability,
            difficulty=selected.memory.difficulty,
            reps=card.reps + 1,
            lapses=lapses,
            last_review=now,
            due=now + timedelta(days=interval),
            scheduled_days=interval,
        )

    def handlers_for(
        self,
        card: FsrsCardState,
        on_update: CardSink,
        clock: Callable[[], datetime] | None = None,
    ) -> GradeHandlers:
        """
        Bind the four grading actions to `card`.

        Each action computes the new state and awaits `on_update` with it;
        persistence errors propagate to whoever dispatched the grade.
        """
        now = clock or (lambda: datetime.now(timezone.utc))

        def action(grade: Grade):
            async def apply() -> None:
                await on_update(self.review(card, grade, now=now()))

            return apply

        return GradeHandlers(
            again=action(Grade.AGAIN),
            hard=action(Grade.HARD),
            good=action(Grade.GOOD),
            easy=action(Grade.EASY),
        )
