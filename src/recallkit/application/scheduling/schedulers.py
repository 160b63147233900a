"""
Scheduler variants behind the Scheduler port.

Hosts pick one through configuration (see recallkit.application.factory)
and call `grade()` without caring which algorithm runs underneath.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from recallkit.domain.scheduling.models import Grade, GradeHandlers, MemoryState
from recallkit.domain.scheduling.ports import Scheduler

from .dispatch import dispatch_grade
from .legacy import grade_performance, legacy_grade_for

logger = logging.getLogger(__name__)

StateSink = Callable[[MemoryState], Awaitable[None]]


class LegacyScheduler(Scheduler):
    """
    Ease-based scheduler bound to one card.

    The new state is handed to `on_update` (the host's persistence) and only
    adopted once that call succeeds.
    """

    def __init__(
        self,
        state: MemoryState,
        on_update: StateSink,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Args:
            state: The card's current memory state.
            on_update: Coroutine persisting the new state.
            clock: Optional time source; defaults to UTC now.
        """
        self.state = state
        self._on_update = on_update
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def grade(self, grade: Grade) -> None:
        new_state = grade_performance(self.state, legacy_grade_for(grade), now=self._clock())
        await self._on_update(new_state)
        logger.info(
            f"Legacy grade {Grade(grade).name}: interval {self.state.interval}d -> "
            f"{new_state.interval}d, ease {new_state.ease:.2f}"
        )
        self.state = new_state


class DispatchScheduler(Scheduler):
    """Four-grade scheduler: the host's actions own all numeric state."""

    def __init__(self, handlers: GradeHandlers):
        self._handlers = handlers

    async def grade(self, grade: Grade) -> None:
        await dispatch_grade(grade, self._handlers)
