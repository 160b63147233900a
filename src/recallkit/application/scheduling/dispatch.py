"""Four-grade dispatch table."""

import logging
from typing import assert_never

from recallkit.domain.scheduling.models import Grade, GradeHandlers

logger = logging.getLogger(__name__)


async def dispatch_grade(grade: Grade, handlers: GradeHandlers) -> None:
    """
    Await exactly one host action for `grade`.

    Handler exceptions propagate unmodified. Nothing is retried and no state
    is kept here.
    """
    grade = Grade(grade)
    logger.debug(f"Dispatching grade {grade.name}")
    match grade:
        case Grade.AGAIN:
            await handlers.again()
        case Grade.HARD:
            await handlers.hard()
        case Grade.GOOD:
            await handlers.good()
        case Grade.EASY:
            await handlers.easy()
        case _:
            assert_never(grade)
