"""
Scheduler Factory
Centralizes the logic for selecting the scheduler variant a host runs.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from recallkit.application.config import AppConfig
from recallkit.application.scheduling.schedulers import (
    DispatchScheduler,
    LegacyScheduler,
    StateSink,
)
from recallkit.domain.scheduling.models import FsrsCardState, GradeHandlers, MemoryState
from recallkit.domain.scheduling.ports import Scheduler
from recallkit.infrastructure.adapters.fsrs_grading import CardSink, FsrsGradingAdapter

logger = logging.getLogger(__name__)


def get_scheduler(
    config: AppConfig,
    *,
    state: MemoryState | None = None,
    card: FsrsCardState | None = None,
    on_update: StateSink | CardSink | None = None,
    handlers: GradeHandlers | None = None,
    clock: Callable[[], datetime] | None = None,
) -> Scheduler:
    """
    Returns the Scheduler implementation selected by `config.scheduler`.

    The legacy variant needs `on_update` (and optionally the card's current
    `state`; a new card is assumed otherwise). The fsrs variant takes the four
    grading `handlers`, or builds them for `card` and `on_update` with an
    FsrsGradingAdapter using the configured parameters and retention.

    Raises:
        ValueError: If the collaborators required by the variant are missing.
    """
    if config.scheduler == "legacy":
        if on_update is None:
            raise ValueError("Legacy scheduler requires an on_update callback")
        logger.debug("Scheduler: legacy")
        return LegacyScheduler(state or MemoryState(), on_update, clock=clock)

    if config.scheduler == "fsrs":
        if handlers is None:
            if card is None or on_update is None:
                raise ValueError(
                    "FSRS scheduler requires grade handlers or a card with an on_update callback"
                )
            adapter = FsrsGradingAdapter(
                parameters=config.fsrs_parameters,
                desired_retention=config.desired_retention,
            )
            handlers = adapter.handlers_for(card, on_update, clock=clock)
            logger.debug(f"Scheduler: fsrs (retention={config.desired_retention})")
        else:
            logger.debug("Scheduler: fsrs dispatch")
        return DispatchScheduler(handlers)

    raise ValueError(f"Unknown scheduler: {config.scheduler}")
