"""
Ports (interfaces) for review scheduling.

Hosts depend on this abstraction; the legacy ease-based algorithm and the
four-grade dispatch table are the two concrete variants.
"""

from abc import ABC, abstractmethod

from .models import Grade


class Scheduler(ABC):
    """
    Port for applying a learner's grade to a card.

    Implementations:
        - LegacyScheduler: Computes the next ease-based MemoryState locally.
        - DispatchScheduler: Hands the grade to one of four host actions.
    """

    @abstractmethod
    async def grade(self, grade: Grade) -> None:
        """
        Apply a grade to the card this scheduler is bound to.

        Exactly one suspension point per call. Exceptions raised by host
        collaborators propagate unmodified.
        """
        pass
