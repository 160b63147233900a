"""
Drill session: walks a learner through one corrective drill.

Progression: diagnosis -> target -> (contrast) -> production. A step is
passed by a matching attempt (or, for diagnosis, by acknowledging it); passing
the last step completes the drill.
"""

import logging
from collections.abc import Awaitable, Callable

from recallkit.application.utils.text import compare
from recallkit.domain.constants import TARGET_STEP_TOLERANCE
from recallkit.domain.drill.models import (
    AutoSpeech,
    CorrectiveDrillLesson,
    DrillStepOutcome,
    Production,
    ProductionVerdict,
    Step,
    StepType,
)

from .steps import (
    auto_speech_for_step,
    build_steps,
    expected_for_step,
    is_match_for_step,
    step_key,
)

logger = logging.getLogger(__name__)

ProductionGrader = Callable[[Production, str], Awaitable[ProductionVerdict]]
CompletionHook = Callable[[], Awaitable[None]]


class DrillSession:
    """
    State for one drill. Not shared between tasks; the lesson is read-only.
    """

    def __init__(
        self,
        lesson: CorrectiveDrillLesson,
        *,
        production_grader: ProductionGrader | None = None,
        on_complete: CompletionHook | None = None,
        target_tolerance: int = TARGET_STEP_TOLERANCE,
    ):
        """
        Args:
            lesson: The generated lesson.
            production_grader: Optional external grader consulted when a
                production attempt is not a strict match.
            on_complete: Awaited once when the last step is passed.
            target_tolerance: Edit budget for the target step.
        """
        self.lesson = lesson
        self.steps = build_steps(lesson)
        self.index = 0
        self.passed: set[str] = set()
        self.outcomes: list[DrillStepOutcome] = []
        self.completed = False
        self._spoken: set[str] = set()
        self._production_grader = production_grader
        self._on_complete = on_complete
        self._target_tolerance = target_tolerance

    @property
    def current_step(self) -> Step:
        return self.steps[self.index]

    @property
    def progress(self) -> int:
        """Percentage of the drill reached, counting the current step."""
        return round((self.index + 1) / len(self.steps) * 100)

    @property
    def expected(self) -> str:
        return expected_for_step(self.lesson, self.current_step)

    def is_step_passed(self, step: Step | None = None) -> bool:
        return step_key(step or self.current_step) in self.passed

    def next_auto_speech(self) -> AutoSpeech | None:
        """Speech to auto-play for the current step, returned only once per step."""
        key = step_key(self.current_step)
        if key in self.passed or key in self._spoken:
            return None
        payload = auto_speech_for_step(self.lesson, self.current_step)
        if payload is None:
            return None
        self._spoken.add(key)
        return payload

    def replay_speech(self) -> AutoSpeech | None:
        return auto_speech_for_step(self.lesson, self.current_step)

    async def acknowledge(self) -> None:
        """Pass the diagnosis step without a recording."""
        if self.current_step.type is not StepType.DIAGNOSIS:
            raise ValueError("Only the diagnosis step can be acknowledged")
        if not self.is_step_passed():
            await self._mark_passed_and_advance()

    async def submit(self, transcription: str, is_match: bool | None = None) -> DrillStepOutcome:
        """
        Score a learner attempt at the current step.

        Args:
            transcription: What the learner said or typed.
            is_match: Verdict from the transcription service, if it produced one.

        Returns:
            The outcome of this attempt. A matching attempt advances the session.

        Raises:
            RuntimeError: If the drill is already complete.
        """
        if self.completed:
            raise RuntimeError("Drill already completed")

        step = self.current_step
        expected = self.expected

        feedback = None
        if step.type is StepType.PRODUCTION:
            matched, feedback = await self._grade_production(expected, transcription)
        else:
            matched = is_match_for_step(
                step,
                expected,
                transcription,
                is_match=is_match,
                target_tolerance=self._target_tolerance,
            )

        outcome = DrillStepOutcome(step, expected, transcription, matched, feedback)
        self.outcomes.append(outcome)
        logger.debug(f"Step {step_key(step)} attempt: match={matched}")

        if matched:
            await self._mark_passed_and_advance()
        return outcome

    async def _grade_production(
        self, expected: str, transcription: str
    ) -> tuple[bool, str | None]:
        if compare(expected, transcription):
            return True, "Good match"
        if self._production_grader is None:
            return False, None

        verdict = await self._production_grader(self.lesson.production, transcription)
        prefix = "OK" if verdict.is_correct else "Try again"
        return verdict.is_correct, f"{prefix}: {verdict.feedback}"

    async def _mark_passed_and_advance(self) -> None:
        key = step_key(self.current_step)
        self.passed.add(key)
        logger.info(f"Drill step {key} passed ({self.progress}%)")

        if self.index >= len(self.steps) - 1:
            self.completed = True
            logger.info("Drill completed")
            if self._on_complete is not None:
                await self._on_complete()
            return
        self.index += 1
