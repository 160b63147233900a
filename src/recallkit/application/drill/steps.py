"""
Step derivation and scoring for corrective drills.

Pure functions over an immutable lesson; the session state machine in
`session.py` drives them.
"""

from recallkit.application.utils.text import compare
from recallkit.domain.constants import TARGET_STEP_TOLERANCE
from recallkit.domain.drill.models import (
    AutoSpeech,
    CorrectiveDrillLesson,
    Step,
    StepType,
)

_STEP_KEYS = {
    StepType.DIAGNOSIS: "diagnosis",
    StepType.TARGET: "A",
    StepType.CONTRAST: "B",
    StepType.PRODUCTION: "P",
}


def _step_type(step: Step) -> StepType:
    try:
        return StepType(step.type)
    except ValueError:
        raise ValueError(f"Unknown drill step: {step.type!r}") from None


def build_steps(lesson: CorrectiveDrillLesson) -> list[Step]:
    """Diagnosis, target, contrast (only when the lesson has one), production."""
    steps = [Step(StepType.DIAGNOSIS), Step(StepType.TARGET)]
    if lesson.contrast is not None:
        steps.append(Step(StepType.CONTRAST))
    steps.append(Step(StepType.PRODUCTION))
    return steps


def step_key(step: Step) -> str:
    """Stable short key used to correlate a step across UI and analytics."""
    return _STEP_KEYS[_step_type(step)]


def expected_for_step(lesson: CorrectiveDrillLesson, step: Step) -> str:
    match _step_type(step):
        case StepType.DIAGNOSIS:
            return lesson.diagnosis.corrected
        case StepType.TARGET:
            return lesson.target.example.text
        case StepType.CONTRAST:
            return lesson.contrast.example.text if lesson.contrast else ""
        case StepType.PRODUCTION:
            return lesson.production.answer


def auto_speech_for_step(lesson: CorrectiveDrillLesson, step: Step) -> AutoSpeech | None:
    """
    Content to play when the step becomes active.

    Production never auto-plays: the learner must produce the answer unaided.
    """
    match _step_type(step):
        case StepType.DIAGNOSIS:
            return AutoSpeech(tl=lesson.diagnosis.error_explanation)
        case StepType.TARGET:
            example = lesson.target.example
            return AutoSpeech(tl=example.text, en=example.en)
        case StepType.CONTRAST:
            if lesson.contrast is None:
                return None
            example = lesson.contrast.example
            return AutoSpeech(tl=example.text, en=example.en)
        case StepType.PRODUCTION:
            return None


def is_match_for_step(
    step: Step,
    expected: str,
    transcription: str,
    is_match: bool | None = None,
    target_tolerance: int = TARGET_STEP_TOLERANCE,
) -> bool:
    """
    Decide whether a transcription passes a step.

    An externally supplied `is_match` verdict is authoritative; without one the
    strict comparison is used. The target step is a guided repetition, so it
    also passes when the transcription is within `target_tolerance` edits.
    """
    step_type = _step_type(step)
    base_match = is_match if isinstance(is_match, bool) else compare(expected, transcription)
    if step_type is not StepType.TARGET:
        return base_match
    return compare(expected, transcription, target_tolerance) or base_match
