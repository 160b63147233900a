"""
Domain models for corrective drills.

The lesson schema mirrors the JSON produced by the external lesson generator.
The core assumes the shape holds and only parses it at the boundary.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Sentence(_Frozen):
    """A target-language sentence with its English gloss."""

    text: str
    en: str


class DrillExample(_Frozen):
    label: str
    example: Sentence


class Diagnosis(_Frozen):
    original: str
    corrected: str
    error_explanation: str


class Production(_Frozen):
    prompt_en: str
    answer: str


class CorrectiveDrillLesson(_Frozen):
    """
    A generated corrective exercise.

    `contrast` is present only when a meaningful grammatical contrast exists.
    """

    diagnosis: Diagnosis
    target: DrillExample
    contrast: DrillExample | None = None
    production: Production


class StepType(str, Enum):
    DIAGNOSIS = "diagnosis"
    TARGET = "target"
    CONTRAST = "contrast"
    PRODUCTION = "production"


@dataclass(frozen=True)
class Step:
    type: StepType


@dataclass(frozen=True)
class AutoSpeech:
    """Content played automatically when a step becomes active."""

    tl: str
    en: str | None = None


@dataclass(frozen=True)
class DrillStepOutcome:
    """Result of scoring one learner attempt at a step."""

    step: Step
    expected: str
    transcription: str
    is_match: bool
    feedback: str | None = None


@dataclass(frozen=True)
class ProductionVerdict:
    """Verdict returned by an external grader for a free-production attempt."""

    is_correct: bool
    feedback: str = ""
