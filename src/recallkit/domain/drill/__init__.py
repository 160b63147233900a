# Domain Drill Package
from .models import (
    AutoSpeech,
    CorrectiveDrillLesson,
    Diagnosis,
    DrillExample,
    DrillStepOutcome,
    Production,
    ProductionVerdict,
    Sentence,
    Step,
    StepType,
)

__all__ = [
    "AutoSpeech",
    "CorrectiveDrillLesson",
    "Diagnosis",
    "DrillExample",
    "DrillStepOutcome",
    "Production",
    "ProductionVerdict",
    "Sentence",
    "Step",
    "StepType",
]
