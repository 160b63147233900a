# Application Drill Package
from .session import DrillSession
from .steps import (
    auto_speech_for_step,
    build_steps,
    expected_for_step,
    is_match_for_step,
    step_key,
)

__all__ = [
    "DrillSession",
    "auto_speech_for_step",
    "build_steps",
    "expected_for_step",
    "is_match_for_step",
    "step_key",
]
