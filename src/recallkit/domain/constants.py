"""Centralized constants for recallkit.

All magic numbers and protocol markers live here so every layer
imports from a single source of truth.
"""

# ---------- Legacy ease-based scheduler ----------
MIN_EASE = 1.3
DEFAULT_EASE = 2.5
EASE_DECAY = 0.8
GRADE_REWARD = 0.28
NONLINEAR_ADJUSTMENT = 0.02
PASSING_GRADE = 3
MIN_LEGACY_GRADE = 0
MAX_LEGACY_GRADE = 4
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6

# ---------- FSRS ----------
DEFAULT_DESIRED_RETENTION = 0.9
FSRS_MIN_STABILITY = 0.1
FSRS_DIFFICULTY_RANGE = (1.0, 10.0)

# ---------- Text comparison ----------
TARGET_STEP_TOLERANCE = 3
AUTO_TOLERANCE_MIN_LEN = 4
AUTO_TOLERANCE_POINT_INCR = 10

# ---------- Event stream protocol ----------
FRAME_DELIMITER = "\n\n"
DONE_EVENT = "done"
DEFAULT_READ_SIZE = 4096
