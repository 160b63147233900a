"""recallkit: review-grading engine for spaced-repetition language drills."""

from recallkit.consts import VERSION

__version__ = VERSION
