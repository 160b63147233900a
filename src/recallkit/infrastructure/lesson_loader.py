"""Loads generated drill lessons saved as JSON or YAML."""

from pathlib import Path

import yaml

from recallkit.domain.drill.models import CorrectiveDrillLesson


def load_lesson(path: Path) -> CorrectiveDrillLesson:
    """
    Parse a lesson file. YAML is a superset of JSON, so either format works.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the document is not a mapping.
        pydantic.ValidationError: If the lesson does not have the expected shape.
    """
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Lesson file {path} does not contain a mapping")
    return CorrectiveDrillLesson.model_validate(raw)
