import json

import pytest
import yaml
from pydantic import ValidationError

from recallkit.infrastructure.lesson_loader import load_lesson


def test_load_json_lesson(tmp_path, lesson_data):
    path = tmp_path / "lesson.json"
    path.write_text(json.dumps(lesson_data, ensure_ascii=False), encoding="utf-8")

    lesson = load_lesson(path)

    assert lesson.target.example.text == "어제 친구를 만났어요."
    assert lesson.contrast is not None


def test_load_yaml_lesson_with_null_contrast(tmp_path, lesson_data):
    lesson_data["contrast"] = None
    path = tmp_path / "lesson.yaml"
    path.write_text(yaml.safe_dump(lesson_data, allow_unicode=True), encoding="utf-8")

    lesson = load_lesson(path)

    assert lesson.contrast is None


def test_load_rejects_non_mapping(tmp_path):
    path = tmp_path / "lesson.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_lesson(path)


def test_load_rejects_missing_production(tmp_path, lesson_data):
    del lesson_data["production"]
    path = tmp_path / "lesson.json"
    path.write_text(json.dumps(lesson_data), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_lesson(path)
