import pytest

from recallkit.domain.drill.models import CorrectiveDrillLesson

LESSON_DATA = {
    "diagnosis": {
        "original": "저는 학교에 가요었어요",
        "corrected": "저는 학교에 갔어요.",
        "error_explanation": "You stacked two tense endings; use 갔어요 for the past.",
    },
    "target": {
        "label": "Past tense -았/었어요",
        "example": {"text": "어제 친구를 만났어요.", "en": "I met a friend yesterday."},
    },
    "contrast": {
        "label": "Present tense -아/어요",
        "example": {"text": "지금 친구를 만나요.", "en": "I am meeting a friend now."},
    },
    "production": {
        "prompt_en": "I went to the library.",
        "answer": "도서관에 갔어요.",
    },
}


@pytest.fixture
def lesson_data():
    """Raw lesson dict as the generator returns it."""
    return {k: dict(v) for k, v in LESSON_DATA.items()}


@pytest.fixture
def lesson(lesson_data):
    return CorrectiveDrillLesson.model_validate(lesson_data)


@pytest.fixture
def lesson_without_contrast(lesson_data):
    lesson_data["contrast"] = None
    return CorrectiveDrillLesson.model_validate(lesson_data)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolates config files from the developer's real home directory
    monkeypatch.setenv("HOME", str(home))
    return home
