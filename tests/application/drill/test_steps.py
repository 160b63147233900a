import pytest

from recallkit.application.drill.steps import (
    auto_speech_for_step,
    build_steps,
    expected_for_step,
    is_match_for_step,
    step_key,
)
from recallkit.domain.drill.models import AutoSpeech, Step, StepType

DIAGNOSIS = Step(StepType.DIAGNOSIS)
TARGET = Step(StepType.TARGET)
CONTRAST = Step(StepType.CONTRAST)
PRODUCTION = Step(StepType.PRODUCTION)


# ---------- build_steps ----------


def test_build_steps_with_contrast(lesson):
    steps = build_steps(lesson)
    assert steps == [DIAGNOSIS, TARGET, CONTRAST, PRODUCTION]


def test_build_steps_without_contrast(lesson_without_contrast):
    steps = build_steps(lesson_without_contrast)
    assert len(steps) == 3
    assert steps[0] == DIAGNOSIS
    assert steps[-1] == PRODUCTION
    assert CONTRAST not in steps


def test_missing_contrast_key_parses_as_none(lesson_data):
    from recallkit.domain.drill.models import CorrectiveDrillLesson

    del lesson_data["contrast"]
    lesson = CorrectiveDrillLesson.model_validate(lesson_data)
    assert lesson.contrast is None
    assert len(build_steps(lesson)) == 3


# ---------- step_key ----------


def test_step_keys_are_fixed():
    assert [step_key(s) for s in (DIAGNOSIS, TARGET, CONTRAST, PRODUCTION)] == [
        "diagnosis",
        "A",
        "B",
        "P",
    ]


def test_unknown_step_is_rejected(lesson):
    bogus = Step("review")  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="Unknown drill step"):
        step_key(bogus)
    with pytest.raises(ValueError):
        expected_for_step(lesson, bogus)
    with pytest.raises(ValueError):
        is_match_for_step(bogus, "a", "a")


# ---------- expected_for_step ----------


def test_expected_for_each_step(lesson):
    assert expected_for_step(lesson, DIAGNOSIS) == "저는 학교에 갔어요."
    assert expected_for_step(lesson, TARGET) == "어제 친구를 만났어요."
    assert expected_for_step(lesson, CONTRAST) == "지금 친구를 만나요."
    assert expected_for_step(lesson, PRODUCTION) == "도서관에 갔어요."


def test_expected_for_absent_contrast_is_empty(lesson_without_contrast):
    assert expected_for_step(lesson_without_contrast, CONTRAST) == ""


# ---------- auto_speech_for_step ----------


def test_auto_speech_diagnosis_plays_explanation(lesson):
    speech = auto_speech_for_step(lesson, DIAGNOSIS)
    assert speech == AutoSpeech(tl=lesson.diagnosis.error_explanation)
    assert speech.en is None


def test_auto_speech_examples_include_gloss(lesson):
    assert auto_speech_for_step(lesson, TARGET) == AutoSpeech(
        tl="어제 친구를 만났어요.", en="I met a friend yesterday."
    )
    assert auto_speech_for_step(lesson, CONTRAST) == AutoSpeech(
        tl="지금 친구를 만나요.", en="I am meeting a friend now."
    )


def test_auto_speech_silent_for_production(lesson):
    assert auto_speech_for_step(lesson, PRODUCTION) is None


def test_auto_speech_silent_for_absent_contrast(lesson_without_contrast):
    assert auto_speech_for_step(lesson_without_contrast, CONTRAST) is None


# ---------- is_match_for_step ----------


def test_external_verdict_is_authoritative_for_strict_steps():
    assert is_match_for_step(CONTRAST, "지금 친구를 만나요", "전혀 다른 말", is_match=True)
    assert not is_match_for_step(DIAGNOSIS, "같아요", "같아요", is_match=False)


def test_strict_comparison_without_verdict():
    assert is_match_for_step(PRODUCTION, "도서관에 갔어요.", "도서관에 갔어요")
    assert not is_match_for_step(CONTRAST, "지금 친구를 만나요.", "지금 친구 만나요")


def test_target_is_lenient_within_three_edits():
    expected = "어제 친구를 만났어요."
    heard = "어제 친구 만났어요"
    assert is_match_for_step(TARGET, expected, heard)
    # A stricter external verdict does not override the lenient comparison
    assert is_match_for_step(TARGET, expected, heard, is_match=False)


def test_target_still_honours_positive_verdict():
    assert is_match_for_step(
        TARGET, "어제 친구를 만났어요.", "완전히 다른 문장입니다", is_match=True
    )


def test_target_rejects_distant_answer():
    assert not is_match_for_step(TARGET, "어제 친구를 만났어요.", "오늘 학교에 가요")


def test_target_tolerance_is_configurable():
    expected = "어제 친구를 만났어요."
    heard = "어제 친구 만났어요"
    assert not is_match_for_step(TARGET, expected, heard, target_tolerance=0)


def test_contrast_is_not_lenient():
    # One edit away, still rejected on the contrast step
    assert not is_match_for_step(CONTRAST, "지금 친구를 만나요.", "지금 친구 만나요")
    assert is_match_for_step(TARGET, "지금 친구를 만나요.", "지금 친구 만나요")
