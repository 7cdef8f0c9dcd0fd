# tests/test_models.py

"""
Model Validation Tests - enumerations, profile validation and answer coercion
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from career_compass.core.exceptions import InvalidAnswerError
from career_compass.models.analysis import AnalysisResult, AnalysisView
from career_compass.models.enumerations import AnalysisMethod, Instrument, QuestionType
from career_compass.models.submission import (
    MultipleChoice,
    Profile,
    Ranking,
    ScaleRating,
    SingleChoice,
    SubmissionCreate,
    TextResponse,
    answer_from_wire,
    answer_numeric,
    answer_to_wire,
    identity_order,
    parse_answer_value,
)
from career_compass.models.survey import Question, QuestionOption


def make_question(qtype: QuestionType, option_count: int = 3, code: str = "q1") -> Question:
    return Question(
        id=f"id-{code}",
        model_id="m-1",
        code=code,
        type=qtype,
        content="Sample question",
        options=[QuestionOption(code=chr(ord("A") + i), label=f"Option {i + 1}")
                 for i in range(option_count)],
    )



# ENUMERATION TESTS


class TestInstrumentEnum:
    """Tests for the six instrument groups."""

    def test_all_instruments_exist(self):
        expected = ["fiveQuestions", "mbti", "bigFive", "disc", "holland", "values"]
        assert [i.value for i in Instrument] == expected

    def test_model_codes(self):
        assert [i.model_code for i in Instrument] == [
            "fiveq", "mbti", "big5", "disc", "holland", "motivation"]

    def test_knowledge_tags(self):
        assert Instrument.HOLLAND.knowledge_tag == "career_interests"
        assert Instrument.VALUES.knowledge_tag == "work_values"
        assert Instrument.FIVE_QUESTIONS.knowledge_tag == "career_development"

    def test_from_model_code(self):
        assert Instrument.from_model_code("big5") == Instrument.BIG_FIVE

    def test_from_unknown_model_code(self):
        with pytest.raises(ValueError):
            Instrument.from_model_code("astrology")

    def test_question_type_count(self):
        assert [t.value for t in QuestionType] == ["single", "multiple", "scale", "text", "sorting"]



# PROFILE / REQUEST TESTS


class TestProfile:

    def test_valid_profile(self, sample_profile):
        profile = Profile(**sample_profile)
        assert profile.age == 29
        assert profile.phone is None

    def test_age_too_high(self, sample_profile):
        with pytest.raises(ValidationError):
            Profile(**{**sample_profile, "age": 121})

    def test_age_zero(self, sample_profile):
        with pytest.raises(ValidationError):
            Profile(**{**sample_profile, "age": 0})

    def test_empty_name(self, sample_profile):
        with pytest.raises(ValidationError):
            Profile(**{**sample_profile, "name": ""})


class TestSubmissionCreate:

    def test_camel_case_groups(self, full_payload):
        request = SubmissionCreate.model_validate(full_payload)
        assert request.five_questions["fq_env"] == "A"
        assert request.big_five["big5_o_1"] == 5

    def test_all_groups_optional(self):
        request = SubmissionCreate.model_validate({})
        assert request.profile is None
        assert all(request.answers_for(i) is None for i in Instrument)

    def test_answers_for_maps_each_instrument(self, full_payload):
        request = SubmissionCreate.model_validate(full_payload)
        assert request.answers_for(Instrument.VALUES) == {"values_1": ["1", "7"], "values_2": ["8"]}



# ANSWER COERCION TESTS


class TestParseAnswerValue:

    def test_single_choice(self):
        value = parse_answer_value(make_question(QuestionType.SINGLE), "B")
        assert value == SingleChoice(option="B")

    def test_single_choice_integer_code(self):
        value = parse_answer_value(make_question(QuestionType.SINGLE), 2)
        assert value == SingleChoice(option="2")

    def test_single_choice_rejects_object(self):
        with pytest.raises(InvalidAnswerError):
            parse_answer_value(make_question(QuestionType.SINGLE), {"a": 1})

    def test_multiple_choice_list(self):
        value = parse_answer_value(make_question(QuestionType.MULTIPLE), ["A", "C"])
        assert value == MultipleChoice(options=["A", "C"])

    def test_multiple_choice_scalar_wrapped(self):
        value = parse_answer_value(make_question(QuestionType.MULTIPLE), "A")
        assert value == MultipleChoice(options=["A"])

    def test_scale_number(self):
        assert parse_answer_value(make_question(QuestionType.SCALE), 4) == ScaleRating(score=4.0)

    def test_scale_numeric_string(self):
        assert parse_answer_value(make_question(QuestionType.SCALE), " 3 ") == ScaleRating(score=3.0)

    def test_scale_rejects_text(self):
        with pytest.raises(InvalidAnswerError) as exc:
            parse_answer_value(make_question(QuestionType.SCALE, code="mbti_1"), "often")
        assert exc.value.question_code == "mbti_1"

    def test_scale_rejects_boolean(self):
        with pytest.raises(InvalidAnswerError):
            parse_answer_value(make_question(QuestionType.SCALE), True)

    @pytest.mark.parametrize("raw", ["Infinity", "-inf", "NaN", float("inf"), float("nan"), 10 ** 400])
    def test_scale_rejects_non_finite(self, raw):
        with pytest.raises(InvalidAnswerError) as exc:
            parse_answer_value(make_question(QuestionType.SCALE, code="disc_d_1"), raw)
        assert exc.value.question_code == "disc_d_1"

    def test_text(self):
        value = parse_answer_value(make_question(QuestionType.TEXT), "Build things")
        assert value == TextResponse(text="Build things")

    def test_unanswered_non_sorting_is_none(self):
        for qtype in (QuestionType.SINGLE, QuestionType.MULTIPLE, QuestionType.SCALE, QuestionType.TEXT):
            assert parse_answer_value(make_question(qtype), None) is None

    def test_sorting_order_object(self):
        value = parse_answer_value(make_question(QuestionType.SORTING), {"order": [3, 1, 2]})
        assert value == Ranking(order=[3, 1, 2])

    def test_sorting_bare_list(self):
        value = parse_answer_value(make_question(QuestionType.SORTING), [2, 3, 1])
        assert value == Ranking(order=[2, 3, 1])

    def test_unanswered_sorting_defaults_to_identity(self):
        value = parse_answer_value(make_question(QuestionType.SORTING, option_count=4), None)
        assert value == Ranking(order=[1, 2, 3, 4])

    def test_empty_sorting_defaults_to_identity(self):
        value = parse_answer_value(make_question(QuestionType.SORTING), {"order": []})
        assert value == Ranking(order=[1, 2, 3])

    def test_sorting_rejects_partial_order(self):
        with pytest.raises(InvalidAnswerError):
            parse_answer_value(make_question(QuestionType.SORTING), {"order": [1, 2]})

    def test_sorting_rejects_duplicates(self):
        with pytest.raises(InvalidAnswerError):
            parse_answer_value(make_question(QuestionType.SORTING), {"order": [1, 1, 2]})

    def test_identity_order(self):
        assert identity_order(0) == []
        assert identity_order(3) == [1, 2, 3]


class TestWireForm:
    """Stored column values rebuild into the same variant."""

    @pytest.mark.parametrize("qtype,value,wire", [
        (QuestionType.SINGLE, SingleChoice(option="B"), "B"),
        (QuestionType.MULTIPLE, MultipleChoice(options=["A", "C"]), ["A", "C"]),
        (QuestionType.SCALE, ScaleRating(score=4.0), 4.0),
        (QuestionType.TEXT, TextResponse(text="hello"), "hello"),
        (QuestionType.SORTING, Ranking(order=[2, 1, 3]), {"order": [2, 1, 3]}),
    ])
    def test_wire_form(self, qtype, value, wire):
        assert answer_to_wire(value) == wire
        assert answer_from_wire(qtype, wire) == value


class TestAnswerNumeric:

    def test_scale(self):
        assert answer_numeric(ScaleRating(score=4.0)) == 4.0

    def test_numeric_option_code(self):
        assert answer_numeric(SingleChoice(option="5")) == 5.0

    def test_non_numeric_uses_default(self):
        assert answer_numeric(SingleChoice(option="B"), default=1.0) == 1.0
        assert answer_numeric(TextResponse(text="often"), default=3.0) == 3.0

    def test_empty_multiple_uses_default(self):
        assert answer_numeric(MultipleChoice(options=[]), default=2.0) == 2.0



# ANALYSIS MODEL TESTS


class TestAnalysisResult:

    def _result(self, confidence):
        return AnalysisResult(
            id="a-1",
            submission_id="s-1",
            summary="Summary",
            confidence_score=confidence,
            method=AnalysisMethod.RULE,
            created_at=datetime.now(timezone.utc),
        )

    def test_confidence_clamped_high(self):
        assert self._result(1.3).confidence_score == 1.0

    def test_confidence_clamped_low(self):
        assert self._result(-0.2).confidence_score == 0.0

    def test_view_uses_camel_case(self):
        view = AnalysisView.from_result(self._result(0.9))
        data = view.model_dump(by_alias=True)
        assert "confidenceScore" in data
        assert "knowledgeSources" in data
        assert "processingTime" in data
        assert "detailedAnalysis" in data
