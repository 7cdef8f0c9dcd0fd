"""
Submission Models - Career Compass
career_compass/models/submission.py

Profile, the intake request, stored submissions and answers.

Answer values are a tagged union keyed by the owning question's type:

    single    -> SingleChoice   wire: "B"
    multiple  -> MultipleChoice wire: ["A", "C"]
    scale     -> ScaleRating    wire: 4
    text      -> TextResponse   wire: "free text"
    sorting   -> Ranking        wire: {"order": [2, 1, 3]}
"""

import math
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from career_compass.core.exceptions import InvalidAnswerError
from career_compass.models.common import CamelModel
from career_compass.models.enumerations import Instrument, QuestionType
from career_compass.models.survey import Question


# ---------------------------------------------------------------------------
# Profile + intake request
# ---------------------------------------------------------------------------

class Profile(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    gender: str = Field(..., max_length=20)
    age: int = Field(..., ge=1, le=120)
    city: str = Field(..., max_length=100)
    occupation: str = Field(..., max_length=100)
    education: str = Field(..., max_length=100)
    phone: Optional[str] = Field(None, max_length=30)


class SubmissionCreate(CamelModel):
    """Intake payload. Every group is optional here so that the service can
    report all missing groups at once instead of failing on the first."""

    profile: Optional[Profile] = None
    five_questions: Optional[Dict[str, Any]] = None
    mbti: Optional[Dict[str, Any]] = None
    big_five: Optional[Dict[str, Any]] = None
    disc: Optional[Dict[str, Any]] = None
    holland: Optional[Dict[str, Any]] = None
    values: Optional[Dict[str, Any]] = None

    def answers_for(self, instrument: Instrument) -> Optional[Dict[str, Any]]:
        return {
            Instrument.FIVE_QUESTIONS: self.five_questions,
            Instrument.MBTI: self.mbti,
            Instrument.BIG_FIVE: self.big_five,
            Instrument.DISC: self.disc,
            Instrument.HOLLAND: self.holland,
            Instrument.VALUES: self.values,
        }[instrument]


class Submission(CamelModel):
    id: str
    profile: Profile
    instruments: List[Instrument] = Field(default_factory=list)
    submitted_at: datetime


class SubmissionReceipt(CamelModel):
    message: str
    submission_id: str
    stats: Dict[str, Dict[str, int]] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Answer values (tagged union)
# ---------------------------------------------------------------------------

class SingleChoice(BaseModel):
    kind: Literal["single"] = "single"
    option: str


class MultipleChoice(BaseModel):
    kind: Literal["multiple"] = "multiple"
    options: List[str]


class ScaleRating(BaseModel):
    kind: Literal["scale"] = "scale"
    score: float


class TextResponse(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class Ranking(BaseModel):
    kind: Literal["sorting"] = "sorting"
    order: List[int]


AnswerValue = Annotated[
    Union[SingleChoice, MultipleChoice, ScaleRating, TextResponse, Ranking],
    Field(discriminator="kind"),
]


class Answer(CamelModel):
    submission_id: str
    question_id: str
    model_id: str
    value: AnswerValue


def identity_order(option_count: int) -> List[int]:
    return list(range(1, option_count + 1))


def _as_code(question: Question, raw: Any) -> str:
    if isinstance(raw, bool):
        raise InvalidAnswerError(question.code, "expected an option code")
    if isinstance(raw, str):
        return raw
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    raise InvalidAnswerError(question.code, "expected an option code")


def _as_number(question: Question, raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise InvalidAnswerError(question.code, "expected a numeric rating")
    try:
        score = float(raw.strip() if isinstance(raw, str) else raw)
    except (ValueError, OverflowError):
        raise InvalidAnswerError(question.code, "expected a numeric rating")
    if not math.isfinite(score):
        raise InvalidAnswerError(question.code, "rating must be a finite number")
    return score


def _as_ranking(question: Question, raw: Any) -> Ranking:
    order = raw.get("order") if isinstance(raw, dict) else raw
    if order is None or order == []:
        return Ranking(order=identity_order(question.option_count))
    if not isinstance(order, list):
        raise InvalidAnswerError(question.code, "expected {'order': [...]}")
    try:
        positions = [int(p) for p in order]
    except (TypeError, ValueError):
        raise InvalidAnswerError(question.code, "ranking positions must be integers")
    if sorted(positions) != identity_order(question.option_count):
        raise InvalidAnswerError(
            question.code,
            f"ranking must order all {question.option_count} options exactly once",
        )
    return Ranking(order=positions)


def parse_answer_value(question: Question, raw: Any) -> Optional[AnswerValue]:
    """
    Coerce a raw wire value into the tagged union for ``question``.

    Returns None for an unanswered non-ranking question. An unanswered ranking
    question yields the identity order over its declared options.

    Raises:
        InvalidAnswerError: the value cannot represent an answer of this type.
    """
    qtype = question.type
    if qtype == QuestionType.SORTING:
        return _as_ranking(question, raw)
    if raw is None:
        return None
    if qtype == QuestionType.SINGLE:
        return SingleChoice(option=_as_code(question, raw))
    if qtype == QuestionType.MULTIPLE:
        items = raw if isinstance(raw, list) else [raw]
        return MultipleChoice(options=[_as_code(question, item) for item in items])
    if qtype == QuestionType.SCALE:
        return ScaleRating(score=_as_number(question, raw))
    if qtype == QuestionType.TEXT:
        if isinstance(raw, (dict, list)):
            raise InvalidAnswerError(question.code, "expected text")
        return TextResponse(text=str(raw))
    raise ValueError(f"Unhandled question type: {qtype}")


def answer_to_wire(value: AnswerValue) -> Any:
    """Plain JSON form persisted in the polymorphic value column."""
    if isinstance(value, SingleChoice):
        return value.option
    if isinstance(value, MultipleChoice):
        return list(value.options)
    if isinstance(value, ScaleRating):
        return value.score
    if isinstance(value, TextResponse):
        return value.text
    if isinstance(value, Ranking):
        return {"order": list(value.order)}
    raise ValueError(f"Unhandled answer value: {value!r}")


def answer_from_wire(question_type: QuestionType, data: Any) -> AnswerValue:
    """Rebuild a stored value; the question type selects the variant."""
    if question_type == QuestionType.SINGLE:
        return SingleChoice(option=str(data))
    if question_type == QuestionType.MULTIPLE:
        return MultipleChoice(options=[str(d) for d in (data or [])])
    if question_type == QuestionType.SCALE:
        return ScaleRating(score=float(data))
    if question_type == QuestionType.TEXT:
        return TextResponse(text=str(data))
    if question_type == QuestionType.SORTING:
        return Ranking(order=[int(p) for p in data.get("order", [])])
    raise ValueError(f"Unhandled question type: {question_type}")


def answer_numeric(value: AnswerValue, default: float = 0.0) -> float:
    """Numeric reading of an answer as used by the rule-based scorers."""
    if isinstance(value, ScaleRating):
        return value.score
    if isinstance(value, SingleChoice):
        return _parse_float(value.option, default)
    if isinstance(value, TextResponse):
        return _parse_float(value.text, default)
    if isinstance(value, MultipleChoice):
        return _parse_float(value.options[0], default) if value.options else default
    if isinstance(value, Ranking):
        return float(value.order[0]) if value.order else default
    raise ValueError(f"Unhandled answer value: {value!r}")


def _parse_float(text: str, default: float) -> float:
    try:
        number = float(text)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default
