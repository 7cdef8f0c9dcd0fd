"""
Five-question career reflection: resolves the open questionnaire into
readable statements (question text paired with the chosen label or text).
"""
from dataclasses import dataclass, field
from typing import List

from career_compass.models.submission import (
    MultipleChoice,
    Ranking,
    ScaleRating,
    SingleChoice,
    TextResponse,
)
from career_compass.scoring.context import AnsweredQuestion


@dataclass
class CareerReflection:
    statements: List[str] = field(default_factory=list)

    @property
    def answered(self) -> int:
        return len(self.statements)


def describe_answer(answer: AnsweredQuestion) -> str:
    """Human-readable answer text; option codes are replaced by their labels."""
    question = answer.question
    value = answer.value
    if isinstance(value, SingleChoice):
        return question.option_label(value.option) or "(unlisted option)"
    if isinstance(value, MultipleChoice):
        labels = [question.option_label(code) or "(unlisted option)" for code in value.options]
        return ", ".join(labels) if labels else "(none selected)"
    if isinstance(value, ScaleRating):
        return f"{value.score:g}/5"
    if isinstance(value, TextResponse):
        return value.text
    if isinstance(value, Ranking):
        labels = [question.option_label_at(p) or f"#{p}" for p in value.order]
        return " > ".join(labels)
    raise ValueError(f"Unhandled answer value: {value!r}")


class CareerReflectionScorer:

    def calculate(self, answers: List[AnsweredQuestion]) -> CareerReflection:
        statements = [
            f"{answer.question.content}: {describe_answer(answer)}"
            for answer in answers
            if describe_answer(answer).strip()
        ]
        return CareerReflection(statements=statements)
