"""
Work Values Scorer - Career Compass
career_compass/scoring/values_scorer.py

Every selected value of a multi-select answer is binned by number:
    <= 2 achievement, <= 4 security, <= 6 relationship, <= 8 autonomy, else service.
Non-numeric selections count as 0 (achievement).
"""
from dataclasses import dataclass
from typing import Dict, List

from career_compass.models.submission import (
    MultipleChoice,
    Ranking,
    ScaleRating,
    SingleChoice,
    TextResponse,
)
from career_compass.scoring.context import AnsweredQuestion
from career_compass.scoring.utils import top_keys

CATEGORIES = ["achievement", "security", "relationship", "autonomy", "service"]

# Upper bound (inclusive) per category; the last one is open-ended.
BINS = [(2, "achievement"), (4, "security"), (6, "relationship"), (8, "autonomy")]

CULTURE_HINTS: Dict[str, str] = {
    "achievement": "performance-driven teams with visible goals and recognition",
    "security": "stable organizations with clear processes and long-term prospects",
    "relationship": "supportive, people-first cultures with strong team bonds",
    "autonomy": "flat organizations that grant ownership and flexible working",
    "service": "mission-driven organizations with social impact",
}


def bin_value(value: float) -> str:
    for upper, category in BINS:
        if value <= upper:
            return category
    return "service"


@dataclass
class ValuesResult:
    counts: Dict[str, int]

    @property
    def dominant(self) -> str:
        return top_keys(self.counts, CATEGORIES, 1)[0]

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class ValuesScorer:

    def calculate(self, answers: List[AnsweredQuestion]) -> ValuesResult:
        counts = {category: 0 for category in CATEGORIES}
        for answer in answers:
            value = answer.value
            if isinstance(value, MultipleChoice):
                selections = value.options
            elif isinstance(value, (SingleChoice, ScaleRating, TextResponse, Ranking)):
                # only multi-select answers carry value selections
                continue
            else:
                raise ValueError(f"Unhandled answer value: {value!r}")
            for selection in selections:
                counts[bin_value(_to_number(selection))] += 1
        return ValuesResult(counts=counts)


def _to_number(text: str) -> float:
    try:
        return float(text)
    except (TypeError, ValueError):
        return 0.0
