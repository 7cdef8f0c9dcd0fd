"""
Holland (RIASEC) Scorer - Career Compass
career_compass/scoring/holland_scorer.py

Six tallies converted to whole percentages summing to 100 (uniform split when
every tally is zero). The three highest types, ties broken by the fixed
R-I-A-S-E-C order, form the three-letter Holland code.
"""
from dataclasses import dataclass, field
from typing import Dict, List

from career_compass.scoring.context import AnsweredQuestion, code_segment
from career_compass.scoring.utils import to_percentages, top_keys

TYPES: Dict[str, str] = {
    "r": "realistic",
    "i": "investigative",
    "a": "artistic",
    "s": "social",
    "e": "enterprising",
    "c": "conventional",
}

CAREERS: Dict[str, List[str]] = {
    "investigative": ["Data Analyst", "Researcher", "Software Engineer"],
    "social": ["Counselor", "Teacher", "HR Specialist"],
    "artistic": ["Designer", "Writer", "Musician"],
    "enterprising": ["Sales Manager", "Entrepreneur", "Marketing Specialist"],
    "conventional": ["Accountant", "Administrative Coordinator", "Project Coordinator"],
    "realistic": ["Engineer", "Technician", "Architect"],
}


@dataclass
class HollandResult:
    scores: Dict[str, int]
    top_three: List[str] = field(default_factory=list)
    code: str = ""

    def careers(self, limit: int = 5) -> List[str]:
        """Careers for the top types; lookup follows the original table order."""
        out: List[str] = []
        for holland_type, careers in CAREERS.items():
            if holland_type in self.top_three:
                out.extend(careers)
        return out[:limit]


class HollandScorer:
    NON_NUMERIC_VALUE = 1.0

    def calculate(self, answers: List[AnsweredQuestion]) -> HollandResult:
        order = list(TYPES.values())
        raw = {t: 0.0 for t in order}
        for answer in answers:
            letter = code_segment(answer.code, "".join(TYPES))
            if letter is None:
                continue
            raw[TYPES[letter]] += answer.numeric(self.NON_NUMERIC_VALUE)

        scores = to_percentages(raw, order)
        top_three = top_keys(raw, order, 3)
        return HollandResult(
            scores=scores,
            top_three=top_three,
            code="".join(t[0].upper() for t in top_three),
        )
