"""
Analysis Context - Career Compass
career_compass/scoring/context.py

Everything a strategy needs for one submission: the profile, every answer
paired with its catalog question, and the retrieved knowledge entries.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from career_compass.models.enumerations import Instrument
from career_compass.models.knowledge import KnowledgeEntry
from career_compass.models.submission import AnswerValue, Submission, answer_numeric
from career_compass.models.survey import Question


@dataclass(frozen=True)
class AnsweredQuestion:
    instrument: Instrument
    question: Question
    value: AnswerValue

    @property
    def code(self) -> str:
        return self.question.code

    def numeric(self, default: float) -> float:
        return answer_numeric(self.value, default)


@dataclass
class AnalysisContext:
    submission: Submission
    answers: Dict[Instrument, List[AnsweredQuestion]] = field(default_factory=dict)
    knowledge: List[KnowledgeEntry] = field(default_factory=list)

    @property
    def instruments(self) -> List[Instrument]:
        """Instruments present at intake, in declaration order."""
        present = set(self.submission.instruments)
        return [i for i in Instrument if i in present]

    @property
    def completed_instrument_count(self) -> int:
        return len(self.instruments)

    def answers_for(self, instrument: Instrument) -> List[AnsweredQuestion]:
        return self.answers.get(instrument, [])

    def has(self, instrument: Instrument) -> bool:
        return instrument in self.submission.instruments


def group_answers(answers: Iterable[AnsweredQuestion]) -> Dict[Instrument, List[AnsweredQuestion]]:
    """Group by instrument, each group in catalog order."""
    grouped: Dict[Instrument, List[AnsweredQuestion]] = {}
    for answer in answers:
        grouped.setdefault(answer.instrument, []).append(answer)
    for items in grouped.values():
        items.sort(key=lambda a: (a.question.sort_order, a.question.code))
    return grouped


def code_segment(code: str, letters: str) -> Optional[str]:
    """
    First single-letter segment of a question code found in ``letters``.

    ``big5_o_3`` -> ``o``; ``holland-r-2`` -> ``r``; ``q12`` -> None.
    """
    for part in code.lower().replace("-", "_").split("_"):
        if len(part) == 1 and part in letters:
            return part
    return None
