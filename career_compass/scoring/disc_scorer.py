"""
DISC Scorer - Career Compass
career_compass/scoring/disc_scorer.py

Four tallies (D, I, S, C) summed from answer values (non-numeric counts as 1),
converted to whole percentages that sum to 100. All-zero tallies give 25 each.
"""
from dataclasses import dataclass
from typing import Dict, List

from career_compass.scoring.context import AnsweredQuestion, code_segment
from career_compass.scoring.utils import to_percentages, top_keys

STYLES: Dict[str, str] = {
    "d": "dominance",
    "i": "influence",
    "s": "steadiness",
    "c": "conscientiousness",
}

STYLE_NAMES: Dict[str, str] = {
    "dominance": "Dominant",
    "influence": "Influential",
    "steadiness": "Steady",
    "conscientiousness": "Conscientious",
}

COMMUNICATION_TIPS: Dict[str, str] = {
    "dominance": "State goals and decisions directly and keep updates brief",
    "influence": "Channel enthusiasm into clear commitments and written follow-ups",
    "steadiness": "Voice disagreement early instead of absorbing extra load",
    "conscientiousness": "Share work-in-progress before it is perfect to speed up feedback",
}


@dataclass
class DISCResult:
    scores: Dict[str, int]
    raw: Dict[str, float]
    primary: str

    @property
    def primary_style(self) -> str:
        return STYLE_NAMES.get(self.primary, "Blended")


class DISCScorer:
    NON_NUMERIC_VALUE = 1.0

    def calculate(self, answers: List[AnsweredQuestion]) -> DISCResult:
        order = list(STYLES.values())
        raw = {style: 0.0 for style in order}
        for answer in answers:
            letter = code_segment(answer.code, "".join(STYLES))
            if letter is None:
                continue
            raw[STYLES[letter]] += answer.numeric(self.NON_NUMERIC_VALUE)

        scores = to_percentages(raw, order)
        primary = top_keys(raw, order, 1)[0]
        return DISCResult(scores=scores, raw=raw, primary=primary)
