"""
Big Five Scorer - Career Compass
career_compass/scoring/big_five_scorer.py

Deviation-from-midpoint accumulation:

    trait = 50 + Σ (answer − 3) × 10   over answers tagged with the trait
    clamped to [0, 100]; non-numeric answers count as the midpoint 3.

Trait tags are single-letter code segments: o, c, e, a, n.
"""
from dataclasses import asdict, dataclass
from typing import Dict, List

from career_compass.scoring.context import AnsweredQuestion, code_segment
from career_compass.scoring.utils import clamp

TRAITS: Dict[str, str] = {
    "o": "openness",
    "c": "conscientiousness",
    "e": "extraversion",
    "a": "agreeableness",
    "n": "neuroticism",
}

HIGH = 60
LOW = 40


@dataclass
class BigFiveResult:
    openness: float = 50.0
    conscientiousness: float = 50.0
    extraversion: float = 50.0
    agreeableness: float = 50.0
    neuroticism: float = 50.0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def strengths(self) -> List[str]:
        out: List[str] = []
        if self.openness > HIGH:
            out += ["Creative", "Open to new experiences"]
        if self.conscientiousness > HIGH:
            out += ["Responsible", "Detail-oriented"]
        if self.extraversion > HIGH:
            out += ["Sociable", "Energetic"]
        if self.agreeableness > HIGH:
            out += ["Cooperative", "Trustworthy"]
        if self.neuroticism < LOW:
            out += ["Emotionally stable", "Resilient under pressure"]
        return out or ["Distinctive personal presence", "Strong growth potential"]

    def improvement_areas(self) -> List[str]:
        out: List[str] = []
        if self.extraversion < LOW:
            out += ["Build social skills", "Strengthen verbal communication"]
        if self.conscientiousness < LOW:
            out += ["Improve time management", "Strengthen follow-through"]
        if self.openness < LOW:
            out += ["Cultivate creative thinking", "Stay open to new ideas"]
        if self.neuroticism > HIGH:
            out += ["Emotion management", "Stress regulation"]
        return out or ["Keep a steady learning rhythm", "Broaden cross-functional experience"]


class BigFiveScorer:
    MIDPOINT = 3.0
    STEP = 10.0
    BASE = 50.0

    def calculate(self, answers: List[AnsweredQuestion]) -> BigFiveResult:
        scores = {trait: self.BASE for trait in TRAITS.values()}
        for answer in answers:
            letter = code_segment(answer.code, "".join(TRAITS))
            if letter is None:
                continue
            value = answer.numeric(self.MIDPOINT)
            scores[TRAITS[letter]] += (value - self.MIDPOINT) * self.STEP
        return BigFiveResult(**{k: clamp(v, 0.0, 100.0) for k, v in scores.items()})
