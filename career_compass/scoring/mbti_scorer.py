"""
MBTI Scorer - Career Compass
career_compass/scoring/mbti_scorer.py

Four-letter type by majority vote per axis.

    answer i votes on axis (i mod 4): EI, SN, TF, JP
    numeric value > 2  -> first letter, else second letter
    non-numeric value  -> counted as 0
    first letter wins only with strictly more votes
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from career_compass.scoring.context import AnsweredQuestion

AXES: List[Tuple[str, str]] = [("E", "I"), ("S", "N"), ("T", "F"), ("J", "P")]

MBTI_DESCRIPTIONS: Dict[str, str] = {
    "INTJ": "Architect: independent strategic thinker with strong intuition and decisiveness",
    "INTP": "Logician: curious, drawn to theory and abstract ideas",
    "ENTJ": "Commander: natural leader who organizes and plans",
    "ENTP": "Debater: innovator who spots new possibilities",
    "INFJ": "Advocate: idealist with a strong moral compass",
    "INFP": "Mediator: creative and loyal to personal values",
    "ENFJ": "Protagonist: charismatic leader who inspires others",
    "ENFP": "Campaigner: enthusiastic, creative and sociable",
    "ISTJ": "Logistician: practical, reliable, attentive to detail and tradition",
    "ISFJ": "Defender: warm and glad to help others",
    "ESTJ": "Executive: efficient organizer who manages and delivers",
    "ESFJ": "Consul: caring, builds harmonious surroundings",
    "ISTP": "Virtuoso: adaptable, solves practical problems",
    "ISFP": "Adventurer: gentle, seeks inner harmony",
    "ESTP": "Entrepreneur: energetic, quick to seize opportunities",
    "ESFP": "Entertainer: warm, enjoys interacting with people",
}

WORK_STYLE: Dict[str, str] = {
    "E": "collaborative, people-facing settings",
    "I": "focused settings with room for independent work",
}


@dataclass
class MBTIResult:
    type: str
    description: str
    dimensions: Dict[str, str] = field(default_factory=dict)
    votes: Dict[str, int] = field(default_factory=dict)


class MBTIScorer:
    """Majority-vote MBTI typing."""

    NON_NUMERIC_VALUE = 0.0

    def calculate(self, answers: List[AnsweredQuestion]) -> MBTIResult:
        votes = {letter: 0 for pair in AXES for letter in pair}
        for index, answer in enumerate(answers):
            first, second = AXES[index % 4]
            value = answer.numeric(self.NON_NUMERIC_VALUE)
            votes[first if value > 2 else second] += 1

        dimensions = {
            f"{first}{second}": first if votes[first] > votes[second] else second
            for first, second in AXES
        }
        mbti_type = "".join(dimensions.values())
        return MBTIResult(
            type=mbti_type,
            description=MBTI_DESCRIPTIONS.get(mbti_type, "A distinctive personality type"),
            dimensions=dimensions,
            votes=votes,
        )
