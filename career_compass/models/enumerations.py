from enum import Enum


class Instrument(str, Enum):
    """The six answer groups of one assessment, keyed by their request field."""
    FIVE_QUESTIONS = "fiveQuestions"
    MBTI = "mbti"
    BIG_FIVE = "bigFive"
    DISC = "disc"
    HOLLAND = "holland"
    VALUES = "values"

    @property
    def model_code(self) -> str:
        return INSTRUMENT_MODEL_CODES[self]

    @property
    def knowledge_tag(self) -> str:
        return INSTRUMENT_KNOWLEDGE_TAGS[self]

    @classmethod
    def from_model_code(cls, code: str) -> "Instrument":
        for instrument, model_code in INSTRUMENT_MODEL_CODES.items():
            if model_code == code:
                return instrument
        raise ValueError(f"Unknown instrument model code: {code}")


INSTRUMENT_MODEL_CODES = {
    Instrument.FIVE_QUESTIONS: "fiveq",
    Instrument.MBTI: "mbti",
    Instrument.BIG_FIVE: "big5",
    Instrument.DISC: "disc",
    Instrument.HOLLAND: "holland",
    Instrument.VALUES: "motivation",
}

INSTRUMENT_KNOWLEDGE_TAGS = {
    Instrument.FIVE_QUESTIONS: "career_development",
    Instrument.MBTI: "personality",
    Instrument.BIG_FIVE: "personality_traits",
    Instrument.DISC: "behavior_style",
    Instrument.HOLLAND: "career_interests",
    Instrument.VALUES: "work_values",
}


class QuestionType(str, Enum):
    SINGLE = "single"        # one option code
    MULTIPLE = "multiple"    # several option codes
    SCALE = "scale"          # numeric rating
    TEXT = "text"            # free text
    SORTING = "sorting"      # ranking of all options


class AnalysisMethod(str, Enum):
    AI = "ai"
    RULE = "rule"


class AnalysisStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    USER_NOT_FOUND = "user_not_found"
    NO_ANALYSIS = "no_analysis"


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
