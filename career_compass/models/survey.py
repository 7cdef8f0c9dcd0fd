"""
Survey Catalog Models - Career Compass
career_compass/models/survey.py

Immutable catalog entries: the six instrument models and their questions.
"""

from typing import List, Optional

from pydantic import Field

from career_compass.models.common import CamelModel
from career_compass.models.enumerations import QuestionType


class InstrumentModel(CamelModel):
    id: str = Field(..., description="Instrument model ID")
    code: str = Field(..., description="Model code, e.g. 'mbti' or 'big5'")
    name: str = Field(..., description="Display name")
    description: Optional[str] = None


class QuestionOption(CamelModel):
    code: str
    label: str


class Question(CamelModel):
    id: str
    model_id: str
    code: str = Field(..., description="Question code, unique within its model")
    type: QuestionType
    content: str = Field(..., description="Literal question text")
    options: List[QuestionOption] = Field(default_factory=list)
    sort_order: int = 0

    @property
    def option_count(self) -> int:
        return len(self.options)

    def option_label(self, code: str) -> Optional[str]:
        for option in self.options:
            if option.code == code:
                return option.label
        return None

    def option_label_at(self, position: int) -> Optional[str]:
        """Label of the 1-based option position used by ranking answers."""
        if 1 <= position <= len(self.options):
            return self.options[position - 1].label
        return None


class InstrumentModelList(CamelModel):
    items: List[InstrumentModel]
    total: int


class QuestionList(CamelModel):
    model: InstrumentModel
    items: List[Question]
    total: int
