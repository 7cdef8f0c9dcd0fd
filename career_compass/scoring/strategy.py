"""
Analysis strategy interface shared by the AI and rule-based paths.
"""
from abc import ABC, abstractmethod
from typing import Optional

from career_compass.models.analysis import AnalysisReport
from career_compass.models.enumerations import AnalysisMethod
from career_compass.scoring.context import AnalysisContext


class AnalysisStrategy(ABC):
    """Produces an AnalysisReport for one submission."""

    method: AnalysisMethod
    model_name: Optional[str] = None

    @abstractmethod
    async def analyze(self, context: AnalysisContext) -> AnalysisReport:
        ...
