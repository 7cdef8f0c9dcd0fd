"""
scoring/confidence_calculator.py

Confidence score (0–1) for an analysis, computed per strategy.

Rule-based path:
    confidence = clamp(0.5 + 0.1 × completed_instruments
                       + (0.2 if knowledge_count > 10 else 0), 0, 1)

AI path:
    the model's own confidence_score; values above 1 (up to 100) are read as
    percentages. Absent or non-numeric -> 0.85.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from career_compass.scoring.utils import clamp

logger = logging.getLogger(__name__)


@dataclass
class ConfidenceResult:
    """Output of ConfidenceCalculator.rule_based()."""
    confidence: float
    completed_instruments: int
    knowledge_count: int
    knowledge_bonus: bool


class ConfidenceCalculator:
    """Calculate the confidence score attached to an analysis."""

    BASE: Decimal = Decimal("0.5")
    PER_INSTRUMENT: Decimal = Decimal("0.1")
    KNOWLEDGE_BONUS: Decimal = Decimal("0.2")
    KNOWLEDGE_THRESHOLD: int = 10
    AI_DEFAULT: float = 0.85

    def rule_based(self, completed_instruments: int, knowledge_count: int) -> ConfidenceResult:
        """
        Args:
            completed_instruments: Instruments present in the submission (0-6).
            knowledge_count: Knowledge entries retrieved for the analysis.

        Returns:
            ConfidenceResult with confidence in [0, 1].
        """
        bonus = knowledge_count > self.KNOWLEDGE_THRESHOLD
        raw = (
            self.BASE
            + self.PER_INSTRUMENT * Decimal(max(0, completed_instruments))
            + (self.KNOWLEDGE_BONUS if bonus else Decimal("0"))
        )
        confidence = float(clamp(raw, Decimal("0"), Decimal("1")))

        logger.info(
            "Rule-based confidence calculated",
            extra={
                "completed_instruments": completed_instruments,
                "knowledge_count": knowledge_count,
                "confidence": confidence,
            },
        )
        return ConfidenceResult(
            confidence=confidence,
            completed_instruments=completed_instruments,
            knowledge_count=knowledge_count,
            knowledge_bonus=bonus,
        )

    def from_ai(self, value: Any) -> float:
        """Normalize a model-supplied confidence into [0, 1]."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return self.AI_DEFAULT
        score = float(value)
        if score != score:  # NaN
            return self.AI_DEFAULT
        if 1.0 < score <= 100.0:
            score = score / 100.0
        return clamp(score, 0.0, 1.0)
