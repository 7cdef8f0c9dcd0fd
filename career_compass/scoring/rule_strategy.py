"""
Rule-Based Analysis Strategy - Career Compass
career_compass/scoring/rule_strategy.py

Deterministic report built from the per-instrument scorers. Used as the
fallback for the AI path and as the only path when no AI client is configured.

Report layout (shared with the AI path):
    summary                 fixed template
    detailed_analysis       personal_profile, test_results, career_recommendations,
                            development_suggestions, cultural_fit,
                            strengths_and_weaknesses
    recommendations         career lines + development lines + action plan
    confidence_score        see ConfidenceCalculator.rule_based
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

import structlog

from career_compass.models.analysis import AnalysisReport
from career_compass.models.enumerations import AnalysisMethod, Instrument
from career_compass.models.knowledge import is_culture_entry
from career_compass.models.submission import Profile
from career_compass.scoring.big_five_scorer import BigFiveResult, BigFiveScorer
from career_compass.scoring.career_reflection import CareerReflection, CareerReflectionScorer
from career_compass.scoring.confidence_calculator import ConfidenceCalculator
from career_compass.scoring.context import AnalysisContext
from career_compass.scoring.disc_scorer import COMMUNICATION_TIPS, DISCResult, DISCScorer
from career_compass.scoring.holland_scorer import HollandResult, HollandScorer
from career_compass.scoring.mbti_scorer import WORK_STYLE, MBTIResult, MBTIScorer
from career_compass.scoring.strategy import AnalysisStrategy
from career_compass.scoring.values_scorer import CULTURE_HINTS, ValuesResult, ValuesScorer

logger = structlog.get_logger(__name__)


@dataclass
class InstrumentScores:
    """Per-instrument outputs; None where the instrument was not submitted."""
    reflection: Optional[CareerReflection] = None
    mbti: Optional[MBTIResult] = None
    big_five: Optional[BigFiveResult] = None
    disc: Optional[DISCResult] = None
    holland: Optional[HollandResult] = None
    values: Optional[ValuesResult] = None


def age_group(age: int) -> str:
    if age < 25:
        return "under 25"
    if age < 35:
        return "25-34"
    if age < 45:
        return "35-44"
    return "45 and over"


def career_stage(age: int) -> str:
    if age < 25:
        return "exploration"
    if age < 35:
        return "establishment"
    if age < 45:
        return "advancement"
    return "mastery"


class RuleBasedAnalysisStrategy(AnalysisStrategy):
    """Compose the instrument scorers into the shared report schema."""

    method = AnalysisMethod.RULE
    model_name = "rule-based"

    def __init__(self, confidence_calculator: Optional[ConfidenceCalculator] = None):
        self.confidence = confidence_calculator or ConfidenceCalculator()
        self.reflection_scorer = CareerReflectionScorer()
        self.mbti_scorer = MBTIScorer()
        self.big_five_scorer = BigFiveScorer()
        self.disc_scorer = DISCScorer()
        self.holland_scorer = HollandScorer()
        self.values_scorer = ValuesScorer()

    async def analyze(self, context: AnalysisContext) -> AnalysisReport:
        return self.build_report(context)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(self, context: AnalysisContext) -> InstrumentScores:
        scores = InstrumentScores()
        if context.has(Instrument.FIVE_QUESTIONS):
            scores.reflection = self.reflection_scorer.calculate(
                context.answers_for(Instrument.FIVE_QUESTIONS))
        if context.has(Instrument.MBTI):
            scores.mbti = self.mbti_scorer.calculate(context.answers_for(Instrument.MBTI))
        if context.has(Instrument.BIG_FIVE):
            scores.big_five = self.big_five_scorer.calculate(context.answers_for(Instrument.BIG_FIVE))
        if context.has(Instrument.DISC):
            scores.disc = self.disc_scorer.calculate(context.answers_for(Instrument.DISC))
        if context.has(Instrument.HOLLAND):
            scores.holland = self.holland_scorer.calculate(context.answers_for(Instrument.HOLLAND))
        if context.has(Instrument.VALUES):
            scores.values = self.values_scorer.calculate(context.answers_for(Instrument.VALUES))
        return scores

    def build_report(self, context: AnalysisContext) -> AnalysisReport:
        scores = self.score(context)
        profile = context.submission.profile

        career = self.career_recommendations(context, scores)
        development = self.development_suggestions(scores)
        strengths = scores.big_five.strengths() if scores.big_five else []
        improvements = scores.big_five.improvement_areas() if scores.big_five else []
        action_plan = self.action_plan(scores, improvements)
        confidence = self.confidence.rule_based(
            context.completed_instrument_count, len(context.knowledge))

        detailed_analysis: Dict[str, Any] = {
            "personal_profile": self.personal_profile(profile),
            "test_results": self.test_results(scores),
            "career_recommendations": career,
            "development_suggestions": development,
            "cultural_fit": self.cultural_fit(context, scores),
            "strengths_and_weaknesses": {
                "strengths": strengths,
                "improvement_areas": improvements,
                "action_plan": action_plan,
            },
        }
        recommendations = career + development + action_plan

        logger.info(
            "rule_report_built",
            submission_id=context.submission.id,
            instruments=[i.value for i in context.instruments],
            knowledge_count=len(context.knowledge),
            recommendation_count=len(recommendations),
            confidence=confidence.confidence,
        )
        return AnalysisReport(
            summary=self.summary(profile, scores, context, len(recommendations)),
            detailed_analysis=detailed_analysis,
            recommendations=recommendations,
            confidence_score=confidence.confidence,
            method=AnalysisMethod.RULE,
            model_used=self.model_name,
        )

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def summary(
        self,
        profile: Profile,
        scores: InstrumentScores,
        context: AnalysisContext,
        recommendation_count: int,
    ) -> str:
        mbti = f"{scores.mbti.type}" if scores.mbti else "not assessed"
        disc = scores.disc.primary_style.lower() if scores.disc else "an unassessed"
        holland = (
            f"{scores.holland.top_three[0]} work (Holland code {scores.holland.code})"
            if scores.holland else "areas not yet assessed"
        )
        return (
            f"{profile.name}'s assessment report: MBTI type {mbti}, "
            f"{disc} behavioral style, strongest interest in {holland}. "
            f"Based on {context.completed_instrument_count} completed instruments "
            f"and {len(context.knowledge)} knowledge references, with "
            f"{recommendation_count} recommendations."
        )

    def personal_profile(self, profile: Profile) -> Dict[str, Any]:
        return {
            "basic_info": profile.model_dump(exclude={"phone"}),
            "demographics": {
                "age_group": age_group(profile.age),
                "education_level": profile.education,
                "career_stage": career_stage(profile.age),
            },
        }

    def test_results(self, scores: InstrumentScores) -> Dict[str, Any]:
        results: Dict[str, Any] = {}
        if scores.reflection:
            results["career_development"] = {"reflections": scores.reflection.statements}
        if scores.mbti:
            results["mbti"] = asdict(scores.mbti)
        if scores.big_five:
            results["big_five"] = scores.big_five.as_dict()
        if scores.disc:
            results["disc"] = {
                "scores": scores.disc.scores,
                "primary_style": scores.disc.primary_style,
            }
        if scores.holland:
            results["holland"] = asdict(scores.holland)
        if scores.values:
            results["values"] = {
                "counts": scores.values.counts,
                "dominant": scores.values.dominant,
            }
        return results

    def career_recommendations(
        self, context: AnalysisContext, scores: InstrumentScores
    ) -> List[str]:
        lines: List[str] = []
        if scores.holland:
            lines.append(
                f"Explore career areas that match your Holland code {scores.holland.code}: "
                f"{', '.join(scores.holland.careers())}"
            )
        if scores.mbti:
            lines.append(
                f"As an {scores.mbti.type}, look for roles in "
                f"{WORK_STYLE[scores.mbti.type[0]]}"
            )
        culture = [e.source_label for e in context.knowledge if is_culture_entry(e)]
        if culture:
            lines.append(
                "Prioritize employers whose culture matches your values; see "
                + ", ".join(culture[:3])
            )
        return lines

    def development_suggestions(self, scores: InstrumentScores) -> List[str]:
        lines: List[str] = []
        if scores.big_five:
            strengths = scores.big_five.strengths()
            improvement = scores.big_five.improvement_areas()[0]
            lines.append(
                f"Build on your strengths ({', '.join(strengths[:2])}) "
                f"and make progress on: {improvement.lower()}"
            )
        if scores.disc:
            lines.append(COMMUNICATION_TIPS[scores.disc.primary])
        if scores.values and scores.values.total:
            lines.append(f"Favor {CULTURE_HINTS[scores.values.dominant]}")
        return lines

    def cultural_fit(self, context: AnalysisContext, scores: InstrumentScores) -> Dict[str, Any]:
        dominant = scores.values.dominant if scores.values and scores.values.total else None
        return {
            "dominant_value": dominant,
            "preferred_culture": CULTURE_HINTS[dominant] if dominant else None,
            "references": [e.source_label for e in context.knowledge if is_culture_entry(e)],
        }

    def action_plan(self, scores: InstrumentScores, improvements: List[str]) -> List[str]:
        area = scores.holland.top_three[0] if scores.holland else "your target"
        focus = improvements[0].lower() if improvements else "one core professional skill"
        setting = (
            CULTURE_HINTS[scores.values.dominant]
            if scores.values and scores.values.total
            else "a team whose working style suits you"
        )
        return [
            f"Within 1 month: research three {area} roles and talk to one practitioner",
            f"Within 3 months: complete a course or project focused on {focus}",
            f"Within 6 months: pursue a role or internal move in {setting}",
        ]
