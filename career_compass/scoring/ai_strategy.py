"""
AI Analysis Strategy - Career Compass
career_compass/scoring/ai_strategy.py

One chat-completion call in JSON mode. The payload must parse into a JSON
object; anything else raises and the orchestrator falls back to the rule path.
A parseable but incomplete payload is repaired field by field:

    summary            missing/blank       -> rule-based summary
    recommendations    missing/empty/bad   -> rule-based recommendations
    detailed_analysis  not an object       -> rule-based detailed analysis
    confidence_score   absent/non-numeric  -> 0.85 (percentages are rescaled)
"""

import json
from typing import Any, Dict, List, Optional

import structlog
from openai import AsyncOpenAI

from career_compass.core.exceptions import AIResponseError
from career_compass.models.analysis import AnalysisReport
from career_compass.models.enumerations import AnalysisMethod
from career_compass.scoring.confidence_calculator import ConfidenceCalculator
from career_compass.scoring.context import AnalysisContext
from career_compass.scoring.prompt_builder import PromptBuilder
from career_compass.scoring.rule_strategy import RuleBasedAnalysisStrategy
from career_compass.scoring.strategy import AnalysisStrategy

logger = structlog.get_logger(__name__)


class AIAnalysisStrategy(AnalysisStrategy):
    """Analysis by an OpenAI-compatible chat model."""

    method = AnalysisMethod.AI

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        rule_strategy: RuleBasedAnalysisStrategy,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        prompt_builder: Optional[PromptBuilder] = None,
        confidence_calculator: Optional[ConfidenceCalculator] = None,
    ):
        self.client = client
        self.model_name = model
        self.rule_strategy = rule_strategy
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.confidence = confidence_calculator or ConfidenceCalculator()

    async def analyze(self, context: AnalysisContext) -> AnalysisReport:
        prompt = self.prompt_builder.user_message(context)
        logger.info(
            "ai_request_started",
            submission_id=context.submission.id,
            model=self.model_name,
            prompt_chars=len(prompt),
        )
        completion = await self.client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": self.prompt_builder.system_message()},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            response_format={"type": "json_object"},
        )
        content = completion.choices[0].message.content if completion.choices else None
        payload = parse_payload(content)
        return self.complete(payload, context)

    def complete(self, payload: Dict[str, Any], context: AnalysisContext) -> AnalysisReport:
        """Backfill missing required fields from the rule-based report."""
        fallback: Optional[AnalysisReport] = None
        backfilled: List[str] = []

        def rule_report() -> AnalysisReport:
            nonlocal fallback
            if fallback is None:
                fallback = self.rule_strategy.build_report(context)
            return fallback

        summary = payload.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            summary = rule_report().summary
            backfilled.append("summary")

        recommendations = payload.get("recommendations")
        if isinstance(recommendations, list):
            recommendations = [str(r) for r in recommendations if str(r).strip()]
        else:
            recommendations = None
        if not recommendations:
            recommendations = list(rule_report().recommendations)
            backfilled.append("recommendations")

        detailed = payload.get("detailed_analysis")
        if not isinstance(detailed, dict):
            detailed = rule_report().detailed_analysis
            backfilled.append("detailed_analysis")

        if backfilled:
            logger.info(
                "ai_payload_backfilled",
                submission_id=context.submission.id,
                fields=backfilled,
            )

        return AnalysisReport(
            summary=summary,
            detailed_analysis=detailed,
            recommendations=recommendations,
            confidence_score=self.confidence.from_ai(payload.get("confidence_score")),
            method=AnalysisMethod.AI,
            model_used=self.model_name,
        )


def parse_payload(content: Optional[str]) -> Dict[str, Any]:
    """Parse the model message into a JSON object or raise AIResponseError."""
    if not content or not content.strip():
        raise AIResponseError("Empty response from model")
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"Model returned invalid JSON: {e}")
    if not isinstance(payload, dict):
        raise AIResponseError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload
