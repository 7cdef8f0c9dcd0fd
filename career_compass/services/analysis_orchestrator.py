"""
Analysis Orchestrator - Career Compass
career_compass/services/analysis_orchestrator.py

Runs one analysis for one submission.

    START ──► AI_ATTEMPT ──(ok)──────────────► PERSISTED
      │           └──(error | timeout)──┐
      └──(no AI client)──► RULE_ATTEMPT ◄┘──► PERSISTED
                                          └──(write fails)──► FAILED

The AI call is raced against AI timeout with asyncio.wait_for. Any failure
there falls back once, without retry, to the rule-based strategy. The write
is insert-or-ignore keyed by submission, so a second run for the same
submission leaves the first result in place.
"""

import asyncio
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple

import structlog

from career_compass.core.exceptions import SubmissionNotFoundError
from career_compass.models.analysis import AnalysisReport, AnalysisResult
from career_compass.models.enumerations import AnalysisMethod, Instrument
from career_compass.repositories.analysis_result_repository import AnalysisResultRepository
from career_compass.repositories.submission_repository import SubmissionRepository
from career_compass.repositories.survey_repository import SurveyRepository
from career_compass.scoring.context import AnalysisContext, AnsweredQuestion, group_answers
from career_compass.scoring.strategy import AnalysisStrategy
from career_compass.services.knowledge_retriever import KnowledgeRetriever

logger = structlog.get_logger(__name__)


class OrchestrationState(str, Enum):
    START = "start"
    AI_ATTEMPT = "ai_attempt"
    RULE_ATTEMPT = "rule_attempt"
    PERSISTED = "persisted"
    FAILED = "failed"


@dataclass
class OrchestrationOutcome:
    submission_id: str
    state: OrchestrationState
    result: Optional[AnalysisResult] = None
    inserted: bool = False
    fallback_reason: Optional[str] = None
    error: Optional[str] = None
    trail: List[OrchestrationState] = field(default_factory=list)

    @property
    def method(self) -> Optional[AnalysisMethod]:
        return self.result.method if self.result else None


class AnalysisOrchestrator:

    def __init__(
        self,
        submission_repository: SubmissionRepository,
        survey_repository: SurveyRepository,
        result_repository: AnalysisResultRepository,
        retriever: KnowledgeRetriever,
        rule_strategy: AnalysisStrategy,
        ai_strategy: Optional[AnalysisStrategy] = None,
        ai_timeout_seconds: float = 60.0,
    ):
        self.submission_repository = submission_repository
        self.survey_repository = survey_repository
        self.result_repository = result_repository
        self.retriever = retriever
        self.rule_strategy = rule_strategy
        self.ai_strategy = ai_strategy
        self.ai_timeout_seconds = ai_timeout_seconds

    async def run(self, submission_id: str) -> OrchestrationOutcome:
        """
        Analyze a submission and persist its single result.

        Raises:
            SubmissionNotFoundError: no such submission.
            RepositoryException: loading the submission or its knowledge failed.
        """
        started = time.perf_counter()
        log = logger.bind(submission_id=submission_id)
        trail = [OrchestrationState.START]

        existing = await asyncio.to_thread(
            self.result_repository.get_by_submission_id, submission_id)
        if existing is not None:
            log.info("analysis_already_persisted", analysis_id=existing.id)
            return OrchestrationOutcome(
                submission_id, OrchestrationState.PERSISTED, result=existing,
                trail=trail + [OrchestrationState.PERSISTED])

        context = await asyncio.to_thread(self.load_context, submission_id)
        report, fallback_reason = await self.produce_report(context, trail)

        result = AnalysisResult(
            id=str(uuid.uuid4()),
            submission_id=submission_id,
            summary=report.summary,
            detailed_analysis=report.detailed_analysis,
            recommendations=report.recommendations,
            confidence_score=report.confidence_score,
            knowledge_source_ids=[entry.id for entry in context.knowledge],
            method=report.method,
            model_used=report.model_used,
            processing_time_ms=int((time.perf_counter() - started) * 1000),
            created_at=datetime.now(timezone.utc),
        )

        try:
            inserted = await asyncio.to_thread(self.result_repository.insert_if_absent, result)
        except Exception as e:
            log.error("analysis_persist_failed", error=str(e), method=result.method.value)
            return OrchestrationOutcome(
                submission_id,
                OrchestrationState.FAILED,
                fallback_reason=fallback_reason,
                error=str(e),
                trail=trail + [OrchestrationState.FAILED],
            )

        if not inserted:
            # another run got there first; report the row that won
            winner = await asyncio.to_thread(
                self.result_repository.get_by_submission_id, submission_id)
            result = winner or result

        log.info(
            "analysis_persisted",
            analysis_id=result.id,
            method=result.method.value,
            inserted=inserted,
            confidence=result.confidence_score,
            fallback_reason=fallback_reason,
            processing_time_ms=result.processing_time_ms,
        )
        return OrchestrationOutcome(
            submission_id,
            OrchestrationState.PERSISTED,
            result=result,
            inserted=inserted,
            fallback_reason=fallback_reason,
            trail=trail + [OrchestrationState.PERSISTED],
        )

    async def produce_report(
        self, context: AnalysisContext, trail: List[OrchestrationState]
    ) -> Tuple[AnalysisReport, Optional[str]]:
        """AI first when configured, rule-based otherwise or on any AI failure."""
        fallback_reason: Optional[str] = None
        if self.ai_strategy is not None:
            trail.append(OrchestrationState.AI_ATTEMPT)
            try:
                report = await asyncio.wait_for(
                    self.ai_strategy.analyze(context), timeout=self.ai_timeout_seconds)
                return report, None
            except asyncio.TimeoutError:
                fallback_reason = f"timeout after {self.ai_timeout_seconds}s"
            except Exception as e:
                fallback_reason = f"{type(e).__name__}: {e}"
            logger.warning(
                "ai_strategy_fallback",
                submission_id=context.submission.id,
                reason=fallback_reason,
            )

        trail.append(OrchestrationState.RULE_ATTEMPT)
        report = await self.rule_strategy.analyze(context)
        return report, fallback_reason

    def load_context(self, submission_id: str) -> AnalysisContext:
        submission = self.submission_repository.get_by_id(submission_id)
        if submission is None:
            raise SubmissionNotFoundError(submission_id)

        answers = self.submission_repository.get_answers(submission_id)
        questions = self.survey_repository.get_questions_by_ids(a.question_id for a in answers)
        instruments: Dict[str, Instrument] = {}
        for model in self.survey_repository.list_models():
            try:
                instruments[model.id] = Instrument.from_model_code(model.code)
            except ValueError:
                continue

        answered = []
        for answer in answers:
            question = questions.get(answer.question_id)
            instrument = instruments.get(answer.model_id)
            if question is None or instrument is None:
                continue
            answered.append(AnsweredQuestion(instrument, question, answer.value))

        knowledge = self.retriever.retrieve(submission.instruments)
        return AnalysisContext(
            submission=submission,
            answers=group_answers(answered),
            knowledge=knowledge,
        )
