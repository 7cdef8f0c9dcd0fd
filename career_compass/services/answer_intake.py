"""
Answer Intake - Career Compass
career_compass/services/answer_intake.py

Validates a submission, resolves question codes against the catalog, and
stores the submission, its answers and its pending-analysis marker in one
transaction. Analysis is scheduled afterwards and never awaited.
"""

import asyncio
import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, Tuple

import structlog

from career_compass.core.exceptions import MissingInstrumentsError
from career_compass.models.enumerations import Instrument, QuestionType
from career_compass.models.submission import (
    Answer,
    Submission,
    SubmissionCreate,
    SubmissionReceipt,
    parse_answer_value,
)
from career_compass.models.survey import Question
from career_compass.repositories.submission_repository import SubmissionRepository
from career_compass.repositories.survey_repository import SurveyRepository

logger = structlog.get_logger(__name__)

PROFILE_GROUP = "profile"


class AnalysisScheduler(Protocol):
    def schedule(self, submission_id: str) -> None:
        ...


def find_missing_groups(request: SubmissionCreate) -> List[str]:
    """Every absent group, profile first, then instruments in declaration order."""
    missing: List[str] = []
    if request.profile is None:
        missing.append(PROFILE_GROUP)
    for instrument in Instrument:
        if request.answers_for(instrument) is None:
            missing.append(instrument.value)
    return missing


class AnswerIntakeService:

    def __init__(
        self,
        survey_repository: SurveyRepository,
        submission_repository: SubmissionRepository,
        scheduler: Optional[AnalysisScheduler] = None,
    ):
        self.survey_repository = survey_repository
        self.submission_repository = submission_repository
        self.scheduler = scheduler

    async def submit(self, request: SubmissionCreate) -> SubmissionReceipt:
        """
        Validate and store a submission, then schedule its analysis.

        Raises:
            MissingInstrumentsError: profile or any instrument group is absent.
            InvalidAnswerError: an answer does not fit its question type.
        """
        missing = find_missing_groups(request)
        if missing:
            raise MissingInstrumentsError(missing)

        receipt = await asyncio.to_thread(self.store, request)
        if self.scheduler is not None:
            self.scheduler.schedule(receipt.submission_id)
        return receipt

    def store(self, request: SubmissionCreate) -> SubmissionReceipt:
        submission = Submission(
            id=str(uuid.uuid4()),
            profile=request.profile,
            instruments=[i for i in Instrument if request.answers_for(i) is not None],
            submitted_at=datetime.now(timezone.utc),
        )
        answers, stats = self.resolve_answers(submission.id, request)
        self.submission_repository.create(submission, answers)

        logger.info(
            "submission_accepted",
            submission_id=submission.id,
            answer_count=len(answers),
            by_instrument=stats["byInstrument"],
        )
        return SubmissionReceipt(
            message="Answers submitted successfully",
            submission_id=submission.id,
            stats=stats,
        )

    def resolve_answers(
        self, submission_id: str, request: SubmissionCreate
    ) -> Tuple[List[Answer], Dict[str, Dict[str, int]]]:
        """
        Map every submitted question code to its catalog question and coerce the
        value. Unknown codes are skipped. Unanswered ranking questions of a
        submitted instrument get the identity order.
        """
        models = self.survey_repository.get_models_by_codes(
            instrument.model_code for instrument in Instrument
        )
        questions = self.survey_repository.get_questions_for_models(m.id for m in models.values())
        by_model: Dict[str, Dict[str, Question]] = {}
        for question in questions:
            by_model.setdefault(question.model_id, {})[question.code] = question

        answers: List[Answer] = []
        per_instrument: Counter = Counter()
        per_type: Counter = Counter()

        for instrument in Instrument:
            raw_answers = request.answers_for(instrument)
            if raw_answers is None:
                continue
            model = models.get(instrument.model_code)
            if model is None:
                logger.warning("instrument_model_missing", model_code=instrument.model_code)
                continue
            catalog = by_model.get(model.id, {})

            for code, raw in raw_answers.items():
                question = catalog.get(code)
                if question is None:
                    logger.warning(
                        "unknown_question_skipped",
                        submission_id=submission_id,
                        model_code=model.code,
                        question_code=code,
                    )
                    continue
                value = parse_answer_value(question, raw)
                if value is None:
                    continue
                answers.append(Answer(
                    submission_id=submission_id,
                    question_id=question.id,
                    model_id=model.id,
                    value=value,
                ))
                per_instrument[instrument.value] += 1
                per_type[question.type.value] += 1

            for code, question in catalog.items():
                if question.type == QuestionType.SORTING and code not in raw_answers:
                    answers.append(Answer(
                        submission_id=submission_id,
                        question_id=question.id,
                        model_id=model.id,
                        value=parse_answer_value(question, None),
                    ))
                    per_instrument[instrument.value] += 1
                    per_type[question.type.value] += 1

        stats = {
            "byInstrument": {i.value: per_instrument.get(i.value, 0) for i in Instrument},
            "byType": {t.value: per_type.get(t.value, 0) for t in QuestionType},
        }
        return answers, stats
