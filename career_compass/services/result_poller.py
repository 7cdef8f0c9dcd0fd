"""
Result Poller - Career Compass
career_compass/services/result_poller.py

Read side of the analysis pipeline. A poll resolves, in this order:

  1. a result exists                 -> completed
  2. no result, submission exists    -> processing (with elapsed minutes)
  3. no submission                   -> SubmissionNotFoundError

Completed results never change, so they are cached in Redis when available.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional, Union

from career_compass.core.exceptions import AnalysisNotFoundError, SubmissionNotFoundError
from career_compass.models.analysis import (
    AnalysisResult,
    AnalysisSummaryData,
    AnalysisView,
    CompletedData,
    ProcessingData,
)
from career_compass.models.enumerations import AnalysisStatus
from career_compass.repositories.analysis_result_repository import AnalysisResultRepository
from career_compass.repositories.submission_repository import SubmissionRepository
from career_compass.scoring.utils import round_half_up
from career_compass.services.redis_cache import RedisCache

logger = logging.getLogger(__name__)

PROCESSING_MESSAGE = "Your analysis is being generated, please check back shortly"
ESTIMATED_COMPLETION = "usually 2-5 minutes"

NEXT_STEPS = [
    "Review the detailed analysis report",
    "Pick one or two recommendations to act on this month",
    "Retake the assessment in six months to track your growth",
]


def analysis_cache_key(submission_id: str) -> str:
    return f"analysis:{submission_id}"


class ResultPoller:

    def __init__(
        self,
        result_repository: AnalysisResultRepository,
        submission_repository: SubmissionRepository,
        cache: Optional[RedisCache] = None,
        cache_ttl_seconds: int = 3600,
    ):
        self.result_repository = result_repository
        self.submission_repository = submission_repository
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds

    async def poll(self, submission_id: str) -> Union[CompletedData, ProcessingData]:
        """
        Current state of a submission's analysis.

        Raises:
            SubmissionNotFoundError: the submission was never stored.
        """
        result = await self.find_result(submission_id)
        if result is not None:
            return CompletedData(analysis=AnalysisView.from_result(result))

        submission = await asyncio.to_thread(self.submission_repository.get_by_id, submission_id)
        if submission is None:
            raise SubmissionNotFoundError(submission_id)

        elapsed = datetime.now(timezone.utc) - submission.submitted_at
        return ProcessingData(
            message=PROCESSING_MESSAGE,
            elapsed_time=int(round_half_up(max(0.0, elapsed.total_seconds()) / 60)),
            estimated_completion=ESTIMATED_COMPLETION,
        )

    async def get_by_id(self, analysis_id: str) -> AnalysisView:
        result = await asyncio.to_thread(self.result_repository.get_by_id, analysis_id)
        if result is None:
            raise AnalysisNotFoundError(analysis_id)
        return AnalysisView.from_result(result)

    async def summary(self, submission_id: str) -> AnalysisSummaryData:
        """Condensed view: top three recommendations plus next steps."""
        result = await self.find_result(submission_id)
        if result is None:
            submission = await asyncio.to_thread(self.submission_repository.get_by_id, submission_id)
            if submission is None:
                raise SubmissionNotFoundError(submission_id)
            return AnalysisSummaryData(
                status=AnalysisStatus.NO_ANALYSIS,
                message="No analysis available yet",
            )
        return AnalysisSummaryData(
            status=AnalysisStatus.COMPLETED,
            summary=result.summary,
            key_recommendations=result.recommendations[:3],
            confidence_score=result.confidence_score,
            created_at=result.created_at,
            next_steps=NEXT_STEPS,
        )

    async def find_result(self, submission_id: str) -> Optional[AnalysisResult]:
        key = analysis_cache_key(submission_id)
        if self.cache:
            try:
                cached = self.cache.get(key, AnalysisResult)
                if cached is not None:
                    return cached
            except Exception as e:
                logger.warning("Analysis cache read failed: %s", e)

        result = await asyncio.to_thread(self.result_repository.get_by_submission_id, submission_id)
        if result is not None and self.cache:
            try:
                self.cache.set(key, result, self.cache_ttl_seconds)
            except Exception as e:
                logger.warning("Analysis cache write failed: %s", e)
        return result
