"""
Logging proxy for analysis strategies.

Wraps any AnalysisStrategy and records start, outcome and duration of each
call. Composition only: the wrapped strategy is unaware of it.
"""
import time

import structlog

from career_compass.models.analysis import AnalysisReport
from career_compass.scoring.context import AnalysisContext
from career_compass.scoring.strategy import AnalysisStrategy

logger = structlog.get_logger(__name__)


class LoggedStrategy(AnalysisStrategy):

    def __init__(self, inner: AnalysisStrategy):
        self.inner = inner
        self.method = inner.method
        self.model_name = inner.model_name

    async def analyze(self, context: AnalysisContext) -> AnalysisReport:
        started = time.perf_counter()
        log = logger.bind(
            submission_id=context.submission.id,
            method=self.method.value,
            model=self.model_name,
        )
        log.info("strategy_started")
        try:
            report = await self.inner.analyze(context)
        except BaseException as e:
            # CancelledError included: a timed-out AI call is cancelled here
            log.warning(
                "strategy_failed",
                error_type=type(e).__name__,
                error=str(e)[:200],
                duration_ms=int((time.perf_counter() - started) * 1000),
            )
            raise
        log.info(
            "strategy_finished",
            confidence=report.confidence_score,
            recommendation_count=len(report.recommendations),
            duration_ms=int((time.perf_counter() - started) * 1000),
        )
        return report
