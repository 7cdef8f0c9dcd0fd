"""
Analysis Worker - Career Compass
career_compass/services/analysis_worker.py

Consumes the analysis outbox. Two entry points feed the same claim-then-run
path:

  schedule(id)   detached task started right after a submission commits
  sweep()        periodic pass over pending (or stale in-flight) markers, which
                 picks up submissions whose detached task was lost to a restart

A marker is claimed with a conditional update, so only one runner proceeds
per submission. Failed markers are left failed; nothing retries them.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Set

import structlog

from career_compass.repositories.analysis_job_repository import AnalysisJobRepository
from career_compass.services.analysis_orchestrator import (
    AnalysisOrchestrator,
    OrchestrationOutcome,
    OrchestrationState,
)
from career_compass.shutdown import is_shutting_down

logger = structlog.get_logger(__name__)


class AnalysisWorker:

    def __init__(
        self,
        orchestrator: AnalysisOrchestrator,
        job_repository: AnalysisJobRepository,
        poll_interval_seconds: float = 15.0,
        batch_size: int = 10,
        stale_claim_seconds: int = 600,
    ):
        self.orchestrator = orchestrator
        self.job_repository = job_repository
        self.poll_interval_seconds = poll_interval_seconds
        self.batch_size = batch_size
        self.stale_claim_seconds = stale_claim_seconds
        self._tasks: Set[asyncio.Task] = set()

    def schedule(self, submission_id: str) -> asyncio.Task:
        """Start processing in the background; the caller does not wait."""
        task = asyncio.create_task(self.process(submission_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def _stale_before(self) -> datetime:
        return datetime.now(timezone.utc) - timedelta(seconds=self.stale_claim_seconds)

    async def process(self, submission_id: str) -> Optional[OrchestrationOutcome]:
        """
        Claim the submission's marker and run the orchestrator once.

        Returns:
            The outcome, or None when another runner holds the claim or the
            run raised (the marker is then marked failed).
        """
        log = logger.bind(submission_id=submission_id)
        claimed = await asyncio.to_thread(
            self.job_repository.claim, submission_id, self._stale_before())
        if not claimed:
            log.info("analysis_job_not_claimed")
            return None

        try:
            outcome = await self.orchestrator.run(submission_id)
        except Exception as e:
            log.error("analysis_job_failed", error_type=type(e).__name__, error=str(e))
            await asyncio.to_thread(
                self.job_repository.mark_failed, submission_id, f"{type(e).__name__}: {e}")
            return None

        if outcome.state == OrchestrationState.PERSISTED:
            await asyncio.to_thread(self.job_repository.mark_completed, submission_id)
        else:
            await asyncio.to_thread(
                self.job_repository.mark_failed, submission_id, outcome.error or "persist failed")
        return outcome

    async def sweep(self) -> List[OrchestrationOutcome]:
        """Process one batch of claimable markers."""
        submission_ids = await asyncio.to_thread(
            self.job_repository.list_claimable, self._stale_before(), self.batch_size)
        outcomes: List[OrchestrationOutcome] = []
        for submission_id in submission_ids:
            if is_shutting_down():
                break
            outcome = await self.process(submission_id)
            if outcome is not None:
                outcomes.append(outcome)
        if submission_ids:
            logger.info("analysis_sweep_finished", found=len(submission_ids), processed=len(outcomes))
        return outcomes

    async def run_forever(self) -> None:
        """Sweep periodically until the application shuts down."""
        logger.info("analysis_worker_started", interval_seconds=self.poll_interval_seconds)
        while not is_shutting_down():
            try:
                await self.sweep()
            except Exception as e:
                logger.error("analysis_sweep_failed", error_type=type(e).__name__, error=str(e))
            await asyncio.sleep(self.poll_interval_seconds)
        logger.info("analysis_worker_stopped")
