"""
Analysis Job Repository - Career Compass
career_compass/repositories/analysis_job_repository.py

Outbox of pending analyses. The pending row is inserted by
SubmissionRepository.create inside the submission transaction
(see INSERT_PENDING_JOB_SQL); this repository claims and settles it.
"""

import logging
from datetime import datetime, timezone
from typing import List

from career_compass.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

INSERT_PENDING_JOB_SQL = """
    INSERT INTO ANALYSIS_JOBS (SUBMISSION_ID, STATUS, ATTEMPTS, CREATED_AT)
    VALUES (%s, 'pending', 0, %s)
"""

# A job is claimable when pending, or when a previous claim went stale
# (the worker holding it died before settling it).
CLAIMABLE_CONDITION = """
    (STATUS = 'pending' OR (STATUS = 'processing' AND CLAIMED_AT < %s))
"""

MAX_ERROR_LENGTH = 2000


class AnalysisJobRepository(BaseRepository):
    """Repository for analysis outbox markers."""

    def claim(self, submission_id: str, stale_before: datetime) -> bool:
        """
        Atomically move a claimable job to 'processing'.

        Returns:
            True if this caller won the claim.
        """
        now = datetime.now(timezone.utc)
        updated = self.execute_query(
            f"""
            UPDATE ANALYSIS_JOBS
            SET STATUS = 'processing', ATTEMPTS = ATTEMPTS + 1, CLAIMED_AT = %s
            WHERE SUBMISSION_ID = %s AND {CLAIMABLE_CONDITION}
            """,
            (now, submission_id, stale_before),
            commit=True,
        )
        claimed = updated == 1
        logger.debug("Job claim", extra={"submission_id": submission_id, "claimed": claimed})
        return claimed

    def list_claimable(self, stale_before: datetime, limit: int) -> List[str]:
        rows = self.execute_query(
            f"""
            SELECT SUBMISSION_ID FROM ANALYSIS_JOBS
            WHERE {CLAIMABLE_CONDITION}
            ORDER BY CREATED_AT
            LIMIT %s
            """,
            (stale_before, limit),
            fetch_all=True,
        )
        return [str(self.row_to_dict(r)["submission_id"]) for r in rows or []]

    def mark_completed(self, submission_id: str) -> None:
        self.execute_query(
            """
            UPDATE ANALYSIS_JOBS
            SET STATUS = 'completed', COMPLETED_AT = %s, LAST_ERROR = NULL
            WHERE SUBMISSION_ID = %s
            """,
            (datetime.now(timezone.utc), submission_id),
            commit=True,
        )

    def mark_failed(self, submission_id: str, error: str) -> None:
        self.execute_query(
            """
            UPDATE ANALYSIS_JOBS
            SET STATUS = 'failed', COMPLETED_AT = %s, LAST_ERROR = %s
            WHERE SUBMISSION_ID = %s
            """,
            (datetime.now(timezone.utc), error[:MAX_ERROR_LENGTH], submission_id),
            commit=True,
        )
