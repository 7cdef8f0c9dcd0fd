"""
Submission Repository - Career Compass
career_compass/repositories/submission_repository.py

Submissions and their answers. A submission, all of its answers and its
pending analysis marker are written in one transaction.
"""

import logging
from typing import Dict, List, Optional

from career_compass.models.enumerations import Instrument, QuestionType
from career_compass.models.submission import (
    Answer,
    Profile,
    Submission,
    answer_from_wire,
    answer_to_wire,
)
from career_compass.repositories.analysis_job_repository import INSERT_PENDING_JOB_SQL
from career_compass.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SubmissionRepository(BaseRepository):
    """Repository for submissions and answers."""

    def create(self, submission: Submission, answers: List[Answer]) -> Submission:
        """
        Persist a submission, its answers and its outbox marker atomically.

        Args:
            submission: The new submission
            answers: Answers already bound to ``submission.id``

        Returns:
            The persisted submission
        """
        with self.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO SUBMISSIONS (ID, PROFILE, INSTRUMENTS, SUBMITTED_AT)
                SELECT %s, PARSE_JSON(%s), PARSE_JSON(%s), %s
                """,
                (
                    submission.id,
                    self.to_variant(submission.profile.model_dump(mode="json")),
                    self.to_variant([i.value for i in submission.instruments]),
                    submission.submitted_at,
                ),
            )
            if answers:
                cursor.executemany(
                    """
                    INSERT INTO SUBMISSION_ANSWERS (SUBMISSION_ID, QUESTION_ID, MODEL_ID, VALUE)
                    SELECT %s, %s, %s, PARSE_JSON(%s)
                    """,
                    [
                        (
                            answer.submission_id,
                            answer.question_id,
                            answer.model_id,
                            self.to_variant(answer_to_wire(answer.value)),
                        )
                        for answer in answers
                    ],
                )
            cursor.execute(INSERT_PENDING_JOB_SQL, (submission.id, submission.submitted_at))

        logger.info(
            "Submission stored",
            extra={"submission_id": submission.id, "answer_count": len(answers)},
        )
        return submission

    def get_by_id(self, submission_id: str) -> Optional[Submission]:
        row = self.execute_query(
            "SELECT ID, PROFILE, INSTRUMENTS, SUBMITTED_AT FROM SUBMISSIONS WHERE ID = %s",
            (submission_id,),
            fetch_one=True,
        )
        if not row:
            return None
        data = self.row_to_dict(row)
        return Submission(
            id=str(data["id"]),
            profile=Profile.model_validate(self.parse_variant(data["profile"], default={})),
            instruments=[Instrument(i) for i in self.parse_variant(data["instruments"], default=[])],
            submitted_at=self.normalize_timestamp(data["submitted_at"]),
        )

    def get_answers(self, submission_id: str) -> List[Answer]:
        """Answers of a submission; the question type selects the value variant."""
        rows = self.execute_query(
            """
            SELECT a.SUBMISSION_ID, a.QUESTION_ID, a.MODEL_ID, a.VALUE, q.TYPE
            FROM SUBMISSION_ANSWERS a
            JOIN SURVEY_QUESTIONS q ON q.ID = a.QUESTION_ID
            WHERE a.SUBMISSION_ID = %s
            """,
            (submission_id,),
            fetch_all=True,
        )
        return [self._row_to_answer(r) for r in rows or []]

    def _row_to_answer(self, row: Dict) -> Answer:
        data = self.row_to_dict(row)
        return Answer(
            submission_id=str(data["submission_id"]),
            question_id=str(data["question_id"]),
            model_id=str(data["model_id"]),
            value=answer_from_wire(QuestionType(data["type"]), self.parse_variant(data["value"])),
        )
