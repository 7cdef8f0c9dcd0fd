"""
Analysis Result Repository - Career Compass
career_compass/repositories/analysis_result_repository.py

At most one AnalysisResult per submission. Snowflake does not enforce UNIQUE
constraints, so the insert is a MERGE keyed by SUBMISSION_ID that only
inserts when no row exists (insert-or-ignore).
"""

import logging
from typing import Dict, Optional

from career_compass.models.analysis import AnalysisResult
from career_compass.models.enumerations import AnalysisMethod
from career_compass.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

RESULT_COLUMNS = """
    ID, SUBMISSION_ID, SUMMARY, DETAILED_ANALYSIS, RECOMMENDATIONS, CONFIDENCE_SCORE,
    KNOWLEDGE_SOURCES, METHOD, MODEL_USED, PROCESSING_TIME_MS, CREATED_AT
"""


class AnalysisResultRepository(BaseRepository):
    """Repository for analysis results."""

    def insert_if_absent(self, result: AnalysisResult) -> bool:
        """
        Insert the result unless one already exists for its submission.

        Returns:
            True if a row was inserted, False if the submission already had one.
        """
        inserted = self.execute_query(
            """
            MERGE INTO ANALYSIS_RESULTS t
            USING (
                SELECT %s AS ID, %s AS SUBMISSION_ID, %s AS SUMMARY,
                       PARSE_JSON(%s) AS DETAILED_ANALYSIS, PARSE_JSON(%s) AS RECOMMENDATIONS,
                       %s AS CONFIDENCE_SCORE, PARSE_JSON(%s) AS KNOWLEDGE_SOURCES,
                       %s AS METHOD, %s AS MODEL_USED, %s AS PROCESSING_TIME_MS,
                       %s AS CREATED_AT
            ) s
            ON t.SUBMISSION_ID = s.SUBMISSION_ID
            WHEN NOT MATCHED THEN INSERT (
                ID, SUBMISSION_ID, SUMMARY, DETAILED_ANALYSIS, RECOMMENDATIONS,
                CONFIDENCE_SCORE, KNOWLEDGE_SOURCES, METHOD, MODEL_USED,
                PROCESSING_TIME_MS, CREATED_AT
            ) VALUES (
                s.ID, s.SUBMISSION_ID, s.SUMMARY, s.DETAILED_ANALYSIS, s.RECOMMENDATIONS,
                s.CONFIDENCE_SCORE, s.KNOWLEDGE_SOURCES, s.METHOD, s.MODEL_USED,
                s.PROCESSING_TIME_MS, s.CREATED_AT
            )
            """,
            (
                result.id,
                result.submission_id,
                result.summary,
                self.to_variant(result.detailed_analysis),
                self.to_variant(result.recommendations),
                result.confidence_score,
                self.to_variant(result.knowledge_source_ids),
                result.method.value,
                result.model_used,
                result.processing_time_ms,
                result.created_at,
            ),
            commit=True,
        )
        if not inserted:
            logger.info(
                "Analysis result already present, insert ignored",
                extra={"submission_id": result.submission_id},
            )
        return bool(inserted)

    def get_by_submission_id(self, submission_id: str) -> Optional[AnalysisResult]:
        row = self.execute_query(
            f"""
            SELECT {RESULT_COLUMNS}
            FROM ANALYSIS_RESULTS
            WHERE SUBMISSION_ID = %s
            ORDER BY CREATED_AT DESC
            LIMIT 1
            """,
            (submission_id,),
            fetch_one=True,
        )
        return self._row_to_result(row) if row else None

    def get_by_id(self, analysis_id: str) -> Optional[AnalysisResult]:
        row = self.execute_query(
            f"SELECT {RESULT_COLUMNS} FROM ANALYSIS_RESULTS WHERE ID = %s",
            (analysis_id,),
            fetch_one=True,
        )
        return self._row_to_result(row) if row else None

    def _row_to_result(self, row: Dict) -> AnalysisResult:
        data = self.row_to_dict(row)
        return AnalysisResult(
            id=str(data["id"]),
            submission_id=str(data["submission_id"]),
            summary=data.get("summary") or "",
            detailed_analysis=self.parse_variant(data.get("detailed_analysis"), default={}),
            recommendations=self.parse_variant(data.get("recommendations"), default=[]),
            confidence_score=float(data.get("confidence_score") or 0),
            knowledge_source_ids=self.parse_variant(data.get("knowledge_sources"), default=[]),
            method=AnalysisMethod(data["method"]),
            model_used=data.get("model_used"),
            processing_time_ms=int(data.get("processing_time_ms") or 0),
            created_at=self.normalize_timestamp(data["created_at"]),
        )
