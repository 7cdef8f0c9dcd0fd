"""
Repositories Package - Career Compass
career_compass/repositories/__init__.py

Data access layer for Snowflake database operations.
"""

from career_compass.repositories.base import BaseRepository
from career_compass.repositories.analysis_job_repository import AnalysisJobRepository
from career_compass.repositories.analysis_result_repository import AnalysisResultRepository
from career_compass.repositories.knowledge_repository import KnowledgeRepository
from career_compass.repositories.submission_repository import SubmissionRepository
from career_compass.repositories.survey_repository import SurveyRepository

__all__ = [
    "BaseRepository",
    "AnalysisJobRepository",
    "AnalysisResultRepository",
    "KnowledgeRepository",
    "SubmissionRepository",
    "SurveyRepository",
]
