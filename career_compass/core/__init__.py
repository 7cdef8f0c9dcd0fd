"""
Core Package - Career Compass
career_compass/core/__init__.py

Core infrastructure: exceptions, logging setup and the dependency wiring
(import career_compass.core.dependencies directly; it pulls in every service).
"""

from career_compass.core.exceptions import (
    AIResponseError,
    AnalysisNotFoundError,
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
    ForeignKeyViolationException,
    InvalidAnswerError,
    MissingInstrumentsError,
    RepositoryException,
    SubmissionNotFoundError,
)

__all__ = [
    "AIResponseError",
    "AnalysisNotFoundError",
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "ForeignKeyViolationException",
    "InvalidAnswerError",
    "MissingInstrumentsError",
    "RepositoryException",
    "SubmissionNotFoundError",
]
