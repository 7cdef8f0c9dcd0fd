"""
Custom Exceptions - Career Compass
career_compass/core/exceptions.py

Exception classes for repository operations and the analysis pipeline.
"""

from typing import List


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in database."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


class ForeignKeyViolationException(RepositoryException):
    """Foreign key constraint violation."""

    def __init__(self, message: str = "Foreign key constraint violation"):
        self.message = message
        super().__init__(message)


# ---------------------------------------------------------------------------
# Intake
# ---------------------------------------------------------------------------

class MissingInstrumentsError(Exception):
    """Profile or one or more instrument answer groups were not submitted."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required groups: {', '.join(self.missing)}")


class InvalidAnswerError(Exception):
    """An answer value does not fit its question type."""

    def __init__(self, question_code: str, reason: str):
        self.question_code = question_code
        self.reason = reason
        super().__init__(f"Invalid answer for question '{question_code}': {reason}")


# ---------------------------------------------------------------------------
# Analysis read path
# ---------------------------------------------------------------------------

class SubmissionNotFoundError(EntityNotFoundException):
    def __init__(self, submission_id: str):
        super().__init__("Submission", submission_id)


class AnalysisNotFoundError(EntityNotFoundException):
    def __init__(self, analysis_id: str):
        super().__init__("AnalysisResult", analysis_id)


# ---------------------------------------------------------------------------
# AI strategy
# ---------------------------------------------------------------------------

class AIResponseError(Exception):
    """The model answered, but not with a usable JSON object."""

    pass
