"""
Submission Router - Career Compass
career_compass/routers/submissions.py

Answer intake. Also home of the shared request-validation handler that
main.py registers for every router.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from career_compass.core.dependencies import get_answer_intake_service
from career_compass.core.exceptions import (
    InvalidAnswerError,
    MissingInstrumentsError,
    RepositoryException,
)
from career_compass.models.common import ErrorResponse, MissingInstrumentsResponse
from career_compass.models.submission import SubmissionCreate, SubmissionReceipt
from career_compass.services.answer_intake import AnswerIntakeService

router = APIRouter(prefix="/api/v1", tags=["Submissions"])



#  Validation Error Messages


FIELD_MESSAGES = {
    "profile.name": {
        "missing": "Name is required",
        "string_too_short": "Name cannot be empty",
        "string_too_long": "Name must not exceed 100 characters",
    },
    "profile.age": {
        "missing": "Age is required",
        "less_than_equal": "Age must be between 1 and 120",
        "greater_than_equal": "Age must be between 1 and 120",
        "int_parsing": "Age must be a whole number",
        "int_type": "Age must be a whole number",
    },
    "profile.gender": {
        "missing": "Gender is required",
    },
    "profile.phone": {
        "string_too_long": "Phone number must not exceed 30 characters",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "string_type": "Field '{field}' must be a string",
    "dict_type": "Field '{field}' must be an object of question codes to answers",
    "model_type": "Field '{field}' must be an object",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "json_invalid": "Malformed JSON request body",
}


def get_validation_message(field: str, error_type: str) -> str:
    if field in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[field]:
            if key in error_type:
                return FIELD_MESSAGES[field][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error_code": "INVALID_REQUEST",
                "message": "Malformed JSON request body",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    field = ".".join(str(l) for l in loc if l != "body")
    message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": message,
            "details": {"field": field, "type": error_type} if field else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )



#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str, details: dict = None):
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(
            error_code=error_code,
            message=message,
            details=details,
            timestamp=datetime.now(timezone.utc),
        ).model_dump(mode="json"),
    )


def missing_instruments_response(exc: MissingInstrumentsError) -> JSONResponse:
    body = MissingInstrumentsResponse(
        error=f"Missing required groups: {', '.join(exc.missing)}",
        missing_instruments=exc.missing,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json", by_alias=True),
    )



#  Routes


@router.post(
    "/submissions",
    response_model=SubmissionReceipt,
    responses={
        400: {
            "model": MissingInstrumentsResponse,
            "description": "Profile or instrument groups missing, or an answer does not fit its question",
            "content": {
                "application/json": {
                    "example": {
                        "error_code": "MISSING_INSTRUMENT",
                        "error": "Missing required groups: disc, holland",
                        "missingInstruments": ["disc", "holland"],
                        "timestamp": "2026-03-02T09:14:05.118Z",
                    }
                }
            },
        },
        422: {
            "model": ErrorResponse,
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error_code": "VALIDATION_ERROR",
                        "message": "Age must be between 1 and 120",
                        "details": {"field": "profile.age", "type": "less_than_equal"},
                        "timestamp": "2026-03-02T09:14:05.118Z",
                    }
                }
            },
        },
        503: {
            "model": ErrorResponse,
            "description": "Submission could not be stored",
        },
    },
    summary="Submit assessment answers",
    description=(
        "Stores the profile and all six instrument answer groups, then starts the "
        "analysis in the background. Poll GET /api/v1/analysis/{submissionId} for the result."
    ),
)
async def create_submission(
    request: SubmissionCreate,
    service: AnswerIntakeService = Depends(get_answer_intake_service),
):
    try:
        return await service.submit(request)
    except MissingInstrumentsError as e:
        return missing_instruments_response(e)
    except InvalidAnswerError as e:
        raise_error(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_ANSWER",
            str(e),
            details={"question_code": e.question_code, "reason": e.reason},
        )
    except RepositoryException as e:
        raise_error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "SUBMISSION_NOT_STORED",
            f"Submission could not be stored: {e}",
        )
