"""
Survey Router - Career Compass
career_compass/routers/survey.py

Read-only instrument catalog, cached in Redis.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.exceptions import HTTPException

from career_compass.core.dependencies import get_survey_catalog
from career_compass.core.exceptions import EntityNotFoundException
from career_compass.models.common import ErrorResponse
from career_compass.models.survey import InstrumentModelList, QuestionList
from career_compass.services.survey_catalog import SurveyCatalog

router = APIRouter(prefix="/api/v1/survey", tags=["Survey"])


def raise_model_not_found(model_code: str):
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=ErrorResponse(
            error_code="MODEL_NOT_FOUND",
            message=f"Survey model '{model_code}' not found",
            details={"model_code": model_code},
            timestamp=datetime.now(timezone.utc),
        ).model_dump(mode="json"),
    )


@router.get(
    "/models",
    response_model=InstrumentModelList,
    summary="List instrument models",
    description="The six assessment instruments. Cached for 24 hours.",
)
async def list_models(catalog: SurveyCatalog = Depends(get_survey_catalog)):
    return await catalog.list_models()


@router.get(
    "/models/{model_code}/questions",
    response_model=QuestionList,
    responses={
        404: {
            "model": ErrorResponse,
            "description": "Unknown model code",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error_code": "MODEL_NOT_FOUND",
                            "message": "Survey model 'astrology' not found",
                            "details": {"model_code": "astrology"},
                            "timestamp": "2026-03-02T09:14:05.118Z",
                        }
                    }
                }
            },
        },
    },
    summary="List questions of an instrument",
)
async def list_questions(
    model_code: str,
    catalog: SurveyCatalog = Depends(get_survey_catalog),
):
    try:
        return await catalog.questions(model_code)
    except EntityNotFoundException:
        raise_model_not_found(model_code)
