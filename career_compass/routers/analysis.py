"""
Analysis Router - Career Compass
career_compass/routers/analysis.py

Polling and read endpoints for analysis results.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse

from career_compass.core.dependencies import get_result_poller
from career_compass.core.exceptions import AnalysisNotFoundError, SubmissionNotFoundError
from career_compass.models.analysis import (
    AnalysisResultResponse,
    AnalysisSummaryResponse,
    PollResponse,
    UserNotFoundResponse,
)
from career_compass.models.common import ErrorResponse
from career_compass.services.result_poller import ResultPoller

router = APIRouter(prefix="/api/v1/analysis", tags=["Analysis"])



#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str):
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(
            error_code=error_code,
            message=message,
            details=None,
            timestamp=datetime.now(timezone.utc),
        ).model_dump(mode="json"),
    )


def user_not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=UserNotFoundResponse().model_dump(mode="json"),
    )


_USER_NOT_FOUND_RESPONSE = {
    "model": UserNotFoundResponse,
    "description": "No submission with this ID",
    "content": {
        "application/json": {
            "example": {"error": "user not found", "status": "user_not_found"}
        }
    },
}



#  Routes


@router.get(
    "/results/{analysis_id}",
    response_model=AnalysisResultResponse,
    responses={
        404: {
            "model": ErrorResponse,
            "description": "Analysis result not found",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error_code": "ANALYSIS_NOT_FOUND",
                            "message": "Analysis result not found",
                            "details": None,
                            "timestamp": "2026-03-02T09:14:05.118Z",
                        }
                    }
                }
            },
        },
    },
    summary="Get analysis result by ID",
)
async def get_analysis_result(
    analysis_id: str,
    poller: ResultPoller = Depends(get_result_poller),
):
    try:
        view = await poller.get_by_id(analysis_id)
    except AnalysisNotFoundError:
        raise_error(status.HTTP_404_NOT_FOUND, "ANALYSIS_NOT_FOUND", "Analysis result not found")
    return AnalysisResultResponse(data=view)


@router.get(
    "/{submission_id}",
    response_model=PollResponse,
    responses={
        200: {
            "description": "Analysis still running, or finished",
            "content": {
                "application/json": {
                    "examples": {
                        "processing": {
                            "value": {
                                "success": True,
                                "data": {
                                    "status": "processing",
                                    "message": "Your analysis is being generated, please check back shortly",
                                    "elapsedTime": 1,
                                    "estimatedCompletion": "usually 2-5 minutes",
                                },
                            }
                        },
                        "completed": {
                            "value": {
                                "success": True,
                                "data": {
                                    "status": "completed",
                                    "analysis": {
                                        "id": "9b2f4c1e-3a57-4d2b-8f0e-51c6a7d9e210",
                                        "summary": "Analytical INTJ with strong investigative interests...",
                                        "detailedAnalysis": {},
                                        "recommendations": ["Data scientist"],
                                        "confidenceScore": 1.0,
                                        "knowledgeSources": ["kb-12"],
                                        "processingTime": 84,
                                        "createdAt": "2026-03-02T09:15:41.002Z",
                                        "method": "rule",
                                        "modelUsed": "rule-based",
                                    },
                                },
                            }
                        },
                    }
                }
            },
        },
        404: _USER_NOT_FOUND_RESPONSE,
    },
    summary="Poll analysis status",
    description="Returns `processing` until the analysis is stored, then `completed` with the result.",
)
async def poll_analysis(
    submission_id: str,
    poller: ResultPoller = Depends(get_result_poller),
):
    try:
        data = await poller.poll(submission_id)
    except SubmissionNotFoundError:
        return user_not_found()
    return PollResponse(data=data)


@router.get(
    "/{submission_id}/summary",
    response_model=AnalysisSummaryResponse,
    responses={404: _USER_NOT_FOUND_RESPONSE},
    summary="Condensed analysis",
    description="Summary, top three recommendations and suggested next steps.",
)
async def get_analysis_summary(
    submission_id: str,
    poller: ResultPoller = Depends(get_result_poller),
):
    try:
        data = await poller.summary(submission_id)
    except SubmissionNotFoundError:
        return user_not_found()
    return AnalysisSummaryResponse(data=data)
