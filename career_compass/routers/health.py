"""
Health Check Router - Career Compass
career_compass/routers/health.py

System and AI availability. Always answers 200: a slow or failing dependency
shows up as a degraded payload, never as an error response.
"""

from fastapi import APIRouter, Depends

from career_compass.core.dependencies import get_status_reporter
from career_compass.models.health import AIStatusResponse, SystemHealthResponse
from career_compass.services.status_reporter import StatusReporter

router = APIRouter(prefix="/api/v1", tags=["Health"])


@router.get(
    "/health",
    response_model=SystemHealthResponse,
    responses={
        200: {
            "description": "Healthy, or degraded when the database is unreachable or the check timed out",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "status": "healthy",
                            "timestamp": "2026-03-02T09:14:05.118Z",
                            "version": "1.0.0",
                            "services": {
                                "ai": {
                                    "status": "degraded",
                                    "provider": "openai-compatible",
                                    "model": "gpt-4o-mini",
                                    "message": "AI client not configured, rule-based analysis in use",
                                },
                                "database": {"status": "healthy", "provider": "snowflake", "message": None},
                                "analysis": {"status": "healthy", "fallback": "rule-based"},
                            },
                            "capabilities": {
                                "aiAnalysis": False,
                                "ruleBasedFallback": True,
                                "knowledgeBase": True,
                                "realTimeAnalysis": False,
                            },
                            "error": None,
                        },
                    }
                }
            },
        },
    },
    summary="System health",
)
async def health_check(reporter: StatusReporter = Depends(get_status_reporter)):
    return SystemHealthResponse(data=await reporter.system_health())


@router.get(
    "/health/ai",
    response_model=AIStatusResponse,
    summary="AI availability",
    description="Lists models at the provider, bounded by AI_PROBE_TIMEOUT_SECONDS.",
)
async def ai_status(reporter: StatusReporter = Depends(get_status_reporter)):
    return AIStatusResponse(data=await reporter.ai_status())
