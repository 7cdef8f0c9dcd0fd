import asyncio
from typing import Optional

import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

# IMPORT ROUTERS
from career_compass.config import settings
from career_compass.core.dependencies import get_analysis_worker
from career_compass.core.logging import configure_logging
from career_compass.routers.analysis import router as analysis_router
from career_compass.routers.health import router as health_router
from career_compass.routers.submissions import router as submissions_router
from career_compass.routers.submissions import validation_exception_handler
from career_compass.routers.survey import router as survey_router
from career_compass.shutdown import reset_shutdown, set_shutdown

logger = structlog.get_logger(__name__)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Survey"},
    {"name": "Submissions"},
    {"name": "Analysis"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)           # Health
app.include_router(survey_router)           # Survey
app.include_router(submissions_router)      # Submissions
app.include_router(analysis_router)         # Analysis

_worker_task: Optional[asyncio.Task] = None


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    global _worker_task
    configure_logging(settings)
    reset_shutdown()
    logger.info("app_starting", app=settings.APP_NAME, env=settings.APP_ENV,
                ai_configured=settings.ai_configured)

    if settings.ANALYSIS_WORKER_ENABLED:
        _worker_task = asyncio.create_task(get_analysis_worker().run_forever())


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    global _worker_task
    logger.info("app_shutting_down")
    set_shutdown()
    if _worker_task is not None:
        _worker_task.cancel()
        try:
            await _worker_task
        except asyncio.CancelledError:
            pass
        _worker_task = None


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "career_compass.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
