"""
Status Reporter - Career Compass
career_compass/services/status_reporter.py

Time-boxed system health. The AI probe has its own short bound and the whole
check has a longer one; if the outer bound trips, or anything raises, the
degraded shape is returned instead of an error.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

import structlog
from openai import AsyncOpenAI

from career_compass.models.enumerations import HealthStatus
from career_compass.models.health import (
    AIServiceHealth,
    AIStatus,
    AnalysisServiceHealth,
    Capabilities,
    DatabaseHealth,
    ServicesHealth,
    SystemHealth,
)
from career_compass.repositories.base import BaseRepository
from career_compass.services.llm_client import PROVIDER, probe_llm

logger = structlog.get_logger(__name__)


class StatusReporter:

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: str,
        database: BaseRepository,
        version: str = "1.0.0",
        ai_probe_timeout_seconds: float = 5.0,
        health_timeout_seconds: float = 10.0,
    ):
        self.client = client
        self.model = model
        self.database = database
        self.version = version
        self.ai_probe_timeout_seconds = ai_probe_timeout_seconds
        self.health_timeout_seconds = health_timeout_seconds

    async def ai_status(self) -> AIStatus:
        probe = await probe_llm(self.client, self.model, self.ai_probe_timeout_seconds)
        return AIStatus(**probe)

    async def database_status(self) -> DatabaseHealth:
        try:
            await asyncio.to_thread(self.database.ping)
        except Exception as e:
            logger.warning("database_probe_failed", error_type=type(e).__name__, error=str(e)[:200])
            return DatabaseHealth(status="unhealthy", message=f"{type(e).__name__}: {str(e)[:100]}")
        return DatabaseHealth(status="healthy")

    async def system_health(self) -> SystemHealth:
        """Always answers within ``health_timeout_seconds``."""
        try:
            return await asyncio.wait_for(self._check(), timeout=self.health_timeout_seconds)
        except asyncio.TimeoutError:
            logger.error("health_check_timed_out", timeout_seconds=self.health_timeout_seconds)
            return self.degraded(f"health check exceeded {self.health_timeout_seconds:g}s")
        except Exception as e:
            logger.error("health_check_failed", error_type=type(e).__name__, error=str(e))
            return self.degraded(str(e))

    async def _check(self) -> SystemHealth:
        ai, database = await asyncio.gather(self.ai_status(), self.database_status())
        database_ok = database.status == "healthy"
        return SystemHealth(
            status=HealthStatus.HEALTHY if database_ok else HealthStatus.DEGRADED,
            timestamp=datetime.now(timezone.utc),
            version=self.version,
            services=ServicesHealth(
                ai=AIServiceHealth(
                    status="healthy" if ai.available else "degraded",
                    provider=ai.provider,
                    model=ai.model,
                    message=ai.message,
                ),
                database=database,
                analysis=AnalysisServiceHealth(
                    fallback="ai-powered" if ai.available else "rule-based"),
            ),
            capabilities=Capabilities(
                ai_analysis=ai.available,
                knowledge_base=database_ok,
                real_time_analysis=ai.available,
            ),
        )

    def degraded(self, error: str) -> SystemHealth:
        return SystemHealth(
            status=HealthStatus.DEGRADED,
            timestamp=datetime.now(timezone.utc),
            version=self.version,
            services=ServicesHealth(
                ai=AIServiceHealth(
                    status="unknown",
                    provider=PROVIDER,
                    model=self.model,
                    message="health check timed out or failed",
                ),
                database=DatabaseHealth(status="unknown"),
                analysis=AnalysisServiceHealth(fallback="rule-based"),
            ),
            capabilities=Capabilities(
                ai_analysis=False,
                knowledge_base=False,
                real_time_analysis=False,
            ),
            error=error,
        )
