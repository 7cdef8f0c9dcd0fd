from datetime import datetime
from typing import Optional

from pydantic import Field

from career_compass.models.common import CamelModel
from career_compass.models.enumerations import HealthStatus


class AIStatus(CamelModel):
    available: bool
    model: str
    provider: str
    message: str


class AIServiceHealth(CamelModel):
    status: str = Field(..., description="healthy, degraded or unknown")
    provider: str
    model: str
    message: str


class DatabaseHealth(CamelModel):
    status: str
    provider: str = "snowflake"
    message: Optional[str] = None


class AnalysisServiceHealth(CamelModel):
    status: str = "healthy"
    fallback: str = Field(..., description="ai-powered or rule-based")


class ServicesHealth(CamelModel):
    ai: AIServiceHealth
    database: DatabaseHealth
    analysis: AnalysisServiceHealth


class Capabilities(CamelModel):
    ai_analysis: bool
    rule_based_fallback: bool = True
    knowledge_base: bool
    real_time_analysis: bool


class SystemHealth(CamelModel):
    status: HealthStatus
    timestamp: datetime
    version: str
    services: ServicesHealth
    capabilities: Capabilities
    error: Optional[str] = None


class SystemHealthResponse(CamelModel):
    success: bool = True
    data: SystemHealth


class AIStatusResponse(CamelModel):
    success: bool = True
    data: AIStatus
