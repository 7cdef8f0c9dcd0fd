"""
Analysis Models - Career Compass
career_compass/models/analysis.py

Strategy output (AnalysisReport), the persisted AnalysisResult, the outbox
marker and the polling payloads.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from career_compass.models.common import CamelModel
from career_compass.models.enumerations import AnalysisMethod, AnalysisStatus, JobStatus


class AnalysisReport(BaseModel):
    """What a strategy produces; identical schema for the AI and rule paths."""
    model_config = ConfigDict(protected_namespaces=())

    summary: str
    detailed_analysis: Dict[str, Any] = Field(default_factory=dict)
    recommendations: List[str] = Field(default_factory=list)
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    method: AnalysisMethod
    model_used: Optional[str] = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    id: str
    submission_id: str
    summary: str
    detailed_analysis: Dict[str, Any] = Field(default_factory=dict)
    recommendations: List[str] = Field(default_factory=list)
    confidence_score: float
    knowledge_source_ids: List[str] = Field(default_factory=list)
    method: AnalysisMethod
    model_used: Optional[str] = None
    processing_time_ms: int = Field(default=0, ge=0)
    created_at: datetime

    @field_validator("confidence_score")
    @classmethod
    def clamp_confidence(cls, v: float) -> float:
        return max(0.0, min(1.0, float(v)))


class AnalysisJob(BaseModel):
    """Outbox marker written with its submission."""
    submission_id: str
    status: JobStatus = JobStatus.PENDING
    attempts: int = 0
    claimed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    last_error: Optional[str] = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Wire payloads
# ---------------------------------------------------------------------------

class AnalysisView(CamelModel):
    id: str
    summary: str
    detailed_analysis: Dict[str, Any]
    recommendations: List[str]
    confidence_score: float
    knowledge_sources: List[str]
    processing_time: int = Field(..., description="Milliseconds spent producing the analysis")
    created_at: datetime
    method: AnalysisMethod
    model_used: Optional[str] = None

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisView":
        return cls(
            id=result.id,
            summary=result.summary,
            detailed_analysis=result.detailed_analysis,
            recommendations=result.recommendations,
            confidence_score=result.confidence_score,
            knowledge_sources=result.knowledge_source_ids,
            processing_time=result.processing_time_ms,
            created_at=result.created_at,
            method=result.method,
            model_used=result.model_used,
        )


class ProcessingData(CamelModel):
    status: Literal[AnalysisStatus.PROCESSING] = AnalysisStatus.PROCESSING
    message: str
    elapsed_time: int = Field(..., description="Whole minutes since submission")
    estimated_completion: str


class CompletedData(CamelModel):
    status: Literal[AnalysisStatus.COMPLETED] = AnalysisStatus.COMPLETED
    analysis: AnalysisView


class PollResponse(CamelModel):
    success: bool = True
    data: Union[CompletedData, ProcessingData]


class AnalysisResultResponse(CamelModel):
    success: bool = True
    data: AnalysisView


class AnalysisSummaryData(CamelModel):
    status: AnalysisStatus
    message: Optional[str] = None
    summary: Optional[str] = None
    key_recommendations: List[str] = Field(default_factory=list)
    confidence_score: Optional[float] = None
    created_at: Optional[datetime] = None
    next_steps: List[str] = Field(default_factory=list)


class AnalysisSummaryResponse(CamelModel):
    success: bool = True
    data: AnalysisSummaryData


class UserNotFoundResponse(BaseModel):
    error: str = "user not found"
    status: Literal[AnalysisStatus.USER_NOT_FOUND] = AnalysisStatus.USER_NOT_FOUND
