"""
Dependencies - Career Compass
career_compass/core/dependencies.py

Composition root. Every service is built here from injected handles and
cached, so one process holds one orchestrator, one worker and one set of
repositories. Routers depend on these getters; tests override them.
"""

from functools import lru_cache
from typing import Optional

from openai import AsyncOpenAI

from career_compass.config import get_settings
from career_compass.repositories.analysis_job_repository import AnalysisJobRepository
from career_compass.repositories.analysis_result_repository import AnalysisResultRepository
from career_compass.repositories.knowledge_repository import KnowledgeRepository
from career_compass.repositories.submission_repository import SubmissionRepository
from career_compass.repositories.survey_repository import SurveyRepository
from career_compass.scoring.ai_strategy import AIAnalysisStrategy
from career_compass.scoring.confidence_calculator import ConfidenceCalculator
from career_compass.scoring.logged_strategy import LoggedStrategy
from career_compass.scoring.rule_strategy import RuleBasedAnalysisStrategy
from career_compass.services.analysis_orchestrator import AnalysisOrchestrator
from career_compass.services.analysis_worker import AnalysisWorker
from career_compass.services.answer_intake import AnswerIntakeService
from career_compass.services.cache import get_cache
from career_compass.services.knowledge_retriever import KnowledgeRetriever
from career_compass.services.llm_client import build_llm_client
from career_compass.services.result_poller import ResultPoller
from career_compass.services.status_reporter import StatusReporter
from career_compass.services.survey_catalog import SurveyCatalog


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

@lru_cache()
def get_survey_repository() -> SurveyRepository:
    return SurveyRepository()


@lru_cache()
def get_submission_repository() -> SubmissionRepository:
    return SubmissionRepository()


@lru_cache()
def get_knowledge_repository() -> KnowledgeRepository:
    return KnowledgeRepository()


@lru_cache()
def get_analysis_result_repository() -> AnalysisResultRepository:
    return AnalysisResultRepository()


@lru_cache()
def get_analysis_job_repository() -> AnalysisJobRepository:
    return AnalysisJobRepository()


# ---------------------------------------------------------------------------
# Analysis pipeline
# ---------------------------------------------------------------------------

@lru_cache()
def get_llm_client() -> Optional[AsyncOpenAI]:
    """None when OPENAI_API_KEY is unset; the rule strategy is then the only path."""
    return build_llm_client(get_settings())


@lru_cache()
def get_knowledge_retriever() -> KnowledgeRetriever:
    return KnowledgeRetriever(
        get_knowledge_repository(),
        search_limit=get_settings().KNOWLEDGE_SEARCH_LIMIT,
    )


@lru_cache()
def get_rule_strategy() -> RuleBasedAnalysisStrategy:
    return RuleBasedAnalysisStrategy(ConfidenceCalculator())


@lru_cache()
def get_analysis_orchestrator() -> AnalysisOrchestrator:
    settings = get_settings()
    rule_strategy = get_rule_strategy()
    client = get_llm_client()

    ai_strategy = None
    if client is not None:
        ai_strategy = LoggedStrategy(AIAnalysisStrategy(
            client=client,
            model=settings.OPENAI_MODEL,
            rule_strategy=rule_strategy,
            temperature=settings.AI_TEMPERATURE,
            max_tokens=settings.AI_MAX_TOKENS,
        ))

    return AnalysisOrchestrator(
        submission_repository=get_submission_repository(),
        survey_repository=get_survey_repository(),
        result_repository=get_analysis_result_repository(),
        retriever=get_knowledge_retriever(),
        rule_strategy=LoggedStrategy(rule_strategy),
        ai_strategy=ai_strategy,
        ai_timeout_seconds=settings.AI_TIMEOUT_SECONDS,
    )


@lru_cache()
def get_analysis_worker() -> AnalysisWorker:
    settings = get_settings()
    return AnalysisWorker(
        orchestrator=get_analysis_orchestrator(),
        job_repository=get_analysis_job_repository(),
        poll_interval_seconds=settings.WORKER_POLL_INTERVAL_SECONDS,
        batch_size=settings.WORKER_BATCH_SIZE,
        stale_claim_seconds=settings.WORKER_STALE_CLAIM_SECONDS,
    )


# ---------------------------------------------------------------------------
# Request-facing services
# ---------------------------------------------------------------------------

@lru_cache()
def get_answer_intake_service() -> AnswerIntakeService:
    return AnswerIntakeService(
        survey_repository=get_survey_repository(),
        submission_repository=get_submission_repository(),
        scheduler=get_analysis_worker(),
    )


@lru_cache()
def get_result_poller() -> ResultPoller:
    return ResultPoller(
        result_repository=get_analysis_result_repository(),
        submission_repository=get_submission_repository(),
        cache=get_cache(),
        cache_ttl_seconds=get_settings().CACHE_TTL_ANALYSIS,
    )


@lru_cache()
def get_survey_catalog() -> SurveyCatalog:
    return SurveyCatalog(
        get_survey_repository(),
        cache=get_cache(),
        cache_ttl_seconds=get_settings().CACHE_TTL_CATALOG,
    )


@lru_cache()
def get_status_reporter() -> StatusReporter:
    settings = get_settings()
    return StatusReporter(
        client=get_llm_client(),
        model=settings.OPENAI_MODEL,
        database=get_survey_repository(),
        version=settings.APP_VERSION,
        ai_probe_timeout_seconds=settings.AI_PROBE_TIMEOUT_SECONDS,
        health_timeout_seconds=settings.HEALTH_CHECK_TIMEOUT_SECONDS,
    )
