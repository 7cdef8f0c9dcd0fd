# tests/test_status_reporter.py

"""
Status Reporter Tests - AI probe, database probe and the time-boxed
degraded shape.
"""

import asyncio

from career_compass.core.exceptions import DatabaseConnectionException
from career_compass.models.enumerations import HealthStatus
from career_compass.services.llm_client import PROVIDER
from career_compass.services.status_reporter import StatusReporter

from conftest import FakeAIClient, FakeModels


def reporter(harness, client=None, **kwargs):
    return StatusReporter(client=client, model="gpt-4o-mini", database=harness.survey, **kwargs)


class TestAIStatus:

    def test_no_client(self, harness):
        status = asyncio.run(reporter(harness).ai_status())
        assert status.available is False
        assert status.provider == PROVIDER
        assert "rule-based" in status.message

    def test_available(self, harness):
        status = asyncio.run(reporter(harness, FakeAIClient()).ai_status())
        assert status.available is True
        assert status.model == "gpt-4o-mini"

    def test_hanging_probe_reports_unavailable(self, harness):
        client = FakeAIClient(models=FakeModels(delay=2.0))
        status = asyncio.run(
            reporter(harness, client, ai_probe_timeout_seconds=0.05).ai_status())
        assert status.available is False
        assert "did not respond" in status.message

    def test_provider_error_reports_unavailable(self, harness):
        client = FakeAIClient(models=FakeModels(error=RuntimeError("401 unauthorized")))
        status = asyncio.run(reporter(harness, client).ai_status())
        assert status.available is False
        assert "RuntimeError" in status.message


class TestSystemHealth:

    def test_healthy_without_ai(self, harness):
        health = asyncio.run(reporter(harness).system_health())

        assert health.status == HealthStatus.HEALTHY
        assert health.services.database.status == "healthy"
        assert health.services.ai.status == "degraded"
        assert health.services.analysis.fallback == "rule-based"
        assert health.capabilities.ai_analysis is False
        assert health.capabilities.rule_based_fallback is True
        assert health.capabilities.knowledge_base is True
        assert health.error is None

    def test_healthy_with_ai(self, harness):
        health = asyncio.run(reporter(harness, FakeAIClient()).system_health())

        assert health.services.ai.status == "healthy"
        assert health.services.analysis.fallback == "ai-powered"
        assert health.capabilities.ai_analysis is True
        assert health.capabilities.real_time_analysis is True

    def test_database_error_degrades(self, harness):
        harness.survey.ping_error = DatabaseConnectionException("connection refused")
        health = asyncio.run(reporter(harness).system_health())

        assert health.status == HealthStatus.DEGRADED
        assert health.services.database.status == "unhealthy"
        assert "connection refused" in health.services.database.message
        assert health.capabilities.knowledge_base is False

    def test_overall_timeout_returns_degraded_shape(self, harness):
        client = FakeAIClient(models=FakeModels(delay=2.0))
        health = asyncio.run(reporter(
            harness, client, ai_probe_timeout_seconds=5.0, health_timeout_seconds=0.05,
        ).system_health())

        assert health.status == HealthStatus.DEGRADED
        assert health.services.ai.status == "unknown"
        assert health.services.database.status == "unknown"
        assert health.capabilities.rule_based_fallback is True
        assert health.capabilities.ai_analysis is False
        assert "exceeded" in health.error

    def test_camel_case_payload(self, harness):
        health = asyncio.run(reporter(harness).system_health())
        data = health.model_dump(by_alias=True, mode="json")
        assert set(data["capabilities"]) == {
            "aiAnalysis", "ruleBasedFallback", "knowledgeBase", "realTimeAnalysis"}
