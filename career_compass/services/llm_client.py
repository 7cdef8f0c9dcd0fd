"""
LLM Client - Career Compass
career_compass/services/llm_client.py

Builds the OpenAI-compatible async client and probes its availability.
"""

import asyncio
from typing import Any, Dict, Optional

import structlog
from openai import AsyncOpenAI

from career_compass.config import Settings

logger = structlog.get_logger(__name__)

PROVIDER = "openai-compatible"


def build_llm_client(settings: Settings) -> Optional[AsyncOpenAI]:
    """Return a client, or None when no API key is configured (rule path only)."""
    if settings.OPENAI_API_KEY is None:
        logger.info("llm_client_disabled", reason="OPENAI_API_KEY not set")
        return None
    return AsyncOpenAI(
        api_key=settings.OPENAI_API_KEY.get_secret_value(),
        base_url=settings.OPENAI_BASE_URL or None,
        timeout=settings.AI_TIMEOUT_SECONDS,
        max_retries=0,
    )


async def probe_llm(
    client: Optional[AsyncOpenAI],
    model: str,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Check that the provider answers a model listing within ``timeout_seconds``.

    Never raises; failures are reported in the returned dict.
    """
    if client is None:
        return {
            "available": False,
            "model": model,
            "provider": PROVIDER,
            "message": "AI client not configured, rule-based analysis in use",
        }
    try:
        await asyncio.wait_for(client.models.list(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        return {
            "available": False,
            "model": model,
            "provider": PROVIDER,
            "message": f"AI provider did not respond within {timeout_seconds:g}s",
        }
    except Exception as e:
        logger.warning("llm_probe_failed", error_type=type(e).__name__, error=str(e)[:200])
        return {
            "available": False,
            "model": model,
            "provider": PROVIDER,
            "message": f"AI provider unavailable: {type(e).__name__}",
        }
    return {
        "available": True,
        "model": model,
        "provider": PROVIDER,
        "message": "AI analysis available",
    }
