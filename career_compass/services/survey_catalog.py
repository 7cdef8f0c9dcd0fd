"""
Survey Catalog - Career Compass
career_compass/services/survey_catalog.py

Cache-aside reads of the instrument catalog. The catalog only changes with a
deployment, so entries live for CACHE_TTL_CATALOG.
"""

import asyncio
import logging
from typing import Optional

from career_compass.core.exceptions import EntityNotFoundException
from career_compass.models.survey import InstrumentModelList, QuestionList
from career_compass.repositories.survey_repository import SurveyRepository
from career_compass.services.redis_cache import RedisCache

logger = logging.getLogger(__name__)

CACHE_KEY_MODEL_LIST = "survey:models"


def questions_cache_key(model_code: str) -> str:
    return f"survey:questions:{model_code}"


class SurveyCatalog:

    def __init__(
        self,
        repository: SurveyRepository,
        cache: Optional[RedisCache] = None,
        cache_ttl_seconds: int = 86400,
    ):
        self.repository = repository
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds

    async def list_models(self) -> InstrumentModelList:
        cached = self._cache_get(CACHE_KEY_MODEL_LIST, InstrumentModelList)
        if cached is not None:
            return cached
        models = await asyncio.to_thread(self.repository.list_models)
        response = InstrumentModelList(items=models, total=len(models))
        self._cache_set(CACHE_KEY_MODEL_LIST, response)
        return response

    async def questions(self, model_code: str) -> QuestionList:
        """
        Questions of one instrument in display order.

        Raises:
            EntityNotFoundException: unknown model code.
        """
        key = questions_cache_key(model_code)
        cached = self._cache_get(key, QuestionList)
        if cached is not None:
            return cached

        model = await asyncio.to_thread(self.repository.get_model_by_code, model_code)
        if model is None:
            raise EntityNotFoundException("SurveyModel", model_code)
        questions = await asyncio.to_thread(self.repository.get_questions_for_models, [model.id])
        response = QuestionList(model=model, items=questions, total=len(questions))
        self._cache_set(key, response)
        return response

    def _cache_get(self, key, model):
        if not self.cache:
            return None
        try:
            return self.cache.get(key, model)
        except Exception as e:
            logger.warning("Catalog cache read failed for %s: %s", key, e)
            return None

    def _cache_set(self, key, value) -> None:
        if not self.cache:
            return
        try:
            self.cache.set(key, value, self.cache_ttl_seconds)
        except Exception as e:
            logger.warning("Catalog cache write failed for %s: %s", key, e)
