"""
Knowledge Retriever - Career Compass
career_compass/services/knowledge_retriever.py

Assembles the knowledge entries that ground one analysis:

  1. per present instrument, every entry carrying the instrument's tag
  2. a fixed supplementary search for culture / values content

The result is deduplicated by id, first occurrence wins. Repository errors
propagate to the caller.
"""

from typing import Iterable, List

import structlog

from career_compass.models.enumerations import Instrument
from career_compass.models.knowledge import CULTURE_TERMS, KnowledgeEntry
from career_compass.repositories.knowledge_repository import KnowledgeRepository

logger = structlog.get_logger(__name__)


class KnowledgeRetriever:

    def __init__(self, repository: KnowledgeRepository, search_limit: int = 10):
        self.repository = repository
        self.search_limit = search_limit

    def retrieve(self, instruments: Iterable[Instrument]) -> List[KnowledgeEntry]:
        present = set(instruments)
        collected: List[KnowledgeEntry] = []
        for instrument in Instrument:
            if instrument in present:
                collected.extend(self.repository.get_by_model_tag(instrument.knowledge_tag))
        collected.extend(self.repository.search(CULTURE_TERMS, limit=self.search_limit))

        seen = set()
        unique: List[KnowledgeEntry] = []
        for entry in collected:
            if entry.id in seen:
                continue
            seen.add(entry.id)
            unique.append(entry)

        logger.info(
            "knowledge_retrieved",
            instruments=sorted(i.value for i in present),
            fetched=len(collected),
            unique=len(unique),
        )
        return unique
