"""
Knowledge Repository - Career Compass
career_compass/repositories/knowledge_repository.py

Read-only lookups against the knowledge base.
"""

from typing import Dict, List, Sequence

from career_compass.models.knowledge import KnowledgeEntry
from career_compass.repositories.base import BaseRepository

KNOWLEDGE_COLUMNS = "ID, TITLE, CONTENT, MODEL_TAG, CATEGORY, CREATED_AT"


class KnowledgeRepository(BaseRepository):
    """Repository for knowledge entries."""

    def get_by_model_tag(self, model_tag: str) -> List[KnowledgeEntry]:
        """Entries with the given tag, newest first."""
        rows = self.execute_query(
            f"""
            SELECT {KNOWLEDGE_COLUMNS}
            FROM KNOWLEDGE_BASE
            WHERE MODEL_TAG = %s
            ORDER BY CREATED_AT DESC
            """,
            (model_tag,),
            fetch_all=True,
        )
        return [self._row_to_entry(r) for r in rows or []]

    def search(self, terms: Sequence[str], limit: int = 10) -> List[KnowledgeEntry]:
        """
        Case-insensitive search of title and content.

        Args:
            terms: An entry matches if any term appears in its title or content
            limit: Maximum entries returned

        Returns:
            Matching entries, newest first
        """
        if not terms:
            return []
        clauses = " OR ".join(["TITLE ILIKE %s OR CONTENT ILIKE %s"] * len(terms))
        params: List = []
        for term in terms:
            params.extend([f"%{term}%", f"%{term}%"])
        params.append(limit)
        rows = self.execute_query(
            f"""
            SELECT {KNOWLEDGE_COLUMNS}
            FROM KNOWLEDGE_BASE
            WHERE {clauses}
            ORDER BY CREATED_AT DESC
            LIMIT %s
            """,
            tuple(params),
            fetch_all=True,
        )
        return [self._row_to_entry(r) for r in rows or []]

    def _row_to_entry(self, row: Dict) -> KnowledgeEntry:
        data = self.row_to_dict(row)
        return KnowledgeEntry(
            id=str(data["id"]),
            title=data.get("title") or "",
            content=data.get("content") or "",
            model_tag=data.get("model_tag") or "",
            category=data.get("category"),
            created_at=self.normalize_timestamp(data.get("created_at")),
        )
