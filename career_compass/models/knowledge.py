from datetime import datetime
from typing import Optional

from pydantic import Field

from career_compass.models.common import CamelModel


class KnowledgeEntry(CamelModel):
    """Reference text used to ground an analysis. Read-only to this service."""
    id: str
    title: str
    content: str
    model_tag: str = Field(..., description="Instrument knowledge tag, e.g. 'career_interests'")
    category: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def source_label(self) -> str:
        return self.title or self.id


# Terms of the supplementary culture/values search.
CULTURE_TERMS = ("culture", "values")


def is_culture_entry(entry: KnowledgeEntry) -> bool:
    text = f"{entry.title} {entry.content}".lower()
    return any(term in text for term in CULTURE_TERMS)
