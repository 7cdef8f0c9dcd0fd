from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


class ErrorResponse(BaseModel):
    error_code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error timestamp")


class MissingInstrumentsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error_code: str = "MISSING_INSTRUMENT"
    error: str
    missing_instruments: List[str] = Field(..., alias="missingInstruments")
    timestamp: datetime
