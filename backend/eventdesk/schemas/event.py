"""
Pydantic schemas for event request/response validation.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from eventdesk.schemas.common import MAX_KEY, truncate_to_date


class EventIn(BaseModel):
    id: Optional[int] = Field(None, le=MAX_KEY)
    name: str = Field(..., min_length=1, max_length=100)
    # Omitted means "today"; the service fills it in before validation
    event_date: Optional[date] = None
    event_type: str = Field(..., min_length=1, max_length=20)

    @field_validator("event_date", mode="before")
    @classmethod
    def truncate_event_date(cls, value):
        return truncate_to_date(value)


class EventResponse(BaseModel):
    id: int
    name: str
    event_date: date
    event_type: str

    model_config = {"from_attributes": True}


class EventOptions(BaseModel):
    event_types: list[str]
