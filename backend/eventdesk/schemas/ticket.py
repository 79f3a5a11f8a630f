"""
Pydantic schemas for ticket request/response validation.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from eventdesk.schemas.common import MAX_KEY, Choice, truncate_to_date


class TicketIn(BaseModel):
    ticket_number: Optional[int] = Field(None, le=MAX_KEY)
    service_number: Optional[int] = Field(None, le=MAX_KEY)
    event_id: Optional[int] = Field(None, le=MAX_KEY)
    # Omitted means "today"; the service fills it in before validation
    sale_date: Optional[date] = None
    ticket_type: str = Field(..., min_length=1, max_length=20)
    payment_method: str = Field(..., min_length=1, max_length=20)

    @field_validator("sale_date", mode="before")
    @classmethod
    def truncate_sale_date(cls, value):
        return truncate_to_date(value)


class TicketResponse(BaseModel):
    ticket_number: int
    service_number: int
    event_id: int
    sale_date: date
    ticket_type: str
    payment_method: str
    employee_full_name: Optional[str] = None
    event_name: Optional[str] = None

    model_config = {"from_attributes": True}


class TicketOptions(BaseModel):
    ticket_types: list[str]
    payment_methods: list[str]
    employees: list[Choice]
    events: list[Choice]
