"""
Pydantic schemas for employee request/response validation.

The service number is optional here on purpose: a missing or non-positive key
is reported by the service as a field error alongside the other violations.
"""

from typing import Optional
from pydantic import BaseModel, Field

from eventdesk.schemas.common import MAX_KEY


class EmployeeIn(BaseModel):
    service_number: Optional[int] = Field(None, le=MAX_KEY)
    name: str = Field(..., min_length=1, max_length=50)
    surname: str = Field(..., min_length=1, max_length=50)
    post: str = Field(..., min_length=1, max_length=50)
    phone_number: str = Field(..., min_length=1, max_length=20)


class EmployeeResponse(BaseModel):
    service_number: int
    name: str
    surname: str
    post: str
    phone_number: str
    full_name: str

    model_config = {"from_attributes": True}
