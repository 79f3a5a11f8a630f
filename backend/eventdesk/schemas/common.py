"""
Shared pieces for request/response schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

# Keys are stored in 32-bit integer columns
MAX_KEY = 2_147_483_647


def truncate_to_date(value: Any) -> Any:
    """Drop the time-of-day from datetimes and ISO datetime strings."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class Choice(BaseModel):
    """A (value, label) pair offered to clients for input assistance."""

    value: int
    label: str
