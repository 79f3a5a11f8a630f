"""
Shared path parameter types.
"""

from typing import Annotated

from fastapi import Path

from eventdesk.schemas.common import MAX_KEY

# Upper bound only: zero and negative keys reach the services, which
# report them as malformed input
KeyPath = Annotated[int, Path(le=MAX_KEY)]
