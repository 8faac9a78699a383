"""Error response models."""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned by the HTTP surface.

    A 503 with ``error == "Catalog Unavailable"`` tells clients that search is
    temporarily unavailable, as opposed to an empty but successful search.
    """

    error: str
    detail: str
    timestamp: datetime
    request_id: str | None = Field(default=None, description="Request ID for log correlation")
