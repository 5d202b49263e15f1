# This project was developed with assistance from AI tools.
"""Dashboard statistics schema."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class RequestStatistics(BaseModel):
    """Request counts and fee totals, computed on demand."""

    total: int
    by_status: dict[str, int] = Field(..., description="Every status, zero-filled")
    by_document_type: dict[str, int]
    by_priority: dict[str, int] = Field(..., description="Every priority, zero-filled")
    total_processing_fees: Decimal = Field(
        ..., description="Sum of fees over requests that were not rejected"
    )
    released_fees: Decimal = Field(..., description="Sum of fees over released requests")
    date_from: date | None = None
    date_to: date | None = None
