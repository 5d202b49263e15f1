# This project was developed with assistance from AI tools.
"""Public tracking schemas.

Citizen-facing: no resident details, actors or staff notes.
"""

from datetime import datetime

from db.enums import DocumentType, RequestStatus
from pydantic import BaseModel


class TimelineEntry(BaseModel):
    status: RequestStatus
    reached_at: datetime


class TrackingView(BaseModel):
    """Status of a request looked up by its reference number."""

    reference_number: str
    status: RequestStatus
    document_type: DocumentType
    request_date: datetime
    processed_date: datetime | None = None
    processing_days: int
    timeline: list[TimelineEntry]
