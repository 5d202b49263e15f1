# This project was developed with assistance from AI tools.
"""Document request request/response schemas."""

from datetime import datetime
from decimal import Decimal

from db.enums import DocumentType, Priority, RequestStatus
from pydantic import BaseModel, ConfigDict, Field

from . import Pagination


class DocumentRequestCreate(BaseModel):
    """Submit a new document request.

    Required fields are optional here so that missing values reach the
    lifecycle layer and come back as field-level validation problems.
    """

    document_type: str | None = None
    resident_id: int | None = None
    purpose: str | None = None
    is_urgent: bool = False
    requirements_submitted: list[str] = Field(default_factory=list)


class TransitionNotes(BaseModel):
    """Optional remark attached to review and release."""

    notes: str | None = None


class ApproveRequest(BaseModel):
    certifying_official: str | None = None
    notes: str | None = None


class RejectRequest(BaseModel):
    reason: str | None = None
    notes: str | None = None


class DocumentRequestResponse(BaseModel):
    """Single document request as seen by staff."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    reference_number: str = ""
    document_type: DocumentType
    resident_id: int
    applicant_name: str
    applicant_address: str | None = None
    applicant_contact: str | None = None
    purpose: str
    status: RequestStatus
    priority: Priority
    processing_fee: Decimal
    certifying_official: str | None = None
    requirements_submitted: list[str] = []
    notes: str | None = None
    submitted_by: str | None = None
    request_date: datetime
    processed_date: datetime | None = None
    version: int


class DocumentRequestListResponse(BaseModel):
    """Paginated list of document requests."""

    data: list[DocumentRequestResponse]
    pagination: Pagination


class StatusEventItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    from_status: RequestStatus | None = None
    to_status: RequestStatus
    actor: str | None = None
    note: str | None = None
    occurred_at: datetime


class StatusHistoryResponse(BaseModel):
    """Status history of one request, oldest first."""

    request_id: int
    events: list[StatusEventItem]
