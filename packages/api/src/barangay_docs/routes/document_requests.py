# This project was developed with assistance from AI tools.
"""Staff routes for document requests with RBAC enforcement.

Domain errors raised by the services propagate to the exception handlers in
``main`` and come back as RFC 7807 Problem Details.
"""

from datetime import date

from db import DocumentRequest, get_db
from db.enums import DocumentType, Priority, RequestStatus, UserRole
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import (
    ALL_STAFF,
    INTAKE_ROLES,
    SIGNING_ROLES,
    require_roles,
)
from ..schemas import Pagination
from ..schemas.auth import UserContext
from ..schemas.document_request import (
    ApproveRequest,
    DocumentRequestCreate,
    DocumentRequestListResponse,
    DocumentRequestResponse,
    RejectRequest,
    StatusEventItem,
    StatusHistoryResponse,
    TransitionNotes,
)
from ..schemas.statistics import RequestStatistics
from ..services import lifecycle, store
from ..services.residents import ResidentDirectory, get_resident_directory
from ..services.statistics import compute_statistics
from ..services.tracking import format_reference

router = APIRouter()


def _build_response(request: DocumentRequest) -> DocumentRequestResponse:
    response = DocumentRequestResponse.model_validate(request)
    response.reference_number = format_reference(request.id)
    return response


def _staff(*roles: UserRole):
    return Depends(require_roles(*roles))


@router.post(
    "/",
    response_model=DocumentRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_request(
    body: DocumentRequestCreate,
    user: UserContext = _staff(*INTAKE_ROLES),
    session: AsyncSession = Depends(get_db),
    residents: ResidentDirectory = Depends(get_resident_directory),
) -> DocumentRequestResponse:
    """Submit a request on behalf of a resident. Fee and priority are computed here."""
    request = await lifecycle.submit(
        session,
        residents,
        document_type=body.document_type,
        resident_id=body.resident_id,
        purpose=body.purpose,
        is_urgent=body.is_urgent,
        requirements_submitted=body.requirements_submitted,
        submitted_by=user.actor,
    )
    return _build_response(request)


@router.get(
    "/",
    response_model=DocumentRequestListResponse,
    dependencies=[_staff(*ALL_STAFF)],
)
async def list_requests(
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    document_type: DocumentType | None = None,
    priority: Priority | None = None,
    resident_id: int | None = None,
    search: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> DocumentRequestListResponse:
    """List requests, newest first."""
    filters = store.RequestFilter(
        status=status_filter,
        document_type=document_type,
        priority=priority,
        resident_id=resident_id,
        search=search,
        date_from=date_from,
        date_to=date_to,
    )
    requests, total = await store.list_requests(session, filters, offset=offset, limit=limit)
    return DocumentRequestListResponse(
        data=[_build_response(r) for r in requests],
        pagination=Pagination.build(total, offset, limit),
    )


@router.get(
    "/statistics",
    response_model=RequestStatistics,
    dependencies=[_staff(*ALL_STAFF)],
)
async def get_statistics(
    session: AsyncSession = Depends(get_db),
    date_from: date | None = None,
    date_to: date | None = None,
) -> RequestStatistics:
    """Dashboard counts by status, document type and priority."""
    return await compute_statistics(session, date_from=date_from, date_to=date_to)


@router.get(
    "/{request_id}",
    response_model=DocumentRequestResponse,
    dependencies=[_staff(*ALL_STAFF)],
)
async def get_request(
    request_id: int,
    session: AsyncSession = Depends(get_db),
) -> DocumentRequestResponse:
    return _build_response(await store.get_request(session, request_id))


@router.get(
    "/{request_id}/history",
    response_model=StatusHistoryResponse,
    dependencies=[_staff(*ALL_STAFF)],
)
async def get_history(
    request_id: int,
    session: AsyncSession = Depends(get_db),
) -> StatusHistoryResponse:
    """Status changes of a request, oldest first."""
    events = await store.list_request_events(session, request_id)
    return StatusHistoryResponse(
        request_id=request_id,
        events=[StatusEventItem.model_validate(e) for e in events],
    )


@router.post("/{request_id}/review", response_model=DocumentRequestResponse)
async def review_request(
    request_id: int,
    body: TransitionNotes | None = None,
    user: UserContext = _staff(*INTAKE_ROLES),
    session: AsyncSession = Depends(get_db),
) -> DocumentRequestResponse:
    request = await lifecycle.advance_to_review(
        session, request_id, actor=user.actor, notes=body.notes if body else None
    )
    return _build_response(request)


@router.post("/{request_id}/approve", response_model=DocumentRequestResponse)
async def approve_request(
    request_id: int,
    body: ApproveRequest,
    user: UserContext = _staff(*SIGNING_ROLES),
    session: AsyncSession = Depends(get_db),
) -> DocumentRequestResponse:
    request = await lifecycle.approve(
        session, request_id, body.certifying_official, actor=user.actor, notes=body.notes
    )
    return _build_response(request)


@router.post("/{request_id}/reject", response_model=DocumentRequestResponse)
async def reject_request(
    request_id: int,
    body: RejectRequest,
    user: UserContext = _staff(*SIGNING_ROLES),
    session: AsyncSession = Depends(get_db),
) -> DocumentRequestResponse:
    request = await lifecycle.reject(
        session, request_id, body.reason, actor=user.actor, notes=body.notes
    )
    return _build_response(request)


@router.post("/{request_id}/release", response_model=DocumentRequestResponse)
async def release_request(
    request_id: int,
    body: TransitionNotes | None = None,
    user: UserContext = _staff(*INTAKE_ROLES),
    session: AsyncSession = Depends(get_db),
) -> DocumentRequestResponse:
    request = await lifecycle.release(
        session, request_id, actor=user.actor, notes=body.notes if body else None
    )
    return _build_response(request)
