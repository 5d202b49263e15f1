# This project was developed with assistance from AI tools.
"""Document request store.

Persistence for requests and their status history. After creation,
``update_request`` is the only write path: a single conditional UPDATE keyed
on ``(id, version)``, so two transitions racing on the same request cannot
both land. Requests are never deleted.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal

from db import DocumentRequest, DocumentRequestEvent
from db.enums import DocumentType, Priority, RequestStatus
from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import ConcurrentModificationError, InfrastructureError, NotFoundError

logger = logging.getLogger(__name__)

# Everything else is fixed at submission.
MUTABLE_FIELDS = frozenset({"status", "certifying_official", "processed_date", "notes"})


@dataclass(frozen=True)
class RequestFilter:
    """Optional list filters; unset fields do not constrain the query."""

    status: RequestStatus | None = None
    document_type: DocumentType | None = None
    priority: Priority | None = None
    resident_id: int | None = None
    search: str | None = None
    date_from: date | None = None
    date_to: date | None = None


@dataclass(frozen=True)
class StatusChange:
    """History entry written alongside a status update."""

    from_status: RequestStatus | None
    to_status: RequestStatus
    actor: str | None
    note: str | None
    occurred_at: datetime


def request_date_clauses(date_from: date | None, date_to: date | None) -> list:
    """WHERE clauses for an inclusive calendar-date range over request_date (UTC)."""
    clauses = []
    if date_from is not None:
        clauses.append(
            DocumentRequest.request_date >= datetime.combine(date_from, time.min, tzinfo=UTC)
        )
    if date_to is not None:
        next_day = datetime.combine(date_to + timedelta(days=1), time.min, tzinfo=UTC)
        clauses.append(DocumentRequest.request_date < next_day)
    return clauses


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _apply_filters(stmt, filters: RequestFilter):
    """Apply optional WHERE clauses for the list filters."""
    if filters.status is not None:
        stmt = stmt.where(DocumentRequest.status == filters.status)
    if filters.document_type is not None:
        stmt = stmt.where(DocumentRequest.document_type == filters.document_type)
    if filters.priority is not None:
        stmt = stmt.where(DocumentRequest.priority == filters.priority)
    if filters.resident_id is not None:
        stmt = stmt.where(DocumentRequest.resident_id == filters.resident_id)
    if filters.search and filters.search.strip():
        pattern = f"%{_escape_like(filters.search.strip())}%"
        stmt = stmt.where(
            or_(
                DocumentRequest.applicant_name.ilike(pattern, escape="\\"),
                DocumentRequest.purpose.ilike(pattern, escape="\\"),
            )
        )
    for clause in request_date_clauses(filters.date_from, filters.date_to):
        stmt = stmt.where(clause)
    return stmt


async def execute_query(session: AsyncSession, stmt):
    """Run a read query, surfacing driver failures as InfrastructureError."""
    try:
        return await session.execute(stmt)
    except SQLAlchemyError as exc:
        logger.exception("Document request query failed")
        raise InfrastructureError("Document request storage is unavailable") from exc


async def create_request(
    session: AsyncSession,
    *,
    document_type: DocumentType,
    resident_id: int,
    applicant_name: str,
    purpose: str,
    priority: Priority,
    processing_fee: Decimal,
    applicant_address: str | None = None,
    applicant_contact: str | None = None,
    requirements_submitted: list[str] | None = None,
    submitted_by: str | None = None,
    notes: str | None = None,
    request_date: datetime | None = None,
) -> DocumentRequest:
    """Insert a PENDING request and its submission history entry."""
    submitted_at = request_date or datetime.now(UTC)
    request = DocumentRequest(
        document_type=document_type,
        resident_id=resident_id,
        applicant_name=applicant_name,
        applicant_address=applicant_address,
        applicant_contact=applicant_contact,
        purpose=purpose,
        status=RequestStatus.PENDING,
        priority=priority,
        processing_fee=processing_fee,
        requirements_submitted=list(requirements_submitted or []),
        submitted_by=submitted_by,
        notes=notes,
        request_date=submitted_at,
        version=1,
    )
    try:
        session.add(request)
        await session.flush()
        request_id = request.id  # capture before commit
        session.add(
            DocumentRequestEvent(
                request_id=request_id,
                from_status=None,
                to_status=RequestStatus.PENDING,
                actor=submitted_by,
                note="Request submitted",
                occurred_at=submitted_at,
            )
        )
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to create document request for resident %s", resident_id)
        raise InfrastructureError("Could not save the document request") from exc

    return await get_request(session, request_id)


async def get_request(session: AsyncSession, request_id: int) -> DocumentRequest:
    """Return a request by id or raise NotFoundError.

    Always reloads from the database: status updates are issued as bulk
    UPDATE statements and bypass the session's identity map.
    """
    stmt = (
        select(DocumentRequest)
        .where(DocumentRequest.id == request_id)
        .execution_options(populate_existing=True)
    )
    result = await execute_query(session, stmt)
    request = result.scalar_one_or_none()
    if request is None:
        raise NotFoundError("Document request", request_id)
    return request


async def update_request(
    session: AsyncSession,
    request_id: int,
    *,
    expected_version: int,
    changes: dict,
    status_change: StatusChange,
) -> DocumentRequest:
    """Apply ``changes`` only if the stored version still equals ``expected_version``.

    Raises:
        ValueError: ``changes`` names a field that is immutable after submission.
        NotFoundError: no request with ``request_id``.
        ConcurrentModificationError: another update landed first.
    """
    immutable = set(changes) - MUTABLE_FIELDS
    if immutable:
        raise ValueError(f"Fields cannot be changed after submission: {sorted(immutable)}")

    stmt = (
        update(DocumentRequest)
        .where(
            DocumentRequest.id == request_id,
            DocumentRequest.version == expected_version,
        )
        .values(**changes, version=DocumentRequest.version + 1)
        .execution_options(synchronize_session=False)
    )
    try:
        result = await session.execute(stmt)
        if result.rowcount == 0:
            await session.rollback()
            await get_request(session, request_id)  # NotFoundError if it is gone
            raise ConcurrentModificationError(request_id, expected_version)

        session.add(
            DocumentRequestEvent(
                request_id=request_id,
                from_status=status_change.from_status,
                to_status=status_change.to_status,
                actor=status_change.actor,
                note=status_change.note,
                occurred_at=status_change.occurred_at,
            )
        )
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to update document request %s", request_id)
        raise InfrastructureError("Could not update the document request") from exc

    return await get_request(session, request_id)


async def list_requests(
    session: AsyncSession,
    filters: RequestFilter | None = None,
    *,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[DocumentRequest], int]:
    """Return one page of matching requests plus the total match count.

    Ordered by request_date (newest first), ties broken by id ascending so
    pages are stable.
    """
    filters = filters or RequestFilter()

    count_stmt = _apply_filters(select(func.count(DocumentRequest.id)), filters)
    total = (await execute_query(session, count_stmt)).scalar() or 0

    stmt = (
        _apply_filters(select(DocumentRequest), filters)
        .order_by(DocumentRequest.request_date.desc(), DocumentRequest.id.asc())
        .offset(offset)
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    result = await execute_query(session, stmt)
    return list(result.scalars().all()), total


async def list_request_events(
    session: AsyncSession,
    request_id: int,
) -> list[DocumentRequestEvent]:
    """Return the status history of a request, oldest first."""
    await get_request(session, request_id)
    stmt = (
        select(DocumentRequestEvent)
        .where(DocumentRequestEvent.request_id == request_id)
        .order_by(DocumentRequestEvent.id.asc())
    )
    result = await execute_query(session, stmt)
    return list(result.scalars().all())
