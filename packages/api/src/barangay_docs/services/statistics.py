# This project was developed with assistance from AI tools.
"""Dashboard statistics over document requests.

Pure read queries computed at call time; nothing is cached or denormalized.
"""

import logging
from datetime import date
from decimal import Decimal

from db import DocumentRequest
from db.enums import Priority, RequestStatus
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.statistics import RequestStatistics
from .store import execute_query, request_date_clauses

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(_CENTS)


async def compute_statistics(
    session: AsyncSession,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
) -> RequestStatistics:
    """Count requests by status, document type and priority.

    Args:
        session: Database session.
        date_from: Only requests submitted on or after this UTC date.
        date_to: Only requests submitted on or before this UTC date.

    Returns:
        RequestStatistics. Every status and priority appears, zero-filled,
        and the per-status counts sum to ``total``.
    """
    clauses = request_date_clauses(date_from, date_to)

    status_stmt = (
        select(
            DocumentRequest.status,
            func.count(DocumentRequest.id),
            func.sum(DocumentRequest.processing_fee),
        )
        .where(*clauses)
        .group_by(DocumentRequest.status)
    )
    by_status = {s.value: 0 for s in RequestStatus}
    total_fees = Decimal("0")
    released_fees = Decimal("0")
    for status, count, fees in (await execute_query(session, status_stmt)).all():
        by_status[status.value] = count
        if status != RequestStatus.REJECTED:
            total_fees += _money(fees)
        if status == RequestStatus.RELEASED:
            released_fees = _money(fees)

    type_stmt = (
        select(DocumentRequest.document_type, func.count(DocumentRequest.id))
        .where(*clauses)
        .group_by(DocumentRequest.document_type)
    )
    by_document_type = {
        doc_type.value: count for doc_type, count in (await execute_query(session, type_stmt)).all()
    }

    priority_stmt = (
        select(DocumentRequest.priority, func.count(DocumentRequest.id))
        .where(*clauses)
        .group_by(DocumentRequest.priority)
    )
    by_priority = {p.value: 0 for p in Priority}
    for priority, count in (await execute_query(session, priority_stmt)).all():
        by_priority[priority.value] = count

    return RequestStatistics(
        total=sum(by_status.values()),
        by_status=by_status,
        by_document_type=by_document_type,
        by_priority=by_priority,
        total_processing_fees=_money(total_fees),
        released_fees=_money(released_fees),
        date_from=date_from,
        date_to=date_to,
    )
