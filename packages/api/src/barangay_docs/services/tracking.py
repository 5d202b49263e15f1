# This project was developed with assistance from AI tools.
"""Public request tracking by reference number.

A reference number is the request id zero-padded to ``REFERENCE_WIDTH``
digits. The view exposes status and dates only.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.tracking import TimelineEntry, TrackingView
from . import store
from .errors import NotFoundError

logger = logging.getLogger(__name__)

REFERENCE_WIDTH = 8


def format_reference(request_id: int) -> str:
    return str(request_id).zfill(REFERENCE_WIDTH)


def parse_reference(reference_number: str) -> int:
    """Return the request id encoded in ``reference_number``.

    Raises:
        NotFoundError: the reference is not a positive number of at most
            ``REFERENCE_WIDTH`` digits.
    """
    ref = (reference_number or "").strip()
    if not ref.isdigit() or len(ref) > REFERENCE_WIDTH or int(ref) <= 0:
        raise NotFoundError("Reference number", reference_number)
    return int(ref)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back; stored values are UTC.
    return value if value.tzinfo else value.replace(tzinfo=UTC)


async def track_by_reference(session: AsyncSession, reference_number: str) -> TrackingView:
    """Return the citizen-safe status view for a reference number.

    Raises:
        NotFoundError: malformed reference or no such request.
    """
    try:
        request_id = parse_reference(reference_number)
        request = await store.get_request(session, request_id)
    except NotFoundError:
        logger.debug("Tracking lookup for unknown reference %r", reference_number)
        raise

    events = await store.list_request_events(session, request_id)

    request_date = _as_utc(request.request_date)
    processed_date = _as_utc(request.processed_date) if request.processed_date else None
    end = processed_date or datetime.now(UTC)

    return TrackingView(
        reference_number=format_reference(request.id),
        status=request.status,
        document_type=request.document_type,
        request_date=request_date,
        processed_date=processed_date,
        processing_days=max((end - request_date).days, 0),
        timeline=[
            TimelineEntry(status=event.to_status, reached_at=_as_utc(event.occurred_at))
            for event in events
        ],
    )
