# This project was developed with assistance from AI tools.
"""Tests for dashboard statistics."""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from db.enums import DocumentType, Priority, RequestStatus

from barangay_docs.services import lifecycle, store
from barangay_docs.services.statistics import compute_statistics


async def test_empty_store_is_all_zero(db_session):
    stats = await compute_statistics(db_session)

    assert stats.total == 0
    assert stats.by_status == {s.value: 0 for s in RequestStatus}
    assert stats.by_priority == {p.value: 0 for p in Priority}
    assert stats.by_document_type == {}
    assert stats.total_processing_fees == Decimal("0")
    assert stats.released_fees == Decimal("0")


async def test_counts_and_fees(db_session, residents):
    clearance = await lifecycle.submit(
        db_session,
        residents,
        document_type=DocumentType.BARANGAY_CLEARANCE,
        resident_id=1,
        purpose="Employment",
        is_urgent=True,
    )
    residency = await lifecycle.submit(
        db_session,
        residents,
        document_type=DocumentType.CERTIFICATE_OF_RESIDENCY,
        resident_id=2,
        purpose="School enrollment",
    )
    await lifecycle.submit(
        db_session,
        residents,
        document_type=DocumentType.BARANGAY_CLEARANCE,
        resident_id=2,
        purpose="Bank account",
    )
    await lifecycle.approve(db_session, clearance.id, "Hon. Reyes")
    await lifecycle.release(db_session, clearance.id)
    await lifecycle.reject(db_session, residency.id, "Incomplete")

    stats = await compute_statistics(db_session)

    assert stats.total == 3
    assert sum(stats.by_status.values()) == stats.total
    assert stats.by_status[RequestStatus.RELEASED.value] == 1
    assert stats.by_status[RequestStatus.REJECTED.value] == 1
    assert stats.by_status[RequestStatus.PENDING.value] == 1
    assert stats.by_status[RequestStatus.UNDER_REVIEW.value] == 0
    assert stats.by_document_type == {"BARANGAY_CLEARANCE": 2, "CERTIFICATE_OF_RESIDENCY": 1}
    assert stats.by_priority == {"NORMAL": 2, "HIGH": 1}
    # 100 (urgent clearance) + 50 (pending clearance); the rejected residency is excluded
    assert stats.total_processing_fees == Decimal("150.00")
    assert stats.released_fees == Decimal("100.00")


async def test_date_range_limits_counted_requests(db_session):
    today = datetime.now(UTC)
    for when in (today - timedelta(days=10), today):
        await store.create_request(
            db_session,
            document_type=DocumentType.BUSINESS_PERMIT,
            resident_id=1,
            applicant_name="Juan Dela Cruz",
            purpose="Sari-sari store",
            priority=Priority.NORMAL,
            processing_fee=Decimal("100.00"),
            request_date=when,
        )

    stats = await compute_statistics(db_session, date_from=today.date())

    assert stats.total == 1
    assert stats.date_from == today.date()
    assert stats.date_to is None

    stats = await compute_statistics(db_session, date_to=date(2000, 1, 1))
    assert stats.total == 0
