# This project was developed with assistance from AI tools.
"""Tests for public reference-number tracking."""

import pytest
from db.enums import DocumentType, RequestStatus

from barangay_docs.schemas.tracking import TrackingView
from barangay_docs.services import lifecycle
from barangay_docs.services.errors import NotFoundError
from barangay_docs.services.tracking import (
    format_reference,
    parse_reference,
    track_by_reference,
)


def test_reference_is_zero_padded_id():
    assert format_reference(42) == "00000042"
    assert parse_reference("00000042") == 42


def test_parse_reference_accepts_unpadded_and_whitespace():
    assert parse_reference(" 42 ") == 42


@pytest.mark.parametrize("bad", ["", "abc", "00000000", "-1", "123456789", "12a4"])
def test_parse_reference_rejects_malformed(bad):
    with pytest.raises(NotFoundError):
        parse_reference(bad)


async def test_track_shows_status_and_timeline(db_session, residents):
    request = await lifecycle.submit(
        db_session,
        residents,
        document_type=DocumentType.CERTIFICATE_OF_RESIDENCY,
        resident_id=1,
        purpose="School enrollment",
    )
    await lifecycle.advance_to_review(db_session, request.id, actor="clerk", notes="ok")
    await lifecycle.approve(db_session, request.id, "Hon. Reyes")

    view = await track_by_reference(db_session, format_reference(request.id))

    assert view.reference_number == format_reference(request.id)
    assert view.status == RequestStatus.APPROVED
    assert view.document_type == DocumentType.CERTIFICATE_OF_RESIDENCY
    assert view.processed_date is not None
    assert view.processing_days == 0
    assert [e.status for e in view.timeline] == [
        RequestStatus.PENDING,
        RequestStatus.UNDER_REVIEW,
        RequestStatus.APPROVED,
    ]
    assert view.request_date.tzinfo is not None


def test_tracking_view_exposes_no_personal_or_staff_fields():
    exposed = set(TrackingView.model_fields)
    for hidden in ("applicant_name", "applicant_address", "applicant_contact", "notes",
                   "certifying_official", "resident_id", "submitted_by"):
        assert hidden not in exposed


async def test_track_unknown_reference(db_session):
    with pytest.raises(NotFoundError):
        await track_by_reference(db_session, "00009999")
