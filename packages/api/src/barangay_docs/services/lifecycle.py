# This project was developed with assistance from AI tools.
"""Document request lifecycle.

The only code path that changes a request's status. Each transition checks
the current status against ``RequestStatus.valid_transitions()``, appends a
timestamped line to ``notes``, records a history event, and writes through
``store.update_request`` with the version it read. A failed or lost
transition leaves the stored request untouched.

    PENDING -> UNDER_REVIEW -> APPROVED -> RELEASED
    PENDING | UNDER_REVIEW -> REJECTED
"""

import logging
from datetime import UTC, datetime

from db import DocumentRequest
from db.enums import DocumentType, RequestStatus
from sqlalchemy.ext.asyncio import AsyncSession

from . import store
from .errors import ConcurrentModificationError, InvalidTransitionError, ValidationError
from .fees import compute_fee_and_priority, get_rule
from .residents import ResidentDirectory

logger = logging.getLogger(__name__)


def _require_text(value: str | None, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(field, "is required")
    return str(value).strip()


def _join_detail(*parts: str | None) -> str | None:
    text = "; ".join(p.strip() for p in parts if p and p.strip())
    return text or None


def _note_line(
    at: datetime,
    from_status: RequestStatus | None,
    to_status: RequestStatus,
    actor: str | None,
    detail: str | None,
) -> str:
    transition = (
        f"{from_status.value} -> {to_status.value}" if from_status else f"SUBMITTED ({to_status.value})"
    )
    line = f"[{at.isoformat(timespec='seconds')}] {transition} by {actor or 'system'}"
    return f"{line}: {detail}" if detail else line


def _append_note(existing: str | None, line: str) -> str:
    return f"{existing}\n{line}" if existing else line


def _check_transition(request: DocumentRequest, target: RequestStatus, action: str) -> None:
    current = request.status
    allowed = RequestStatus.valid_transitions().get(current, frozenset())
    if target not in allowed:
        logger.warning(
            "Refused %s on request %s: current status is %s",
            action,
            request.id,
            current.value,
        )
        raise InvalidTransitionError(request.id, current, action, allowed)


async def _apply(
    session: AsyncSession,
    request: DocumentRequest,
    target: RequestStatus,
    *,
    actor: str | None,
    detail: str | None,
    changes: dict | None = None,
) -> DocumentRequest:
    now = datetime.now(UTC)
    from_status = request.status
    changes = dict(changes or {})

    open_statuses = RequestStatus.open_statuses()
    if (
        from_status in open_statuses
        and target not in open_statuses
        and request.processed_date is None
    ):
        changes["processed_date"] = now

    changes["status"] = target
    changes["notes"] = _append_note(
        request.notes, _note_line(now, from_status, target, actor, detail)
    )

    try:
        updated = await store.update_request(
            session,
            request.id,
            expected_version=request.version,
            changes=changes,
            status_change=store.StatusChange(
                from_status=from_status,
                to_status=target,
                actor=actor,
                note=detail,
                occurred_at=now,
            ),
        )
    except ConcurrentModificationError:
        logger.warning(
            "Lost update on request %s (%s -> %s by %s)",
            request.id,
            from_status.value,
            target.value,
            actor,
        )
        raise

    logger.info(
        "Request %s: %s -> %s by %s", request.id, from_status.value, target.value, actor
    )
    return updated


async def submit(
    session: AsyncSession,
    residents: ResidentDirectory,
    *,
    document_type: DocumentType | str | None,
    resident_id: int | None,
    purpose: str | None,
    is_urgent: bool = False,
    requirements_submitted: list[str] | None = None,
    submitted_by: str | None = None,
) -> DocumentRequest:
    """Create a PENDING request with its fee and priority fixed for good.

    Raises:
        ValidationError: document_type, resident_id or purpose missing.
        UnknownDocumentTypeError: no fee rule for the document type.
        NotFoundError: the registry does not know the resident.
    """
    if document_type is None or not str(document_type).strip():
        raise ValidationError("document_type", "is required")
    if resident_id is None:
        raise ValidationError("resident_id", "is required")
    purpose = _require_text(purpose, "purpose")

    rule = get_rule(document_type)
    quote = compute_fee_and_priority(rule.document_type, is_urgent)

    resident = await residents.get_resident_summary(resident_id)

    now = datetime.now(UTC)
    note = _note_line(
        now,
        None,
        RequestStatus.PENDING,
        submitted_by,
        f"fee {quote.fee}, priority {quote.priority.value}",
    )
    request = await store.create_request(
        session,
        document_type=rule.document_type,
        resident_id=resident_id,
        applicant_name=resident.name,
        applicant_address=resident.address,
        applicant_contact=resident.contact_number,
        purpose=purpose,
        priority=quote.priority,
        processing_fee=quote.fee,
        requirements_submitted=requirements_submitted,
        submitted_by=submitted_by,
        notes=note,
        request_date=now,
    )
    logger.info(
        "Submitted request %s: %s for resident %s (fee=%s, priority=%s)",
        request.id,
        rule.document_type.value,
        resident_id,
        quote.fee,
        quote.priority.value,
    )
    return request


async def advance_to_review(
    session: AsyncSession,
    request_id: int,
    *,
    actor: str | None = None,
    notes: str | None = None,
) -> DocumentRequest:
    """PENDING -> UNDER_REVIEW."""
    request = await store.get_request(session, request_id)
    _check_transition(request, RequestStatus.UNDER_REVIEW, "review")
    return await _apply(
        session, request, RequestStatus.UNDER_REVIEW, actor=actor, detail=_join_detail(notes)
    )


async def approve(
    session: AsyncSession,
    request_id: int,
    certifying_official: str | None,
    *,
    actor: str | None = None,
    notes: str | None = None,
) -> DocumentRequest:
    """PENDING | UNDER_REVIEW -> APPROVED, recording the certifying official."""
    request = await store.get_request(session, request_id)
    _check_transition(request, RequestStatus.APPROVED, "approve")
    official = _require_text(certifying_official, "certifying_official")
    return await _apply(
        session,
        request,
        RequestStatus.APPROVED,
        actor=actor,
        detail=_join_detail(f"certifying official {official}", notes),
        changes={"certifying_official": official},
    )


async def reject(
    session: AsyncSession,
    request_id: int,
    reason: str | None,
    *,
    actor: str | None = None,
    notes: str | None = None,
) -> DocumentRequest:
    """PENDING | UNDER_REVIEW -> REJECTED. The reason is kept in the notes trail."""
    request = await store.get_request(session, request_id)
    _check_transition(request, RequestStatus.REJECTED, "reject")
    reason = _require_text(reason, "reason")
    return await _apply(
        session,
        request,
        RequestStatus.REJECTED,
        actor=actor,
        detail=_join_detail(f"reason: {reason}", notes),
    )


async def release(
    session: AsyncSession,
    request_id: int,
    *,
    actor: str | None = None,
    notes: str | None = None,
) -> DocumentRequest:
    """APPROVED -> RELEASED."""
    request = await store.get_request(session, request_id)
    _check_transition(request, RequestStatus.RELEASED, "release")
    if not request.certifying_official:
        raise ValidationError("certifying_official", "must be recorded before release")
    return await _apply(
        session, request, RequestStatus.RELEASED, actor=actor, detail=_join_detail(notes)
    )
