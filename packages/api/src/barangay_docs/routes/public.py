# This project was developed with assistance from AI tools.
"""Public API routes -- no authentication required."""

from db import get_db
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.fees import DocumentTypeInfo, FeeQuoteRequest, FeeQuoteResponse
from ..schemas.tracking import TrackingView
from ..services.errors import NotFoundError
from ..services.fees import DOCUMENT_TYPE_RULES, compute_fee_and_priority
from ..services.tracking import track_by_reference

router = APIRouter()


@router.get("/document-types", response_model=list[DocumentTypeInfo])
async def list_document_types() -> list[DocumentTypeInfo]:
    """Document types that can be requested, with their fees."""
    return [
        DocumentTypeInfo(
            document_type=rule.document_type.value,
            label=rule.label,
            base_fee=rule.base_fee,
            urgent_surcharge=rule.urgent_surcharge,
            fee_override=rule.fee_override,
        )
        for rule in DOCUMENT_TYPE_RULES.values()
    ]


@router.post("/fee-quote", response_model=FeeQuoteResponse)
async def quote_fee(body: FeeQuoteRequest) -> FeeQuoteResponse:
    """Preview the fee and priority a submission would get."""
    quote = compute_fee_and_priority(body.document_type, body.is_urgent)
    return FeeQuoteResponse(
        document_type=body.document_type,
        is_urgent=body.is_urgent,
        fee=quote.fee,
        priority=quote.priority,
    )


@router.get("/track/{reference_number}", response_model=TrackingView)
async def track_request(
    reference_number: str,
    session: AsyncSession = Depends(get_db),
) -> TrackingView:
    """Citizen-facing status lookup by reference number."""
    try:
        return await track_by_reference(session, reference_number)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No document request matches this reference number",
        ) from None
