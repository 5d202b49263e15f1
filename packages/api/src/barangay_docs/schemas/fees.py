# This project was developed with assistance from AI tools.
"""Document type catalogue and fee-quote schemas."""

from decimal import Decimal

from db.enums import Priority
from pydantic import BaseModel


class DocumentTypeInfo(BaseModel):
    """One configured document type with its fee rule."""

    document_type: str
    label: str
    base_fee: Decimal
    urgent_surcharge: Decimal
    fee_override: bool


class FeeQuoteRequest(BaseModel):
    document_type: str
    is_urgent: bool = False


class FeeQuoteResponse(BaseModel):
    document_type: str
    is_urgent: bool
    fee: Decimal
    priority: Priority
