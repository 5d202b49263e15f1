# This project was developed with assistance from AI tools.
"""Fee and priority rules per document type.

Pure lookup, no I/O. Shared by request submission and the public
fee-quote preview.
"""

from dataclasses import dataclass
from decimal import Decimal

from db.enums import DocumentType, Priority

from .errors import UnknownDocumentTypeError


@dataclass(frozen=True)
class DocumentTypeRule:
    """Static fee configuration for one document type.

    ``fee_override`` marks documents that must be issued free of charge by
    law; it wins over the urgent surcharge.
    """

    document_type: DocumentType
    label: str
    base_fee: Decimal
    urgent_surcharge: Decimal = Decimal("0")
    fee_override: bool = False


@dataclass(frozen=True)
class FeeQuote:
    fee: Decimal
    priority: Priority


DOCUMENT_TYPE_RULES: dict[DocumentType, DocumentTypeRule] = {
    DocumentType.BARANGAY_CLEARANCE: DocumentTypeRule(
        document_type=DocumentType.BARANGAY_CLEARANCE,
        label="Barangay Clearance",
        base_fee=Decimal("50.00"),
        urgent_surcharge=Decimal("50.00"),
    ),
    DocumentType.CERTIFICATE_OF_RESIDENCY: DocumentTypeRule(
        document_type=DocumentType.CERTIFICATE_OF_RESIDENCY,
        label="Certificate of Residency",
        base_fee=Decimal("30.00"),
        urgent_surcharge=Decimal("25.00"),
    ),
    # Indigency certificates are free by law, urgent or not.
    DocumentType.CERTIFICATE_OF_INDIGENCY: DocumentTypeRule(
        document_type=DocumentType.CERTIFICATE_OF_INDIGENCY,
        label="Certificate of Indigency",
        base_fee=Decimal("0.00"),
        fee_override=True,
    ),
    DocumentType.BUSINESS_PERMIT: DocumentTypeRule(
        document_type=DocumentType.BUSINESS_PERMIT,
        label="Business Permit",
        base_fee=Decimal("100.00"),
    ),
}


def get_rule(document_type: DocumentType | str) -> DocumentTypeRule:
    """Return the rule for ``document_type`` or raise UnknownDocumentTypeError."""
    try:
        key = DocumentType(document_type)
    except ValueError:
        raise UnknownDocumentTypeError(document_type) from None

    rule = DOCUMENT_TYPE_RULES.get(key)
    if rule is None:
        raise UnknownDocumentTypeError(key.value)
    return rule


def compute_fee_and_priority(document_type: DocumentType | str, is_urgent: bool) -> FeeQuote:
    """Compute the processing fee and priority for a new request."""
    rule = get_rule(document_type)
    priority = Priority.HIGH if is_urgent else Priority.NORMAL

    if rule.fee_override:
        return FeeQuote(fee=Decimal("0.00"), priority=priority)

    fee = rule.base_fee + (rule.urgent_surcharge if is_urgent else Decimal("0"))
    return FeeQuote(fee=fee, priority=priority)
