# This project was developed with assistance from AI tools.
"""Tests for the fee and priority rules."""

from decimal import Decimal

import pytest
from db.enums import DocumentType, Priority

from barangay_docs.services.errors import UnknownDocumentTypeError
from barangay_docs.services.fees import (
    DOCUMENT_TYPE_RULES,
    compute_fee_and_priority,
    get_rule,
)


@pytest.mark.parametrize(
    "document_type,is_urgent,expected_fee",
    [
        (DocumentType.BARANGAY_CLEARANCE, False, Decimal("50.00")),
        (DocumentType.BARANGAY_CLEARANCE, True, Decimal("100.00")),
        (DocumentType.CERTIFICATE_OF_RESIDENCY, False, Decimal("30.00")),
        (DocumentType.CERTIFICATE_OF_RESIDENCY, True, Decimal("55.00")),
        (DocumentType.BUSINESS_PERMIT, False, Decimal("100.00")),
        (DocumentType.BUSINESS_PERMIT, True, Decimal("100.00")),
    ],
)
def test_fee_table(document_type, is_urgent, expected_fee):
    assert compute_fee_and_priority(document_type, is_urgent).fee == expected_fee


@pytest.mark.parametrize("is_urgent", [False, True])
def test_indigency_is_free_even_when_urgent(is_urgent):
    quote = compute_fee_and_priority(DocumentType.CERTIFICATE_OF_INDIGENCY, is_urgent)
    assert quote.fee == Decimal("0")
    assert quote.priority == (Priority.HIGH if is_urgent else Priority.NORMAL)


def test_urgent_fee_adds_exactly_the_surcharge():
    for rule in DOCUMENT_TYPE_RULES.values():
        if rule.fee_override:
            continue
        normal = compute_fee_and_priority(rule.document_type, False).fee
        urgent = compute_fee_and_priority(rule.document_type, True).fee
        assert urgent == normal + rule.urgent_surcharge


def test_priority_follows_urgency_flag():
    assert compute_fee_and_priority("BARANGAY_CLEARANCE", True).priority == Priority.HIGH
    assert compute_fee_and_priority("BARANGAY_CLEARANCE", False).priority == Priority.NORMAL


def test_accepts_string_document_type():
    assert get_rule("CERTIFICATE_OF_RESIDENCY").label == "Certificate of Residency"


def test_known_enum_without_rule_is_unknown():
    with pytest.raises(UnknownDocumentTypeError) as exc_info:
        compute_fee_and_priority(DocumentType.PWD_ID, False)
    assert exc_info.value.document_type == "PWD_ID"


def test_unrecognized_document_type_is_unknown():
    with pytest.raises(UnknownDocumentTypeError, match="PASSPORT"):
        compute_fee_and_priority("PASSPORT", True)


def test_fees_are_never_negative():
    for rule in DOCUMENT_TYPE_RULES.values():
        for is_urgent in (False, True):
            assert compute_fee_and_priority(rule.document_type, is_urgent).fee >= 0
