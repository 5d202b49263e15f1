# This project was developed with assistance from AI tools.
"""
Domain enums for the document request lifecycle.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class DocumentType(str, enum.Enum):
    BARANGAY_CLEARANCE = "BARANGAY_CLEARANCE"
    CERTIFICATE_OF_RESIDENCY = "CERTIFICATE_OF_RESIDENCY"
    CERTIFICATE_OF_INDIGENCY = "CERTIFICATE_OF_INDIGENCY"
    BUSINESS_PERMIT = "BUSINESS_PERMIT"
    BUILDING_PERMIT = "BUILDING_PERMIT"
    FIRST_TIME_JOB_SEEKER = "FIRST_TIME_JOB_SEEKER"
    SENIOR_CITIZEN_ID = "SENIOR_CITIZEN_ID"
    PWD_ID = "PWD_ID"
    BARANGAY_ID = "BARANGAY_ID"
    OTHERS = "OTHERS"


class RequestStatus(str, enum.Enum):
    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    RELEASED = "RELEASED"
    REJECTED = "REJECTED"

    @classmethod
    def terminal_statuses(cls) -> frozenset["RequestStatus"]:
        """Statuses a request never leaves."""
        return frozenset({cls.RELEASED, cls.REJECTED})

    @classmethod
    def open_statuses(cls) -> frozenset["RequestStatus"]:
        """Statuses that still count as unprocessed (processed_date unset)."""
        return frozenset({cls.PENDING, cls.UNDER_REVIEW})

    @classmethod
    def valid_transitions(cls) -> dict["RequestStatus", frozenset["RequestStatus"]]:
        """Allowed status transitions in the issuance lifecycle."""
        return {
            cls.PENDING: frozenset({cls.UNDER_REVIEW, cls.APPROVED, cls.REJECTED}),
            cls.UNDER_REVIEW: frozenset({cls.APPROVED, cls.REJECTED}),
            cls.APPROVED: frozenset({cls.RELEASED}),
            cls.RELEASED: frozenset(),
            cls.REJECTED: frozenset(),
        }


class Priority(str, enum.Enum):
    NORMAL = "NORMAL"
    HIGH = "HIGH"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    CAPTAIN = "captain"
    SECRETARY = "secretary"
    CLERK = "clerk"
