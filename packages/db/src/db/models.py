# This project was developed with assistance from AI tools.
"""
Barangay document issuance -- domain models

Document requests submitted on behalf of residents, and the append-only
status history each lifecycle transition writes.
"""

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import DocumentType, Priority, RequestStatus


class DocumentRequest(Base):
    """A resident's request for an official barangay document."""

    __tablename__ = "document_requests"
    __table_args__ = (
        CheckConstraint("processing_fee >= 0", name="ck_document_requests_fee_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_type = Column(
        Enum(DocumentType, name="document_type", native_enum=False),
        nullable=False,
        index=True,
    )
    resident_id = Column(Integer, nullable=False, index=True)
    # Display snapshot taken from the resident registry at submission.
    applicant_name = Column(String(255), nullable=False)
    applicant_address = Column(Text, nullable=True)
    applicant_contact = Column(String(50), nullable=True)
    purpose = Column(Text, nullable=False)
    status = Column(
        Enum(RequestStatus, name="request_status", native_enum=False),
        nullable=False,
        default=RequestStatus.PENDING,
        index=True,
    )
    priority = Column(
        Enum(Priority, name="request_priority", native_enum=False),
        nullable=False,
        default=Priority.NORMAL,
    )
    processing_fee = Column(Numeric(10, 2), nullable=False, default=0)
    certifying_official = Column(String(255), nullable=True)
    requirements_submitted = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    submitted_by = Column(String(255), nullable=True)
    request_date = Column(DateTime(timezone=True), nullable=False, index=True)
    processed_date = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    events = relationship(
        "DocumentRequestEvent",
        back_populates="request",
        cascade="all, delete-orphan",
        order_by="DocumentRequestEvent.id",
    )

    def __repr__(self):
        return (
            f"<DocumentRequest(id={self.id}, type='{self.document_type}', "
            f"status='{self.status}')>"
        )


class DocumentRequestEvent(Base):
    """One status change of a document request (append-only)."""

    __tablename__ = "document_request_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    request_id = Column(
        Integer, ForeignKey("document_requests.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    from_status = Column(
        Enum(RequestStatus, name="request_status", native_enum=False),
        nullable=True,
    )
    to_status = Column(
        Enum(RequestStatus, name="request_status", native_enum=False),
        nullable=False,
    )
    actor = Column(String(255), nullable=True)
    note = Column(Text, nullable=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False)

    request = relationship("DocumentRequest", back_populates="events")

    def __repr__(self):
        return (
            f"<DocumentRequestEvent(request_id={self.request_id}, "
            f"{self.from_status} -> {self.to_status})>"
        )
