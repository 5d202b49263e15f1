# This project was developed with assistance from AI tools.
"""add document requests and status history

Revision ID: 3a1f7c2e9b10
Revises:
Create Date: 2026-10-19 09:12:40.318204

"""

import sqlalchemy as sa
from alembic import op

revision = "3a1f7c2e9b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "document_requests",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("document_type", sa.String(50), nullable=False),
        sa.Column("resident_id", sa.Integer(), nullable=False),
        sa.Column("applicant_name", sa.String(255), nullable=False),
        sa.Column("applicant_address", sa.Text(), nullable=True),
        sa.Column("applicant_contact", sa.String(50), nullable=True),
        sa.Column("purpose", sa.Text(), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="PENDING"),
        sa.Column("priority", sa.String(50), nullable=False, server_default="NORMAL"),
        sa.Column("processing_fee", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("certifying_official", sa.String(255), nullable=True),
        sa.Column("requirements_submitted", sa.JSON(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("submitted_by", sa.String(255), nullable=True),
        sa.Column("request_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("processed_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("processing_fee >= 0", name="ck_document_requests_fee_non_negative"),
    )
    op.create_index("ix_document_requests_document_type", "document_requests", ["document_type"])
    op.create_index("ix_document_requests_resident_id", "document_requests", ["resident_id"])
    op.create_index("ix_document_requests_status", "document_requests", ["status"])
    op.create_index("ix_document_requests_request_date", "document_requests", ["request_date"])

    op.create_table(
        "document_request_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("request_id", sa.Integer(), nullable=False),
        sa.Column("from_status", sa.String(50), nullable=True),
        sa.Column("to_status", sa.String(50), nullable=False),
        sa.Column("actor", sa.String(255), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["request_id"], ["document_requests.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_document_request_events_request_id", "document_request_events", ["request_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_document_request_events_request_id", table_name="document_request_events")
    op.drop_table("document_request_events")
    op.drop_index("ix_document_requests_request_date", table_name="document_requests")
    op.drop_index("ix_document_requests_status", table_name="document_requests")
    op.drop_index("ix_document_requests_resident_id", table_name="document_requests")
    op.drop_index("ix_document_requests_document_type", table_name="document_requests")
    op.drop_table("document_requests")
