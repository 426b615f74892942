"""Initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-09-28 10:12:41.000000
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _company_fk(table: str, *, ondelete: str = "SET NULL") -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["company_id"],
        ["company.id"],
        name=f"fk_{table}_company_id_company",
        ondelete=ondelete,
    )


def upgrade() -> None:
    op.create_table(
        "company",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email_domain", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_company"),
    )
    op.create_index("ix_company_user_id", "company", ["user_id"])

    op.create_table(
        "contact",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("position", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("primary", sa.Boolean(), nullable=False),
        _company_fk("contact"),
        sa.PrimaryKeyConstraint("id", name="pk_contact"),
    )
    op.create_index("ix_contact_user_id", "contact", ["user_id"])

    op.create_table(
        "job_posting",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        _company_fk("job_posting", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_job_posting"),
    )
    op.create_index("ix_job_posting_user_id", "job_posting", ["user_id"])

    op.create_table(
        "tracker_entry",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("job_posting_id", sa.Uuid(), nullable=True),
        sa.Column("company_id", sa.Uuid(), nullable=True),
        sa.Column("role", sa.String(), nullable=True),
        sa.Column("date_applied_raw", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("last_event_id", sa.Uuid(), nullable=True),
        sa.Column("last_event_title", sa.String(), nullable=True),
        sa.Column("last_event_date", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["job_posting_id"],
            ["job_posting.id"],
            name="fk_tracker_entry_job_posting_id_job_posting",
            ondelete="SET NULL",
        ),
        _company_fk("tracker_entry"),
        sa.PrimaryKeyConstraint("id", name="pk_tracker_entry"),
    )
    op.create_index("ix_tracker_entry_user_id", "tracker_entry", ["user_id"])

    op.create_table(
        "calendar_event",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("attendees", sa.Text(), nullable=False),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("event_type", sa.String(length=32), nullable=False),
        _company_fk("calendar_event"),
        sa.PrimaryKeyConstraint("id", name="pk_calendar_event"),
        sa.UniqueConstraint("user_id", "external_id", name="uq_calendar_event_user_id"),
    )

    op.create_table(
        "message_thread",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=False),
        sa.Column("subject", sa.String(), nullable=False),
        sa.Column("participants", sa.Text(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=True),
        sa.Column("latest_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("message_type", sa.String(length=32), nullable=False),
        sa.Column("message_count", sa.Integer(), nullable=False),
        _company_fk("message_thread"),
        sa.PrimaryKeyConstraint("id", name="pk_message_thread"),
        sa.UniqueConstraint("user_id", "external_id", name="uq_message_thread_user_id"),
    )

    op.create_table(
        "message",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=False),
        sa.Column("thread_id", sa.Uuid(), nullable=True),
        sa.Column("thread_external_id", sa.String(), nullable=True),
        sa.Column("company_id", sa.Uuid(), nullable=True),
        sa.Column("subject", sa.String(), nullable=False),
        sa.Column("sender", sa.Text(), nullable=True),
        sa.Column("recipients", sa.Text(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("labels", sa.Text(), nullable=False),
        sa.Column("message_type", sa.String(length=32), nullable=False),
        _company_fk("message"),
        sa.PrimaryKeyConstraint("id", name="pk_message"),
        sa.UniqueConstraint("user_id", "external_id", name="uq_message_user_id"),
    )
    op.create_index("ix_message_thread_id", "message", ["thread_id"])

    op.create_table(
        "user_settings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("calendar_last_sync_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("messages_last_sync_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_user_settings"),
        sa.UniqueConstraint("user_id", name="uq_user_settings_user_id"),
    )


def downgrade() -> None:
    op.drop_table("user_settings")
    op.drop_index("ix_message_thread_id", table_name="message")
    op.drop_table("message")
    op.drop_table("message_thread")
    op.drop_table("calendar_event")
    op.drop_index("ix_tracker_entry_user_id", table_name="tracker_entry")
    op.drop_table("tracker_entry")
    op.drop_index("ix_job_posting_user_id", table_name="job_posting")
    op.drop_table("job_posting")
    op.drop_index("ix_contact_user_id", table_name="contact")
    op.drop_table("contact")
    op.drop_index("ix_company_user_id", table_name="company")
    op.drop_table("company")
