"""create cgest tables

Revision ID: c9e1f2a3b4d5
Revises:
Create Date: 2026-03-02
"""
from alembic import op
import sqlalchemy as sa

revision = "c9e1f2a3b4d5"
down_revision = None
branch_labels = None
depends_on = None


def _record_columns():
    return [
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
    ]


def _record_table(name: str, *columns) -> None:
    op.create_table(
        name,
        *_record_columns(),
        *columns,
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("account_id", "id", name=f"uq_{name}_account_id"),
    )
    op.create_index(f"ix_{name}_account_id", name, ["account_id"])


def upgrade() -> None:
    _record_table(
        "clients",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(16), server_default="one-off", nullable=False),
        sa.Column("status", sa.String(16), server_default="active", nullable=False),
        sa.Column("monthly_value", sa.Numeric(20, 2), nullable=True),
        sa.Column("due_day", sa.SmallInteger(), nullable=True),
        sa.Column("drive_folder_url", sa.Text(), server_default="", nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=True),
    )

    # -- payments: sem unique por período, o ledger garante na escrita --
    _record_table(
        "payments",
        sa.Column("client_id", sa.String(64), nullable=False),
        sa.Column("value", sa.Numeric(20, 2), server_default="0", nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(16), server_default="pending", nullable=False),
        sa.Column("paid_at", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("receipt_url", sa.Text(), nullable=True),
        sa.Column("year", sa.SmallInteger(), nullable=True),
        sa.Column("month", sa.SmallInteger(), nullable=True),
    )
    op.create_index("ix_payments_client_id", "payments", ["client_id"])

    _record_table(
        "projects",
        sa.Column("client_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        sa.Column("payment_status", sa.String(16), server_default="pending", nullable=False),
        sa.Column("paid_at", sa.Date(), nullable=True),
        sa.Column("budget", sa.Numeric(20, 2), server_default="0", nullable=False),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index("ix_projects_client_id", "projects", ["client_id"])

    _record_table(
        "goals",
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("target_value", sa.Numeric(20, 2), nullable=False),
        sa.Column("current_value", sa.Numeric(20, 2), server_default="0", nullable=False),
        sa.Column("deadline", sa.Date(), nullable=True),
    )

    _record_table(
        "tasks",
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("is_completed", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("project_id", sa.String(64), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("is_meeting", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("meeting_time", sa.Time(), nullable=True),
        sa.Column("google_event_id", sa.String(255), nullable=True),
    )

    _record_table(
        "user_profiles",
        sa.Column("email", sa.String(255), server_default="", nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("avatar", sa.Text(), nullable=True),
    )


def downgrade() -> None:
    for name in ("user_profiles", "tasks", "goals", "projects", "payments", "clients"):
        op.drop_table(name)
