"""guest desk schema: users, events, catalog, lists, guests, activity, settings

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _ts(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable, server_default=None if nullable else sa.func.now())


def upgrade():
    # users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default=sa.text("'user'")),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
        sa.CheckConstraint("role IN ('admin', 'portaria', 'user')", name="ck_users_role"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # events
    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=5), nullable=True),
        sa.Column("location", sa.String(length=256), nullable=True),
        sa.Column("max_capacity", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default=sa.text("'active'")),
        sa.Column("created_by", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_events_status_date", "events", ["status", "date"])

    # catalog
    op.create_table(
        "list_types",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=7), nullable=False, server_default=sa.text("'#3B82F6'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at"),
    )
    op.create_table(
        "sectors",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=7), nullable=False, server_default=sa.text("'#10B981'")),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at"),
    )

    # event_lists
    op.create_table(
        "event_lists",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("list_type_id", sa.Uuid(), sa.ForeignKey("list_types.id"), nullable=False),
        sa.Column("sector_id", sa.Uuid(), sa.ForeignKey("sectors.id"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("max_capacity", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        _ts("created_at"),
        sa.CheckConstraint("max_capacity IS NULL OR max_capacity > 0", name="ck_event_lists_capacity_positive"),
    )
    op.create_index("ix_event_lists_event", "event_lists", ["event_id"])
    op.create_index("ix_event_lists_type", "event_lists", ["list_type_id"])
    op.create_index("ix_event_lists_sector", "event_lists", ["sector_id"])

    # guest_lists
    op.create_table(
        "guest_lists",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=True),
        sa.Column("event_list_id", sa.Uuid(), sa.ForeignKey("event_lists.id", ondelete="CASCADE"), nullable=True),
        sa.Column("guest_name", sa.String(length=100), nullable=False),
        sa.Column("guest_email", sa.String(length=320), nullable=True),
        sa.Column("guest_phone", sa.String(length=32), nullable=True),
        sa.Column("submitted_by", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("sender_name", sa.String(length=256), nullable=True),
        sa.Column("sender_email", sa.String(length=320), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("checked_in", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("checked_in_by", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        _ts("created_at"),
        sa.CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="ck_guest_lists_status"),
        sa.CheckConstraint(
            "(checked_in AND checked_in_at IS NOT NULL) OR (NOT checked_in AND checked_in_at IS NULL)",
            name="ck_guest_lists_checkin_stamp",
        ),
    )
    op.create_index("ix_guest_lists_event", "guest_lists", ["event_id"])
    op.create_index("ix_guest_lists_event_list", "guest_lists", ["event_list_id"])
    op.create_index("ix_guest_lists_submitted_by", "guest_lists", ["submitted_by"])

    # activity_logs (append-only)
    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("event_id", sa.Uuid(), nullable=True),
        sa.Column("action", sa.String(length=128), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("request_id", sa.String(length=128), nullable=True),
        _ts("created_at"),
    )
    op.create_index("ix_activity_logs_created_at", "activity_logs", ["created_at"])
    op.create_index("ix_activity_logs_event", "activity_logs", ["event_id"])
    op.create_index("ix_activity_logs_user", "activity_logs", ["user_id"])

    # site_settings
    op.create_table(
        "site_settings",
        sa.Column("setting_key", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("setting_value", sa.Text(), nullable=False),
        sa.Column("updated_by", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        _ts("updated_at"),
    )


def downgrade():
    op.drop_table("site_settings")
    op.drop_index("ix_activity_logs_user", table_name="activity_logs")
    op.drop_index("ix_activity_logs_event", table_name="activity_logs")
    op.drop_index("ix_activity_logs_created_at", table_name="activity_logs")
    op.drop_table("activity_logs")
    op.drop_index("ix_guest_lists_submitted_by", table_name="guest_lists")
    op.drop_index("ix_guest_lists_event_list", table_name="guest_lists")
    op.drop_index("ix_guest_lists_event", table_name="guest_lists")
    op.drop_table("guest_lists")
    op.drop_index("ix_event_lists_sector", table_name="event_lists")
    op.drop_index("ix_event_lists_type", table_name="event_lists")
    op.drop_index("ix_event_lists_event", table_name="event_lists")
    op.drop_table("event_lists")
    op.drop_table("sectors")
    op.drop_table("list_types")
    op.drop_index("ix_events_status_date", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
