"""Initial schema: users, events, registrations, notifications, budgets,
schedules, venues, venue bookings and volunteers.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default=sa.text("'participant'")),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('admin', 'organizer', 'participant', 'sponsor')", name="check_user_role"
        ),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Events table
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("organizer_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'published'")),
        *_timestamps(),
        sa.CheckConstraint("capacity > 0", name="check_event_capacity_positive"),
        sa.CheckConstraint("price >= 0", name="check_event_price_non_negative"),
        sa.CheckConstraint(
            "status IN ('draft', 'published', 'cancelled', 'completed')", name="check_event_status"
        ),
    )
    op.create_index("ix_events_id", "events", ["id"])
    # Listings are always ordered by start date
    op.create_index("ix_events_start_date", "events", ["start_date"])
    # "My events": one organizer's events in start order
    op.create_index("ix_events_organizer_start", "events", ["organizer_id", "start_date"])

    # Registrations table
    op.create_table(
        "registrations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("registration_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'confirmed'")),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default=sa.text("'completed'")),
        sa.Column("ticket_type", sa.String(50), nullable=False),
        sa.Column("amount_paid", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("special_requirements", sa.Text(), nullable=True),
        sa.Column("check_in_status", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("check_in_time", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("amount_paid >= 0", name="check_registration_amount_non_negative"),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled')", name="check_registration_status"
        ),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'completed', 'refunded')", name="check_registration_payment_status"
        ),
    )
    op.create_index("ix_registrations_id", "registrations", ["id"])
    op.create_index("ix_registrations_user_id", "registrations", ["user_id"])
    # Backs the active-registration count taken on every admission
    op.create_index("ix_registrations_event_status", "registrations", ["event_id", "status"])
    # One active registration per user and event; cancelled rows don't count
    op.create_index(
        "uq_registrations_active_user_event",
        "registrations",
        ["user_id", "event_id"],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'"),
    )

    # Notifications table
    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default=sa.text("'info'")),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=True),
        sa.Column("is_announcement", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("target_audience", sa.String(20), nullable=True),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "type IN ('info', 'warning', 'success', 'error')", name="check_notification_type"
        ),
        sa.CheckConstraint(
            "target_audience IS NULL OR target_audience IN "
            "('all', 'participants', 'organizers', 'sponsors', 'staff')",
            name="check_notification_target_audience",
        ),
    )
    op.create_index("ix_notifications_id", "notifications", ["id"])
    op.create_index("ix_notifications_user_created", "notifications", ["user_id", "created_at"])

    # Budget items table
    op.create_table(
        "budget_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("item_name", sa.String(200), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("estimated_cost", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("actual_cost", sa.Numeric(12, 2), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'planned'")),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("receipt_url", sa.String(500), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("estimated_cost >= 0", name="check_budget_estimated_non_negative"),
        sa.CheckConstraint("actual_cost IS NULL OR actual_cost >= 0", name="check_budget_actual_non_negative"),
        sa.CheckConstraint(
            "category IN ('venue', 'catering', 'marketing', 'equipment', 'staff', 'other')",
            name="check_budget_category",
        ),
        sa.CheckConstraint(
            "status IN ('planned', 'approved', 'spent', 'cancelled')", name="check_budget_status"
        ),
    )
    op.create_index("ix_budget_items_id", "budget_items", ["id"])
    op.create_index("ix_budget_items_event_created", "budget_items", ["event_id", "created_at"])

    # Schedule items table
    op.create_table(
        "schedule_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("speaker", sa.String(200), nullable=True),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'planned'")),
        *_timestamps(),
        sa.CheckConstraint("end_time > start_time", name="check_schedule_time_order"),
        sa.CheckConstraint("priority IS NULL OR priority BETWEEN 1 AND 5", name="check_schedule_priority"),
        sa.CheckConstraint(
            "status IN ('planned', 'in-progress', 'completed', 'cancelled')", name="check_schedule_status"
        ),
    )
    op.create_index("ix_schedule_items_id", "schedule_items", ["id"])
    op.create_index("ix_schedule_items_event_start", "schedule_items", ["event_id", "start_time"])

    # Venues table
    op.create_table(
        "venues",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("facilities", sa.JSON(), nullable=False),
        sa.Column("contact_info", sa.String(255), nullable=False),
        sa.Column("cost_per_hour", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("rating", sa.Float(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("capacity > 0", name="check_venue_capacity_positive"),
        sa.CheckConstraint("cost_per_hour >= 0", name="check_venue_cost_non_negative"),
    )
    op.create_index("ix_venues_id", "venues", ["id"])
    op.create_index("ix_venues_capacity", "venues", ["capacity"])

    # Venue bookings table
    op.create_table(
        "venue_bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("venue_id", sa.Integer(), sa.ForeignKey("venues.id"), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("booking_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("booking_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("total_cost", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("booking_end > booking_start", name="check_venue_booking_time_order"),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled')", name="check_venue_booking_status"
        ),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'partial', 'completed', 'refunded')",
            name="check_venue_booking_payment_status",
        ),
    )
    op.create_index("ix_venue_bookings_id", "venue_bookings", ["id"])
    op.create_index("ix_venue_bookings_venue_id", "venue_bookings", ["venue_id"])
    op.create_index("ix_venue_bookings_event_id", "venue_bookings", ["event_id"])

    # Volunteers table
    op.create_table(
        "volunteers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("role", sa.String(100), nullable=False),
        sa.Column("responsibilities", sa.JSON(), nullable=False),
        sa.Column("shift_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("shift_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("hours_worked", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "event_id", name="uq_volunteer_user_event"),
        sa.CheckConstraint("hours_worked >= 0", name="check_volunteer_hours_non_negative"),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'completed')", name="check_volunteer_status"
        ),
    )
    op.create_index("ix_volunteers_id", "volunteers", ["id"])
    op.create_index("ix_volunteers_user_id", "volunteers", ["user_id"])
    op.create_index("ix_volunteers_event_id", "volunteers", ["event_id"])


def downgrade() -> None:
    op.drop_table("volunteers")
    op.drop_table("venue_bookings")
    op.drop_table("venues")
    op.drop_table("schedule_items")
    op.drop_table("budget_items")
    op.drop_table("notifications")
    op.drop_table("registrations")
    op.drop_table("events")
    op.drop_table("users")
