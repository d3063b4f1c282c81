"""Initial booking schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

JSON_TYPE = postgresql.JSONB().with_variant(sa.JSON(), "sqlite")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "schedule_settings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("min_advance_booking_days", sa.Integer(), nullable=False),
        sa.Column("max_advance_booking_days", sa.Integer(), nullable=False),
        sa.Column("one_event_per_day", sa.Boolean(), nullable=False),
        sa.Column("max_concurrent_events", sa.Integer(), nullable=False),
        sa.Column("default_event_duration", sa.Numeric(4, 2), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "time_blocks",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("days", JSON_TYPE, nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("duration", sa.Numeric(4, 2), nullable=False),
        sa.Column("half_hour_break", sa.Boolean(), nullable=False),
        sa.Column("max_events_per_block", sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "rest_days",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("day", sa.Integer(), nullable=False, unique=True),
        sa.Column("name", sa.String(length=60), nullable=False),
        sa.Column("fee", sa.Numeric(10, 2), nullable=False),
        sa.Column("can_be_released", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "rest_day_releases",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("release_date", sa.Date(), nullable=False, unique=True),
        sa.Column("note", sa.String(length=255)),
        *_timestamps(),
    )

    op.create_table(
        "packages",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1024)),
        sa.Column("weekday_price", sa.Numeric(10, 2)),
        sa.Column("weekend_price", sa.Numeric(10, 2)),
        sa.Column("base_price", sa.Numeric(10, 2)),
        sa.Column("max_guests", sa.Integer(), nullable=False),
        sa.Column("min_guests", sa.Integer()),
        sa.Column("duration", sa.Numeric(4, 2)),
        sa.Column("features", JSON_TYPE, nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "food_options",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1024)),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("adult_price", sa.Numeric(10, 2)),
        sa.Column("kids_price", sa.Numeric(10, 2)),
        sa.Column("dishes", JSON_TYPE, nullable=False),
        sa.Column("upgrades", JSON_TYPE, nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "event_themes",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1024)),
        sa.Column("packages", JSON_TYPE, nullable=False),
        sa.Column("theme_names", JSON_TYPE, nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "extra_services",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1024)),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("category", sa.String(length=60), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "payment_settings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("cash_discount_enabled", sa.Boolean(), nullable=False),
        sa.Column("cash_discount_percentage", sa.Numeric(5, 2), nullable=False),
        sa.Column("cash_discount_description", sa.String(length=100), nullable=False),
        sa.Column(
            "cash_discount_applies_to",
            sa.Enum("REMAINING", "TOTAL", name="discountappliesto"),
            nullable=False,
        ),
        *_timestamps(),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "status",
            sa.Enum(
                "PENDING",
                "CONFIRMED",
                "CANCELLED",
                "COMPLETED",
                name="reservationstatus",
            ),
            nullable=False,
        ),
        sa.Column("child_name", sa.String(length=255), nullable=False),
        sa.Column("child_age", sa.Integer(), nullable=False),
        sa.Column("customer_phone", sa.String(length=32), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("event_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("adult_count", sa.Integer(), nullable=False),
        sa.Column("kids_count", sa.Integer(), nullable=False),
        sa.Column("package_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("food_option_id", sa.Uuid(as_uuid=True)),
        sa.Column("event_theme_id", sa.Uuid(as_uuid=True)),
        sa.Column("selected_theme_package", sa.String(length=64)),
        sa.Column("extra_service_ids", JSON_TYPE, nullable=False),
        sa.Column("food_upgrades", JSON_TYPE, nullable=False),
        sa.Column(
            "payment_method",
            sa.Enum("TRANSFER", "CASH", "CARD", name="paymentmethod"),
            nullable=False,
        ),
        sa.Column("special_comments", sa.String(length=1024)),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False),
        sa.Column("cash_discount_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("total", sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_reservations_event_date", "reservations", ["event_date"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_reservations_event_date", table_name="reservations")
    op.drop_table("reservations")
    op.drop_table("payment_settings")
    op.drop_table("extra_services")
    op.drop_table("event_themes")
    op.drop_table("food_options")
    op.drop_table("packages")
    op.drop_table("rest_day_releases")
    op.drop_table("rest_days")
    op.drop_table("time_blocks")
    op.drop_table("schedule_settings")
    sa.Enum(name="paymentmethod").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="reservationstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="discountappliesto").drop(op.get_bind(), checkfirst=True)
