"""Weekly schedule configuration: settings, time blocks and rest days."""
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.mixins import JSONB_TYPE, TimestampMixin


class ScheduleSettings(TimestampMixin, Base):
    """Venue-wide booking window and capacity policy (single row)."""

    __tablename__ = "schedule_settings"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    min_advance_booking_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=7
    )
    max_advance_booking_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=90
    )
    one_event_per_day: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    max_concurrent_events: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )
    default_event_duration: Mapped[Decimal] = mapped_column(
        Numeric(4, 2), nullable=False, default=Decimal("3.5")
    )


class TimeBlock(TimestampMixin, Base):
    """Recurring weekly window in which events may be booked."""

    __tablename__ = "time_blocks"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    days: Mapped[list[int]] = mapped_column(JSONB_TYPE, nullable=False, default=list)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    duration: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    half_hour_break: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    max_events_per_block: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )


class RestDay(TimestampMixin, Base):
    """Weekday on which the venue is closed unless the date is released."""

    __tablename__ = "rest_days"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    day: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    fee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    can_be_released: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )


class RestDayRelease(TimestampMixin, Base):
    """A specific rest-day date opened for bookings."""

    __tablename__ = "rest_day_releases"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    release_date: Mapped[date] = mapped_column(Date, nullable=False, unique=True)
    note: Mapped[str | None] = mapped_column(String(255))
