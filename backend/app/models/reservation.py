"""Reservation models."""
from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, Date, Enum, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.mixins import JSONB_TYPE, TimestampMixin


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentMethod(str, enum.Enum):
    """Ways a client can settle the reservation."""

    TRANSFER = "transfer"
    CASH = "cash"
    CARD = "card"


class Reservation(TimestampMixin, Base):
    """A submitted party booking for a single slot."""

    __tablename__ = "reservations"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), default=ReservationStatus.PENDING, nullable=False
    )
    child_name: Mapped[str] = mapped_column(String(255), nullable=False)
    child_age: Mapped[int] = mapped_column(Integer, nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    event_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    adult_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    kids_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    package_id: Mapped[uuid.UUID] = mapped_column(nullable=False)
    food_option_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    event_theme_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    selected_theme_package: Mapped[str | None] = mapped_column(String(64))
    extra_service_ids: Mapped[list[str]] = mapped_column(
        JSONB_TYPE, nullable=False, default=list
    )
    food_upgrades: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB_TYPE, nullable=False, default=list
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod), nullable=False
    )
    special_comments: Mapped[str | None] = mapped_column(String(1024))
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    cash_discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    is_rest_day: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rest_day_fee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
