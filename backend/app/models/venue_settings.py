"""Venue-wide payment configuration."""
from __future__ import annotations

import enum
import uuid
from decimal import Decimal

from sqlalchemy import Boolean, Enum, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.mixins import TimestampMixin


class DiscountAppliesTo(str, enum.Enum):
    """Which part of the bill a cash discount is advertised against."""

    REMAINING = "remaining"
    TOTAL = "total"


class PaymentSettings(TimestampMixin, Base):
    """Cash discount policy shown to clients paying in cash (single row)."""

    __tablename__ = "payment_settings"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    cash_discount_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    cash_discount_percentage: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("0")
    )
    cash_discount_description: Mapped[str] = mapped_column(
        String(100), nullable=False, default="Cash payment discount"
    )
    cash_discount_applies_to: Mapped[DiscountAppliesTo] = mapped_column(
        Enum(DiscountAppliesTo), nullable=False, default=DiscountAppliesTo.REMAINING
    )
