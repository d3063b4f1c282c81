"""Bookable catalog: packages, food options, themes and extras."""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.mixins import JSONB_TYPE, TimestampMixin


class Package(TimestampMixin, Base):
    """Party package priced per weekday/weekend tier."""

    __tablename__ = "packages"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1024))
    weekday_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    weekend_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    base_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    max_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    min_guests: Mapped[int | None] = mapped_column(Integer)
    duration: Mapped[Decimal | None] = mapped_column(Numeric(4, 2))
    features: Mapped[list[str]] = mapped_column(JSONB_TYPE, nullable=False, default=list)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @property
    def pricing(self) -> dict[str, Decimal] | None:
        """Tiered pricing, or ``None`` for packages with a flat legacy price."""
        if self.weekday_price is None and self.weekend_price is None:
            return None
        return {
            "weekday": self.weekday_price or Decimal("0"),
            "weekend": self.weekend_price or Decimal("0"),
        }


class FoodOption(TimestampMixin, Base):
    """Meal package with per-guest pricing and dish upgrades."""

    __tablename__ = "food_options"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1024))
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    adult_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    kids_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    dishes: Mapped[dict[str, Any]] = mapped_column(JSONB_TYPE, nullable=False, default=dict)
    upgrades: Mapped[dict[str, Any]] = mapped_column(
        JSONB_TYPE, nullable=False, default=dict
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class EventTheme(TimestampMixin, Base):
    """Decoration theme with nested priced sub-packages."""

    __tablename__ = "event_themes"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1024))
    packages: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB_TYPE, nullable=False, default=list
    )
    theme_names: Mapped[list[str]] = mapped_column(
        JSONB_TYPE, nullable=False, default=list
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ExtraService(TimestampMixin, Base):
    """Flat-priced add-on service."""

    __tablename__ = "extra_services"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1024))
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(60), nullable=False, default="other")
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
