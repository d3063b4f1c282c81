"""Pydantic schemas for reservations."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.models.reservation import PaymentMethod, ReservationStatus
from app.schemas.draft import ReservationDraft


class ReservationCreate(ReservationDraft):
    """A completed draft submitted for booking."""

    guest_shortfall_confirmed: bool = False

    def to_draft(self) -> ReservationDraft:
        return ReservationDraft.model_validate(
            self.model_dump(exclude={"guest_shortfall_confirmed"})
        )


class ReservationRead(BaseModel):
    """Serialized reservation representation."""

    id: uuid.UUID
    status: ReservationStatus
    child_name: str
    child_age: int
    customer_phone: str
    event_date: date
    event_time: str
    end_time: str
    adult_count: int
    kids_count: int
    package_id: uuid.UUID
    food_option_id: uuid.UUID | None = None
    event_theme_id: uuid.UUID | None = None
    selected_theme_package: str | None = None
    extra_service_ids: list[str] = Field(default_factory=list)
    food_upgrades: list[dict[str, Any]] = Field(default_factory=list)
    payment_method: PaymentMethod
    special_comments: str | None = None
    subtotal: Decimal
    cash_discount_amount: Decimal
    is_rest_day: bool = False
    rest_day_fee: Decimal = Decimal("0")
    total: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class StepValidationRequest(BaseModel):
    step: Literal[
        "basic", "datetime", "package", "food", "extras", "payment", "confirmation"
    ]
    draft: ReservationDraft


class GuestCapacityRead(BaseModel):
    status: Literal["within", "under", "over"]
    total_guests: int
    max_guests: int
    message: str | None = None


class ValidationResultRead(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    guest_capacity: GuestCapacityRead | None = None


class ReservationRejectedRead(BaseModel):
    detail: str
    errors: list[str] = Field(default_factory=list)
