"""Schemas for venue payment settings."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.venue_settings import DiscountAppliesTo


class CashDiscountSettings(BaseModel):
    """Discount offered when the client pays in cash."""

    enabled: bool = False
    percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    description: str = Field(default="Cash payment discount", max_length=100)
    applies_to: DiscountAppliesTo = DiscountAppliesTo.REMAINING

    model_config = ConfigDict(frozen=True)


class PaymentSettingsRead(BaseModel):
    cash_discount: CashDiscountSettings


class PaymentSettingsUpdate(BaseModel):
    cash_discount: CashDiscountSettings
