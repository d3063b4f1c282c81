"""Pricing schema definitions."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class PricingBreakdownRead(BaseModel):
    """Itemized price of a reservation draft."""

    base_price: Decimal
    food_price: Decimal
    upgrades_price: Decimal
    theme_price: Decimal
    extras_price: Decimal
    subtotal: Decimal
    cash_discount_amount: Decimal
    discount: Decimal
    total: Decimal
    is_weekend: bool
    day_range: str | None = None
    cash_discount_applies_to: str | None = None
