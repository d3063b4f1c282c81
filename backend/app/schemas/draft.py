"""Client-held reservation draft assembled across the wizard steps."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.venue_settings import CashDiscountSettings

PaymentMethodName = Literal["transfer", "cash", "card"]


class FoodUpgradeSelection(BaseModel):
    """A dish swapped for every guest of one category."""

    from_dish: str
    to_dish: str
    additional_price: Decimal = Field(ge=0)
    category: Literal["adult", "kids"]
    quantity: int | None = Field(default=None, ge=0)
    food_option_id: str | None = None

    model_config = ConfigDict(frozen=True)


class ReservationDraft(BaseModel):
    """Immutable snapshot of the booking wizard state."""

    child_name: str = ""
    child_age: str = ""
    customer_phone: str = ""
    adult_count: str = ""
    kids_count: str = ""
    event_date: date | None = None
    event_time: str = ""
    package_id: str | None = None
    food_option_id: str | None = None
    selected_food_upgrades: tuple[FoodUpgradeSelection, ...] = ()
    selected_drink: str = ""
    event_theme_id: str | None = None
    selected_theme_package: str | None = None
    selected_extra_services: str = ""
    special_comments: str = ""
    payment_method: PaymentMethodName | None = None
    coupon_code: str = ""
    terms_accepted: bool = False
    cash_discount: CashDiscountSettings | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("child_age", "adult_count", "kids_count", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def extra_service_ids(self) -> list[str]:
        return [
            item.strip()
            for item in self.selected_extra_services.split(",")
            if item.strip()
        ]
