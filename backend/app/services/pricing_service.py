"""Pricing engine for reservation drafts."""

from __future__ import annotations

import datetime
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Protocol
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.catalog import (
    EventThemeRead,
    ExtraServiceRead,
    FoodOptionRead,
    PackageRead,
)
from app.schemas.draft import FoodUpgradeSelection, ReservationDraft
from app.services import catalog_service, venue_settings_service
from app.services.schedule_service import day_of_week

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0")

# Friday, Saturday and Sunday share the weekend tier.
WEEKEND_DAYS = frozenset({5, 6, 0})

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class _Identified(Protocol):
    id: UUID


@dataclass(slots=True)
class PricingBreakdown:
    """Itemized price for a reservation draft."""

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
    cash_discount_applies_to: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the breakdown to plain types for responses."""
        return {
            "base_price": _to_str(self.base_price),
            "food_price": _to_str(self.food_price),
            "upgrades_price": _to_str(self.upgrades_price),
            "theme_price": _to_str(self.theme_price),
            "extras_price": _to_str(self.extras_price),
            "subtotal": _to_str(self.subtotal),
            "cash_discount_amount": _to_str(self.cash_discount_amount),
            "discount": _to_str(self.discount),
            "total": _to_str(self.total),
            "is_weekend": self.is_weekend,
            "cash_discount_applies_to": self.cash_discount_applies_to,
        }


def _to_money(value: Decimal | float | str) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _to_str(value: Decimal) -> str:
    return f"{value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP):.2f}"


def is_weekend(value: datetime.date) -> bool:
    return day_of_week(value) in WEEKEND_DAYS


def day_range_label(value: datetime.date) -> str:
    """Label of the pricing tier a date belongs to."""
    if is_weekend(value):
        return "Friday - Sunday"
    return "Monday - Thursday"


def parse_guest_count(raw: str | int | None) -> int:
    """Read a typed headcount; anything without a leading integer counts as 0."""
    if raw is None:
        return 0
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def upgrade_display_total(
    upgrade: FoodUpgradeSelection, draft: ReservationDraft | None = None
) -> Decimal:
    """Informational ``price x guests`` figure shown next to an upgrade.

    The canonical breakdown charges ``additional_price`` once per upgrade entry;
    this total is display-only.
    """
    quantity = upgrade.quantity
    if quantity is None and draft is not None:
        raw = draft.adult_count if upgrade.category == "adult" else draft.kids_count
        quantity = parse_guest_count(raw)
    return upgrade.additional_price * (quantity or 0)


def _find(items: Iterable[_Identified], item_id: str | None) -> Any:
    if not item_id:
        return None
    return next((item for item in items if str(item.id) == item_id), None)


def _package_price(package: PackageRead | None, weekend: bool) -> Decimal:
    if package is None:
        return ZERO
    if package.pricing is not None:
        if weekend:
            return package.pricing.weekend or package.pricing.weekday or ZERO
        return package.pricing.weekday or ZERO
    return package.base_price or ZERO


def _food_price(food: FoodOptionRead | None, adults: int, kids: int) -> Decimal:
    if food is None:
        return ZERO
    adult_unit = food.adult_price if food.adult_price is not None else food.base_price
    kids_unit = food.kids_price if food.kids_price is not None else food.base_price
    return adult_unit * adults + kids_unit * kids


def _theme_price(theme: EventThemeRead | None, theme_package_id: str | None) -> Decimal:
    if theme is None or not theme_package_id:
        return ZERO
    for package in theme.packages:
        if package.id == theme_package_id:
            return package.price
    return ZERO


def calculate_pricing(
    draft: ReservationDraft,
    packages: Sequence[PackageRead],
    food_options: Sequence[FoodOptionRead],
    themes: Sequence[EventThemeRead],
    extras: Sequence[ExtraServiceRead],
) -> PricingBreakdown:
    """Compute the itemized total for ``draft``; missing selections count as zero."""
    adults = parse_guest_count(draft.adult_count)
    kids = parse_guest_count(draft.kids_count)
    weekend = is_weekend(draft.event_date) if draft.event_date else False

    base_price = _package_price(_find(packages, draft.package_id), weekend)
    food_price = _food_price(_find(food_options, draft.food_option_id), adults, kids)
    upgrades_price = sum(
        (upgrade.additional_price for upgrade in draft.selected_food_upgrades), ZERO
    )
    theme_price = _theme_price(
        _find(themes, draft.event_theme_id), draft.selected_theme_package
    )
    extras_price = ZERO
    for extra_id in draft.extra_service_ids:
        extra = _find(extras, extra_id)
        if extra is not None:
            extras_price += extra.price

    subtotal = base_price + food_price + upgrades_price + theme_price + extras_price

    cash_discount_amount = ZERO
    applies_to: str | None = None
    settings = draft.cash_discount
    if draft.payment_method == "cash" and settings is not None and settings.enabled:
        applies_to = settings.applies_to.value
        # Deposit/remaining split is a display concern; both use the subtotal.
        discount_base = subtotal
        cash_discount_amount = _to_money(discount_base * settings.percentage / 100)

    coupon_discount = ZERO
    total = subtotal - cash_discount_amount - coupon_discount

    return PricingBreakdown(
        base_price=base_price,
        food_price=food_price,
        upgrades_price=upgrades_price,
        theme_price=theme_price,
        extras_price=extras_price,
        subtotal=subtotal,
        cash_discount_amount=cash_discount_amount,
        discount=coupon_discount,
        total=total,
        is_weekend=weekend,
        cash_discount_applies_to=applies_to,
    )


async def quote_draft(
    session: AsyncSession,
    draft: ReservationDraft,
    *,
    catalog: catalog_service.ActiveCatalog | None = None,
) -> PricingBreakdown:
    """Price a draft against the active catalog and current payment settings."""
    if catalog is None:
        catalog = await catalog_service.load_active_catalog(session)
    if draft.payment_method == "cash":
        cash_discount = await venue_settings_service.get_cash_discount(session)
        draft = draft.model_copy(update={"cash_discount": cash_discount})
    return calculate_pricing(
        draft,
        catalog.packages,
        catalog.food_options,
        catalog.themes,
        catalog.extras,
    )
