"""Itemized pricing of reservation drafts."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

import pytest

from app.models.venue_settings import DiscountAppliesTo
from app.schemas.catalog import (
    EventThemeRead,
    ExtraServiceRead,
    FoodOptionRead,
    PackageRead,
)
from app.schemas.draft import FoodUpgradeSelection, ReservationDraft
from app.schemas.venue_settings import CashDiscountSettings
from app.services.pricing_service import (
    calculate_pricing,
    day_range_label,
    is_weekend,
    parse_guest_count,
    upgrade_display_total,
)

PACKAGE = PackageRead(
    id=uuid.uuid4(),
    name="Fiesta",
    pricing={"weekday": Decimal("2500"), "weekend": Decimal("3000")},
    max_guests=50,
)
LEGACY_PACKAGE = PackageRead(
    id=uuid.uuid4(), name="Classic", base_price=Decimal("1800"), max_guests=30
)
FOOD = FoodOptionRead(
    id=uuid.uuid4(),
    name="Tacos",
    base_price=Decimal("90"),
    adult_price=Decimal("150"),
    kids_price=Decimal("100"),
)
FLAT_FOOD = FoodOptionRead(id=uuid.uuid4(), name="Pizza", base_price=Decimal("70"))
THEME = EventThemeRead(
    id=uuid.uuid4(),
    name="Superheroes",
    packages=[
        {"id": "basic", "name": "Basic", "price": Decimal("400")},
        {"id": "premium", "name": "Premium", "price": Decimal("900")},
    ],
)
CLOWN = ExtraServiceRead(id=uuid.uuid4(), name="Clown", price=Decimal("300"))
PHOTO = ExtraServiceRead(
    id=uuid.uuid4(), name="Photographer", price=Decimal("1200"), category="photography"
)

SATURDAY = datetime.date(2025, 6, 14)
FRIDAY = datetime.date(2025, 6, 13)
THURSDAY = datetime.date(2025, 6, 12)

CASH_FIVE_PERCENT = CashDiscountSettings(
    enabled=True, percentage=Decimal("5"), applies_to=DiscountAppliesTo.REMAINING
)


def _price(draft: ReservationDraft):
    return calculate_pricing(
        draft, [PACKAGE, LEGACY_PACKAGE], [FOOD, FLAT_FOOD], [THEME], [CLOWN, PHOTO]
    )


def test_saturday_cash_booking_matches_reference_breakdown() -> None:
    draft = ReservationDraft(
        package_id=str(PACKAGE.id),
        food_option_id=str(FOOD.id),
        adult_count="4",
        kids_count="2",
        event_date=SATURDAY,
        payment_method="cash",
        cash_discount=CASH_FIVE_PERCENT,
    )

    breakdown = _price(draft)

    assert breakdown.base_price == Decimal("3000")
    assert breakdown.food_price == Decimal("800")
    assert breakdown.subtotal == Decimal("3800")
    assert breakdown.cash_discount_amount == Decimal("190.00")
    assert breakdown.total == Decimal("3610.00")
    assert breakdown.is_weekend
    assert breakdown.cash_discount_applies_to == "remaining"
    assert breakdown.to_dict()["total"] == "3610.00"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime.date(2025, 6, 9), False),
        (datetime.date(2025, 6, 10), False),
        (datetime.date(2025, 6, 11), False),
        (THURSDAY, False),
        (FRIDAY, True),
        (SATURDAY, True),
        (datetime.date(2025, 6, 15), True),
    ],
)
def test_friday_through_sunday_is_weekend(value: datetime.date, expected: bool) -> None:
    assert is_weekend(value) is expected


def test_day_range_labels() -> None:
    assert day_range_label(FRIDAY) == "Friday - Sunday"
    assert day_range_label(THURSDAY) == "Monday - Thursday"


def test_friday_uses_weekend_tier_and_thursday_weekday_tier() -> None:
    friday = _price(ReservationDraft(package_id=str(PACKAGE.id), event_date=FRIDAY))
    thursday = _price(ReservationDraft(package_id=str(PACKAGE.id), event_date=THURSDAY))

    assert friday.base_price == Decimal("3000")
    assert thursday.base_price == Decimal("2500")


def test_draft_without_date_prices_at_weekday_rate() -> None:
    breakdown = _price(ReservationDraft(package_id=str(PACKAGE.id)))
    assert breakdown.base_price == Decimal("2500")
    assert not breakdown.is_weekend


def test_legacy_package_uses_flat_base_price() -> None:
    breakdown = _price(
        ReservationDraft(package_id=str(LEGACY_PACKAGE.id), event_date=SATURDAY)
    )
    assert breakdown.base_price == Decimal("1800")


def test_food_without_category_prices_falls_back_to_base_price() -> None:
    breakdown = _price(
        ReservationDraft(
            food_option_id=str(FLAT_FOOD.id), adult_count="3", kids_count="2"
        )
    )
    assert breakdown.food_price == Decimal("350")


def test_upgrades_are_charged_once_per_entry() -> None:
    upgrade = FoodUpgradeSelection(
        from_dish="Tacos",
        to_dish="Steak",
        additional_price=Decimal("50"),
        category="adult",
        quantity=10,
    )
    draft = ReservationDraft(adult_count="10", selected_food_upgrades=(upgrade,))

    assert _price(draft).upgrades_price == Decimal("50")
    assert upgrade_display_total(upgrade, draft) == Decimal("500")


def test_theme_and_extras_are_added() -> None:
    draft = ReservationDraft(
        event_theme_id=str(THEME.id),
        selected_theme_package="premium",
        selected_extra_services=f"{CLOWN.id},{PHOTO.id},,unknown",
    )

    breakdown = _price(draft)

    assert breakdown.theme_price == Decimal("900")
    assert breakdown.extras_price == Decimal("1500")
    assert breakdown.subtotal == Decimal("2400")


def test_missing_selections_and_bad_counts_price_as_zero() -> None:
    breakdown = _price(
        ReservationDraft(
            package_id=str(uuid.uuid4()),
            food_option_id=str(FOOD.id),
            adult_count="many",
            kids_count="",
        )
    )
    assert breakdown.subtotal == Decimal("0")
    assert breakdown.total == Decimal("0")


def test_cash_discount_only_applies_to_cash_payments() -> None:
    common = {
        "package_id": str(PACKAGE.id),
        "event_date": SATURDAY,
        "cash_discount": CASH_FIVE_PERCENT,
    }
    card = _price(ReservationDraft(payment_method="card", **common))
    disabled = _price(
        ReservationDraft(
            payment_method="cash",
            **{**common, "cash_discount": CashDiscountSettings(percentage=Decimal("5"))},
        )
    )

    assert card.cash_discount_amount == Decimal("0")
    assert card.total == card.subtotal
    assert disabled.cash_discount_amount == Decimal("0")


def test_discount_rounds_to_cents_and_total_is_exact() -> None:
    settings = CashDiscountSettings(
        enabled=True, percentage=Decimal("7.5"), applies_to=DiscountAppliesTo.TOTAL
    )
    draft = ReservationDraft(
        food_option_id=str(FLAT_FOOD.id),
        adult_count="3",
        payment_method="cash",
        cash_discount=settings,
    )

    breakdown = _price(draft)

    assert breakdown.subtotal == Decimal("210")
    assert breakdown.cash_discount_amount == Decimal("15.75")
    assert breakdown.total == breakdown.subtotal - breakdown.cash_discount_amount


def test_pricing_is_deterministic() -> None:
    draft = ReservationDraft(
        package_id=str(PACKAGE.id), adult_count="5", event_date=SATURDAY
    )
    assert _price(draft) == _price(draft)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("12", 12), (" 7 guests", 7), ("", 0), ("abc", 0), (None, 0), (4, 4)],
)
def test_guest_counts_parse_leading_integers(raw, expected: int) -> None:
    assert parse_guest_count(raw) == expected
