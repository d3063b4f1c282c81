"""Draft reducer and client-side persistence."""

from __future__ import annotations

import datetime
import json
from decimal import Decimal

import pytest

from app.schemas.draft import ReservationDraft
from app.schemas.venue_settings import CashDiscountSettings
from app.services import draft_service

NOW = datetime.datetime(2025, 6, 1, 12, 0, tzinfo=datetime.UTC)


def _upgrade(category: str = "adult") -> dict[str, object]:
    return {
        "from_dish": "Tacos",
        "to_dish": "Steak",
        "additional_price": "50",
        "category": category,
    }


def test_apply_update_returns_new_draft() -> None:
    draft = ReservationDraft()
    updated = draft_service.apply_update(draft, {"child_name": "Ana", "adult_count": 12})

    assert draft.child_name == ""
    assert updated.child_name == "Ana"
    assert updated.adult_count == "12"


def test_apply_update_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError):
        draft_service.apply_update(ReservationDraft(), {"coupon": "X"})


def test_upgrade_quantity_follows_headcount() -> None:
    draft = draft_service.apply_update(
        ReservationDraft(adult_count="8", kids_count="5"),
        {"selected_food_upgrades": [_upgrade("adult"), _upgrade("kids")]},
    )
    assert [item.quantity for item in draft.selected_food_upgrades] == [8, 5]

    resized = draft_service.apply_update(draft, {"adult_count": "10"})
    assert [item.quantity for item in resized.selected_food_upgrades] == [10, 5]


def test_malformed_upgrades_are_rejected() -> None:
    missing_category = {
        key: value for key, value in _upgrade().items() if key != "category"
    }
    for upgrade in (missing_category, _upgrade("teens"), "Steak"):
        with pytest.raises(ValueError):
            draft_service.apply_update(
                ReservationDraft(adult_count="8"),
                {"selected_food_upgrades": [upgrade]},
            )


def test_cash_discount_is_dropped_when_payment_is_not_cash() -> None:
    settings = CashDiscountSettings(enabled=True, percentage=Decimal("5"))
    cash = draft_service.attach_cash_discount(
        ReservationDraft(payment_method="cash"), settings
    )
    assert cash.cash_discount == settings

    card = draft_service.apply_update(cash, {"payment_method": "card"})
    assert card.cash_discount is None
    assert draft_service.attach_cash_discount(card, settings).cash_discount is None


def test_saved_draft_loads_within_ttl() -> None:
    storage: dict[str, str] = {}
    draft = ReservationDraft(
        child_name="Ana", event_date=datetime.date(2025, 6, 14), adult_count="4"
    )
    draft_service.save_draft(storage, draft, now=NOW)

    payload = json.loads(storage[draft_service.STORAGE_KEY])
    assert payload["event_date"] == "2025-06-14"
    assert "timestamp" in payload

    loaded = draft_service.load_draft(
        storage, now=NOW + datetime.timedelta(hours=23, minutes=59)
    )
    assert loaded == draft


def test_stale_draft_is_discarded() -> None:
    storage: dict[str, str] = {}
    draft_service.save_draft(storage, ReservationDraft(child_name="Ana"), now=NOW)

    loaded = draft_service.load_draft(
        storage, now=NOW + datetime.timedelta(hours=24, seconds=1)
    )

    assert loaded is None
    assert draft_service.STORAGE_KEY not in storage


def test_naive_now_is_treated_as_utc() -> None:
    storage: dict[str, str] = {}
    draft_service.save_draft(storage, ReservationDraft(child_name="Ana"), now=NOW)
    naive_now = NOW.replace(tzinfo=None)

    fresh = draft_service.load_draft(
        storage, now=naive_now + datetime.timedelta(hours=1)
    )
    assert fresh is not None
    assert fresh.child_name == "Ana"

    stale = draft_service.load_draft(
        storage, now=naive_now + datetime.timedelta(hours=25)
    )
    assert stale is None


def test_corrupt_draft_is_discarded() -> None:
    storage = {draft_service.STORAGE_KEY: "{not json"}
    assert draft_service.load_draft(storage, now=NOW) is None
    assert storage == {}


def test_unparseable_event_date_is_dropped() -> None:
    storage = {
        draft_service.STORAGE_KEY: json.dumps(
            {"child_name": "Ana", "event_date": "soon", "timestamp": NOW.isoformat()}
        )
    }
    loaded = draft_service.load_draft(storage, now=NOW)
    assert loaded is not None
    assert loaded.event_date is None


def test_clear_draft() -> None:
    storage: dict[str, str] = {}
    draft_service.save_draft(storage, ReservationDraft(), now=NOW)
    draft_service.clear_draft(storage)
    assert storage == {}
