"""Wizard step validation and guest capacity checks."""

from __future__ import annotations

import datetime
import uuid

import pytest

from app.schemas.catalog import PackageRead
from app.schemas.draft import ReservationDraft
from app.services.booking_rules_service import (
    GuestCapacityStatus,
    check_guest_capacity,
    validate_coupon_code,
    validate_email,
    validate_phone,
    validate_step,
    validate_submission,
)

PACKAGE = PackageRead(id=uuid.uuid4(), name="Fiesta", base_price=1000, max_guests=20)


def _complete_draft(**overrides) -> ReservationDraft:
    values = {
        "child_name": "Ana",
        "child_age": "6",
        "customer_phone": "55 1234 5678",
        "event_date": datetime.date(2025, 6, 14),
        "event_time": "14:00",
        "package_id": str(PACKAGE.id),
        "adult_count": "10",
        "kids_count": "10",
        "payment_method": "transfer",
        "terms_accepted": True,
    }
    values.update(overrides)
    return ReservationDraft(**values)


def test_complete_draft_passes_every_step() -> None:
    assert validate_submission(_complete_draft()).is_valid


def test_basic_step_reports_each_missing_field() -> None:
    result = validate_step("basic", ReservationDraft())
    assert not result.is_valid
    assert len(result.errors) == 3


@pytest.mark.parametrize("age", ["0", "19", "abc"])
def test_basic_step_rejects_out_of_range_ages(age: str) -> None:
    result = validate_step("basic", _complete_draft(child_age=age))
    assert result.errors == ["Age must be between 1 and 18 years"]


def test_datetime_step_requires_date_and_time() -> None:
    result = validate_step("datetime", ReservationDraft())
    assert len(result.errors) == 2


def test_package_step_guest_rules() -> None:
    empty = validate_step("package", _complete_draft(adult_count="", kids_count=""))
    zero = validate_step("package", _complete_draft(adult_count="0", kids_count="0"))
    negative = validate_step("package", _complete_draft(adult_count="-2", kids_count="5"))

    assert empty.errors == ["The number of guests must be specified"]
    assert zero.errors == ["There must be at least one guest"]
    assert negative.errors == ["Guest counts cannot be negative"]


def test_payment_step_requires_method_and_terms() -> None:
    result = validate_step("payment", ReservationDraft())
    assert len(result.errors) == 2


def test_steps_without_rules_always_pass() -> None:
    for step in ("food", "extras", "confirmation"):
        assert validate_step(step, ReservationDraft()).is_valid


@pytest.mark.parametrize(
    ("phone", "valid"),
    [
        ("55 1234 5678", True),
        ("+52 (55) 1234-5678", True),
        ("12345", False),
        ("55-1234-abcd", False),
    ],
)
def test_validate_phone(phone: str, valid: bool) -> None:
    assert validate_phone(phone) is valid


def test_validate_email_and_coupon() -> None:
    assert validate_email("parent@example.com")
    assert not validate_email("parent@example")
    assert validate_coupon_code("FIESTA10")
    assert not validate_coupon_code("AB1")
    assert not validate_coupon_code("FIESTA-10")


def test_guest_capacity_statuses() -> None:
    within = check_guest_capacity(_complete_draft(), PACKAGE)
    under = check_guest_capacity(_complete_draft(adult_count="5"), PACKAGE)
    over = check_guest_capacity(_complete_draft(adult_count="15"), PACKAGE)

    assert within.status is GuestCapacityStatus.WITHIN
    assert not within.is_blocking and not within.requires_confirmation
    assert under.status is GuestCapacityStatus.UNDER
    assert under.requires_confirmation
    assert "5 more" in under.message
    assert over.status is GuestCapacityStatus.OVER
    assert over.is_blocking
    assert over.total_guests == 25
