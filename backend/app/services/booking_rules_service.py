"""Wizard step validation and the package guest-capacity guard."""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Literal

from app.schemas.catalog import PackageRead
from app.schemas.draft import ReservationDraft
from app.services.pricing_service import parse_guest_count

StepType = Literal[
    "basic", "datetime", "package", "food", "extras", "payment", "confirmation"
]

SUBMISSION_STEPS: tuple[StepType, ...] = ("basic", "datetime", "package", "payment")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^[\d\s\-+()]+$")
_PHONE_NOISE_RE = re.compile(r"[\s\-()]")
_COUPON_RE = re.compile(r"^[A-Z0-9]+$", re.IGNORECASE)
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


@dataclass(slots=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


class GuestCapacityStatus(str, enum.Enum):
    WITHIN = "within"
    UNDER = "under"
    OVER = "over"


@dataclass(slots=True)
class GuestCapacityCheck:
    """Headcount compared to the package maximum.

    ``OVER`` blocks progression; ``UNDER`` needs explicit client confirmation.
    """

    status: GuestCapacityStatus
    total_guests: int
    max_guests: int
    message: str | None = None

    @property
    def is_blocking(self) -> bool:
        return self.status is GuestCapacityStatus.OVER

    @property
    def requires_confirmation(self) -> bool:
        return self.status is GuestCapacityStatus.UNDER


def validate_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    return bool(_PHONE_RE.match(phone)) and len(_PHONE_NOISE_RE.sub("", phone)) >= 10


def validate_coupon_code(code: str) -> bool:
    return len(code) >= 4 and bool(_COUPON_RE.match(code))


def _validate_basic(draft: ReservationDraft, errors: list[str]) -> None:
    if not draft.child_name.strip():
        errors.append("The child's name is required")
    if not draft.child_age:
        errors.append("The child's age is required")
    else:
        match = _LEADING_INT.match(draft.child_age)
        age = int(match.group(0)) if match else None
        if age is None or age < 1 or age > 18:
            errors.append("Age must be between 1 and 18 years")
    if not draft.customer_phone.strip():
        errors.append("A contact phone number is required")
    elif not validate_phone(draft.customer_phone):
        errors.append("The phone number format is not valid")


def _validate_package(draft: ReservationDraft, errors: list[str]) -> None:
    if not draft.package_id:
        errors.append("A package must be selected")
    adults = parse_guest_count(draft.adult_count)
    kids = parse_guest_count(draft.kids_count)
    if draft.adult_count == "" and draft.kids_count == "":
        errors.append("The number of guests must be specified")
    elif adults + kids == 0:
        errors.append("There must be at least one guest")
    elif adults < 0 or kids < 0:
        errors.append("Guest counts cannot be negative")


def validate_step(step: StepType, draft: ReservationDraft) -> ValidationResult:
    errors: list[str] = []
    if step == "basic":
        _validate_basic(draft, errors)
    elif step == "datetime":
        if draft.event_date is None:
            errors.append("The event date is required")
        if not draft.event_time:
            errors.append("The event time is required")
    elif step == "package":
        _validate_package(draft, errors)
    elif step == "payment":
        if not draft.payment_method:
            errors.append("A payment method must be selected")
        if not draft.terms_accepted:
            errors.append("The terms and conditions must be accepted")
    return ValidationResult(is_valid=not errors, errors=errors)


def validate_submission(draft: ReservationDraft) -> ValidationResult:
    """Run every step a submitted reservation must pass."""
    errors: list[str] = []
    for step in SUBMISSION_STEPS:
        errors.extend(validate_step(step, draft).errors)
    return ValidationResult(is_valid=not errors, errors=errors)


def check_guest_capacity(
    draft: ReservationDraft, package: PackageRead
) -> GuestCapacityCheck:
    total = parse_guest_count(draft.adult_count) + parse_guest_count(draft.kids_count)
    if total > package.max_guests:
        return GuestCapacityCheck(
            status=GuestCapacityStatus.OVER,
            total_guests=total,
            max_guests=package.max_guests,
            message=(
                f"{total} guests exceed the package capacity of {package.max_guests}"
            ),
        )
    if total < package.max_guests:
        missing = package.max_guests - total
        return GuestCapacityCheck(
            status=GuestCapacityStatus.UNDER,
            total_guests=total,
            max_guests=package.max_guests,
            message=(
                f"You selected {total} of {package.max_guests} available guests; "
                f"{missing} more can still be added"
            ),
        )
    return GuestCapacityCheck(
        status=GuestCapacityStatus.WITHIN,
        total_guests=total,
        max_guests=package.max_guests,
    )
