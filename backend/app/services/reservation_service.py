"""Reservation submission and lifecycle helpers."""
from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog import Package
from app.models.reservation import PaymentMethod, Reservation, ReservationStatus
from app.schemas.catalog import PackageRead
from app.schemas.draft import ReservationDraft
from app.schemas.reservation import ReservationCreate
from app.services import (
    availability_service,
    booking_rules_service,
    catalog_service,
    pricing_service,
)
from app.services.schedule_service import (
    load_schedule_configuration,
    minutes_to_time,
    time_to_minutes,
)

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {
        ReservationStatus.COMPLETED,
        ReservationStatus.CANCELLED,
    },
    ReservationStatus.COMPLETED: set(),
    ReservationStatus.CANCELLED: set(),
}

_LEADING_INT = re.compile(r"^\s*(\d+)")


class ReservationRejected(ValueError):
    """Raised when a submitted reservation cannot be booked."""

    def __init__(self, message: str, errors: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


def _parse_uuid(value: str | None, label: str) -> uuid.UUID | None:
    if not value:
        return None
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise ReservationRejected(f"Unknown {label}") from exc


async def list_reservations(
    session: AsyncSession,
    *,
    status: ReservationStatus | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Reservation]:
    stmt = select(Reservation).order_by(
        Reservation.event_date.asc(), Reservation.event_time.asc()
    )
    if status is not None:
        stmt = stmt.where(Reservation.status == status)
    if start_date is not None:
        stmt = stmt.where(Reservation.event_date >= start_date)
    if end_date is not None:
        stmt = stmt.where(Reservation.event_date <= end_date)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().all()


async def get_reservation(
    session: AsyncSession, *, reservation_id: uuid.UUID
) -> Reservation | None:
    return await session.get(Reservation, reservation_id)


async def _load_package(session: AsyncSession, package_id: str | None) -> PackageRead:
    parsed = _parse_uuid(package_id, "package")
    package = await session.get(Package, parsed) if parsed else None
    if package is None or not package.active:
        raise ReservationRejected("The selected package is not available")
    return PackageRead.model_validate(package)


def _resolve_selections(
    draft: ReservationDraft, catalog: catalog_service.ActiveCatalog
) -> None:
    """Reject selections that do not match an active catalog entry."""
    food = None
    if draft.food_option_id:
        food = next(
            (
                item
                for item in catalog.food_options
                if str(item.id) == draft.food_option_id
            ),
            None,
        )
        if food is None:
            raise ReservationRejected("The selected food option is not available")

    for upgrade in draft.selected_food_upgrades:
        if food is None:
            raise ReservationRejected("Food upgrades require a food option")
        if upgrade.food_option_id and upgrade.food_option_id != str(food.id):
            raise ReservationRejected("The selected food upgrade is not offered")
        offered = getattr(food.upgrades, upgrade.category)
        if not any(
            item.from_dish == upgrade.from_dish
            and item.to_dish == upgrade.to_dish
            and item.additional_price == upgrade.additional_price
            for item in offered
        ):
            raise ReservationRejected("The selected food upgrade is not offered")

    if draft.event_theme_id:
        theme = next(
            (item for item in catalog.themes if str(item.id) == draft.event_theme_id),
            None,
        )
        if theme is None:
            raise ReservationRejected("The selected theme is not available")
        if draft.selected_theme_package and not any(
            item.id == draft.selected_theme_package for item in theme.packages
        ):
            raise ReservationRejected("The selected theme package is not available")
    elif draft.selected_theme_package:
        raise ReservationRejected("A theme package requires a theme")

    active_extras = {str(item.id) for item in catalog.extras}
    if any(extra_id not in active_extras for extra_id in draft.extra_service_ids):
        raise ReservationRejected("A selected extra service is not available")


async def _ensure_slot_available(
    session: AsyncSession, *, event_date: date, event_time: str, today: date
) -> tuple[availability_service.DayAvailability, availability_service.TimeSlot]:
    """Return the day and the slot starting at ``event_time`` if it can be booked."""
    config = await load_schedule_configuration(session)
    counts = await availability_service.count_bookings(
        session, start_date=event_date, end_date=event_date
    )
    released = await availability_service.released_dates_between(
        session, start_date=event_date, end_date=event_date
    )
    day = availability_service.resolve_day(
        event_date,
        config,
        counts.get(event_date, {}),
        today=today,
        released_dates=released,
    )
    if not day.is_offered:
        raise ReservationRejected("The selected date is outside the booking window")
    if day.is_unavailable:
        raise ReservationRejected("The selected date is not available")

    slot = next(
        (item for item in day.slots if item.start_time == event_time), None
    )
    if slot is None:
        raise ReservationRejected("The selected time is not offered on that date")
    if slot.remaining_capacity <= 0:
        raise ReservationRejected("Capacity limit reached for the selected slot")
    return day, slot


async def create_reservation(
    session: AsyncSession,
    *,
    payload: ReservationCreate,
    today: date | None = None,
) -> Reservation:
    """Validate, price and persist a submitted draft as a pending reservation."""
    draft = payload.to_draft()
    validation = booking_rules_service.validate_submission(draft)
    if not validation.is_valid:
        raise ReservationRejected("The reservation is incomplete", validation.errors)

    package = await _load_package(session, draft.package_id)
    capacity = booking_rules_service.check_guest_capacity(draft, package)
    if capacity.is_blocking:
        raise ReservationRejected(capacity.message or "Too many guests")
    if capacity.requires_confirmation and not payload.guest_shortfall_confirmed:
        raise ReservationRejected(capacity.message or "Guest shortfall not confirmed")

    if draft.event_date is None:
        raise ReservationRejected("The event date is required")
    try:
        event_time = minutes_to_time(time_to_minutes(draft.event_time))
    except ValueError as exc:
        raise ReservationRejected("The event time is not valid") from exc
    day, slot = await _ensure_slot_available(
        session,
        event_date=draft.event_date,
        event_time=event_time,
        today=today or availability_service.venue_today(),
    )

    catalog = await catalog_service.load_active_catalog(session)
    _resolve_selections(draft, catalog)
    breakdown = await pricing_service.quote_draft(session, draft, catalog=catalog)
    # Released rest days carry their fee on top of the quoted price.
    rest_day_fee = Decimal("0")
    if day.is_rest_day and day.is_released:
        rest_day_fee = day.rest_day_fee or Decimal("0")
    age_match = _LEADING_INT.match(draft.child_age)

    reservation = Reservation(
        status=ReservationStatus.PENDING,
        child_name=draft.child_name.strip(),
        child_age=int(age_match.group(1)) if age_match else 0,
        customer_phone=draft.customer_phone.strip(),
        event_date=draft.event_date,
        event_time=slot.start_time,
        end_time=slot.end_time,
        adult_count=pricing_service.parse_guest_count(draft.adult_count),
        kids_count=pricing_service.parse_guest_count(draft.kids_count),
        package_id=package.id,
        food_option_id=_parse_uuid(draft.food_option_id, "food option"),
        event_theme_id=_parse_uuid(draft.event_theme_id, "event theme"),
        selected_theme_package=draft.selected_theme_package,
        extra_service_ids=draft.extra_service_ids,
        food_upgrades=[
            upgrade.model_dump(mode="json") for upgrade in draft.selected_food_upgrades
        ],
        payment_method=PaymentMethod(draft.payment_method),
        special_comments=draft.special_comments or None,
        subtotal=breakdown.subtotal,
        cash_discount_amount=breakdown.cash_discount_amount,
        is_rest_day=day.is_rest_day,
        rest_day_fee=rest_day_fee,
        total=breakdown.total + rest_day_fee,
    )
    session.add(reservation)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(reservation)
    logger.info(
        "Created reservation %s for %s %s",
        reservation.id,
        reservation.event_date.isoformat(),
        reservation.event_time,
    )
    return reservation


def _validate_status_transition(
    current: ReservationStatus, target: ReservationStatus
) -> None:
    if target == current:
        return
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise ValueError(
            f"Invalid status transition from {current.value} to {target.value}"
        )


async def update_reservation_status(
    session: AsyncSession,
    *,
    reservation: Reservation,
    status: ReservationStatus,
) -> Reservation:
    _validate_status_transition(reservation.status, status)
    reservation.status = status
    await session.commit()
    await session.refresh(reservation)
    logger.info("Reservation %s moved to %s", reservation.id, status.value)
    return reservation
