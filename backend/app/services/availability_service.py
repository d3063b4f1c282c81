"""Resolve bookable time slots and remaining capacity per calendar date."""
from __future__ import annotations

import datetime
from collections import defaultdict
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.models.reservation import Reservation, ReservationStatus
from app.schemas.schedule import ScheduleConfiguration
from app.services.schedule_service import (
    calculate_end_time,
    day_of_week,
    list_releases,
    time_to_minutes,
)

ACTIVE_BOOKING_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)

BookingCounts = Mapping[str, int]


@dataclass(slots=True)
class TimeSlot:
    """One bookable occurrence of a time block on a date."""

    block_name: str
    start_time: str
    end_time: str
    duration: Decimal
    max_capacity: int
    current_capacity: int
    remaining_capacity: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "block_name": self.block_name,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": str(self.duration),
            "max_capacity": self.max_capacity,
            "current_capacity": self.current_capacity,
            "remaining_capacity": self.remaining_capacity,
        }


@dataclass(slots=True)
class DayAvailability:
    """Resolved slots for a single date."""

    date: datetime.date
    day_of_week: int
    is_offered: bool = True
    is_unavailable: bool = False
    is_rest_day: bool = False
    is_released: bool = False
    rest_day_fee: Decimal | None = None
    has_bookings: bool = False
    slots: list[TimeSlot] = field(default_factory=list)

    @property
    def is_bookable(self) -> bool:
        return (
            self.is_offered
            and not self.is_unavailable
            and any(slot.remaining_capacity > 0 for slot in self.slots)
        )


@dataclass(slots=True)
class AvailabilityCalendar:
    """Availability across a date range keyed by ISO date."""

    available_slots: dict[str, DayAvailability]
    blocked_dates: list[str]


@dataclass(slots=True)
class DaySummary:
    """Aggregated slot counts for the admin month view."""

    date: datetime.date
    available: bool
    total_slots: int
    available_slots: int
    is_rest_day: bool
    rest_day_fee: Decimal | None
    has_reservations: bool


def venue_today(now: datetime.datetime | None = None) -> datetime.date:
    """Current date in the venue's timezone."""
    zone = ZoneInfo(get_settings().venue_timezone)
    if now is None:
        return datetime.datetime.now(zone).date()
    return now.astimezone(zone).date()


def is_within_booking_window(
    value: datetime.date, config: ScheduleConfiguration, today: datetime.date
) -> bool:
    earliest = today + datetime.timedelta(days=config.min_advance_booking_days)
    latest = today + datetime.timedelta(days=config.max_advance_booking_days)
    return earliest <= value <= latest


def resolve_day(
    value: datetime.date,
    config: ScheduleConfiguration,
    booking_counts: BookingCounts,
    *,
    today: datetime.date,
    released_dates: Collection[datetime.date] = (),
    enforce_booking_window: bool = True,
) -> DayAvailability:
    """Produce the slots for ``value``.

    ``booking_counts`` maps a slot start time (``HH:MM``) to the number of
    pending or confirmed reservations already holding it on that date.
    """
    weekday = day_of_week(value)
    day = DayAvailability(
        date=value,
        day_of_week=weekday,
        has_bookings=any(count > 0 for count in booking_counts.values()),
    )

    if enforce_booking_window and not is_within_booking_window(value, config, today):
        day.is_offered = False
        return day

    rest_day = config.rest_day_for(weekday)
    if rest_day is not None:
        day.is_rest_day = True
        day.rest_day_fee = rest_day.fee
        day.is_released = rest_day.can_be_released and value in released_dates
        if not day.is_released:
            day.is_unavailable = True
            return day

    day_locked = config.one_event_per_day and day.has_bookings
    for block in config.time_blocks:
        if weekday not in block.days:
            continue
        total = 1 if config.one_event_per_day else block.max_events_per_block
        booked = booking_counts.get(block.start_time, 0)
        remaining = 0 if day_locked else max(0, total - booked)
        day.slots.append(
            TimeSlot(
                block_name=block.name,
                start_time=block.start_time,
                end_time=calculate_end_time(
                    block.start_time, block.duration, block.half_hour_break
                ),
                duration=block.duration,
                max_capacity=total,
                current_capacity=booked,
                remaining_capacity=remaining,
            )
        )

    day.slots.sort(key=lambda slot: time_to_minutes(slot.start_time))
    return day


def _date_range(
    start_date: datetime.date, end_date: datetime.date
) -> Iterable[datetime.date]:
    current = start_date
    while current <= end_date:
        yield current
        current += datetime.timedelta(days=1)


def resolve_range(
    start_date: datetime.date,
    end_date: datetime.date,
    config: ScheduleConfiguration,
    counts_by_date: Mapping[datetime.date, BookingCounts],
    *,
    today: datetime.date,
    released_dates: Collection[datetime.date] = (),
) -> AvailabilityCalendar:
    """Resolve every date in ``[start_date, end_date]`` for the booking calendar."""
    if start_date > end_date:
        raise ValueError("start_date must be before or equal to end_date")

    available: dict[str, DayAvailability] = {}
    blocked: list[str] = []
    for value in _date_range(start_date, end_date):
        day = resolve_day(
            value,
            config,
            counts_by_date.get(value, {}),
            today=today,
            released_dates=released_dates,
        )
        key = value.isoformat()
        if day.is_offered:
            available[key] = day
        if not day.is_bookable:
            blocked.append(key)
    return AvailabilityCalendar(available_slots=available, blocked_dates=blocked)


def summarize_day(day: DayAvailability) -> DaySummary:
    open_slots = sum(1 for slot in day.slots if slot.remaining_capacity > 0)
    return DaySummary(
        date=day.date,
        available=open_slots > 0,
        total_slots=len(day.slots),
        available_slots=open_slots,
        is_rest_day=day.is_rest_day,
        rest_day_fee=day.rest_day_fee,
        has_reservations=day.has_bookings,
    )


def summarize_month(
    year: int,
    month: int,
    config: ScheduleConfiguration,
    counts_by_date: Mapping[datetime.date, BookingCounts],
    *,
    released_dates: Collection[datetime.date] = (),
) -> list[DaySummary]:
    """Summaries for every day of a month, ignoring the client booking window."""
    first = datetime.date(year, month, 1)
    next_month = (first + datetime.timedelta(days=32)).replace(day=1)
    last = next_month - datetime.timedelta(days=1)
    return [
        summarize_day(
            resolve_day(
                value,
                config,
                counts_by_date.get(value, {}),
                today=first,
                released_dates=released_dates,
                enforce_booking_window=False,
            )
        )
        for value in _date_range(first, last)
    ]


async def count_bookings(
    session: AsyncSession,
    *,
    start_date: datetime.date,
    end_date: datetime.date,
) -> dict[datetime.date, dict[str, int]]:
    """Active reservations per date and slot start, read in one query."""
    stmt = (
        select(Reservation.event_date, Reservation.event_time, func.count())
        .where(
            Reservation.event_date >= start_date,
            Reservation.event_date <= end_date,
            Reservation.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .group_by(Reservation.event_date, Reservation.event_time)
    )
    counts: dict[datetime.date, dict[str, int]] = defaultdict(dict)
    for event_date, event_time, total in (await session.execute(stmt)).all():
        counts[event_date][event_time] = total
    return dict(counts)


async def released_dates_between(
    session: AsyncSession,
    *,
    start_date: datetime.date,
    end_date: datetime.date,
) -> set[datetime.date]:
    releases = await list_releases(session, start_date=start_date, end_date=end_date)
    return {release.release_date for release in releases}
