"""Availability schemas."""

from __future__ import annotations

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TimeSlotRead(BaseModel):
    block_name: str
    start_time: str
    end_time: str
    duration: Decimal
    max_capacity: int
    current_capacity: int
    remaining_capacity: int

    model_config = ConfigDict(from_attributes=True)


class DayAvailabilityRead(BaseModel):
    """Resolved slots for one date."""

    date: datetime.date
    day_of_week: int
    is_unavailable: bool
    is_rest_day: bool
    is_released: bool
    rest_day_fee: Decimal | None = None
    has_bookings: bool
    is_bookable: bool
    slots: list[TimeSlotRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class AvailabilityCalendarRead(BaseModel):
    available_slots: dict[str, DayAvailabilityRead]
    blocked_dates: list[str]


class SlotOptionRead(BaseModel):
    """A time the client can pick on the date step."""

    time: str
    end_time: str
    block_name: str
    total_capacity: int
    remaining_capacity: int


class DaySlotsRead(BaseModel):
    """Slots offered on one date plus the rest-day context shown with them."""

    date: datetime.date
    is_bookable: bool
    is_rest_day: bool = False
    rest_day_fee: Decimal | None = None
    default_event_duration: Decimal
    slots: list[SlotOptionRead] = Field(default_factory=list)


class MonthDaySummaryRead(BaseModel):
    date: datetime.date
    available: bool
    total_slots: int
    available_slots: int
    is_rest_day: bool
    rest_day_fee: Decimal | None = None
    has_reservations: bool

    model_config = ConfigDict(from_attributes=True)
