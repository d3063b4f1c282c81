"""Schemas for the weekly schedule configuration."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_TIME_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d$"


class TimeBlockBase(BaseModel):
    """Recurring weekly window; ``days`` use 0 = Sunday ... 6 = Saturday."""

    name: str = Field(min_length=1, max_length=120)
    days: list[int] = Field(min_length=1)
    start_time: str = Field(pattern=_TIME_PATTERN)
    end_time: str = Field(pattern=_TIME_PATTERN)
    duration: Decimal = Field(ge=Decimal("0.5"), le=Decimal("24"))
    half_hour_break: bool = True
    max_events_per_block: int = Field(default=1, ge=1)

    @field_validator("days")
    @classmethod
    def _normalize_days(cls, value: list[int]) -> list[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("Days must be between 0 (Sunday) and 6 (Saturday)")
        return sorted(set(value))

    @field_validator("start_time", "end_time")
    @classmethod
    def _pad_time(cls, value: str) -> str:
        hours, minutes = value.split(":")
        return f"{int(hours):02d}:{minutes}"


class TimeBlockCreate(TimeBlockBase):
    pass


class TimeBlockRead(TimeBlockBase):
    id: uuid.UUID
    position: int

    model_config = ConfigDict(from_attributes=True)


class TimeBlockPreviewRequest(TimeBlockBase):
    """Candidate block checked against the stored blocks without saving."""

    editing_id: uuid.UUID | None = None


class TimeBlockValidationRead(BaseModel):
    """Structured outcome of validating a time block."""

    valid: bool
    error_code: str | None = None
    message: str | None = None
    conflicting_block: str | None = None
    available_minutes: int
    required_minutes: int
    margin_minutes: int
    available_window: str
    required_window: str
    margin_window: str
    suggested_end_time: str | None = None

    model_config = ConfigDict(from_attributes=True)


class RestDayBase(BaseModel):
    day: int = Field(ge=0, le=6)
    name: str = Field(min_length=1, max_length=60)
    fee: Decimal = Field(default=Decimal("0"), ge=0)
    can_be_released: bool = True


class RestDayRead(RestDayBase):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class RestDayReleaseCreate(BaseModel):
    release_date: date
    note: str | None = Field(default=None, max_length=255)


class RestDayReleaseRead(RestDayReleaseCreate):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class ScheduleSettingsBase(BaseModel):
    """Booking window and capacity policy."""

    min_advance_booking_days: int = Field(default=7, ge=0)
    max_advance_booking_days: int = Field(default=90, ge=0)
    one_event_per_day: bool = True
    max_concurrent_events: int = Field(default=1, ge=1)
    default_event_duration: Decimal = Field(
        default=Decimal("3.5"), ge=Decimal("0.5"), le=Decimal("24")
    )

    @model_validator(mode="after")
    def _check_window(self) -> "ScheduleSettingsBase":
        if self.min_advance_booking_days > self.max_advance_booking_days:
            raise ValueError(
                "min_advance_booking_days cannot exceed max_advance_booking_days"
            )
        return self


class ScheduleSettingsRead(ScheduleSettingsBase):
    model_config = ConfigDict(from_attributes=True)


class ScheduleConfiguration(ScheduleSettingsBase):
    """Aggregate read by the availability resolver."""

    time_blocks: list[TimeBlockBase] = Field(default_factory=list)
    rest_days: list[RestDayBase] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_rest_days(self) -> "ScheduleConfiguration":
        seen: set[int] = set()
        for rest_day in self.rest_days:
            if rest_day.day in seen:
                raise ValueError(f"Duplicate rest day for weekday {rest_day.day}")
            seen.add(rest_day.day)
        return self

    def rest_day_for(self, day_of_week: int) -> RestDayBase | None:
        for rest_day in self.rest_days:
            if rest_day.day == day_of_week:
                return rest_day
        return None


class ScheduleConfigurationRead(ScheduleSettingsBase):
    """Public configuration payload consumed by the booking wizard."""

    time_blocks: list[TimeBlockRead]
    rest_days: list[RestDayRead]
