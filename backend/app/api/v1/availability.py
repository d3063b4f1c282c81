"""Availability calendar endpoints."""

from __future__ import annotations

import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.config import get_settings
from app.schemas.availability import (
    AvailabilityCalendarRead,
    DayAvailabilityRead,
    DaySlotsRead,
    MonthDaySummaryRead,
    SlotOptionRead,
    TimeSlotRead,
)
from app.services import availability_service
from app.services.availability_service import DayAvailability
from app.services.schedule_service import load_schedule_configuration

router = APIRouter()
admin_router = APIRouter()

_MAX_RANGE_DAYS = 366


def _day_read(day: DayAvailability) -> DayAvailabilityRead:
    return DayAvailabilityRead(
        date=day.date,
        day_of_week=day.day_of_week,
        is_unavailable=day.is_unavailable,
        is_rest_day=day.is_rest_day,
        is_released=day.is_released,
        rest_day_fee=day.rest_day_fee,
        has_bookings=day.has_bookings,
        is_bookable=day.is_bookable,
        slots=[TimeSlotRead.model_validate(slot) for slot in day.slots],
    )


@router.get(
    "",
    response_model=AvailabilityCalendarRead,
    summary="Bookable slots across a date range",
)
async def get_availability(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
) -> AvailabilityCalendarRead:
    today = availability_service.venue_today()
    start = start_date or today
    end = end_date or today + datetime.timedelta(
        days=get_settings().availability_default_days
    )
    if start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must be before or equal to end_date",
        )
    if (end - start).days > _MAX_RANGE_DAYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Date range cannot exceed {_MAX_RANGE_DAYS} days",
        )

    config = await load_schedule_configuration(session)
    counts = await availability_service.count_bookings(
        session, start_date=start, end_date=end
    )
    released = await availability_service.released_dates_between(
        session, start_date=start, end_date=end
    )
    calendar = availability_service.resolve_range(
        start, end, config, counts, today=today, released_dates=released
    )
    return AvailabilityCalendarRead(
        available_slots={
            key: _day_read(day) for key, day in calendar.available_slots.items()
        },
        blocked_dates=calendar.blocked_dates,
    )


@router.get("/slots", response_model=DaySlotsRead, summary="Slots offered on a date")
async def get_day_slots(
    date: datetime.date,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> DaySlotsRead:
    config = await load_schedule_configuration(session)
    counts = await availability_service.count_bookings(
        session, start_date=date, end_date=date
    )
    released = await availability_service.released_dates_between(
        session, start_date=date, end_date=date
    )
    day = availability_service.resolve_day(
        date,
        config,
        counts.get(date, {}),
        today=availability_service.venue_today(),
        released_dates=released,
    )
    return DaySlotsRead(
        date=date,
        is_bookable=day.is_bookable,
        is_rest_day=day.is_rest_day,
        rest_day_fee=day.rest_day_fee,
        default_event_duration=config.default_event_duration,
        slots=[
            SlotOptionRead(
                time=slot.start_time,
                end_time=slot.end_time,
                block_name=slot.block_name,
                total_capacity=slot.max_capacity,
                remaining_capacity=slot.remaining_capacity,
            )
            for slot in day.slots
        ],
    )


@admin_router.get(
    "/month",
    response_model=list[MonthDaySummaryRead],
    summary="Per-day slot summary for a month",
)
async def get_month_summary(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
    year: Annotated[int, Query(ge=2000, le=2100)],
    month: Annotated[int, Query(ge=1, le=12)],
) -> list[MonthDaySummaryRead]:
    first = datetime.date(year, month, 1)
    last = (first + datetime.timedelta(days=32)).replace(day=1) - datetime.timedelta(
        days=1
    )
    config = await load_schedule_configuration(session)
    counts = await availability_service.count_bookings(
        session, start_date=first, end_date=last
    )
    released = await availability_service.released_dates_between(
        session, start_date=first, end_date=last
    )
    summaries = availability_service.summarize_month(
        year, month, config, counts, released_dates=released
    )
    return [MonthDaySummaryRead.model_validate(summary) for summary in summaries]
