"""Schedule configuration rules and storage.

Time-of-day values are ``HH:MM`` strings on a 24 hour clock and weekdays are
numbered 0 = Sunday ... 6 = Saturday. Arithmetic never wraps past midnight:
events cannot cross into the next day.
"""
from __future__ import annotations

import datetime
import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import RestDay, RestDayRelease, ScheduleSettings, TimeBlock
from app.schemas.schedule import (
    RestDayBase,
    RestDayRead,
    RestDayReleaseCreate,
    ScheduleConfiguration,
    ScheduleSettingsBase,
    TimeBlockBase,
    TimeBlockRead,
)

logger = logging.getLogger(__name__)

FAREWELL_BREAK_MINUTES = 30
_LAST_MINUTE_OF_DAY = 24 * 60 - 1


class ScheduleErrorCode(str, enum.Enum):
    """Reasons a time block is rejected."""

    INVALID_RANGE = "invalid_range"
    INSUFFICIENT_WINDOW = "insufficient_window"
    SCHEDULE_OVERLAP = "schedule_overlap"


@dataclass(slots=True)
class TimeBlockValidation:
    """Outcome of :func:`validate_time_block` plus informational window figures."""

    valid: bool
    available_minutes: int
    required_minutes: int
    error_code: ScheduleErrorCode | None = None
    message: str | None = None
    conflicting_block: str | None = None

    @property
    def margin_minutes(self) -> int:
        return self.available_minutes - self.required_minutes

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "error_code": self.error_code.value if self.error_code else None,
            "message": self.message,
            "conflicting_block": self.conflicting_block,
            "available_minutes": self.available_minutes,
            "required_minutes": self.required_minutes,
            "margin_minutes": self.margin_minutes,
            "available_window": format_duration(self.available_minutes),
            "required_window": format_duration(self.required_minutes),
            "margin_window": format_duration(self.margin_minutes),
        }


class TimeBlockRejected(ValueError):
    """Raised when a time block fails validation on save."""

    def __init__(self, validation: TimeBlockValidation) -> None:
        super().__init__(validation.message)
        self.validation = validation


def day_of_week(value: datetime.date) -> int:
    """Return the weekday with Sunday as 0."""
    return (value.weekday() + 1) % 7


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def format_duration(total_minutes: int) -> str:
    """Render minutes as ``H:MM`` (negative margins keep their sign)."""
    sign = "-" if total_minutes < 0 else ""
    total_minutes = abs(total_minutes)
    return f"{sign}{total_minutes // 60}:{total_minutes % 60:02d}"


def required_minutes(duration: Decimal | float | str, half_hour_break: bool) -> int:
    """Minutes an event occupies: its duration plus the optional farewell break."""
    minutes = (Decimal(str(duration)) * 60).to_integral_value(rounding=ROUND_HALF_UP)
    return int(minutes) + (FAREWELL_BREAK_MINUTES if half_hour_break else 0)


def calculate_end_time(
    start_time: str, duration: Decimal | float | str, half_hour_break: bool
) -> str:
    end_minutes = time_to_minutes(start_time) + required_minutes(
        duration, half_hour_break
    )
    if end_minutes > _LAST_MINUTE_OF_DAY:
        return minutes_to_time(_LAST_MINUTE_OF_DAY)
    return minutes_to_time(end_minutes)


def calculate_start_time(
    end_time: str, duration: Decimal | float | str, half_hour_break: bool
) -> str:
    start_minutes = time_to_minutes(end_time) - required_minutes(
        duration, half_hour_break
    )
    if start_minutes < 0:
        return minutes_to_time(0)
    return minutes_to_time(start_minutes)


def validate_time_block(
    candidate: TimeBlockBase,
    existing_blocks: Sequence[TimeBlockBase],
    editing_index: int | None = None,
) -> TimeBlockValidation:
    """Check a block's own window and its overlap with blocks sharing a day."""
    start = time_to_minutes(candidate.start_time)
    end = time_to_minutes(candidate.end_time)
    needed = required_minutes(candidate.duration, candidate.half_hour_break)
    available = end - start

    if start >= end:
        return TimeBlockValidation(
            valid=False,
            available_minutes=available,
            required_minutes=needed,
            error_code=ScheduleErrorCode.INVALID_RANGE,
            message="Start time must be earlier than end time",
        )

    if available < needed:
        return TimeBlockValidation(
            valid=False,
            available_minutes=available,
            required_minutes=needed,
            error_code=ScheduleErrorCode.INSUFFICIENT_WINDOW,
            message=(
                f"Available time ({format_duration(available)}) is shorter than "
                f"the required time ({format_duration(needed)})"
            ),
        )

    candidate_days = set(candidate.days)
    for index, other in enumerate(existing_blocks):
        if editing_index is not None and index == editing_index:
            continue
        if not candidate_days.intersection(other.days):
            continue
        other_start = time_to_minutes(other.start_time)
        other_end = time_to_minutes(other.end_time)
        if start < other_end and end > other_start:
            return TimeBlockValidation(
                valid=False,
                available_minutes=available,
                required_minutes=needed,
                error_code=ScheduleErrorCode.SCHEDULE_OVERLAP,
                message=f'This schedule overlaps block "{other.name}" on shared days',
                conflicting_block=other.name,
            )

    return TimeBlockValidation(
        valid=True, available_minutes=available, required_minutes=needed
    )


async def get_or_create_settings(session: AsyncSession) -> ScheduleSettings:
    result = await session.execute(select(ScheduleSettings).limit(1))
    settings_row = result.scalar_one_or_none()
    if settings_row is None:
        settings_row = ScheduleSettings()
        session.add(settings_row)
        await session.commit()
        await session.refresh(settings_row)
    return settings_row


async def update_settings(
    session: AsyncSession, *, payload: ScheduleSettingsBase
) -> ScheduleSettings:
    settings_row = await get_or_create_settings(session)
    for key, value in payload.model_dump().items():
        setattr(settings_row, key, value)
    await session.commit()
    await session.refresh(settings_row)
    return settings_row


async def list_time_blocks(session: AsyncSession) -> list[TimeBlock]:
    result = await session.execute(
        select(TimeBlock).order_by(TimeBlock.position.asc(), TimeBlock.created_at.asc())
    )
    return list(result.scalars().all())


async def list_rest_days(session: AsyncSession) -> list[RestDay]:
    result = await session.execute(select(RestDay).order_by(RestDay.day.asc()))
    return list(result.scalars().all())


async def create_time_block(
    session: AsyncSession, *, payload: TimeBlockBase
) -> TimeBlock:
    blocks = await list_time_blocks(session)
    validation = validate_time_block(
        payload, [TimeBlockRead.model_validate(block) for block in blocks]
    )
    if not validation.valid:
        logger.info("Rejected time block %r: %s", payload.name, validation.message)
        raise TimeBlockRejected(validation)

    block = TimeBlock(
        position=(blocks[-1].position + 1) if blocks else 0,
        **payload.model_dump(),
    )
    session.add(block)
    await session.commit()
    await session.refresh(block)
    return block


async def update_time_block(
    session: AsyncSession, *, block: TimeBlock, payload: TimeBlockBase
) -> TimeBlock:
    blocks = await list_time_blocks(session)
    editing_index = next(
        (index for index, item in enumerate(blocks) if item.id == block.id), None
    )
    validation = validate_time_block(
        payload,
        [TimeBlockRead.model_validate(item) for item in blocks],
        editing_index=editing_index,
    )
    if not validation.valid:
        logger.info("Rejected update of time block %s: %s", block.id, validation.message)
        raise TimeBlockRejected(validation)

    for key, value in payload.model_dump().items():
        setattr(block, key, value)
    await session.commit()
    await session.refresh(block)
    return block


async def delete_time_block(session: AsyncSession, *, block: TimeBlock) -> None:
    await session.delete(block)
    await session.commit()


async def upsert_rest_day(session: AsyncSession, *, payload: RestDayBase) -> RestDay:
    existing = (
        await session.execute(select(RestDay).where(RestDay.day == payload.day))
    ).scalar_one_or_none()
    if existing is None:
        rest_day = RestDay(**payload.model_dump())
        session.add(rest_day)
        await session.commit()
        await session.refresh(rest_day)
        return rest_day

    existing.name = payload.name
    existing.fee = payload.fee
    existing.can_be_released = payload.can_be_released
    await session.commit()
    await session.refresh(existing)
    return existing


async def delete_rest_day(session: AsyncSession, *, day: int) -> bool:
    rest_day = (
        await session.execute(select(RestDay).where(RestDay.day == day))
    ).scalar_one_or_none()
    if rest_day is None:
        return False
    await session.delete(rest_day)
    await session.commit()
    return True


async def list_releases(
    session: AsyncSession,
    *,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
) -> list[RestDayRelease]:
    stmt = select(RestDayRelease).order_by(RestDayRelease.release_date.asc())
    if start_date is not None:
        stmt = stmt.where(RestDayRelease.release_date >= start_date)
    if end_date is not None:
        stmt = stmt.where(RestDayRelease.release_date <= end_date)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_release(
    session: AsyncSession, *, payload: RestDayReleaseCreate
) -> RestDayRelease:
    """Open a rest-day date for bookings."""
    weekday = day_of_week(payload.release_date)
    rest_day = (
        await session.execute(select(RestDay).where(RestDay.day == weekday))
    ).scalar_one_or_none()
    if rest_day is None:
        raise ValueError("Date does not fall on a rest day")
    if not rest_day.can_be_released:
        raise ValueError(f"Rest day {rest_day.name} cannot be released")

    existing = (
        await session.execute(
            select(RestDayRelease).where(
                RestDayRelease.release_date == payload.release_date
            )
        )
    ).scalar_one_or_none()
    if existing is not None:
        return existing

    release = RestDayRelease(release_date=payload.release_date, note=payload.note)
    session.add(release)
    await session.commit()
    await session.refresh(release)
    logger.info("Released rest day %s", payload.release_date.isoformat())
    return release


async def delete_release(session: AsyncSession, *, release: RestDayRelease) -> None:
    await session.delete(release)
    await session.commit()


async def load_schedule_configuration(session: AsyncSession) -> ScheduleConfiguration:
    """Assemble the typed configuration aggregate from storage."""
    settings_row = await get_or_create_settings(session)
    blocks = await list_time_blocks(session)
    rest_days = await list_rest_days(session)
    return ScheduleConfiguration(
        min_advance_booking_days=settings_row.min_advance_booking_days,
        max_advance_booking_days=settings_row.max_advance_booking_days,
        one_event_per_day=settings_row.one_event_per_day,
        max_concurrent_events=settings_row.max_concurrent_events,
        default_event_duration=settings_row.default_event_duration,
        time_blocks=[TimeBlockRead.model_validate(block) for block in blocks],
        rest_days=[RestDayRead.model_validate(rest_day) for rest_day in rest_days],
    )


DEFAULT_TIME_BLOCKS: tuple[dict[str, Any], ...] = (
    {
        "name": "Weekday afternoon",
        "days": [1, 3, 4, 5],
        "start_time": "14:00",
        "end_time": "19:00",
        "duration": Decimal("3.5"),
        "half_hour_break": True,
        "max_events_per_block": 1,
    },
    {
        "name": "Weekend afternoon",
        "days": [6, 0],
        "start_time": "14:00",
        "end_time": "19:00",
        "duration": Decimal("3.5"),
        "half_hour_break": True,
        "max_events_per_block": 1,
    },
    {
        "name": "Tuesday rest day",
        "days": [2],
        "start_time": "14:00",
        "end_time": "19:00",
        "duration": Decimal("3.5"),
        "half_hour_break": True,
        "max_events_per_block": 1,
    },
)
DEFAULT_REST_DAYS: tuple[dict[str, Any], ...] = (
    {"day": 2, "name": "Tuesday", "fee": Decimal("1500"), "can_be_released": True},
)


async def ensure_default_schedule(session: AsyncSession) -> bool:
    """Fill in the default blocks and rest days when none are configured.

    Returns ``True`` when anything was created.
    """
    await get_or_create_settings(session)
    created = False
    if not await list_time_blocks(session):
        for position, values in enumerate(DEFAULT_TIME_BLOCKS):
            session.add(TimeBlock(position=position, **values))
        created = True
    if not await list_rest_days(session):
        for values in DEFAULT_REST_DAYS:
            session.add(RestDay(**values))
        created = True
    if created:
        await session.commit()
        logger.info("Initialized default schedule configuration")
    return created
