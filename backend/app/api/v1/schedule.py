"""Schedule configuration endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.schedule import RestDayRelease, TimeBlock
from app.schemas.schedule import (
    RestDayBase,
    RestDayRead,
    RestDayReleaseCreate,
    RestDayReleaseRead,
    ScheduleConfigurationRead,
    ScheduleSettingsBase,
    ScheduleSettingsRead,
    TimeBlockCreate,
    TimeBlockPreviewRequest,
    TimeBlockRead,
    TimeBlockValidationRead,
)
from app.services import schedule_service

router = APIRouter()
admin_router = APIRouter()


def _rejection_detail(exc: schedule_service.TimeBlockRejected) -> dict[str, Any]:
    return exc.validation.to_dict()


@router.get(
    "/config",
    response_model=ScheduleConfigurationRead,
    summary="Schedule configuration for the booking wizard",
)
async def get_schedule_configuration(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ScheduleConfigurationRead:
    settings_row = await schedule_service.get_or_create_settings(session)
    blocks = await schedule_service.list_time_blocks(session)
    rest_days = await schedule_service.list_rest_days(session)
    return ScheduleConfigurationRead(
        **ScheduleSettingsRead.model_validate(settings_row).model_dump(),
        time_blocks=[TimeBlockRead.model_validate(block) for block in blocks],
        rest_days=[RestDayRead.model_validate(rest_day) for rest_day in rest_days],
    )


@admin_router.get(
    "/settings", response_model=ScheduleSettingsRead, summary="Read schedule settings"
)
async def read_schedule_settings(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> ScheduleSettingsRead:
    settings_row = await schedule_service.get_or_create_settings(session)
    return ScheduleSettingsRead.model_validate(settings_row)


@admin_router.put(
    "/settings", response_model=ScheduleSettingsRead, summary="Update schedule settings"
)
async def update_schedule_settings(
    payload: ScheduleSettingsBase,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> ScheduleSettingsRead:
    settings_row = await schedule_service.update_settings(session, payload=payload)
    return ScheduleSettingsRead.model_validate(settings_row)


@admin_router.get(
    "/time-blocks", response_model=list[TimeBlockRead], summary="List time blocks"
)
async def list_time_blocks(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> list[TimeBlockRead]:
    blocks = await schedule_service.list_time_blocks(session)
    return [TimeBlockRead.model_validate(block) for block in blocks]


@admin_router.post(
    "/time-blocks/preview",
    response_model=TimeBlockValidationRead,
    summary="Validate a time block without saving it",
)
async def preview_time_block(
    payload: TimeBlockPreviewRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> TimeBlockValidationRead:
    blocks = await schedule_service.list_time_blocks(session)
    editing_index = next(
        (
            index
            for index, block in enumerate(blocks)
            if payload.editing_id is not None and block.id == payload.editing_id
        ),
        None,
    )
    validation = schedule_service.validate_time_block(
        payload,
        [TimeBlockRead.model_validate(block) for block in blocks],
        editing_index=editing_index,
    )
    return TimeBlockValidationRead(
        **validation.to_dict(),
        suggested_end_time=schedule_service.calculate_end_time(
            payload.start_time, payload.duration, payload.half_hour_break
        ),
    )


@admin_router.post(
    "/time-blocks",
    response_model=TimeBlockRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create time block",
)
async def create_time_block(
    payload: TimeBlockCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> TimeBlockRead:
    try:
        block = await schedule_service.create_time_block(session, payload=payload)
    except schedule_service.TimeBlockRejected as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_rejection_detail(exc),
        ) from exc
    return TimeBlockRead.model_validate(block)


@admin_router.put(
    "/time-blocks/{block_id}",
    response_model=TimeBlockRead,
    summary="Replace time block",
)
async def update_time_block(
    block_id: uuid.UUID,
    payload: TimeBlockCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> TimeBlockRead:
    block = await session.get(TimeBlock, block_id)
    if block is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Time block not found"
        )
    try:
        updated = await schedule_service.update_time_block(
            session, block=block, payload=payload
        )
    except schedule_service.TimeBlockRejected as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_rejection_detail(exc),
        ) from exc
    return TimeBlockRead.model_validate(updated)


@admin_router.delete(
    "/time-blocks/{block_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete time block",
)
async def delete_time_block(
    block_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> None:
    block = await session.get(TimeBlock, block_id)
    if block is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Time block not found"
        )
    await schedule_service.delete_time_block(session, block=block)
    return None


@admin_router.get(
    "/rest-days", response_model=list[RestDayRead], summary="List rest days"
)
async def list_rest_days(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> list[RestDayRead]:
    rest_days = await schedule_service.list_rest_days(session)
    return [RestDayRead.model_validate(rest_day) for rest_day in rest_days]


@admin_router.put("/rest-days", response_model=RestDayRead, summary="Upsert rest day")
async def upsert_rest_day(
    payload: RestDayBase,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> RestDayRead:
    rest_day = await schedule_service.upsert_rest_day(session, payload=payload)
    return RestDayRead.model_validate(rest_day)


@admin_router.delete(
    "/rest-days/{day}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete rest day",
)
async def delete_rest_day(
    day: Annotated[int, Path(ge=0, le=6)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> None:
    if not await schedule_service.delete_rest_day(session, day=day):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Rest day not found"
        )
    return None


@admin_router.get(
    "/releases",
    response_model=list[RestDayReleaseRead],
    summary="List released rest-day dates",
)
async def list_releases(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[RestDayReleaseRead]:
    releases = await schedule_service.list_releases(
        session, start_date=start_date, end_date=end_date
    )
    return [RestDayReleaseRead.model_validate(release) for release in releases]


@admin_router.post(
    "/releases",
    response_model=RestDayReleaseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Release a rest-day date for bookings",
)
async def create_release(
    payload: RestDayReleaseCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> RestDayReleaseRead:
    try:
        release = await schedule_service.create_release(session, payload=payload)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return RestDayReleaseRead.model_validate(release)


@admin_router.delete(
    "/releases/{release_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Withdraw a rest-day release",
)
async def delete_release(
    release_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> None:
    release = await session.get(RestDayRelease, release_id)
    if release is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Release not found"
        )
    await schedule_service.delete_release(session, release=release)
    return None


@admin_router.post(
    "/initialize",
    response_model=ScheduleConfigurationRead,
    summary="Create the default schedule when none is configured",
)
async def initialize_schedule(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> ScheduleConfigurationRead:
    await schedule_service.ensure_default_schedule(session)
    return await get_schedule_configuration(session)
