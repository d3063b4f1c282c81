"""Reservation submission and management endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.rate_limit import parse_rate, rate_dependency
from app.core.config import get_settings
from app.models.catalog import Package
from app.models.reservation import ReservationStatus
from app.schemas.catalog import PackageRead
from app.schemas.reservation import (
    GuestCapacityRead,
    ReservationCreate,
    ReservationRead,
    ReservationStatusUpdate,
    StepValidationRequest,
    ValidationResultRead,
)
from app.services import booking_rules_service, catalog_service, reservation_service

router = APIRouter()
admin_router = APIRouter()

_settings = get_settings()

_SUBMIT_RATE_DEP = rate_dependency(
    parse_rate(_settings.rate_limit_reservations, fallback=(10, 60))
)


async def _package_for(session: AsyncSession, package_id: str | None) -> PackageRead | None:
    if not package_id:
        return None
    try:
        parsed = uuid.UUID(package_id)
    except ValueError:
        return None
    package = await catalog_service.get_item(session, Package, parsed)
    if package is None:
        return None
    return PackageRead.model_validate(package)


@router.post(
    "/validate-step",
    response_model=ValidationResultRead,
    summary="Validate one booking wizard step",
)
async def validate_step(
    payload: StepValidationRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ValidationResultRead:
    result = booking_rules_service.validate_step(payload.step, payload.draft)
    guest_capacity = None
    if payload.step == "package":
        package = await _package_for(session, payload.draft.package_id)
        if package is not None:
            check = booking_rules_service.check_guest_capacity(payload.draft, package)
            guest_capacity = GuestCapacityRead(
                status=check.status.value,
                total_guests=check.total_guests,
                max_guests=check.max_guests,
                message=check.message,
            )
            if check.is_blocking and check.message:
                result.errors.append(check.message)
                result.is_valid = False
    return ValidationResultRead(
        is_valid=result.is_valid,
        errors=result.errors,
        guest_capacity=guest_capacity,
    )


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a reservation",
    dependencies=[_SUBMIT_RATE_DEP],
)
async def create_reservation(
    payload: ReservationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ReservationRead:
    try:
        reservation = await reservation_service.create_reservation(
            session, payload=payload
        )
    except reservation_service.ReservationRejected as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "errors": exc.errors},
        ) from exc
    return ReservationRead.model_validate(reservation)


@admin_router.get(
    "", response_model=list[ReservationRead], summary="List reservations"
)
async def list_reservations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
    status_filter: Annotated[ReservationStatus | None, Query(alias="status")] = None,
    start_date: date | None = None,
    end_date: date | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> list[ReservationRead]:
    reservations = await reservation_service.list_reservations(
        session,
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        skip=skip,
        limit=limit,
    )
    return [ReservationRead.model_validate(item) for item in reservations]


@admin_router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def get_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> ReservationRead:
    reservation = await reservation_service.get_reservation(
        session, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    return ReservationRead.model_validate(reservation)


@admin_router.patch(
    "/{reservation_id}/status",
    response_model=ReservationRead,
    summary="Change reservation status",
)
async def update_reservation_status(
    reservation_id: uuid.UUID,
    payload: ReservationStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> ReservationRead:
    reservation = await reservation_service.get_reservation(
        session, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    try:
        updated = await reservation_service.update_reservation_status(
            session, reservation=reservation, status=payload.status
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ReservationRead.model_validate(updated)
