"""Venue payment settings endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.venue_settings import PaymentSettingsRead, PaymentSettingsUpdate
from app.services import venue_settings_service

router = APIRouter()
admin_router = APIRouter()


@router.get("", response_model=PaymentSettingsRead, summary="Read payment settings")
async def read_payment_settings(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PaymentSettingsRead:
    cash_discount = await venue_settings_service.get_cash_discount(session)
    return PaymentSettingsRead(cash_discount=cash_discount)


@admin_router.put(
    "", response_model=PaymentSettingsRead, summary="Update payment settings"
)
async def update_payment_settings(
    payload: PaymentSettingsUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[dict, Depends(deps.get_current_admin)],
) -> PaymentSettingsRead:
    cash_discount = await venue_settings_service.update_cash_discount(
        session, payload=payload.cash_discount
    )
    return PaymentSettingsRead(cash_discount=cash_discount)
