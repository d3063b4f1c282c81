"""Pricing-related API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.draft import ReservationDraft
from app.schemas.pricing import PricingBreakdownRead
from app.services import pricing_service

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post(
    "/quote", response_model=PricingBreakdownRead, summary="Price a reservation draft"
)
async def quote_reservation_draft(
    payload: ReservationDraft,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PricingBreakdownRead:
    breakdown = await pricing_service.quote_draft(session, payload)
    return PricingBreakdownRead(
        **breakdown.to_dict(),
        day_range=(
            pricing_service.day_range_label(payload.event_date)
            if payload.event_date
            else None
        ),
    )
