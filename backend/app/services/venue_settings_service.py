"""Venue payment settings (cash discount policy)."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.venue_settings import PaymentSettings
from app.schemas.venue_settings import CashDiscountSettings


async def get_or_create_payment_settings(session: AsyncSession) -> PaymentSettings:
    result = await session.execute(select(PaymentSettings).limit(1))
    row = result.scalar_one_or_none()
    if row is None:
        row = PaymentSettings()
        session.add(row)
        await session.commit()
        await session.refresh(row)
    return row


def to_cash_discount(row: PaymentSettings) -> CashDiscountSettings:
    return CashDiscountSettings(
        enabled=row.cash_discount_enabled,
        percentage=row.cash_discount_percentage,
        description=row.cash_discount_description,
        applies_to=row.cash_discount_applies_to,
    )


async def get_cash_discount(session: AsyncSession) -> CashDiscountSettings:
    return to_cash_discount(await get_or_create_payment_settings(session))


async def update_cash_discount(
    session: AsyncSession, *, payload: CashDiscountSettings
) -> CashDiscountSettings:
    row = await get_or_create_payment_settings(session)
    row.cash_discount_enabled = payload.enabled
    row.cash_discount_percentage = payload.percentage
    row.cash_discount_description = payload.description
    row.cash_discount_applies_to = payload.applies_to
    await session.commit()
    await session.refresh(row)
    return to_cash_discount(row)
