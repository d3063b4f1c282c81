"""Seed the default weekly schedule and payment settings."""

from __future__ import annotations

import asyncio

from app.db.session import get_sessionmaker
from app.services import schedule_service, venue_settings_service


async def seed_schedule() -> None:
    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        created = await schedule_service.ensure_default_schedule(session)
        await venue_settings_service.get_or_create_payment_settings(session)
        blocks = await schedule_service.list_time_blocks(session)
        rest_days = await schedule_service.list_rest_days(session)

    if created:
        print(
            f"Seeded {len(blocks)} time block(s) and {len(rest_days)} rest day(s)."
        )
    else:
        print("Schedule already configured; nothing to seed.")


def main() -> None:
    asyncio.run(seed_schedule())


if __name__ == "__main__":
    main()
