"""Test fixtures for the booking backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from app.core.config import get_settings
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import dispose_engine, get_sessionmaker
from app.main import app
from app.models import (
    EventTheme,
    ExtraService,
    FoodOption,
    Package,
    RestDay,
    ScheduleSettings,
    TimeBlock,
)


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    token = create_access_token("admin-user", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: AsyncIterator[None], db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client plus a seeded schedule and catalog."""
    sessionmaker = get_sessionmaker(db_url)

    async with sessionmaker() as session:
        session.add(
            ScheduleSettings(
                min_advance_booking_days=7,
                max_advance_booking_days=90,
                one_event_per_day=True,
            )
        )
        session.add(
            TimeBlock(
                position=0,
                name="Afternoon",
                days=[0, 1, 2, 3, 4, 5, 6],
                start_time="14:00",
                end_time="19:00",
                duration=Decimal("3.5"),
                half_hour_break=True,
                max_events_per_block=1,
            )
        )
        session.add(
            RestDay(day=2, name="Tuesday", fee=Decimal("1500"), can_be_released=True)
        )

        package = Package(
            name="Fiesta",
            weekday_price=Decimal("2500"),
            weekend_price=Decimal("3000"),
            max_guests=50,
            features=["Venue", "Host"],
        )
        food = FoodOption(
            name="Tacos",
            base_price=Decimal("100"),
            adult_price=Decimal("100"),
            kids_price=Decimal("80"),
            dishes={"adult": ["Tacos"], "kids": ["Nuggets"]},
            upgrades={
                "adult": [
                    {"from_dish": "Tacos", "to_dish": "Steak", "additional_price": "50"}
                ],
                "kids": [],
            },
        )
        theme = EventTheme(
            name="Superheroes",
            packages=[
                {"id": "basic", "name": "Basic", "price": "400", "features": []}
            ],
            theme_names=["Spider-Man"],
        )
        extra = ExtraService(name="Clown", price=Decimal("300"), category="entertainment")
        session.add_all([package, food, theme, extra])
        await session.commit()

        context: dict[str, object] = {
            "package_id": str(package.id),
            "food_option_id": str(food.id),
            "event_theme_id": str(theme.id),
            "extra_service_id": str(extra.id),
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
