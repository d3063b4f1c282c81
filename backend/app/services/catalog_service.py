"""Catalog storage for packages, food options, themes and extra services."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog import EventTheme, ExtraService, FoodOption, Package
from app.schemas.catalog import (
    EventThemeRead,
    ExtraServiceRead,
    FoodOptionRead,
    PackageRead,
)

CatalogItem = TypeVar("CatalogItem", Package, FoodOption, EventTheme, ExtraService)

_JSON_FIELDS = frozenset({"features", "dishes", "upgrades", "packages", "theme_names"})


@dataclass(slots=True)
class ActiveCatalog:
    """Everything a client can currently select."""

    packages: list[PackageRead]
    food_options: list[FoodOptionRead]
    themes: list[EventThemeRead]
    extras: list[ExtraServiceRead]


def _column_values(payload: BaseModel, *, exclude_unset: bool) -> dict[str, Any]:
    values = payload.model_dump(exclude_unset=exclude_unset)
    json_values = payload.model_dump(mode="json", exclude_unset=exclude_unset)
    for key in _JSON_FIELDS.intersection(values):
        values[key] = json_values[key]
    if "pricing" in values:
        pricing = values.pop("pricing")
        values["weekday_price"] = pricing["weekday"] if pricing else None
        values["weekend_price"] = pricing["weekend"] if pricing else None
    return values


async def list_items(
    session: AsyncSession,
    model: type[CatalogItem],
    *,
    active_only: bool = False,
) -> list[CatalogItem]:
    stmt = select(model).order_by(model.name.asc())
    if active_only:
        stmt = stmt.where(model.active.is_(True))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_item(
    session: AsyncSession, model: type[CatalogItem], item_id: uuid.UUID
) -> CatalogItem | None:
    return await session.get(model, item_id)


async def create_item(
    session: AsyncSession, model: type[CatalogItem], *, payload: BaseModel
) -> CatalogItem:
    item = model(**_column_values(payload, exclude_unset=False))
    session.add(item)
    await session.commit()
    await session.refresh(item)
    return item


async def update_item(
    session: AsyncSession, *, item: CatalogItem, payload: BaseModel
) -> CatalogItem:
    for key, value in _column_values(payload, exclude_unset=True).items():
        setattr(item, key, value)
    await session.commit()
    await session.refresh(item)
    return item


async def delete_item(session: AsyncSession, *, item: CatalogItem) -> None:
    await session.delete(item)
    await session.commit()


async def load_active_catalog(session: AsyncSession) -> ActiveCatalog:
    packages = await list_items(session, Package, active_only=True)
    food_options = await list_items(session, FoodOption, active_only=True)
    themes = await list_items(session, EventTheme, active_only=True)
    extras = await list_items(session, ExtraService, active_only=True)
    return ActiveCatalog(
        packages=[PackageRead.model_validate(item) for item in packages],
        food_options=[FoodOptionRead.model_validate(item) for item in food_options],
        themes=[EventThemeRead.model_validate(item) for item in themes],
        extras=[ExtraServiceRead.model_validate(item) for item in extras],
    )
