"""Catalog endpoints for packages, food options, event themes and extras."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.catalog import EventTheme, ExtraService, FoodOption, Package
from app.schemas.catalog import (
    EventThemeCreate,
    EventThemeRead,
    EventThemeUpdate,
    ExtraServiceCreate,
    ExtraServiceRead,
    ExtraServiceUpdate,
    FoodOptionCreate,
    FoodOptionRead,
    FoodOptionUpdate,
    PackageCreate,
    PackageRead,
    PackageUpdate,
)
from app.services import catalog_service

router = APIRouter()
admin_router = APIRouter()


def _register(
    path: str,
    label: str,
    model: type,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    read_schema: type[BaseModel],
) -> None:
    """Attach the public listing and admin CRUD routes for one catalog entity."""
    not_found = f"{label} not found"
    slug = path.replace("-", "_")

    async def _get_or_404(session: AsyncSession, item_id: uuid.UUID):
        item = await catalog_service.get_item(session, model, item_id)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        return item

    @router.get(
        f"/{path}",
        response_model=list[read_schema],
        summary=f"List active {label.lower()} entries",
        name=f"list_active_{slug}",
    )
    async def list_active(
        session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    ):
        items = await catalog_service.list_items(session, model, active_only=True)
        return [read_schema.model_validate(item) for item in items]

    @admin_router.get(
        f"/{path}",
        response_model=list[read_schema],
        summary=f"List all {label.lower()} entries",
        name=f"list_all_{slug}",
    )
    async def list_all(
        session: Annotated[AsyncSession, Depends(deps.get_db_session)],
        _: Annotated[dict, Depends(deps.get_current_admin)],
    ):
        items = await catalog_service.list_items(session, model)
        return [read_schema.model_validate(item) for item in items]

    @admin_router.post(
        f"/{path}",
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {label.lower()}",
        name=f"create_{slug}",
    )
    async def create(
        payload: create_schema,
        session: Annotated[AsyncSession, Depends(deps.get_db_session)],
        _: Annotated[dict, Depends(deps.get_current_admin)],
    ):
        item = await catalog_service.create_item(session, model, payload=payload)
        return read_schema.model_validate(item)

    @admin_router.patch(
        f"/{path}/{{item_id}}",
        response_model=read_schema,
        summary=f"Update {label.lower()}",
        name=f"update_{slug}",
    )
    async def update(
        item_id: uuid.UUID,
        payload: update_schema,
        session: Annotated[AsyncSession, Depends(deps.get_db_session)],
        _: Annotated[dict, Depends(deps.get_current_admin)],
    ):
        item = await _get_or_404(session, item_id)
        updated = await catalog_service.update_item(session, item=item, payload=payload)
        return read_schema.model_validate(updated)

    @admin_router.delete(
        f"/{path}/{{item_id}}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Delete {label.lower()}",
        name=f"delete_{slug}",
    )
    async def delete(
        item_id: uuid.UUID,
        session: Annotated[AsyncSession, Depends(deps.get_db_session)],
        _: Annotated[dict, Depends(deps.get_current_admin)],
    ) -> None:
        item = await _get_or_404(session, item_id)
        await catalog_service.delete_item(session, item=item)
        return None


_register("packages", "Package", Package, PackageCreate, PackageUpdate, PackageRead)
_register(
    "food-options",
    "Food option",
    FoodOption,
    FoodOptionCreate,
    FoodOptionUpdate,
    FoodOptionRead,
)
_register(
    "event-themes",
    "Event theme",
    EventTheme,
    EventThemeCreate,
    EventThemeUpdate,
    EventThemeRead,
)
_register(
    "extra-services",
    "Extra service",
    ExtraService,
    ExtraServiceCreate,
    ExtraServiceUpdate,
    ExtraServiceRead,
)
