"""Catalog schemas for packages, food, themes and extra services."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PackagePricing(BaseModel):
    weekday: Decimal = Field(ge=0)
    weekend: Decimal = Field(ge=0)


class PackageBase(BaseModel):
    """A bookable package; ``base_price`` is the legacy flat price."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1024)
    pricing: PackagePricing | None = None
    base_price: Decimal | None = Field(default=None, ge=0)
    max_guests: int = Field(ge=1)
    min_guests: int | None = Field(default=None, ge=0)
    duration: Decimal | None = Field(default=None, ge=0)
    features: list[str] = Field(default_factory=list)
    active: bool = True


class PackageCreate(PackageBase):
    pass


class PackageUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1024)
    pricing: PackagePricing | None = None
    base_price: Decimal | None = Field(default=None, ge=0)
    max_guests: int | None = Field(default=None, ge=1)
    min_guests: int | None = Field(default=None, ge=0)
    duration: Decimal | None = Field(default=None, ge=0)
    features: list[str] | None = None
    active: bool | None = None


class PackageRead(PackageBase):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class DishUpgrade(BaseModel):
    from_dish: str
    to_dish: str
    additional_price: Decimal = Field(ge=0)


class FoodDishes(BaseModel):
    adult: list[str] = Field(default_factory=list)
    kids: list[str] = Field(default_factory=list)


class FoodUpgrades(BaseModel):
    adult: list[DishUpgrade] = Field(default_factory=list)
    kids: list[DishUpgrade] = Field(default_factory=list)


class FoodOptionBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1024)
    base_price: Decimal = Field(ge=0)
    adult_price: Decimal | None = Field(default=None, ge=0)
    kids_price: Decimal | None = Field(default=None, ge=0)
    dishes: FoodDishes = Field(default_factory=FoodDishes)
    upgrades: FoodUpgrades = Field(default_factory=FoodUpgrades)
    active: bool = True


class FoodOptionCreate(FoodOptionBase):
    pass


class FoodOptionUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1024)
    base_price: Decimal | None = Field(default=None, ge=0)
    adult_price: Decimal | None = Field(default=None, ge=0)
    kids_price: Decimal | None = Field(default=None, ge=0)
    dishes: FoodDishes | None = None
    upgrades: FoodUpgrades | None = None
    active: bool | None = None


class FoodOptionRead(FoodOptionBase):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class ThemePackage(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str
    price: Decimal = Field(ge=0)
    features: list[str] = Field(default_factory=list)


class EventThemeBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1024)
    packages: list[ThemePackage] = Field(default_factory=list)
    theme_names: list[str] = Field(default_factory=list)
    active: bool = True


class EventThemeCreate(EventThemeBase):
    pass


class EventThemeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1024)
    packages: list[ThemePackage] | None = None
    theme_names: list[str] | None = None
    active: bool | None = None


class EventThemeRead(EventThemeBase):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


ExtraCategory = Literal["decoration", "entertainment", "food", "photography", "other"]


class ExtraServiceBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1024)
    price: Decimal = Field(ge=0)
    category: ExtraCategory = "other"
    active: bool = True


class ExtraServiceCreate(ExtraServiceBase):
    pass


class ExtraServiceUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1024)
    price: Decimal | None = Field(default=None, ge=0)
    category: ExtraCategory | None = None
    active: bool | None = None


class ExtraServiceRead(ExtraServiceBase):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)
