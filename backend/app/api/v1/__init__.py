"""Versioned API router."""

from fastapi import APIRouter

from . import (
    availability,
    catalog,
    health,
    payment_settings,
    pricing,
    reservations,
    schedule,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(schedule.router, prefix="/schedule", tags=["schedule"])
router.include_router(
    availability.router, prefix="/availability", tags=["availability"]
)
router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
router.include_router(
    payment_settings.router, prefix="/payment-settings", tags=["payment-settings"]
)
router.include_router(pricing.router)
router.include_router(
    reservations.router, prefix="/reservations", tags=["reservations"]
)

admin = APIRouter(prefix="/admin")
admin.include_router(schedule.admin_router, prefix="/schedule", tags=["admin"])
admin.include_router(
    availability.admin_router, prefix="/availability", tags=["admin"]
)
admin.include_router(catalog.admin_router, prefix="/catalog", tags=["admin"])
admin.include_router(
    payment_settings.admin_router, prefix="/payment-settings", tags=["admin"]
)
admin.include_router(
    reservations.admin_router, prefix="/reservations", tags=["admin"]
)
router.include_router(admin)

__all__ = ["router"]
