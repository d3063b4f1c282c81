"""Service layer exports."""
from app.services import (
    availability_service,
    booking_rules_service,
    catalog_service,
    draft_service,
    pricing_service,
    reservation_service,
    schedule_service,
    venue_settings_service,
)

__all__ = [
    "availability_service",
    "booking_rules_service",
    "catalog_service",
    "draft_service",
    "pricing_service",
    "reservation_service",
    "schedule_service",
    "venue_settings_service",
]
