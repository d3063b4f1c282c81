"""ORM models package export."""

from app.models.catalog import EventTheme, ExtraService, FoodOption, Package
from app.models.reservation import PaymentMethod, Reservation, ReservationStatus
from app.models.schedule import RestDay, RestDayRelease, ScheduleSettings, TimeBlock
from app.models.venue_settings import DiscountAppliesTo, PaymentSettings

__all__ = [
    "DiscountAppliesTo",
    "EventTheme",
    "ExtraService",
    "FoodOption",
    "Package",
    "PaymentMethod",
    "PaymentSettings",
    "Reservation",
    "ReservationStatus",
    "RestDay",
    "RestDayRelease",
    "ScheduleSettings",
    "TimeBlock",
]
