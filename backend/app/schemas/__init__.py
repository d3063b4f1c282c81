"""Schema exports."""

from app.schemas.availability import (
    AvailabilityCalendarRead,
    DayAvailabilityRead,
    DaySlotsRead,
    MonthDaySummaryRead,
    SlotOptionRead,
    TimeSlotRead,
)
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
from app.schemas.draft import FoodUpgradeSelection, ReservationDraft
from app.schemas.pricing import PricingBreakdownRead
from app.schemas.reservation import (
    ReservationCreate,
    ReservationRead,
    ReservationStatusUpdate,
    StepValidationRequest,
    ValidationResultRead,
)
from app.schemas.schedule import (
    RestDayBase,
    RestDayRead,
    RestDayReleaseCreate,
    RestDayReleaseRead,
    ScheduleConfiguration,
    ScheduleConfigurationRead,
    ScheduleSettingsBase,
    ScheduleSettingsRead,
    TimeBlockCreate,
    TimeBlockPreviewRequest,
    TimeBlockRead,
    TimeBlockValidationRead,
)
from app.schemas.venue_settings import (
    CashDiscountSettings,
    PaymentSettingsRead,
    PaymentSettingsUpdate,
)

__all__ = [
    "AvailabilityCalendarRead",
    "CashDiscountSettings",
    "DayAvailabilityRead",
    "DaySlotsRead",
    "EventThemeCreate",
    "EventThemeRead",
    "EventThemeUpdate",
    "ExtraServiceCreate",
    "ExtraServiceRead",
    "ExtraServiceUpdate",
    "FoodOptionCreate",
    "FoodOptionRead",
    "FoodOptionUpdate",
    "FoodUpgradeSelection",
    "MonthDaySummaryRead",
    "PackageCreate",
    "PackageRead",
    "PackageUpdate",
    "PaymentSettingsRead",
    "PaymentSettingsUpdate",
    "PricingBreakdownRead",
    "ReservationCreate",
    "ReservationDraft",
    "ReservationRead",
    "ReservationStatusUpdate",
    "RestDayBase",
    "RestDayRead",
    "RestDayReleaseCreate",
    "RestDayReleaseRead",
    "ScheduleConfiguration",
    "ScheduleConfigurationRead",
    "ScheduleSettingsBase",
    "ScheduleSettingsRead",
    "SlotOptionRead",
    "StepValidationRequest",
    "TimeBlockCreate",
    "TimeBlockPreviewRequest",
    "TimeBlockRead",
    "TimeBlockValidationRead",
    "TimeSlotRead",
    "ValidationResultRead",
]
