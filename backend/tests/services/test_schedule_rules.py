"""Time block validation and time arithmetic."""

from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from app.schemas.schedule import TimeBlockBase
from app.services.schedule_service import (
    ScheduleErrorCode,
    calculate_end_time,
    calculate_start_time,
    day_of_week,
    format_duration,
    required_minutes,
    validate_time_block,
)


def _block(
    name: str = "Afternoon",
    *,
    days: list[int] | None = None,
    start: str = "14:00",
    end: str = "19:00",
    duration: str = "3.5",
    half_hour_break: bool = True,
) -> TimeBlockBase:
    return TimeBlockBase(
        name=name,
        days=days if days is not None else [6],
        start_time=start,
        end_time=end,
        duration=Decimal(duration),
        half_hour_break=half_hour_break,
    )


def test_end_time_adds_duration_and_farewell_break() -> None:
    assert calculate_end_time("14:00", Decimal("3.5"), True) == "18:00"
    assert calculate_end_time("14:00", Decimal("3.5"), False) == "17:30"


def test_end_and_start_time_clamp_at_day_boundaries() -> None:
    assert calculate_end_time("22:00", Decimal("3"), True) == "23:59"
    assert calculate_start_time("01:00", Decimal("2"), False) == "00:00"


@pytest.mark.parametrize(
    ("start", "duration", "half_hour_break"),
    [("09:00", "2", False), ("14:00", "3.5", True), ("10:15", "4.25", True)],
)
def test_start_time_inverts_end_time(start: str, duration: str, half_hour_break: bool) -> None:
    end = calculate_end_time(start, Decimal(duration), half_hour_break)
    assert calculate_start_time(end, Decimal(duration), half_hour_break) == start


def test_required_minutes_and_duration_formatting() -> None:
    assert required_minutes(Decimal("3.5"), True) == 240
    assert format_duration(240) == "4:00"
    assert format_duration(75) == "1:15"
    assert format_duration(-30) == "-0:30"


def test_day_of_week_counts_from_sunday() -> None:
    assert day_of_week(datetime.date(2025, 6, 15)) == 0  # Sunday
    assert day_of_week(datetime.date(2025, 6, 14)) == 6  # Saturday
    assert day_of_week(datetime.date(2025, 6, 13)) == 5  # Friday


def test_valid_block_reports_margin() -> None:
    result = validate_time_block(_block(), [])
    assert result.valid
    assert result.available_minutes == 300
    assert result.required_minutes == 240
    assert result.margin_minutes == 60
    assert result.to_dict()["margin_window"] == "1:00"


def test_start_after_end_is_invalid_range() -> None:
    result = validate_time_block(_block(start="19:00", end="14:00"), [])
    assert not result.valid
    assert result.error_code is ScheduleErrorCode.INVALID_RANGE


def test_short_window_is_rejected_with_both_durations() -> None:
    result = validate_time_block(_block(start="14:00", end="17:00"), [])
    assert not result.valid
    assert result.error_code is ScheduleErrorCode.INSUFFICIENT_WINDOW
    assert "3:00" in result.message
    assert "4:00" in result.message


def test_overlap_is_detected_in_both_directions() -> None:
    first = _block("Afternoon", days=[5, 6], start="12:00", end="17:00")
    second = _block("Evening", days=[6], start="16:00", end="21:00")

    forward = validate_time_block(second, [first])
    backward = validate_time_block(first, [second])

    assert forward.error_code is ScheduleErrorCode.SCHEDULE_OVERLAP
    assert forward.conflicting_block == "Afternoon"
    assert backward.error_code is ScheduleErrorCode.SCHEDULE_OVERLAP
    assert backward.conflicting_block == "Evening"


def test_blocks_on_disjoint_days_or_touching_edges_do_not_overlap() -> None:
    weekday = _block("Weekday", days=[1, 3], start="14:00", end="19:00")
    weekend = _block("Weekend", days=[6, 0], start="14:00", end="19:00")
    evening = _block("Evening", days=[1], start="19:00", end="23:30")

    assert validate_time_block(weekend, [weekday]).valid
    assert validate_time_block(evening, [weekday]).valid


def test_editing_index_skips_the_block_being_edited() -> None:
    existing = [_block("Afternoon"), _block("Morning", start="08:00", end="13:00")]
    edited = _block("Afternoon", start="13:30", end="18:30")

    assert validate_time_block(edited, existing, editing_index=0).valid
    assert not validate_time_block(edited, existing).valid


def test_block_days_are_normalized_and_range_checked() -> None:
    block = _block(days=[6, 0, 6])
    assert block.days == [0, 6]
    with pytest.raises(ValueError):
        _block(days=[7])
    assert _block(start="9:00", end="13:30").start_time == "09:00"
