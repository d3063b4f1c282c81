"""Schedule configuration API tests."""

from __future__ import annotations

import datetime

import pytest

from app.core.security import create_access_token
from app.services.availability_service import venue_today
from app.services.schedule_service import day_of_week

pytestmark = pytest.mark.asyncio


def _next_weekday(weekday: int, *, after_days: int = 10) -> datetime.date:
    value = venue_today() + datetime.timedelta(days=after_days)
    while day_of_week(value) != weekday:
        value += datetime.timedelta(days=1)
    return value


async def test_public_configuration(app_context: dict[str, object]) -> None:
    client = app_context["client"]
    response = await client.get("/api/v1/schedule/config")
    assert response.status_code == 200
    payload = response.json()
    assert payload["min_advance_booking_days"] == 7
    assert payload["one_event_per_day"] is True
    assert [block["name"] for block in payload["time_blocks"]] == ["Afternoon"]
    assert payload["rest_days"][0]["day"] == 2


async def test_admin_routes_require_admin_role(app_context: dict[str, object]) -> None:
    client = app_context["client"]
    anonymous = await client.get("/api/v1/admin/schedule/time-blocks")
    assert anonymous.status_code == 401

    token = create_access_token("visitor", role="client")
    forbidden = await client.get(
        "/api/v1/admin/schedule/time-blocks",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert forbidden.status_code == 403

    metadata_token = create_access_token(
        "staff", public_metadata={"role": "admin"}
    )
    allowed = await client.get(
        "/api/v1/admin/schedule/time-blocks",
        headers={"Authorization": f"Bearer {metadata_token}"},
    )
    assert allowed.status_code == 200


async def test_time_block_lifecycle(
    app_context: dict[str, object], admin_headers: dict[str, str]
) -> None:
    client = app_context["client"]
    overlapping = {
        "name": "Late",
        "days": [6],
        "start_time": "17:00",
        "end_time": "22:00",
        "duration": 3.5,
        "half_hour_break": True,
    }
    rejected = await client.post(
        "/api/v1/admin/schedule/time-blocks", json=overlapping, headers=admin_headers
    )
    assert rejected.status_code == 400
    detail = rejected.json()["detail"]
    assert detail["error_code"] == "schedule_overlap"
    assert detail["conflicting_block"] == "Afternoon"

    morning = {**overlapping, "name": "Morning", "start_time": "9:00", "end_time": "13:30"}
    created = await client.post(
        "/api/v1/admin/schedule/time-blocks", json=morning, headers=admin_headers
    )
    assert created.status_code == 201
    block = created.json()
    assert block["start_time"] == "09:00"
    assert block["position"] == 1

    shifted = {**morning, "start_time": "09:30", "end_time": "13:45"}
    updated = await client.put(
        f"/api/v1/admin/schedule/time-blocks/{block['id']}",
        json=shifted,
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["end_time"] == "13:45"

    deleted = await client.delete(
        f"/api/v1/admin/schedule/time-blocks/{block['id']}", headers=admin_headers
    )
    assert deleted.status_code == 204


async def test_preview_reports_window_figures(
    app_context: dict[str, object], admin_headers: dict[str, str]
) -> None:
    client = app_context["client"]
    response = await client.post(
        "/api/v1/admin/schedule/time-blocks/preview",
        json={
            "name": "Short",
            "days": [1],
            "start_time": "08:00",
            "end_time": "11:00",
            "duration": 3.5,
            "half_hour_break": True,
        },
        headers=admin_headers,
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["valid"] is False
    assert payload["error_code"] == "insufficient_window"
    assert payload["available_window"] == "3:00"
    assert payload["required_window"] == "4:00"
    assert payload["margin_window"] == "-1:00"
    assert payload["suggested_end_time"] == "12:00"


async def test_settings_validation(
    app_context: dict[str, object], admin_headers: dict[str, str]
) -> None:
    client = app_context["client"]
    invalid = await client.put(
        "/api/v1/admin/schedule/settings",
        json={"min_advance_booking_days": 30, "max_advance_booking_days": 10},
        headers=admin_headers,
    )
    assert invalid.status_code == 422

    valid = await client.put(
        "/api/v1/admin/schedule/settings",
        json={
            "min_advance_booking_days": 3,
            "max_advance_booking_days": 60,
            "one_event_per_day": False,
            "max_concurrent_events": 2,
        },
        headers=admin_headers,
    )
    assert valid.status_code == 200
    assert valid.json()["one_event_per_day"] is False


async def test_rest_days_and_releases(
    app_context: dict[str, object], admin_headers: dict[str, str]
) -> None:
    client = app_context["client"]
    upserted = await client.put(
        "/api/v1/admin/schedule/rest-days",
        json={"day": 2, "name": "Tuesday", "fee": 2000, "can_be_released": True},
        headers=admin_headers,
    )
    assert upserted.status_code == 200
    assert float(upserted.json()["fee"]) == 2000

    tuesday = _next_weekday(2)
    released = await client.post(
        "/api/v1/admin/schedule/releases",
        json={"release_date": tuesday.isoformat(), "note": "Birthday request"},
        headers=admin_headers,
    )
    assert released.status_code == 201

    wednesday = _next_weekday(3)
    not_rest_day = await client.post(
        "/api/v1/admin/schedule/releases",
        json={"release_date": wednesday.isoformat()},
        headers=admin_headers,
    )
    assert not_rest_day.status_code == 400

    listed = await client.get("/api/v1/admin/schedule/releases", headers=admin_headers)
    assert [item["release_date"] for item in listed.json()] == [tuesday.isoformat()]

    missing = await client.delete(
        "/api/v1/admin/schedule/rest-days/5", headers=admin_headers
    )
    assert missing.status_code == 404


async def test_initialize_keeps_existing_schedule(
    app_context: dict[str, object], admin_headers: dict[str, str]
) -> None:
    client = app_context["client"]
    response = await client.post(
        "/api/v1/admin/schedule/initialize", headers=admin_headers
    )
    assert response.status_code == 200
    assert len(response.json()["time_blocks"]) == 1
