"""Reservation draft reducer and local-storage persistence."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, MutableMapping
from datetime import UTC, date, datetime, timedelta
from typing import Any

from pydantic import ValidationError

from app.core.config import get_settings
from app.schemas.draft import ReservationDraft
from app.schemas.venue_settings import CashDiscountSettings
from app.services.pricing_service import parse_guest_count

logger = logging.getLogger(__name__)

STORAGE_KEY = "party-reservation-form"


def _sync_upgrade_quantities(data: dict[str, Any]) -> None:
    # Upgrades are all-or-nothing per dish: every guest of the category gets it.
    headcounts = {
        "adult": parse_guest_count(data.get("adult_count")),
        "kids": parse_guest_count(data.get("kids_count")),
    }
    synced = []
    for upgrade in data.get("selected_food_upgrades") or ():
        # Malformed entries are left for model validation to reject.
        category = upgrade.get("category") if isinstance(upgrade, Mapping) else None
        if category in ("adult", "kids"):
            upgrade = {
                **upgrade,
                "quantity": max(headcounts[category], 0),
            }
        synced.append(upgrade)
    data["selected_food_upgrades"] = synced


def apply_update(draft: ReservationDraft, patch: Mapping[str, Any]) -> ReservationDraft:
    """Return a new draft with ``patch`` applied.

    Raises ``ValueError`` for unknown fields or invalid values.
    """
    unknown = set(patch) - set(ReservationDraft.model_fields)
    if unknown:
        raise ValueError(f"Unknown draft fields: {', '.join(sorted(unknown))}")

    data = draft.model_dump()
    data.update(patch)
    if data.get("payment_method") != "cash":
        data["cash_discount"] = None
    if data.get("selected_food_upgrades"):
        data["selected_food_upgrades"] = [
            upgrade.model_dump() if hasattr(upgrade, "model_dump") else upgrade
            for upgrade in data["selected_food_upgrades"]
        ]
        _sync_upgrade_quantities(data)
    return ReservationDraft.model_validate(data)


def attach_cash_discount(
    draft: ReservationDraft, settings: CashDiscountSettings
) -> ReservationDraft:
    """Snapshot the venue cash discount onto a cash-paid draft."""
    if draft.payment_method != "cash":
        return draft.model_copy(update={"cash_discount": None})
    return draft.model_copy(update={"cash_discount": settings})


def save_draft(
    storage: MutableMapping[str, str],
    draft: ReservationDraft,
    *,
    now: datetime | None = None,
) -> None:
    payload = draft.model_dump(mode="json")
    payload["timestamp"] = (now or datetime.now(UTC)).isoformat()
    storage[STORAGE_KEY] = json.dumps(payload)


def _discard(storage: MutableMapping[str, str]) -> None:
    storage.pop(STORAGE_KEY, None)


def load_draft(
    storage: MutableMapping[str, str],
    *,
    now: datetime | None = None,
    ttl: timedelta | None = None,
) -> ReservationDraft | None:
    """Restore a saved draft unless it is missing, unreadable or stale."""
    raw = storage.get(STORAGE_KEY)
    if raw is None:
        return None

    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    ttl = ttl or timedelta(hours=get_settings().draft_ttl_hours)
    try:
        payload = json.loads(raw)
        saved_at = datetime.fromisoformat(payload.pop("timestamp"))
    except (ValueError, KeyError, TypeError, AttributeError):
        logger.warning("Discarding unreadable reservation draft")
        _discard(storage)
        return None

    if saved_at.tzinfo is None:
        saved_at = saved_at.replace(tzinfo=UTC)
    if now - saved_at > ttl:
        _discard(storage)
        return None

    event_date = payload.get("event_date")
    if event_date:
        try:
            payload["event_date"] = date.fromisoformat(str(event_date)[:10])
        except ValueError:
            payload["event_date"] = None

    try:
        return ReservationDraft.model_validate(payload)
    except ValidationError:
        logger.warning("Discarding reservation draft with invalid fields")
        _discard(storage)
        return None


def clear_draft(storage: MutableMapping[str, str]) -> None:
    _discard(storage)
