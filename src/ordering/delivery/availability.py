"""Delivery slots as the storefront sees them: settings-driven, cached, and
resilient to the settings record being unavailable."""

import random
from datetime import datetime

import structlog

from ordering.delivery.settings import load_store_settings
from ordering.delivery.slots import DeliverySlot, fallback_slots, generate_delivery_slots, group_slots_by_date
from shared.cache import get_cache

logger = structlog.get_logger(__name__)


def get_delivery_slots(now: datetime | None = None, rng: random.Random | None = None) -> list[DeliverySlot]:
    """Bookable slots for the current booking window.

    Without an explicit ``now`` the result is served from, and stored in, the
    shared cache. When store settings cannot be loaded a randomised fallback
    schedule is returned instead of failing the request.
    """
    cache = get_cache()
    if now is None:
        cached = cache.get_delivery_slots()
        if cached is not None:
            return cached

    moment = now or datetime.now()
    try:
        settings = load_store_settings()
        if settings is None:
            raise LookupError("Store settings have not been initialised")
        slots = generate_delivery_slots(settings.delivery_config(), moment)
    except Exception as exc:
        logger.warning("Store settings unavailable, using fallback delivery slots", error=str(exc))
        slots = fallback_slots(moment, rng)

    if now is None:
        cache.set_delivery_slots(slots)
    return slots


def is_slot_available(delivery_date: str, delivery_time: str, now: datetime | None = None) -> bool:
    slot = next(
        (s for s in get_delivery_slots(now) if s.date == delivery_date and s.time == delivery_time),
        None,
    )
    return slot is not None and slot.available


def get_delivery_slots_by_date(now: datetime | None = None) -> dict[str, list[DeliverySlot]]:
    return group_slots_by_date(get_delivery_slots(now))
