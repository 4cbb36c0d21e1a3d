"""Delivery slot generation.

Pure functions over a DeliveryConfig snapshot: no repository access and no
clock of their own, so callers pass ``now`` in. Times are naive local
wall-clock times; dates are ISO ``YYYY-MM-DD`` strings and slot times
``HH:MM``.
"""

import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

REASON_CLOSED = "Closed"
REASON_DATE_UNAVAILABLE = "Date unavailable"
REASON_TOO_SOON = "Too soon to book"

FALLBACK_DAYS = 7
FALLBACK_TIMES = ("10:00", "12:00", "14:00", "16:00", "18:00", "20:00")
FALLBACK_AVAILABILITY = 0.8


@dataclass(frozen=True)
class DayHours:
    is_open: bool
    open_time: str
    close_time: str

    @classmethod
    def from_dict(cls, data: dict) -> "DayHours":
        return cls(
            is_open=bool(data.get("is_open", False)),
            open_time=data["open_time"],
            close_time=data["close_time"],
        )

    def to_dict(self) -> dict:
        return {"is_open": self.is_open, "open_time": self.open_time, "close_time": self.close_time}


@dataclass(frozen=True)
class DeliveryConfig:
    """Everything the generator needs: weekly hours plus booking rules."""

    business_hours: dict[str, DayHours]
    enabled: bool = True
    slot_duration_minutes: int = 120
    advance_notice_hours: int = 24
    max_days_in_advance: int = 7
    unavailable_dates: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dicts(cls, business_hours: dict, delivery_settings: dict) -> "DeliveryConfig":
        return cls(
            business_hours={day: DayHours.from_dict(hours) for day, hours in business_hours.items()},
            enabled=bool(delivery_settings.get("enabled", True)),
            slot_duration_minutes=int(delivery_settings.get("slot_duration_minutes", 120)),
            advance_notice_hours=int(delivery_settings.get("advance_notice_hours", 24)),
            max_days_in_advance=int(delivery_settings.get("max_days_in_advance", 7)),
            unavailable_dates=tuple(delivery_settings.get("unavailable_dates", ())),
        )


@dataclass(frozen=True)
class DeliverySlot:
    date: str
    time: str
    available: bool
    reason: str | None = None

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(date.fromisoformat(self.date), parse_time(self.time))

    def to_dict(self) -> dict:
        return {"date": self.date, "time": self.time, "available": self.available, "reason": self.reason}


def parse_time(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def generate_delivery_slots(config: DeliveryConfig, now: datetime) -> list[DeliverySlot]:
    """Slice every day from today through today + max_days_in_advance into slots.

    A slot that would run past closing time is dropped. Closed weekdays,
    blacked-out dates and slots inside the advance-notice window stay in the
    list but are marked unavailable, with the first matching reason of
    Closed, Date unavailable, Too soon to book.
    """
    if not config.enabled:
        return []
    if config.slot_duration_minutes <= 0:
        raise ValueError("Slot duration must be a positive number of minutes")

    earliest = now + timedelta(hours=config.advance_notice_hours)
    step = timedelta(minutes=config.slot_duration_minutes)
    blackout = set(config.unavailable_dates)
    slots = []

    for offset in range(config.max_days_in_advance + 1):
        day = now.date() + timedelta(days=offset)
        hours = config.business_hours.get(WEEKDAYS[day.weekday()])
        if hours is None:
            continue

        day_str = day.isoformat()
        start = datetime.combine(day, parse_time(hours.open_time))
        close = datetime.combine(day, parse_time(hours.close_time))

        while start + step <= close:
            if not hours.is_open:
                reason = REASON_CLOSED
            elif day_str in blackout:
                reason = REASON_DATE_UNAVAILABLE
            elif start < earliest:
                reason = REASON_TOO_SOON
            else:
                reason = None

            slots.append(
                DeliverySlot(
                    date=day_str,
                    time=start.strftime("%H:%M"),
                    available=reason is None,
                    reason=reason,
                )
            )
            start += step

    return slots


def fallback_slots(now: datetime, rng: random.Random | None = None) -> list[DeliverySlot]:
    """Stand-in schedule used when store settings cannot be loaded.

    Seven days starting tomorrow, six fixed two-hourly slots a day, each
    available with 80% probability.
    """
    rng = rng or random.Random()
    slots = []
    for offset in range(1, FALLBACK_DAYS + 1):
        day_str = (now.date() + timedelta(days=offset)).isoformat()
        for slot_time in FALLBACK_TIMES:
            slots.append(DeliverySlot(date=day_str, time=slot_time, available=rng.random() < FALLBACK_AVAILABILITY))
    return slots


def group_slots_by_date(slots: Iterable[DeliverySlot]) -> dict[str, list[DeliverySlot]]:
    grouped: dict[str, list[DeliverySlot]] = {}
    for slot in slots:
        grouped.setdefault(slot.date, []).append(slot)
    return grouped
