"""Tests for the delivery slot generator."""

import random
from datetime import datetime

import pytest
from ordering.delivery.settings import DEFAULT_BUSINESS_HOURS, DEFAULT_DELIVERY_SETTINGS
from ordering.delivery.slots import (
    FALLBACK_TIMES,
    REASON_CLOSED,
    REASON_DATE_UNAVAILABLE,
    REASON_TOO_SOON,
    DeliveryConfig,
    DeliverySlot,
    fallback_slots,
    generate_delivery_slots,
    group_slots_by_date,
)

# 2024-01-07 is a Sunday
SUNDAY_EVENING = datetime(2024, 1, 7, 18, 0)
MONDAY_MORNING = datetime(2024, 1, 8, 8, 0)


def _config(hours=None, **settings):
    return DeliveryConfig.from_dicts(hours or DEFAULT_BUSINESS_HOURS, dict(DEFAULT_DELIVERY_SETTINGS, **settings))


def _slots_on(slots, day):
    return [s for s in slots if s.date == day]


class TestDefaultSchedule:
    def test_sunday_evening_booking_window(self):
        slots = generate_delivery_slots(_config(), SUNDAY_EVENING)

        monday = _slots_on(slots, "2024-01-08")
        assert [s.time for s in monday] == ["09:00", "11:00", "13:00", "15:00"]
        assert all(not s.available for s in monday)
        assert {s.reason for s in monday} == {REASON_TOO_SOON}

    def test_tuesday_is_bookable_after_notice_window(self):
        slots = generate_delivery_slots(_config(), SUNDAY_EVENING)

        tuesday = _slots_on(slots, "2024-01-09")
        assert all(s.available and s.reason is None for s in tuesday)

    def test_window_covers_today_through_max_days(self):
        slots = generate_delivery_slots(_config(), SUNDAY_EVENING)

        dates = sorted(group_slots_by_date(slots))
        assert dates[0] == "2024-01-07"
        assert dates[-1] == "2024-01-14"
        assert len(dates) == 8

    def test_saturday_has_late_slots(self):
        slots = generate_delivery_slots(_config(), SUNDAY_EVENING)

        saturday = _slots_on(slots, "2024-01-13")
        assert [s.time for s in saturday] == ["10:00", "12:00", "14:00", "16:00", "18:00", "20:00"]

    def test_closed_day_slots_are_listed_as_closed(self):
        slots = generate_delivery_slots(_config(), SUNDAY_EVENING)

        sunday = _slots_on(slots, "2024-01-14")
        assert sunday
        assert all(s.reason == REASON_CLOSED and not s.available for s in sunday)


class TestSlotBoundaries:
    def test_slot_overrunning_closing_time_is_dropped(self):
        hours = dict(DEFAULT_BUSINESS_HOURS, monday={"is_open": True, "open_time": "09:00", "close_time": "16:00"})

        slots = generate_delivery_slots(_config(hours, advance_notice_hours=0), MONDAY_MORNING)

        assert [s.time for s in _slots_on(slots, "2024-01-08")] == ["09:00", "11:00", "13:00"]

    def test_slot_ending_exactly_at_close_is_kept(self):
        slots = generate_delivery_slots(_config(slot_duration_minutes=60, advance_notice_hours=0), MONDAY_MORNING)

        assert _slots_on(slots, "2024-01-08")[-1].time == "16:00"

    def test_notice_boundary_is_inclusive(self):
        slots = generate_delivery_slots(_config(advance_notice_hours=3), MONDAY_MORNING)

        monday = {s.time: s for s in _slots_on(slots, "2024-01-08")}
        assert monday["09:00"].reason == REASON_TOO_SOON
        assert monday["11:00"].available

    def test_zero_day_window_is_today_only(self):
        slots = generate_delivery_slots(_config(max_days_in_advance=0), MONDAY_MORNING)

        assert {s.date for s in slots} == {"2024-01-08"}


class TestUnavailability:
    def test_blackout_date(self):
        slots = generate_delivery_slots(_config(unavailable_dates=["2024-01-10"]), SUNDAY_EVENING)

        wednesday = _slots_on(slots, "2024-01-10")
        assert wednesday
        assert all(s.reason == REASON_DATE_UNAVAILABLE for s in wednesday)

    def test_closed_takes_precedence_over_blackout(self):
        slots = generate_delivery_slots(_config(unavailable_dates=["2024-01-07"]), SUNDAY_EVENING)

        assert {s.reason for s in _slots_on(slots, "2024-01-07")} == {REASON_CLOSED}

    def test_blackout_takes_precedence_over_notice(self):
        slots = generate_delivery_slots(_config(unavailable_dates=["2024-01-08"]), SUNDAY_EVENING)

        assert {s.reason for s in _slots_on(slots, "2024-01-08")} == {REASON_DATE_UNAVAILABLE}

    def test_disabled_delivery_yields_nothing(self):
        assert generate_delivery_slots(_config(enabled=False), SUNDAY_EVENING) == []

    def test_non_positive_duration_is_rejected(self):
        with pytest.raises(ValueError):
            generate_delivery_slots(_config(slot_duration_minutes=0), SUNDAY_EVENING)


class TestFallbackSlots:
    def test_seven_days_from_tomorrow(self):
        slots = fallback_slots(SUNDAY_EVENING, random.Random(7))

        grouped = group_slots_by_date(slots)
        assert sorted(grouped) == [f"2024-01-{day:02d}" for day in range(8, 15)]
        assert all([s.time for s in day] == list(FALLBACK_TIMES) for day in grouped.values())

    def test_seeded_generator_is_reproducible(self):
        first = fallback_slots(SUNDAY_EVENING, random.Random(42))
        second = fallback_slots(SUNDAY_EVENING, random.Random(42))

        assert [s.available for s in first] == [s.available for s in second]

    def test_fallback_slots_carry_no_reason(self):
        assert all(s.reason is None for s in fallback_slots(SUNDAY_EVENING, random.Random(1)))


class TestDeliverySlot:
    def test_starts_at(self):
        slot = DeliverySlot(date="2024-01-08", time="11:00", available=True)
        assert slot.starts_at == datetime(2024, 1, 8, 11, 0)

    def test_to_dict(self):
        slot = DeliverySlot(date="2024-01-08", time="11:00", available=False, reason=REASON_TOO_SOON)
        assert slot.to_dict() == {"date": "2024-01-08", "time": "11:00", "available": False, "reason": "Too soon to book"}
