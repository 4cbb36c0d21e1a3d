"""Shared BDD fixtures for the Ordering domain."""

import pytest
from ordering.delivery.settings import DEFAULT_BUSINESS_HOURS, DEFAULT_DELIVERY_SETTINGS


@pytest.fixture()
def hours():
    """Mutable copy of the default weekly business hours."""
    return {day: dict(value) for day, value in DEFAULT_BUSINESS_HOURS.items()}


@pytest.fixture()
def rules():
    """Mutable copy of the default delivery settings."""
    return dict(DEFAULT_DELIVERY_SETTINGS, unavailable_dates=[])
