"""Application settings read from the environment.

Domain infrastructure (databases, event processing) is configured per domain
in ``domain.toml``; these are the storefront's own knobs.
"""

import os


def _float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def _int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


# TTL for the optimistic read cache (user menus, carts, orders, delivery slots)
CACHE_TTL_SECONDS = _float("CACHE_TTL_SECONDS", 5 * 60)

PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "USD")
PAYMENT_GATEWAY = os.getenv("PAYMENT_GATEWAY", "fake")

PROVISIONING_MAX_ATTEMPTS = _int("PROVISIONING_MAX_ATTEMPTS", 3)
PROVISIONING_BACKOFF_SECONDS = _float("PROVISIONING_BACKOFF_SECONDS", 1.0)
