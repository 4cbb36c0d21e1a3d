"""Optimistic read cache with a fixed time-to-live.

Stores recently loaded user menus, carts, orders and delivery slots so the
API can answer repeat reads without touching the repositories. Entries are a
hint only: every write path invalidates the keys it affects, and anything
older than the TTL is dropped on read.

Provides get_cache() / set_cache() / reset_cache() to swap the store
(tests inject one with a fake clock).
"""

import time
from collections.abc import Callable
from typing import Any

from shared.config import CACHE_TTL_SECONDS

USER_MENU_PREFIX = "userMenu_"
USER_ORDERS_PREFIX = "userOrders_"
USER_CART_PREFIX = "userCart_"
DELIVERY_SLOTS_KEY = "deliverySlots"


class TTLStore:
    """In-process key-value store whose entries expire after ``ttl`` seconds."""

    def __init__(self, ttl: float = CACHE_TTL_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if self._clock() - stored_at < self.ttl:
            return value

        del self._entries[key]
        return None

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def delete_prefix(self, prefix: str) -> None:
        for key in [k for k in self._entries if k.startswith(prefix)]:
            del self._entries[key]

    def keys(self) -> list[str]:
        return list(self._entries)

    # -------------------------------------------------------------------
    # Namespaced helpers
    # -------------------------------------------------------------------
    def get_user_menu(self, user_id: str) -> list | None:
        return self.get(f"{USER_MENU_PREFIX}{user_id}")

    def set_user_menu(self, user_id: str, items: list) -> None:
        self.set(f"{USER_MENU_PREFIX}{user_id}", items)

    def get_user_orders(self, user_id: str) -> list | None:
        return self.get(f"{USER_ORDERS_PREFIX}{user_id}")

    def set_user_orders(self, user_id: str, orders: list) -> None:
        self.set(f"{USER_ORDERS_PREFIX}{user_id}", orders)

    def delete_user_orders(self, user_id: str) -> None:
        self.delete(f"{USER_ORDERS_PREFIX}{user_id}")

    def get_user_cart(self, user_id: str) -> dict | None:
        return self.get(f"{USER_CART_PREFIX}{user_id}")

    def set_user_cart(self, user_id: str, cart: dict) -> None:
        self.set(f"{USER_CART_PREFIX}{user_id}", cart)

    def delete_user_cart(self, user_id: str) -> None:
        self.delete(f"{USER_CART_PREFIX}{user_id}")

    def get_delivery_slots(self) -> list | None:
        return self.get(DELIVERY_SLOTS_KEY)

    def set_delivery_slots(self, slots: list) -> None:
        self.set(DELIVERY_SLOTS_KEY, slots)

    def clear_delivery_slots(self) -> None:
        self.delete(DELIVERY_SLOTS_KEY)

    def clear_user(self, user_id: str) -> None:
        """Drop everything cached for one user (e.g. on sign-out)."""
        for prefix in (USER_MENU_PREFIX, USER_ORDERS_PREFIX, USER_CART_PREFIX):
            self.delete(f"{prefix}{user_id}")

    def clear_user_menus(self, user_id: str | None = None) -> None:
        """Drop one user's cached menu, or every user's when no id is given."""
        if user_id:
            self.delete(f"{USER_MENU_PREFIX}{user_id}")
        else:
            self.delete_prefix(USER_MENU_PREFIX)

    def clear_all(self) -> None:
        self._entries.clear()


_current_cache: TTLStore | None = None


def get_cache() -> TTLStore:
    """Return the active cache, creating the default store on first use."""
    global _current_cache
    if _current_cache is None:
        _current_cache = TTLStore()
    return _current_cache


def set_cache(cache: TTLStore) -> None:
    """Override the active cache (useful for tests)."""
    global _current_cache
    _current_cache = cache


def reset_cache() -> None:
    """Reset to a fresh default cache."""
    global _current_cache
    _current_cache = None
