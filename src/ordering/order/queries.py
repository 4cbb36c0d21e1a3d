"""Read-side helpers for orders."""

from protean.utils.globals import current_domain

from ordering.order.order import Order
from shared.cache import get_cache

RECENT_ORDERS_LIMIT = 5


def _orders():
    return current_domain.repository_for(Order)._dao.query


def orders_for_user(user_id) -> list[dict]:
    """A user's orders, newest first. Cached per user."""
    cache = get_cache()
    cached = cache.get_user_orders(str(user_id))
    if cached is not None:
        return cached

    orders = [o.to_summary() for o in _orders().filter(user_id=str(user_id)).order_by("-created_at").all().items]
    cache.set_user_orders(str(user_id), orders)
    return orders


def recent_orders(user_id, limit=RECENT_ORDERS_LIMIT) -> list[dict]:
    return orders_for_user(user_id)[:limit]


def all_orders() -> list[dict]:
    return [o.to_summary() for o in _orders().order_by("-created_at").all().items]


def order_by_id(order_id) -> dict:
    return current_domain.repository_for(Order).get(order_id).to_summary()
