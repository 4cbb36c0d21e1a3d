"""Direct order placement from item snapshots: command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from shared.cache import get_cache

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    """Create an order from already-priced items (payment handled by the caller)."""

    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON list of item snapshots with price and quantity
    delivery_date = String(required=True, max_length=10)
    delivery_time = String(required=True, max_length=5)
    delivery_address = Text()
    notes = Text()
    payment_method = String(required=True, max_length=50)
    payment_reference = String(max_length=100)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        order = Order.place(
            user_id=command.user_id,
            items=items,
            delivery_date=command.delivery_date,
            delivery_time=command.delivery_time,
            payment_method=command.payment_method,
            delivery_address=command.delivery_address,
            notes=command.notes,
            payment_reference=command.payment_reference,
        )
        current_domain.repository_for(Order).add(order)
        get_cache().delete_user_orders(str(command.user_id))
        logger.info("Order placed", order_id=str(order.id), order_number=order.order_number, total=order.total)
        return str(order.id)
