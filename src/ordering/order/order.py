"""Order aggregate (CQRS): a submitted cart, priced and booked for delivery.

Items are copied from the cart snapshot at submission and the total is
recomputed from them; totals supplied by clients are never trusted.

Status lifecycle:
    paid | confirmed -> processing -> out_for_delivery -> delivered
    any -> cancelled

Orders paid by card start as ``paid``; "Pay on Delivery" orders start as
``confirmed``. After submission the status is moved by admins and is not
checked against the lifecycle above: any status may follow any other.
"""

import secrets
import string
import time
from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderDeleted, OrderPlaced, OrderStatusChanged

PAY_ON_DELIVERY = "Pay on Delivery"

_ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


class OrderStatus(Enum):
    PAID = "paid"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


def generate_order_number(now_millis=None) -> str:
    """``ORD-<epoch millis>-<5 random upper-case alphanumerics>``."""
    millis = now_millis if now_millis is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(5))
    return f"ORD-{millis}-{suffix}"


def initial_status_for(payment_method) -> str:
    if payment_method == PAY_ON_DELIVERY:
        return OrderStatus.CONFIRMED.value
    return OrderStatus.PAID.value


@ordering.entity(part_of="Order")
class OrderItem:
    menu_item_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    ingredients = Text()
    unit_size = String(max_length=50)
    abv = Float(min_value=0.0)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    subtotal = Float(required=True, min_value=0.0)


@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    order_number = String(required=True, max_length=40, unique=True)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    delivery_date = String(required=True, max_length=10)
    delivery_time = String(required=True, max_length=5)
    delivery_address = Text()
    notes = Text()
    status = String(choices=OrderStatus, default=OrderStatus.PAID.value)
    payment_method = String(required=True, max_length=50)
    payment_reference = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(
        cls,
        user_id,
        items,
        delivery_date,
        delivery_time,
        payment_method,
        delivery_address=None,
        notes=None,
        payment_reference=None,
        order_number=None,
    ):
        """Create an order from item snapshots (dicts with price and quantity)."""
        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        order_items = [
            OrderItem(
                menu_item_id=item["menu_item_id"],
                name=item["name"],
                ingredients=item.get("ingredients"),
                unit_size=item.get("unit_size"),
                abv=item.get("abv"),
                price=item["price"],
                quantity=item["quantity"],
                subtotal=round(item["price"] * item["quantity"], 2),
            )
            for item in items
        ]
        total = round(sum(item["price"] * item["quantity"] for item in items), 2)
        now = datetime.now()

        order = cls(
            user_id=user_id,
            order_number=order_number or generate_order_number(),
            items=order_items,
            total=total,
            delivery_date=delivery_date,
            delivery_time=delivery_time,
            delivery_address=delivery_address,
            notes=notes,
            status=initial_status_for(payment_method),
            payment_method=payment_method,
            payment_reference=payment_reference,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                user_id=str(user_id),
                total=total,
                item_count=sum(item.quantity for item in order_items),
                status=order.status,
                payment_method=payment_method,
                delivery_date=delivery_date,
                delivery_time=delivery_time,
                placed_at=now,
            )
        )
        return order

    def change_status(self, new_status):
        # Admin override: no sequencing rule is applied between statuses
        new_status = OrderStatus(new_status).value
        previous_status = self.status
        self.status = new_status
        self.updated_at = datetime.now()
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=new_status,
                changed_at=self.updated_at,
            )
        )

    def mark_deleted(self):
        self.raise_(OrderDeleted(order_id=str(self.id), order_number=self.order_number))

    def to_summary(self) -> dict:
        return {
            "order_id": str(self.id),
            "order_number": self.order_number,
            "user_id": str(self.user_id),
            "status": self.status,
            "total": self.total,
            "delivery_date": self.delivery_date,
            "delivery_time": self.delivery_time,
            "delivery_address": self.delivery_address,
            "notes": self.notes,
            "payment_method": self.payment_method,
            "payment_reference": self.payment_reference,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "items": [
                {
                    "menu_item_id": str(item.menu_item_id),
                    "name": item.name,
                    "ingredients": item.ingredients,
                    "unit_size": item.unit_size,
                    "abv": item.abv,
                    "price": item.price,
                    "quantity": item.quantity,
                    "subtotal": item.subtotal,
                }
                for item in self.items
            ],
        }
