"""Checkout: turn the user's active cart into an order.

The cart is validated, the delivery slot re-checked against current store
settings, and (unless paying on delivery) the card is charged before the
order exists. A declined charge leaves the cart exactly as it was.
"""

from datetime import datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import CartStatus, ShoppingCart
from ordering.delivery.availability import is_slot_available
from ordering.domain import ordering
from ordering.order.order import PAY_ON_DELIVERY, Order, generate_order_number
from payments.gateway import get_gateway
from payments.gateway.port import PaymentCustomer
from shared.cache import get_cache
from shared.config import PAYMENT_CURRENCY

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class CheckoutCart:
    cart_id = Identifier(required=True)
    delivery_date = String(required=True, max_length=10)
    delivery_time = String(required=True, max_length=5)
    payment_method = String(required=True, max_length=50)
    card_token = String(max_length=255)
    delivery_address = Text()
    notes = Text()
    customer_email = String(max_length=254)
    customer_first_name = String(max_length=100)
    customer_last_name = String(max_length=100)
    customer_phone = String(max_length=30)


def to_cents(amount: float) -> int:
    return int(round(amount * 100))


@ordering.command_handler(part_of=ShoppingCart)
class CheckoutCartHandler:
    @handle(CheckoutCart)
    def checkout(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.get(command.cart_id)

        if CartStatus(cart.status) != CartStatus.ACTIVE:
            raise ValidationError({"cart": ["Only active carts can be checked out"]})
        if not cart.items:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})

        # Always against freshly generated slots, never the cached list
        if not is_slot_available(command.delivery_date, command.delivery_time, now=datetime.now()):
            raise ValidationError(
                {"delivery_time": [f"Delivery slot {command.delivery_date} {command.delivery_time} is not available"]}
            )

        order_number = generate_order_number()
        payment_reference = None
        if command.payment_method != PAY_ON_DELIVERY:
            payment_reference = self._charge(command, cart, order_number)

        order = Order.place(
            user_id=cart.user_id,
            items=[item.snapshot() for item in cart.items],
            delivery_date=command.delivery_date,
            delivery_time=command.delivery_time,
            payment_method=command.payment_method,
            delivery_address=command.delivery_address,
            notes=command.notes,
            payment_reference=payment_reference,
            order_number=order_number,
        )
        current_domain.repository_for(Order).add(order)

        cart.check_out(order.id)
        cart_repo.add(cart)

        cache = get_cache()
        cache.delete_user_cart(str(cart.user_id))
        cache.delete_user_orders(str(cart.user_id))

        logger.info(
            "Checkout completed",
            cart_id=str(cart.id),
            order_id=str(order.id),
            order_number=order.order_number,
            total=order.total,
            payment_method=command.payment_method,
        )
        return str(order.id)

    def _charge(self, command, cart, order_number):
        if not command.card_token:
            raise ValidationError({"card_token": ["A card token is required for card payments"]})

        gateway = get_gateway()
        if not gateway.validate_card_token(command.card_token):
            raise ValidationError({"card_token": ["Invalid card token"]})

        customer = PaymentCustomer(
            first_name=command.customer_first_name or "",
            last_name=command.customer_last_name or "",
            email=command.customer_email or "",
            phone=command.customer_phone,
        )
        result = gateway.create_charge(
            amount_cents=to_cents(cart.total),
            currency=PAYMENT_CURRENCY,
            order_number=order_number,
            customer=customer,
            card_token=command.card_token,
        )
        if not result.success:
            logger.warning(
                "Payment declined",
                cart_id=str(cart.id),
                order_number=order_number,
                error_code=result.error_code,
            )
            raise ValidationError({"payment": [result.message]})

        logger.info("Payment captured", order_number=order_number, payment_id=result.payment_id)
        return result.payment_id
