"""Tests for checking out a cart into an order."""

from datetime import datetime

import pytest
from ordering.cart.cart import CartStatus, ShoppingCart
from ordering.cart.items import AddToCart
from ordering.cart.management import CreateCart
from ordering.checkout.checkout import CheckoutCart, to_cents
from ordering.delivery.availability import get_delivery_slots
from ordering.delivery.slots import DeliverySlot
from ordering.order.order import PAY_ON_DELIVERY, Order
from ordering.order.queries import orders_for_user
from protean import current_domain
from protean.exceptions import ValidationError
from shared.cache import get_cache

CARD_TOKEN = "sq0-test-token"


@pytest.fixture
def cart_id():
    cart_id = current_domain.process(CreateCart(user_id="user-001"), asynchronous=False)
    current_domain.process(
        AddToCart(cart_id=cart_id, menu_item_id="ale-1", name="Harbour Pale Ale", price=6.5, quantity=2),
        asynchronous=False,
    )
    current_domain.process(
        AddToCart(cart_id=cart_id, menu_item_id="cider-1", name="Orchard Cider", price=4.25),
        asynchronous=False,
    )
    return cart_id


def _checkout(cart_id, slot, payment_method="Credit Card", card_token=CARD_TOKEN, **extra):
    return current_domain.process(
        CheckoutCart(
            cart_id=cart_id,
            delivery_date=slot.date,
            delivery_time=slot.time,
            payment_method=payment_method,
            card_token=card_token,
            customer_email="jane@example.com",
            **extra,
        ),
        asynchronous=False,
    )


def test_to_cents():
    assert to_cents(17.25) == 1725
    assert to_cents(0.1 + 0.2) == 30


class TestCardCheckout:
    def test_creates_paid_order(self, cart_id, open_slot, gateway):
        order_id = _checkout(cart_id, open_slot, delivery_address="12 Harbour Road")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "paid"
        assert order.total == 17.25
        assert order.delivery_address == "12 Harbour Road"
        assert order.payment_reference.startswith("fake_pay_")
        assert sorted(item.name for item in order.items) == ["Harbour Pale Ale", "Orchard Cider"]

    def test_charges_order_total_in_cents(self, cart_id, open_slot, gateway):
        order_id = _checkout(cart_id, open_slot)

        order = current_domain.repository_for(Order).get(order_id)
        assert gateway.calls[0]["amount_cents"] == 1725
        assert gateway.calls[0]["currency"] == "USD"
        assert gateway.calls[0]["order_number"] == order.order_number

    def test_cart_is_checked_out(self, cart_id, open_slot, gateway):
        _checkout(cart_id, open_slot)

        assert current_domain.repository_for(ShoppingCart).get(cart_id).status == CartStatus.CHECKED_OUT.value

    def test_user_caches_are_invalidated(self, cart_id, open_slot, gateway):
        assert orders_for_user("user-001") == []

        _checkout(cart_id, open_slot)

        assert get_cache().get_user_orders("user-001") is None
        assert len(orders_for_user("user-001")) == 1

    def test_declined_card_leaves_cart_untouched(self, cart_id, open_slot, gateway):
        gateway.configure(should_succeed=False, failure_code="INSUFFICIENT_FUNDS")

        with pytest.raises(ValidationError) as exc:
            _checkout(cart_id, open_slot)

        assert exc.value.messages["payment"] == ["Insufficient funds on card"]
        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert cart.status == CartStatus.ACTIVE.value
        assert cart.item_count == 3
        assert orders_for_user("user-001") == []

    def test_card_token_is_required(self, cart_id, open_slot, gateway):
        with pytest.raises(ValidationError) as exc:
            _checkout(cart_id, open_slot, card_token=None)

        assert "card_token" in exc.value.messages
        assert gateway.calls == []

    def test_malformed_card_token(self, cart_id, open_slot, gateway):
        with pytest.raises(ValidationError):
            _checkout(cart_id, open_slot, card_token="tok_visa")

        assert gateway.calls == []


class TestPayOnDelivery:
    def test_order_is_confirmed_without_charge(self, cart_id, open_slot, gateway):
        order_id = _checkout(cart_id, open_slot, payment_method=PAY_ON_DELIVERY, card_token=None)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "confirmed"
        assert order.payment_reference is None
        assert gateway.calls == []


class TestCheckoutGuards:
    def test_unavailable_slot(self, cart_id, store_settings, gateway):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                CheckoutCart(
                    cart_id=cart_id,
                    delivery_date="1999-01-01",
                    delivery_time="11:00",
                    payment_method=PAY_ON_DELIVERY,
                ),
                asynchronous=False,
            )

        assert "delivery_time" in exc.value.messages

    def test_empty_cart(self, open_slot, gateway):
        empty_cart_id = current_domain.process(CreateCart(user_id="user-002"), asynchronous=False)

        with pytest.raises(ValidationError):
            _checkout(empty_cart_id, open_slot)

    def test_cart_cannot_be_checked_out_twice(self, cart_id, open_slot, gateway):
        _checkout(cart_id, open_slot)

        with pytest.raises(ValidationError):
            _checkout(cart_id, open_slot)

    def test_stale_cached_slots_are_not_trusted(self, cart_id, store_settings, gateway):
        closed = next(slot for slot in get_delivery_slots(now=datetime.now()) if not slot.available)
        get_cache().set_delivery_slots([DeliverySlot(date=closed.date, time=closed.time, available=True)])

        with pytest.raises(ValidationError) as exc:
            _checkout(cart_id, closed, payment_method=PAY_ON_DELIVERY, card_token=None)

        assert "delivery_time" in exc.value.messages
        assert orders_for_user("user-001") == []


class TestSubCentPrices:
    @pytest.fixture
    def cheap_cart_id(self):
        cart_id = current_domain.process(CreateCart(user_id="user-003"), asynchronous=False)
        for menu_item_id in ("taster-1", "taster-2"):
            current_domain.process(
                AddToCart(cart_id=cart_id, menu_item_id=menu_item_id, name="Taster", price=0.125),
                asynchronous=False,
            )
        return cart_id

    def test_order_total_matches_amount_charged(self, cheap_cart_id, open_slot, gateway):
        order_id = _checkout(cheap_cart_id, open_slot)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.total == round(sum(item.price * item.quantity for item in order.items), 2)
        assert order.total == 0.25
        assert gateway.calls[0]["amount_cents"] == to_cents(order.total)
