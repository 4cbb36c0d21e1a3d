"""FastAPI endpoints for the Ordering domain."""

import json

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    CartIdResponse,
    CheckoutRequest,
    CreateCartRequest,
    DeliverySlotResponse,
    OrderIdResponse,
    PlaceOrderRequest,
    SettingsIdResponse,
    StatusResponse,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdateStoreSettingsRequest,
)
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from ordering.cart.management import ClearCart, CreateCart, cart_summary
from ordering.checkout.checkout import CheckoutCart
from ordering.delivery.availability import get_delivery_slots, get_delivery_slots_by_date
from ordering.delivery.settings import (
    InitializeStoreSettings,
    ResetStoreSettings,
    UpdateStoreSettings,
    load_store_settings,
)
from ordering.order import queries
from ordering.order.creation import PlaceOrder
from ordering.order.management import DeleteOrder, UpdateOrderStatus

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    result = current_domain.process(CreateCart(user_id=body.user_id), asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/users/{user_id}")
async def active_cart(user_id: str) -> dict:
    summary = cart_summary(user_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="No active cart")
    return summary


@cart_router.post("/{cart_id}/items", response_model=StatusResponse)
async def add_to_cart(cart_id: str, body: AddToCartRequest) -> StatusResponse:
    command = AddToCart(
        cart_id=cart_id,
        menu_item_id=body.menu_item_id,
        name=body.name,
        price=body.price,
        quantity=body.quantity,
        in_stock=body.in_stock,
        ingredients=body.ingredients,
        unit_size=body.unit_size,
        abv=body.abv,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.put("/{cart_id}/items/{menu_item_id}", response_model=StatusResponse)
async def update_cart_item(cart_id: str, menu_item_id: str, body: UpdateCartItemRequest) -> StatusResponse:
    command = UpdateCartItem(cart_id=cart_id, menu_item_id=menu_item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}/items/{menu_item_id}", response_model=StatusResponse)
async def remove_from_cart(cart_id: str, menu_item_id: str) -> StatusResponse:
    current_domain.process(RemoveFromCart(cart_id=cart_id, menu_item_id=menu_item_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}/items", response_model=StatusResponse)
async def clear_cart(cart_id: str) -> StatusResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(cart_id: str, body: CheckoutRequest) -> OrderIdResponse:
    command = CheckoutCart(
        cart_id=cart_id,
        delivery_date=body.delivery_date,
        delivery_time=body.delivery_time,
        payment_method=body.payment_method,
        card_token=body.card_token,
        delivery_address=body.delivery_address,
        notes=body.notes,
        customer_email=body.customer_email,
        customer_first_name=body.customer_first_name,
        customer_last_name=body.customer_last_name,
        customer_phone=body.customer_phone,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    command = PlaceOrder(
        user_id=body.user_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        delivery_date=body.delivery_date,
        delivery_time=body.delivery_time,
        payment_method=body.payment_method,
        payment_reference=body.payment_reference,
        delivery_address=body.delivery_address,
        notes=body.notes,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.get("")
async def list_orders() -> list[dict]:
    return queries.all_orders()


@order_router.get("/users/{user_id}")
async def user_orders(user_id: str, recent: bool = False) -> list[dict]:
    if recent:
        return queries.recent_orders(user_id)
    return queries.orders_for_user(user_id)


@order_router.get("/{order_id}")
async def order_detail(order_id: str) -> dict:
    return queries.order_by_id(order_id)


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return StatusResponse()


@order_router.delete("/{order_id}", response_model=StatusResponse)
async def delete_order(order_id: str) -> StatusResponse:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Delivery Router
# ---------------------------------------------------------------------------
delivery_router = APIRouter(prefix="/delivery", tags=["delivery"])


@delivery_router.get("/slots", response_model=list[DeliverySlotResponse])
async def delivery_slots() -> list[DeliverySlotResponse]:
    return [DeliverySlotResponse(**slot.to_dict()) for slot in get_delivery_slots()]


@delivery_router.get("/slots/by-date", response_model=dict[str, list[DeliverySlotResponse]])
async def delivery_slots_by_date() -> dict[str, list[DeliverySlotResponse]]:
    return {
        day: [DeliverySlotResponse(**slot.to_dict()) for slot in slots]
        for day, slots in get_delivery_slots_by_date().items()
    }


@delivery_router.get("/settings")
async def store_settings() -> dict:
    settings = load_store_settings()
    if settings is None:
        raise HTTPException(status_code=404, detail="Store settings have not been initialised")
    return settings.to_summary()


@delivery_router.post("/settings", status_code=201, response_model=SettingsIdResponse)
async def initialize_settings() -> SettingsIdResponse:
    return SettingsIdResponse(settings_id=current_domain.process(InitializeStoreSettings(), asynchronous=False))


@delivery_router.put("/settings", response_model=SettingsIdResponse)
async def update_settings(body: UpdateStoreSettingsRequest) -> SettingsIdResponse:
    command = UpdateStoreSettings(
        admin_email=body.admin_email,
        phone_number=body.phone_number,
        enable_email_notifications=body.enable_email_notifications,
        enable_sms_notifications=body.enable_sms_notifications,
        notification_email=body.notification_email,
        profile_image=body.profile_image,
        display_name=body.display_name,
        business_hours=(
            json.dumps({day: hours.model_dump() for day, hours in body.business_hours.items()})
            if body.business_hours
            else None
        ),
        delivery_settings=(
            json.dumps(body.delivery_settings.model_dump(exclude_none=True)) if body.delivery_settings else None
        ),
    )
    return SettingsIdResponse(settings_id=current_domain.process(command, asynchronous=False))


@delivery_router.post("/settings/reset", response_model=SettingsIdResponse)
async def reset_settings() -> SettingsIdResponse:
    return SettingsIdResponse(settings_id=current_domain.process(ResetStoreSettings(), asynchronous=False))
