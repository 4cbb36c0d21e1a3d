"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), kept separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    menu_item_id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    ingredients: str | None = None
    unit_size: str | None = None
    abv: float | None = None


class DayHoursSchema(BaseModel):
    is_open: bool
    open_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    close_time: str = Field(pattern=r"^\d{2}:\d{2}$")


class DeliverySettingsSchema(BaseModel):
    enabled: bool | None = None
    slot_duration_minutes: int | None = Field(None, gt=0)
    advance_notice_hours: int | None = Field(None, ge=0)
    max_days_in_advance: int | None = Field(None, ge=0)
    unavailable_dates: list[str] | None = None


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    user_id: str

    model_config = {"json_schema_extra": {"examples": [{"user_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890"}]}}


class AddToCartRequest(BaseModel):
    menu_item_id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1, default=1)
    in_stock: bool = True
    ingredients: str | None = None
    unit_size: str | None = None
    abv: float | None = None
    image_url: str | None = None


class UpdateCartItemRequest(BaseModel):
    quantity: int


class CheckoutRequest(BaseModel):
    delivery_date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    delivery_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    payment_method: str
    card_token: str | None = None
    delivery_address: str | None = None
    notes: str | None = None
    customer_email: str | None = None
    customer_first_name: str | None = None
    customer_last_name: str | None = None
    customer_phone: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "delivery_date": "2026-10-20",
                    "delivery_time": "11:00",
                    "payment_method": "Credit Card",
                    "card_token": "sq0-example-token",
                    "delivery_address": "12 Harbour Road",
                    "customer_email": "jane.doe@example.com",
                    "customer_first_name": "Jane",
                    "customer_last_name": "Doe",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    user_id: str
    items: list[OrderItemSchema] = Field(min_length=1)
    delivery_date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    delivery_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    payment_method: str
    payment_reference: str | None = None
    delivery_address: str | None = None
    notes: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str

    model_config = {"json_schema_extra": {"examples": [{"status": "out_for_delivery"}]}}


# ---------------------------------------------------------------------------
# Store Settings Request Schemas
# ---------------------------------------------------------------------------
class UpdateStoreSettingsRequest(BaseModel):
    admin_email: str | None = None
    phone_number: str | None = None
    enable_email_notifications: bool | None = None
    enable_sms_notifications: bool | None = None
    notification_email: str | None = None
    profile_image: str | None = None
    display_name: str | None = None
    business_hours: dict[str, DayHoursSchema] | None = None
    delivery_settings: DeliverySettingsSchema | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartIdResponse(BaseModel):
    cart_id: str


class OrderIdResponse(BaseModel):
    order_id: str


class SettingsIdResponse(BaseModel):
    settings_id: str


class DeliverySlotResponse(BaseModel):
    date: str
    time: str
    available: bool
    reason: str | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
