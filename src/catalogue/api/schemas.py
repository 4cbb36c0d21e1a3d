"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CreateMenuItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Old Fashioned",
                    "ingredients": "Bourbon, sugar, bitters, orange peel",
                    "unit_size": "750ml",
                    "abv": 32.0,
                    "price": 45.0,
                    "category": "Cocktails",
                    "in_stock": True,
                    "is_draft": False,
                    "assignment_type": "all_users",
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    price: float = Field(..., ge=0)
    category: str = Field(..., max_length=100)
    ingredients: str | None = None
    unit_size: str | None = Field(None, max_length=50)
    abv: float | None = Field(None, ge=0, le=100)
    image_url: str | None = Field(None, max_length=500)
    in_stock: bool = True
    is_draft: bool = False
    assignment_type: str = Field("all_users", max_length=20)


class UpdateMenuItemRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 48.0, "in_stock": False}]}}

    name: str | None = Field(None, max_length=200)
    price: float | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    ingredients: str | None = None
    unit_size: str | None = Field(None, max_length=50)
    abv: float | None = Field(None, ge=0, le=100)
    image_url: str | None = Field(None, max_length=500)
    in_stock: bool | None = None
    is_draft: bool | None = None
    assignment_type: str | None = Field(None, max_length=20)


class PublishDraftItemsRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"menu_item_ids": ["a1b2c3d4-e5f6-7890-abcd-ef1234567890"]}]}}

    menu_item_ids: list[str]


class AssignUsersRequest(BaseModel):
    user_ids: list[str]


class SaveUserMenuRequest(BaseModel):
    menu_item_ids: list[str]


# --- Response Schemas ---


class MenuItemIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"menu_item_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890"}]}}

    menu_item_id: str


class MenuItemResponse(BaseModel):
    id: str
    name: str
    ingredients: str | None = None
    unit_size: str | None = None
    abv: float | None = None
    price: float
    category: str
    image_url: str | None = None
    in_stock: bool
    is_draft: bool
    assignment_type: str


class CountResponse(BaseModel):
    count: int


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
