"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    AssignUsersRequest,
    CountResponse,
    CreateMenuItemRequest,
    MenuItemIdResponse,
    MenuItemResponse,
    PublishDraftItemsRequest,
    SaveUserMenuRequest,
    StatusResponse,
    UpdateMenuItemRequest,
)
from catalogue.assignment.management import AssignMenuItemToUsers, SaveUserMenu
from catalogue.menu import queries
from catalogue.menu.management import CreateMenuItem, DeleteMenuItem, UpdateMenuItem
from catalogue.menu.publishing import CopyLiveToDraft, PublishDraftItems

menu_router = APIRouter(prefix="/menu-items", tags=["menu"])
user_menu_router = APIRouter(prefix="/user-menus", tags=["menu"])


# --- Menu item endpoints ---


@menu_router.get("", response_model=list[MenuItemResponse])
async def list_menu_items(
    draft: bool = False, category: str | None = None, assignment_type: str | None = None
) -> list[MenuItemResponse]:
    if category:
        items = queries.menu_items_by_category(category, is_draft=draft)
    elif assignment_type:
        items = queries.menu_items_by_assignment_type(assignment_type, is_draft=draft)
    else:
        items = queries.menu_items(is_draft=draft)
    return [MenuItemResponse(**item.to_summary()) for item in items]


@menu_router.post("", status_code=201, response_model=MenuItemIdResponse)
async def create_menu_item(body: CreateMenuItemRequest) -> MenuItemIdResponse:
    command = CreateMenuItem(
        name=body.name,
        price=body.price,
        category=body.category,
        ingredients=body.ingredients,
        unit_size=body.unit_size,
        abv=body.abv,
        image_url=body.image_url,
        in_stock=body.in_stock,
        is_draft=body.is_draft,
        assignment_type=body.assignment_type,
    )
    result = current_domain.process(command, asynchronous=False)
    return MenuItemIdResponse(menu_item_id=result)


@menu_router.post("/publish", response_model=CountResponse)
async def publish_draft_items(body: PublishDraftItemsRequest) -> CountResponse:
    command = PublishDraftItems(menu_item_ids=json.dumps(body.menu_item_ids))
    return CountResponse(count=current_domain.process(command, asynchronous=False))


@menu_router.post("/copy-live-to-draft", response_model=CountResponse)
async def copy_live_to_draft() -> CountResponse:
    return CountResponse(count=current_domain.process(CopyLiveToDraft(), asynchronous=False))


@menu_router.get("/{menu_item_id}", response_model=MenuItemResponse)
async def menu_item_detail(menu_item_id: str) -> MenuItemResponse:
    return MenuItemResponse(**queries.menu_item(menu_item_id).to_summary())


@menu_router.put("/{menu_item_id}", response_model=StatusResponse)
async def update_menu_item(menu_item_id: str, body: UpdateMenuItemRequest) -> StatusResponse:
    command = UpdateMenuItem(
        menu_item_id=menu_item_id,
        name=body.name,
        price=body.price,
        category=body.category,
        ingredients=body.ingredients,
        unit_size=body.unit_size,
        abv=body.abv,
        image_url=body.image_url,
        in_stock=body.in_stock,
        is_draft=body.is_draft,
        assignment_type=body.assignment_type,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@menu_router.delete("/{menu_item_id}", response_model=StatusResponse)
async def delete_menu_item(menu_item_id: str) -> StatusResponse:
    current_domain.process(DeleteMenuItem(menu_item_id=menu_item_id), asynchronous=False)
    return StatusResponse()


@menu_router.get("/{menu_item_id}/users", response_model=list[str])
async def users_for_menu_item(menu_item_id: str) -> list[str]:
    return queries.users_for_menu_item(menu_item_id)


@menu_router.put("/{menu_item_id}/users", response_model=CountResponse)
async def assign_menu_item(menu_item_id: str, body: AssignUsersRequest) -> CountResponse:
    command = AssignMenuItemToUsers(menu_item_id=menu_item_id, user_ids=json.dumps(body.user_ids))
    return CountResponse(count=current_domain.process(command, asynchronous=False))


# --- User menu endpoints ---


@user_menu_router.get("/{user_id}", response_model=list[MenuItemResponse])
async def user_menu(user_id: str) -> list[MenuItemResponse]:
    return [MenuItemResponse(**item) for item in queries.user_menu(user_id)]


@user_menu_router.put("/{user_id}", response_model=CountResponse)
async def save_user_menu(user_id: str, body: SaveUserMenuRequest) -> CountResponse:
    command = SaveUserMenu(user_id=user_id, menu_item_ids=json.dumps(body.menu_item_ids))
    return CountResponse(count=current_domain.process(command, asynchronous=False))
