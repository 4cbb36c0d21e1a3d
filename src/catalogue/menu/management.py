"""Menu item management: commands and handler.

Every write drops cached user menus, since any change to an item can alter
what some user is offered.
"""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.assignment.assignment import MenuAssignment
from catalogue.domain import catalogue
from catalogue.menu.menu_item import _UNSET, AssignmentType, MenuItem
from shared.cache import get_cache

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="MenuItem")
class CreateMenuItem:
    name: String(required=True, max_length=200)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=100)
    ingredients: Text()
    unit_size: String(max_length=50)
    abv: Float(min_value=0.0, max_value=100.0)
    image_url: String(max_length=500)
    in_stock: Boolean(default=True)
    is_draft: Boolean(default=False)
    assignment_type: String(choices=AssignmentType, default=AssignmentType.ALL_USERS.value)


@catalogue.command(part_of="MenuItem")
class UpdateMenuItem:
    menu_item_id: Identifier(required=True)
    name: String(max_length=200)
    price: Float(min_value=0.0)
    category: String(max_length=100)
    ingredients: Text()
    unit_size: String(max_length=50)
    abv: Float(min_value=0.0, max_value=100.0)
    image_url: String(max_length=500)
    in_stock: Boolean()
    is_draft: Boolean()
    assignment_type: String(choices=AssignmentType)


@catalogue.command(part_of="MenuItem")
class DeleteMenuItem:
    """Remove a menu item together with its user assignments."""

    menu_item_id: Identifier(required=True)


@catalogue.command_handler(part_of=MenuItem)
class ManageMenuItemHandler:
    @handle(CreateMenuItem)
    def create_menu_item(self, command):
        item = MenuItem.create(
            name=command.name,
            price=command.price,
            category=command.category,
            ingredients=command.ingredients,
            unit_size=command.unit_size,
            abv=command.abv,
            image_url=command.image_url,
            in_stock=command.in_stock,
            is_draft=command.is_draft,
            assignment_type=command.assignment_type,
        )
        current_domain.repository_for(MenuItem).add(item)
        get_cache().clear_user_menus()
        logger.info("Menu item created", menu_item_id=str(item.id), is_draft=item.is_draft)
        return str(item.id)

    @handle(UpdateMenuItem)
    def update_menu_item(self, command):
        repo = current_domain.repository_for(MenuItem)
        item = repo.get(command.menu_item_id)

        fields = (
            "name",
            "price",
            "category",
            "ingredients",
            "unit_size",
            "abv",
            "image_url",
            "in_stock",
            "is_draft",
            "assignment_type",
        )
        changes = {field: getattr(command, field) for field in fields}
        item.update(**{field: _UNSET if value is None else value for field, value in changes.items()})
        repo.add(item)
        get_cache().clear_user_menus()

    @handle(DeleteMenuItem)
    def delete_menu_item(self, command):
        from catalogue.menu.events import MenuItemDeleted

        repo = current_domain.repository_for(MenuItem)
        item = repo.get(command.menu_item_id)

        assignment_dao = current_domain.repository_for(MenuAssignment)._dao
        for assignment in assignment_dao.query.filter(menu_item_id=str(item.id)).all().items:
            assignment_dao.delete(assignment)

        item.raise_(MenuItemDeleted(menu_item_id=item.id, name=item.name))
        repo._dao.delete(item)
        get_cache().clear_user_menus()
        logger.info("Menu item deleted", menu_item_id=str(item.id))
