"""Per-user menu assignments: commands and handler.

Both commands replace a whole set of assignments rather than editing it:
one item's list of users, or one user's list of items.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from catalogue.assignment.assignment import MenuAssignment
from catalogue.domain import catalogue
from catalogue.menu.menu_item import MenuItem
from shared.cache import get_cache

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="MenuAssignment")
class AssignMenuItemToUsers:
    menu_item_id: Identifier(required=True)
    user_ids: Text(required=True)  # JSON list of user ids


@catalogue.command(part_of="MenuAssignment")
class SaveUserMenu:
    user_id: Identifier(required=True)
    menu_item_ids: Text(required=True)  # JSON list of menu item ids


def _as_list(value):
    return json.loads(value) if isinstance(value, str) else list(value)


@catalogue.command_handler(part_of=MenuAssignment)
class MenuAssignmentHandler:
    @handle(AssignMenuItemToUsers)
    def assign_menu_item(self, command):
        current_domain.repository_for(MenuItem).get(command.menu_item_id)
        user_ids = list(dict.fromkeys(str(u) for u in _as_list(command.user_ids)))

        repo = current_domain.repository_for(MenuAssignment)
        for existing in repo._dao.query.filter(menu_item_id=str(command.menu_item_id)).all().items:
            repo._dao.delete(existing)
        for user_id in user_ids:
            repo.add(MenuAssignment.assign(user_id=user_id, menu_item_id=str(command.menu_item_id)))

        get_cache().clear_user_menus()
        logger.info("Menu item assigned", menu_item_id=str(command.menu_item_id), users=len(user_ids))
        return len(user_ids)

    @handle(SaveUserMenu)
    def save_user_menu(self, command):
        item_repo = current_domain.repository_for(MenuItem)
        menu_item_ids = list(dict.fromkeys(str(i) for i in _as_list(command.menu_item_ids)))
        for menu_item_id in menu_item_ids:
            item_repo.get(menu_item_id)

        repo = current_domain.repository_for(MenuAssignment)
        for existing in repo._dao.query.filter(user_id=str(command.user_id)).all().items:
            repo._dao.delete(existing)
        for menu_item_id in menu_item_ids:
            repo.add(MenuAssignment.assign(user_id=str(command.user_id), menu_item_id=menu_item_id))

        get_cache().clear_user_menus(str(command.user_id))
        logger.info("User menu saved", user_id=str(command.user_id), items=len(menu_item_ids))
        return len(menu_item_ids)
