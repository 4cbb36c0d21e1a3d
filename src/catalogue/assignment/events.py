"""Domain events for the MenuAssignment aggregate."""

from protean.fields import Identifier

from catalogue.domain import catalogue


@catalogue.event(part_of="MenuAssignment")
class MenuItemAssigned:
    """A menu item was made available to one user."""

    __version__ = 1

    user_id: Identifier(required=True)
    menu_item_id: Identifier(required=True)
