"""Domain events for the MenuItem aggregate."""

from protean.fields import Boolean, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="MenuItem")
class MenuItemCreated:
    """A menu item was added, either live or as a draft."""

    __version__ = 1

    menu_item_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    is_draft: Boolean(required=True)
    assignment_type: String(required=True)


@catalogue.event(part_of="MenuItem")
class MenuItemUpdated:
    __version__ = 1

    menu_item_id: Identifier(required=True)
    changed_fields: String(required=True)


@catalogue.event(part_of="MenuItem")
class MenuItemPublished:
    """A draft item went live."""

    __version__ = 1

    menu_item_id: Identifier(required=True)
    name: String(required=True)


@catalogue.event(part_of="MenuItem")
class MenuItemDeleted:
    __version__ = 1

    menu_item_id: Identifier(required=True)
    name: String(required=True)
