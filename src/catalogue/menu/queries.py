"""Read-side helpers for the menu, including each user's personal menu."""

from protean.utils.globals import current_domain

from catalogue.assignment.assignment import MenuAssignment
from catalogue.menu.menu_item import AssignmentType, MenuItem
from shared.cache import get_cache


def _items():
    return current_domain.repository_for(MenuItem)._dao.query


def _assignments():
    return current_domain.repository_for(MenuAssignment)._dao.query


def menu_items(is_draft=False) -> list[MenuItem]:
    """Live (or draft) items ordered by name."""
    return _items().filter(is_draft=is_draft).order_by("name").all().items


def menu_items_by_category(category, is_draft=False) -> list[MenuItem]:
    return _items().filter(category=category, is_draft=is_draft).order_by("name").all().items


def menu_items_by_assignment_type(assignment_type, is_draft=False) -> list[MenuItem]:
    return _items().filter(assignment_type=assignment_type, is_draft=is_draft).order_by("name").all().items


def menu_item(menu_item_id) -> MenuItem:
    return current_domain.repository_for(MenuItem).get(menu_item_id)


def users_for_menu_item(menu_item_id) -> list[str]:
    return [str(a.user_id) for a in _assignments().filter(menu_item_id=str(menu_item_id), is_active=True).all().items]


def assignments_by_menu_item() -> dict[str, list[str]]:
    """Active assignments of specific-user items, keyed by menu item id."""
    specific = {str(item.id) for item in menu_items_by_assignment_type(AssignmentType.SPECIFIC_USERS.value)}
    grouped: dict[str, list[str]] = {}
    for assignment in _assignments().filter(is_active=True).all().items:
        if str(assignment.menu_item_id) in specific:
            grouped.setdefault(str(assignment.menu_item_id), []).append(str(assignment.user_id))
    return grouped


def user_menu(user_id) -> list[dict]:
    """Everything the user may order.

    Live items offered to all users, plus live specific-user items the user
    holds an active assignment for, without duplicates and ordered by name.
    Cached per user.
    """
    cache = get_cache()
    cached = cache.get_user_menu(str(user_id))
    if cached is not None:
        return cached

    items = menu_items_by_assignment_type(AssignmentType.ALL_USERS.value)
    seen = {str(item.id) for item in items}

    for assignment in _assignments().filter(user_id=str(user_id), is_active=True).all().items:
        key = str(assignment.menu_item_id)
        if key in seen:
            continue
        found = _items().filter(id=key).all().items
        item = found[0] if found else None
        if item is None or item.is_draft or item.assignment_type != AssignmentType.SPECIFIC_USERS.value:
            continue
        items.append(item)
        seen.add(key)

    menu = [item.to_summary() for item in sorted(items, key=lambda item: item.name)]
    cache.set_user_menu(str(user_id), menu)
    return menu
