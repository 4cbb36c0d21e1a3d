"""MenuAssignment aggregate: links a user to a menu item offered to specific users."""

from datetime import datetime

from protean.fields import Boolean, DateTime, Identifier

from catalogue.domain import catalogue


@catalogue.aggregate
class MenuAssignment:
    user_id: Identifier(required=True)
    menu_item_id: Identifier(required=True)
    is_active: Boolean(default=True)
    assigned_at: DateTime()

    @classmethod
    def assign(cls, user_id, menu_item_id):
        from catalogue.assignment.events import MenuItemAssigned

        assignment = cls(user_id=user_id, menu_item_id=menu_item_id, is_active=True, assigned_at=datetime.now())
        assignment.raise_(MenuItemAssigned(user_id=user_id, menu_item_id=menu_item_id))
        return assignment
