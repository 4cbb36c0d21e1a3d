"""MenuItem aggregate: a drink on the storefront menu.

Items exist in two editions. Live items (``is_draft`` false) are what users
see; drafts are the admin's working copy, published item by item or rebuilt
wholesale from the live menu. An item is offered either to everyone or only
to the users it is assigned to.
"""

from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text

from catalogue.domain import catalogue

_UNSET = object()


class AssignmentType(Enum):
    ALL_USERS = "all_users"
    SPECIFIC_USERS = "specific_users"


@catalogue.aggregate
class MenuItem:
    name: String(required=True, max_length=200)
    ingredients: Text()
    unit_size: String(max_length=50)
    abv: Float(min_value=0.0, max_value=100.0)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=100)
    image_url: String(max_length=500)
    in_stock: Boolean(default=True)
    is_draft: Boolean(default=False)
    assignment_type: String(choices=AssignmentType, default=AssignmentType.ALL_USERS.value)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        name,
        price,
        category,
        ingredients=None,
        unit_size=None,
        abv=None,
        image_url=None,
        in_stock=True,
        is_draft=False,
        assignment_type=AssignmentType.ALL_USERS.value,
    ):
        from catalogue.menu.events import MenuItemCreated

        now = datetime.now()
        item = cls(
            name=name,
            price=price,
            category=category,
            ingredients=ingredients,
            unit_size=unit_size,
            abv=abv,
            image_url=image_url,
            in_stock=in_stock,
            is_draft=is_draft,
            assignment_type=assignment_type,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            MenuItemCreated(
                menu_item_id=item.id,
                name=name,
                category=category,
                price=price,
                is_draft=is_draft,
                assignment_type=assignment_type,
            )
        )
        return item

    @property
    def offered_to_everyone(self) -> bool:
        return self.assignment_type == AssignmentType.ALL_USERS.value

    def update(self, **changes):
        """Apply the given field changes; fields passed as _UNSET are left alone."""
        from catalogue.menu.events import MenuItemUpdated

        editable = (
            "name",
            "ingredients",
            "unit_size",
            "abv",
            "price",
            "category",
            "image_url",
            "in_stock",
            "is_draft",
            "assignment_type",
        )
        unknown = set(changes) - set(editable)
        if unknown:
            raise ValidationError({"menu_item": [f"Cannot update {', '.join(sorted(unknown))}"]})

        changed = [field for field in editable if changes.get(field, _UNSET) is not _UNSET]
        for field in changed:
            setattr(self, field, changes[field])

        if changed:
            self.updated_at = datetime.now()
            self.raise_(MenuItemUpdated(menu_item_id=self.id, changed_fields=",".join(changed)))

    def publish(self):
        from catalogue.menu.events import MenuItemPublished

        if not self.is_draft:
            return
        self.is_draft = False
        self.updated_at = datetime.now()
        self.raise_(MenuItemPublished(menu_item_id=self.id, name=self.name))

    def draft_copy(self):
        """A new draft carrying this item's details."""
        return MenuItem.create(
            name=self.name,
            price=self.price,
            category=self.category,
            ingredients=self.ingredients,
            unit_size=self.unit_size,
            abv=self.abv,
            image_url=self.image_url,
            in_stock=self.in_stock,
            is_draft=True,
            assignment_type=self.assignment_type,
        )

    def to_summary(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "ingredients": self.ingredients,
            "unit_size": self.unit_size,
            "abv": self.abv,
            "price": self.price,
            "category": self.category,
            "image_url": self.image_url,
            "in_stock": self.in_stock,
            "is_draft": self.is_draft,
            "assignment_type": self.assignment_type,
        }
