"""Shopping Cart aggregate (CQRS): the items a user has picked before checkout.

Each CartItem carries a snapshot of the menu item taken when it was added,
so the cart can be priced and checked out without a catalogue lookup. A
user has at most one Active cart; checkout moves it to CheckedOut.
"""

from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.cart.events import CartCheckedOut, CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering


class CartStatus(Enum):
    ACTIVE = "Active"
    CHECKED_OUT = "CheckedOut"


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    menu_item_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    ingredients = Text()
    unit_size = String(max_length=50)
    abv = Float(min_value=0.0)
    price = Float(required=True, min_value=0.0)
    image_url = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def subtotal(self) -> float:
        return round(self.price * self.quantity, 2)

    def snapshot(self) -> dict:
        return {
            "menu_item_id": str(self.menu_item_id),
            "name": self.name,
            "ingredients": self.ingredients,
            "unit_size": self.unit_size,
            "abv": self.abv,
            "price": self.price,
            "image_url": self.image_url,
            "quantity": self.quantity,
        }


@ordering.aggregate
class ShoppingCart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def cart_must_have_items_to_check_out(self):
        if self.status == CartStatus.CHECKED_OUT.value and not self.items:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})

    @classmethod
    def create(cls, user_id):
        now = datetime.now()
        return cls(user_id=user_id, status=CartStatus.ACTIVE.value, created_at=now, updated_at=now)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> float:
        return round(sum(item.price * item.quantity for item in self.items), 2)

    def _ensure_active(self, action):
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": [f"Items can only be {action} an active cart"]})

    def _find(self, menu_item_id):
        return next((i for i in self.items if str(i.menu_item_id) == str(menu_item_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, menu_item_id, name, price, quantity=1, in_stock=True, **snapshot):
        """Add a menu item (or increase its quantity if already in the cart)."""
        self._ensure_active("added to")
        if not in_stock:
            raise ValidationError({"menu_item_id": [f"{name} is out of stock"]})
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now()
        existing = self._find(menu_item_id)
        if existing:
            existing.quantity += quantity
        else:
            self.add_items(
                CartItem(
                    menu_item_id=menu_item_id,
                    name=name,
                    price=price,
                    quantity=quantity,
                    added_at=now,
                    ingredients=snapshot.get("ingredients"),
                    unit_size=snapshot.get("unit_size"),
                    abv=snapshot.get("abv"),
                    image_url=snapshot.get("image_url"),
                )
            )

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                menu_item_id=str(menu_item_id),
                quantity=quantity,
            )
        )

    def update_item_quantity(self, menu_item_id, new_quantity):
        """Set an item's quantity; zero or less removes it."""
        self._ensure_active("updated in")
        item = self._find(menu_item_id)
        if item is None:
            raise ValidationError({"menu_item_id": ["Item not found in cart"]})

        if new_quantity <= 0:
            self.remove_item(menu_item_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now()
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                menu_item_id=str(menu_item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, menu_item_id):
        self._ensure_active("removed from")
        item = self._find(menu_item_id)
        if item is None:
            raise ValidationError({"menu_item_id": ["Item not found in cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now()
        self.raise_(CartItemRemoved(cart_id=str(self.id), menu_item_id=str(menu_item_id)))

    def clear(self):
        self._ensure_active("removed from")
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now()
        self.raise_(CartCleared(cart_id=str(self.id)))

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def check_out(self, order_id):
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": ["Only active carts can be checked out"]})
        if not self.items:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})

        self.status = CartStatus.CHECKED_OUT.value
        self.updated_at = datetime.now()
        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                order_id=str(order_id),
                total=self.total,
            )
        )

    def to_summary(self) -> dict:
        return {
            "cart_id": str(self.id),
            "user_id": str(self.user_id),
            "status": self.status,
            "items": [dict(item.snapshot(), subtotal=item.subtotal) for item in self.items],
            "item_count": self.item_count,
            "total": self.total,
        }
