"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from shared.cache import get_cache


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    """Add a menu item to the cart, carrying the item snapshot shown to the user."""

    cart_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(default=1, min_value=1)
    in_stock = Boolean(default=True)
    ingredients = Text()
    unit_size = String(max_length=50)
    abv = Float(min_value=0.0)
    image_url = String(max_length=500)


@ordering.command(part_of="ShoppingCart")
class UpdateCartItem:
    cart_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    quantity = Integer(required=True)  # zero or less removes the item


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.add_item(
            menu_item_id=command.menu_item_id,
            name=command.name,
            price=command.price,
            quantity=command.quantity,
            in_stock=command.in_stock,
            ingredients=command.ingredients,
            unit_size=command.unit_size,
            abv=command.abv,
            image_url=command.image_url,
        )
        repo.add(cart)
        get_cache().delete_user_cart(str(cart.user_id))

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.update_item_quantity(
            menu_item_id=command.menu_item_id,
            new_quantity=command.quantity,
        )
        repo.add(cart)
        get_cache().delete_user_cart(str(cart.user_id))

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.remove_item(menu_item_id=command.menu_item_id)
        repo.add(cart)
        get_cache().delete_user_cart(str(cart.user_id))
