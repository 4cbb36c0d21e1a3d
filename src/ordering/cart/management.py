"""Cart management: creation, clearing and read helpers."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import CartStatus, ShoppingCart
from ordering.domain import ordering
from shared.cache import get_cache


@ordering.command(part_of="ShoppingCart")
class CreateCart:
    """Open a cart for a user, or return the one they already have."""

    user_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


def active_cart_for(user_id) -> ShoppingCart | None:
    results = (
        current_domain.repository_for(ShoppingCart)
        ._dao.query.filter(user_id=str(user_id), status=CartStatus.ACTIVE.value)
        .all()
        .items
    )
    return results[0] if results else None


def cart_summary(user_id) -> dict | None:
    """The user's active cart as a plain dict, served from the cache when fresh."""
    cache = get_cache()
    cached = cache.get_user_cart(str(user_id))
    if cached is not None:
        return cached

    cart = active_cart_for(user_id)
    if cart is None:
        return None

    summary = cart.to_summary()
    cache.set_user_cart(str(user_id), summary)
    return summary


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        existing = active_cart_for(command.user_id)
        if existing is not None:
            return str(existing.id)

        cart = ShoppingCart.create(user_id=command.user_id)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)
        get_cache().delete_user_cart(str(cart.user_id))
