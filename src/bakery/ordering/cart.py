"""Cart management: commands and handler.

The cart lives on the User aggregate. Each handler loads the user, applies
one mutation and saves the whole cart back; the handler returns the cart as
stored.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from bakery.domain import bakery
from bakery.errors import Unauthorized
from bakery.identity.user import User


@bakery.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    item_id = String(max_length=255)
    quantity = Integer(default=1)


@bakery.command(part_of="User")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = String(max_length=255)
    quantity = Integer()


@bakery.command(part_of="User")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = String(max_length=255)


@bakery.command(part_of="User")
class ClearCart:
    user_id = Identifier(required=True)


def _load_user(repo, user_id) -> User:
    try:
        return repo.get(user_id)
    except ObjectNotFoundError:
        raise Unauthorized("User not found") from None


@bakery.command_handler(part_of=User)
class CartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(User)
        user = _load_user(repo, command.user_id)
        user.add_to_cart(command.item_id, command.quantity if command.quantity is not None else 1)
        repo.add(user)
        return user.cart

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(User)
        user = _load_user(repo, command.user_id)
        user.set_cart_quantity(command.item_id, command.quantity)
        repo.add(user)
        return user.cart

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(User)
        user = _load_user(repo, command.user_id)
        user.remove_from_cart(command.item_id)
        repo.add(user)
        return user.cart

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(User)
        user = _load_user(repo, command.user_id)
        user.clear_cart()
        repo.add(user)
        return user.cart
