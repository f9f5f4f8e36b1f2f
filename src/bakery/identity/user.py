"""User aggregate: credentials plus the embedded shopping cart.

The cart is a plain mapping of product id to quantity stored on the user
record. It carries no prices; those are resolved when an order is placed.
Every mutation replaces the whole mapping, so concurrent writers resolve
last-write-wins.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Dict, String

from bakery.domain import bakery
from bakery.errors import NotFound
from bakery.identity.email import is_valid_email


def _is_whole_number(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@bakery.aggregate
class User:
    """A registered shopper.

    Email is the login handle and must be unique across users. The password
    is never stored, only its bcrypt hash.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    cart_data: Dict(default=dict)
    registered_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": ["Please enter a valid email"]})

    @invariant.post
    def cart_quantities_must_be_positive_integers(self):
        for item_id, quantity in (self.cart_data or {}).items():
            if not _is_whole_number(quantity) or quantity < 1:
                raise ValidationError({"cart_data": [f"Invalid quantity for item {item_id}"]})

    @classmethod
    def register(cls, name, email, password_hash):
        from bakery.identity.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email,
            password_hash=password_hash,
            cart_data={},
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=name,
                email=email,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    @property
    def cart(self) -> dict:
        return dict(self.cart_data or {})

    def add_to_cart(self, item_id, quantity=1):
        """Add ``quantity`` of an item, incrementing any existing quantity."""
        if not item_id:
            raise ValidationError({"item_id": ["Item ID is required"]})
        if not _is_whole_number(quantity) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive number"]})

        cart = self.cart
        cart[str(item_id)] = cart.get(str(item_id), 0) + quantity
        self.cart_data = cart

    def set_cart_quantity(self, item_id, quantity):
        """Overwrite an item's quantity. Zero removes the item."""
        if not item_id:
            raise ValidationError({"item_id": ["Item ID is required"]})
        if not _is_whole_number(quantity) or quantity < 0:
            raise ValidationError({"quantity": ["Quantity must be a non-negative number"]})

        cart = self.cart
        if quantity == 0:
            cart.pop(str(item_id), None)
        else:
            cart[str(item_id)] = quantity
        self.cart_data = cart

    def remove_from_cart(self, item_id):
        if not item_id:
            raise ValidationError({"item_id": ["Item ID is required"]})

        cart = self.cart
        if str(item_id) not in cart:
            raise NotFound("Item not found in cart")

        del cart[str(item_id)]
        self.cart_data = cart

    def clear_cart(self):
        self.cart_data = {}

    def cart_count(self) -> tuple[int, int]:
        """Return (total quantity, distinct items)."""
        cart = self.cart
        return sum(cart.values()), len(cart)


@bakery.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email).all().first
