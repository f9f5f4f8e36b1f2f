"""Application tests for the cart commands via domain.process()."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from bakery.errors import NotFound, Unauthorized
from bakery.identity.user import User
from bakery.ordering.cart import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem


def _stored_cart(user_id):
    return current_domain.repository_for(User).get(user_id).cart


class TestCartCommands:
    def test_add_persists_whole_cart(self, make_user):
        user = make_user()

        current_domain.process(AddToCart(user_id=user.id, item_id="x", quantity=2), asynchronous=False)
        cart = current_domain.process(AddToCart(user_id=user.id, item_id="x", quantity=3), asynchronous=False)

        assert cart == {"x": 5}
        assert _stored_cart(user.id) == {"x": 5}

    def test_add_defaults_quantity(self, make_user):
        user = make_user()
        cart = current_domain.process(AddToCart(user_id=user.id, item_id="x"), asynchronous=False)
        assert cart == {"x": 1}

    def test_update_to_zero_removes(self, make_user):
        user = make_user(cart={"x": 2, "y": 1})
        cart = current_domain.process(UpdateCartItem(user_id=user.id, item_id="x", quantity=0), asynchronous=False)
        assert cart == {"y": 1}
        assert _stored_cart(user.id) == {"y": 1}

    def test_update_to_zero_when_absent(self, make_user):
        user = make_user(cart={"y": 1})
        cart = current_domain.process(UpdateCartItem(user_id=user.id, item_id="x", quantity=0), asynchronous=False)
        assert cart == {"y": 1}

    def test_update_without_quantity_rejected(self, make_user):
        user = make_user()
        with pytest.raises(ValidationError):
            current_domain.process(UpdateCartItem(user_id=user.id, item_id="x"), asynchronous=False)

    def test_remove_absent(self, make_user):
        user = make_user()
        with pytest.raises(NotFound):
            current_domain.process(RemoveFromCart(user_id=user.id, item_id="x"), asynchronous=False)

    def test_clear(self, make_user):
        user = make_user(cart={"x": 2})
        assert current_domain.process(ClearCart(user_id=user.id), asynchronous=False) == {}
        assert _stored_cart(user.id) == {}

    def test_unknown_user(self):
        with pytest.raises(Unauthorized):
            current_domain.process(AddToCart(user_id="ghost", item_id="x", quantity=1), asynchronous=False)
