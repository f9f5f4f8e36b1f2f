"""Application tests for registration via domain.process()."""

import pytest
from protean import current_domain

from bakery.errors import InvalidInput
from bakery.identity.registration import RegisterUser
from bakery.identity.user import User


def _register(email="a@x.com"):
    return current_domain.process(
        RegisterUser(name="Asha", email=email, password_hash="bcrypt-hash"),
        asynchronous=False,
    )


class TestRegisterUser:
    def test_persists_user(self):
        user_id = _register()

        user = current_domain.repository_for(User).get(user_id)
        assert user.email == "a@x.com"
        assert user.cart == {}

    def test_email_is_normalized(self):
        user_id = _register(email="  Asha@X.com ")
        assert current_domain.repository_for(User).get(user_id).email == "asha@x.com"

    def test_duplicate_email_rejected(self):
        _register()
        with pytest.raises(InvalidInput) as exc:
            _register()
        assert exc.value.message == "User already exists"

    def test_malformed_email_rejected(self):
        with pytest.raises(InvalidInput) as exc:
            _register(email="nope")
        assert exc.value.message == "Please enter a valid email"

    def test_find_by_email(self):
        user_id = _register()
        repo = current_domain.repository_for(User)
        assert str(repo.find_by_email("a@x.com").id) == user_id
        assert repo.find_by_email("b@x.com") is None
