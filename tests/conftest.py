import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be
    referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from bakery.domain import bakery

    bakery.init()
    bakery.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from bakery.domain import bakery
    from bakery.utils.db import drop_db, setup_db

    setup_db(bakery)

    yield

    drop_db(bakery)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Application wiring with fake adapters
# ---------------------------------------------------------------------------
ADMIN_EMAIL = "admin@bakery.test"
ADMIN_PASSWORD = "admin-secret-123"


@pytest.fixture()
def settings(tmp_path):
    from bakery.settings import Settings

    return Settings(
        environment="test",
        api_prefix="/api",
        jwt_secret="test-signing-secret-with-enough-bytes-0123456789",
        bcrypt_rounds=4,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        media_dir=str(tmp_path / "media"),
        recipe_retry_base_delay=2.0,
    )


@pytest.fixture()
def services(settings):
    from bakery.catalogue.images.fake_adapter import FakeImageStore
    from bakery.identity.passwords import PasswordHasher
    from bakery.identity.tokens import TokenIssuer
    from bakery.notifications.fake_email import FakeEmailAdapter
    from bakery.recipes.generator.fake_adapter import FakeRecipeGenerator
    from bakery.services import Services

    delays = []
    services = Services(
        settings=settings,
        tokens=TokenIssuer(settings.jwt_secret, settings.token_ttl_seconds),
        passwords=PasswordHasher(settings.bcrypt_rounds),
        email=FakeEmailAdapter(),
        images=FakeImageStore(),
        recipes=FakeRecipeGenerator(),
        sleep=delays.append,
    )
    services.delays = delays
    return services


@pytest.fixture()
def client(services):
    from fastapi.testclient import TestClient

    from bakery.web import create_app

    return TestClient(create_app(services))


@pytest.fixture()
def register(client):
    """Register a shopper through the API and return their bearer token."""

    def _register(email="a@x.com", password="password1", name="Asha"):
        response = client.post("/api/users/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _register


@pytest.fixture()
def auth_headers(register):
    return {"Authorization": f"Bearer {register()}"}


@pytest.fixture()
def admin_headers(client):
    response = client.post("/api/users/admin", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def make_user():
    """Persist a user directly, bypassing the API."""
    from protean import current_domain

    from bakery.identity.user import User

    def _make_user(email="shopper@example.com", name="Shopper", cart=None):
        user = User.register(name=name, email=email, password_hash="not-a-real-hash")
        if cart:
            user.cart_data = dict(cart)
        current_domain.repository_for(User).add(user)
        return user

    return _make_user


@pytest.fixture()
def make_product():
    from protean import current_domain

    from bakery.catalogue.product import Product

    def _make_product(name="Sourdough Loaf", price=120.0, category="Bread", popular=False):
        product = Product.add(
            name=name,
            description=f"Fresh {name.lower()}",
            price=price,
            image="https://images.test/loaf.jpg",
            category=category,
            popular=popular,
        )
        current_domain.repository_for(Product).add(product)
        return product

    return _make_product
