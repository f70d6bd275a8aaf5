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

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.pop("STRIPE_SECRET_KEY", None)

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path or "/gateway/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    from storefront.identity.provider import reset_identity_provider
    from storefront.payments.gateway import reset_gateway

    reset_gateway()
    reset_identity_provider()

    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


@pytest.fixture()
def gateway():
    """A fresh FakeGateway installed as the active gateway."""
    from storefront.payments.gateway import FakeGateway, set_gateway

    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def make_product():
    """Create a catalogue product through its command; returns the product id."""
    from protean import current_domain
    from storefront.catalogue.management import CreateProduct

    def _make(name="Widget", price="10.00", category="gadgets", stock=25, **extra):
        return current_domain.process(
            CreateProduct(name=name, price=price, category=category, stock=stock, **extra),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def make_user():
    """Register a password user; returns the user id."""
    from protean import current_domain
    from storefront.identity.admin import GrantAdmin
    from storefront.identity.registration import RegisterUser

    def _make(email="jane@example.com", password="correct-horse", admin=False, **extra):
        user_id = current_domain.process(
            RegisterUser(email=email, password=password, **extra),
            asynchronous=False,
        )
        if admin:
            current_domain.process(GrantAdmin(email=email), asynchronous=False)
        return user_id

    return _make
