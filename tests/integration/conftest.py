import pytest
from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api import create_app
from storefront.identity.admin import GrantAdmin


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def register():
    """Register through the API; the client keeps the session cookie."""

    def _register(client, email="jane@example.com", password="correct-horse", **extra):
        response = client.post("/api/auth/register", json={"email": email, "password": password, **extra})
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture()
def customer(app, register):
    client = TestClient(app)
    register(client, email="jane@example.com")
    return client


@pytest.fixture()
def other_customer(app, register):
    client = TestClient(app)
    register(client, email="john@example.com")
    return client


@pytest.fixture()
def admin(app, register):
    client = TestClient(app)
    register(client, email="admin@example.com")
    current_domain.process(GrantAdmin(email="admin@example.com"), asynchronous=False)
    return client


@pytest.fixture()
def shipping_address():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "address": "123 Main St",
        "city": "Springfield",
        "state": "IL",
        "zipCode": "62701",
    }


@pytest.fixture()
def checkout(shipping_address):
    """Open a payment intent for the cart and commit it; returns the create-order response."""

    def _checkout(client):
        intent = client.post("/api/create-payment-intent")
        assert intent.status_code == 200, intent.text
        return client.post(
            "/api/create-order",
            json={"paymentIntentId": intent.json()["paymentIntentId"], "shippingAddress": shipping_address},
        )

    return _checkout
