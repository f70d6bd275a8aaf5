"""Shared BDD fixtures and step definitions for the storefront."""

from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from storefront.cart.items import AddToCart
from storefront.cart.view import CartLine
from storefront.catalogue.management import CreateProduct
from storefront.checkout.pricing import price_lines
from storefront.order.order import Order, ShippingAddress


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def user_id():
    return "user-001"


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Product name → id for products created in Given steps."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at "{price}"'))
def product_priced(products, name, price):
    products[name] = current_domain.process(
        CreateProduct(name=name, price=price, category="gadgets", stock=25),
        asynchronous=False,
    )


@given(parsers.cfparse('the cart holds {quantity:d} of "{name}"'))
def cart_holds(products, user_id, quantity, name):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=products[name], quantity=quantity),
        asynchronous=False,
    )


@given("a paid order", target_fixture="order")
def paid_order(user_id):
    line = CartLine(
        item_id="item-001",
        product_id="prod-001",
        name="Widget",
        unit_price=Decimal("10.00"),
        quantity=2,
        image_url=None,
        stock=25,
        is_active=True,
    )
    order = Order.place(
        user_id=user_id,
        payment_intent_id="pi_test_001",
        summary=price_lines([line], Decimal("0.08"), Decimal("0.00")),
        shipping_address=ShippingAddress(
            name="Jane Doe",
            email="jane@example.com",
            address="123 Main St",
            city="Springfield",
            state="IL",
            zip_code="62701",
        ),
        currency="usd",
    )
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the action is rejected")
def action_rejected(error):
    assert isinstance(error["exc"], ValidationError)
