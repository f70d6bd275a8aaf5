"""Application tests for product requests, order status updates and the dashboard."""

from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.admin.dashboard import dashboard_stats
from storefront.cart.items import AddToCart
from storefront.checkout.payment_intent import StartCheckoutPayment
from storefront.checkout.placement import PlaceOrder
from storefront.checkout.verification import confirm_payment
from storefront.order.order import Order
from storefront.order.status import UpdateOrderStatus
from storefront.sourcing.product_request import ProductRequest
from storefront.sourcing.response import RespondToProductRequest
from storefront.sourcing.submission import SubmitProductRequest


def _submit(user_id="user-001", **overrides):
    data = {
        "user_id": user_id,
        "description": "Left-handed teapot",
        "quantity": 1,
        "budget_range": "$20-$40",
        "email": "jane@example.com",
    }
    data.update(overrides)
    return current_domain.process(SubmitProductRequest(**data), asynchronous=False)


def _place_order(make_product, user_id="user-001", price="10.00", quantity=2):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=make_product(price=price), quantity=quantity),
        asynchronous=False,
    )
    intent_id = current_domain.process(StartCheckoutPayment(user_id=user_id), asynchronous=False)["payment_intent_id"]
    confirm_payment(intent_id, user_id)
    return current_domain.process(
        PlaceOrder(
            user_id=user_id,
            payment_intent_id=intent_id,
            name="Jane Doe",
            email="jane@example.com",
            address="123 Main St",
            city="Springfield",
            state="IL",
            zip_code="62701",
        ),
        asynchronous=False,
    )


class TestProductRequests:
    def test_submit_and_list(self):
        request_id = _submit()
        _submit(user_id="user-002")

        mine = current_domain.repository_for(ProductRequest).for_user("user-001")
        assert [str(r.id) for r in mine] == [request_id]
        assert mine[0].status == "pending"

    def test_respond_with_quote(self):
        request_id = _submit()
        status = current_domain.process(
            RespondToProductRequest(
                request_id=request_id,
                status="quoted",
                admin_response="Two weeks lead time",
                quoted_price="35",
                responded_by="admin-001",
            ),
            asynchronous=False,
        )

        assert status == "quoted"
        request = current_domain.repository_for(ProductRequest).get(request_id)
        assert request.quoted_price == "35.00"
        assert request.admin_response == "Two weeks lead time"

    def test_second_response_rejected(self):
        request_id = _submit()
        current_domain.process(
            RespondToProductRequest(request_id=request_id, status="rejected", admin_response="No"),
            asynchronous=False,
        )
        with pytest.raises(ValidationError):
            current_domain.process(
                RespondToProductRequest(request_id=request_id, status="quoted", admin_response="Yes"),
                asynchronous=False,
            )
        assert current_domain.repository_for(ProductRequest).get(request_id).status == "rejected"

    def test_unknown_request(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                RespondToProductRequest(request_id="missing", status="rejected"),
                asynchronous=False,
            )


class TestOrderStatusUpdates:
    def test_paid_to_shipped(self, gateway, make_product):
        order_id = _place_order(make_product)
        status = current_domain.process(
            UpdateOrderStatus(order_id=order_id, status="shipped", changed_by="admin-001"),
            asynchronous=False,
        )
        assert status == "shipped"
        assert current_domain.repository_for(Order).get(order_id).status == "shipped"

    def test_invalid_transition_not_persisted(self, gateway, make_product):
        order_id = _place_order(make_product)
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="delivered"), asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(UpdateOrderStatus(order_id=order_id, status="shipped"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order_id).status == "delivered"

    def test_orders_listed_newest_first(self, gateway, make_product):
        first = _place_order(make_product)
        second = _place_order(make_product)

        mine = current_domain.repository_for(Order).for_user("user-001")
        assert [str(o.id) for o in mine] == [second, first]


class TestDashboard:
    def test_figures(self, gateway, make_product):
        _place_order(make_product, price="10.00", quantity=2)
        cancelled = _place_order(make_product, user_id="user-002", price="5.00", quantity=1)
        current_domain.process(UpdateOrderStatus(order_id=cancelled, status="cancelled"), asynchronous=False)
        make_product(name="Scarce", stock=3)
        _submit()

        stats = dashboard_stats()
        assert stats.total_revenue == Decimal("21.60")
        assert stats.total_orders == 2
        assert stats.pending_requests == 1
        assert [p.name for p in stats.low_stock_products] == ["Scarce"]
        assert len(stats.recent_orders) == 2
        assert len(stats.recent_requests) == 1

    def test_figures_cover_every_order(self, gateway, make_product):
        for _ in range(105):
            _place_order(make_product, price="10.00", quantity=2)

        stats = dashboard_stats()
        assert stats.total_orders == 105
        assert stats.total_revenue == Decimal("2268.00")
        assert len(stats.recent_orders) == 5

    def test_empty_store(self):
        stats = dashboard_stats()
        assert stats.total_revenue == Decimal("0.00")
        assert stats.total_orders == 0
        assert stats.low_stock_products == []
