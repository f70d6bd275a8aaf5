"""Domain tests for the Order aggregate and its status state machine."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from storefront.cart.view import CartLine
from storefront.checkout.pricing import price_lines
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order, OrderStatus, ShippingAddress, can_transition


def _line(name="Widget", price="10.00", quantity=2, product_id="prod-001"):
    return CartLine(
        item_id=f"item-{product_id}",
        product_id=product_id,
        name=name,
        unit_price=Decimal(price),
        quantity=quantity,
        image_url=None,
        stock=10,
        is_active=True,
    )


def _address():
    return ShippingAddress(
        name="Jane Doe",
        email="jane@example.com",
        address="123 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
    )


def _order(*lines):
    summary = price_lines(lines or (_line(),), Decimal("0.08"), Decimal("0.00"))
    return Order.place(
        user_id="user-001",
        payment_intent_id="pi_test_001",
        summary=summary,
        shipping_address=_address(),
        currency="usd",
    )


class TestOrderPlacement:
    def test_placed_orders_are_paid(self):
        order = _order()
        assert order.status == OrderStatus.PAID.value

    def test_totals_copied_from_summary(self):
        order = _order()
        assert order.subtotal == "20.00"
        assert order.tax == "1.60"
        assert order.shipping == "0.00"
        assert order.total == "21.60"

    def test_items_copy_name_and_price(self):
        order = _order(
            _line(name="Widget", price="10.00", quantity=2),
            _line(name="Gizmo", price="4.25", quantity=1, product_id="prod-002"),
        )

        assert len(order.items) == 2
        by_product = {item.product_id: item for item in order.items}
        assert by_product["prod-001"].price == "10.00"
        assert by_product["prod-001"].product_name == "Widget"
        assert by_product["prod-002"].line_total == "4.25"

    def test_shipping_address_kept(self):
        order = _order()
        assert order.shipping_address.zip_code == "62701"

    def test_raises_order_placed(self):
        order = _order()
        placed = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert placed[0].total == "21.60"
        assert placed[0].item_count == 1

    def test_empty_summary_rejected(self):
        summary = price_lines([], Decimal("0.08"), Decimal("0.00"))
        with pytest.raises(ValidationError) as exc:
            Order.place(
                user_id="user-001",
                payment_intent_id="pi_test_001",
                summary=summary,
                shipping_address=_address(),
                currency="usd",
            )
        assert "cart" in exc.value.messages


class TestStatusTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PAID, OrderStatus.PROCESSING),
            (OrderStatus.PAID, OrderStatus.SHIPPED),
            (OrderStatus.PROCESSING, OrderStatus.DELIVERED),
            (OrderStatus.PENDING, OrderStatus.PAID),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.SHIPPED, OrderStatus.PAID),
            (OrderStatus.PROCESSING, OrderStatus.PENDING),
            (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
            (OrderStatus.CANCELLED, OrderStatus.PAID),
        ],
    )
    def test_rejected(self, current, target):
        assert not can_transition(current, target)

    def test_paid_to_shipped(self):
        order = _order()
        order.change_status("shipped", changed_by="admin-001")

        assert order.status == "shipped"
        changed = [e for e in order._events if isinstance(e, OrderStatusChanged)]
        assert changed[0].previous_status == "paid"
        assert changed[0].new_status == "shipped"
        assert changed[0].changed_by == "admin-001"

    def test_invalid_transition_leaves_status(self):
        order = _order()
        order.change_status("delivered")

        with pytest.raises(ValidationError):
            order.change_status("processing")
        assert order.status == "delivered"

    def test_cancelled_is_terminal(self):
        order = _order()
        order.change_status("cancelled")
        with pytest.raises(ValidationError):
            order.change_status("shipped")

    def test_unknown_status(self):
        order = _order()
        with pytest.raises(ValidationError) as exc:
            order.change_status("lost")
        assert "status" in exc.value.messages

    def test_same_status_is_noop(self):
        order = _order()
        order.change_status("paid")
        assert not any(isinstance(e, OrderStatusChanged) for e in order._events)
