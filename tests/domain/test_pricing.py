"""Checkout pricing arithmetic."""

from decimal import Decimal

from storefront.cart.view import CartLine
from storefront.checkout.pricing import price_lines
from storefront.shared.money import format_amount, to_cents


def _line(price, quantity, product_id="prod-001"):
    return CartLine(
        item_id=f"item-{product_id}",
        product_id=product_id,
        name="Widget",
        unit_price=Decimal(price),
        quantity=quantity,
        image_url=None,
        stock=100,
        is_active=True,
    )


class TestPriceLines:
    def test_widget_scenario(self):
        summary = price_lines([_line("10.00", 2)], Decimal("0.08"), Decimal("0.00"))

        assert summary.subtotal == Decimal("20.00")
        assert summary.tax == Decimal("1.60")
        assert summary.shipping == Decimal("0.00")
        assert summary.total == Decimal("21.60")
        assert summary.total_cents == 2160
        assert summary.item_count == 2

    def test_tax_rounds_half_up(self):
        summary = price_lines([_line("1.31", 1)], Decimal("0.08"), Decimal("0"))
        assert summary.tax == Decimal("0.10")
        assert summary.total == Decimal("1.41")

    def test_multiple_lines(self):
        summary = price_lines(
            [_line("10.00", 2), _line("4.99", 3, product_id="prod-002")],
            Decimal("0.08"),
            Decimal("5.00"),
        )
        assert summary.subtotal == Decimal("34.97")
        assert summary.tax == Decimal("2.80")
        assert summary.total == Decimal("42.77")

    def test_empty_cart_costs_nothing(self):
        summary = price_lines([], Decimal("0.08"), Decimal("5.00"))
        assert summary.total == Decimal("0.00")
        assert summary.lines == ()


class TestMoney:
    def test_format_amount(self):
        assert format_amount("21.6") == "21.60"
        assert format_amount(Decimal("0.125")) == "0.13"

    def test_to_cents(self):
        assert to_cents("21.60") == 2160
        assert to_cents(Decimal("0.01")) == 1
