"""Checkout pricing: subtotal, tax, shipping and total for a cart snapshot.

All arithmetic is ``Decimal``; each component is rounded half-up to cents
before the total is summed, so the total always equals the parts a
customer sees on screen.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront import config
from storefront.cart.view import CartLine, cart_lines
from storefront.checkout.errors import EmptyCartError, UnavailableProductError
from storefront.shared.money import quantize, to_cents


@dataclass(frozen=True)
class CheckoutSummary:
    lines: tuple[CartLine, ...]
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal

    @property
    def total_cents(self) -> int:
        return to_cents(self.total)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)


def price_lines(lines, tax_rate: Decimal, shipping_cost: Decimal) -> CheckoutSummary:
    lines = tuple(lines)
    subtotal = quantize(sum((line.unit_price * line.quantity for line in lines), Decimal("0")))
    tax = quantize(subtotal * tax_rate)
    shipping = quantize(shipping_cost) if lines else Decimal("0.00")
    return CheckoutSummary(
        lines=lines,
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=subtotal + tax + shipping,
    )


def summarize_cart(user_id) -> CheckoutSummary:
    """Price the user's current cart with the configured tax rate and shipping."""
    return price_lines(cart_lines(user_id), config.tax_rate(), config.shipping_cost())


def checkout_snapshot(user_id) -> CheckoutSummary:
    """Like ``summarize_cart``, but an empty cart, or one holding withdrawn products, is an error."""
    summary = summarize_cart(user_id)
    if not summary.lines:
        raise EmptyCartError()
    for line in summary.lines:
        if not line.is_active:
            raise UnavailableProductError(line.name)
    return summary
