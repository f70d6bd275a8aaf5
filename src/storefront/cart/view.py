"""Read side of the cart: lines joined with current catalogue data."""

from dataclasses import dataclass
from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.shared.money import quantize, to_decimal


@dataclass(frozen=True)
class CartLine:
    item_id: str
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    image_url: str | None
    stock: int
    is_active: bool

    @property
    def line_total(self) -> Decimal:
        return quantize(self.unit_price * self.quantity)


def cart_lines(user_id) -> list[CartLine]:
    """Current lines for a user, oldest first. Lines whose product has vanished are skipped."""
    cart = current_domain.repository_for(ShoppingCart).for_user(user_id)
    if cart is None:
        return []

    products = current_domain.repository_for(Product)
    lines = []
    for item in sorted(cart.items, key=lambda i: i.added_at):
        try:
            product = products.get(item.product_id)
        except ObjectNotFoundError:
            continue
        lines.append(
            CartLine(
                item_id=str(item.id),
                product_id=str(item.product_id),
                name=product.name,
                unit_price=to_decimal(product.price),
                quantity=item.quantity,
                image_url=product.image_url,
                stock=product.stock or 0,
                is_active=bool(product.is_active),
            )
        )
    return lines
