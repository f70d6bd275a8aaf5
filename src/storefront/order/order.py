"""Order aggregate: the persisted result of a paid checkout.

Orders are only ever created by committing a paid cart, so they start life
as ``paid``. Afterwards only admins move them along.

State Machine:
    PENDING → PAID → PROCESSING → SHIPPED → DELIVERED
    Forward moves may skip steps (an order can ship straight from PAID).
    Any non-terminal state → CANCELLED
    DELIVERED and CANCELLED are terminal.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.shared.money import format_amount, quantize, to_decimal


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Position along the fulfilment path; cancellation sits outside it
_FORWARD_ORDER = [
    OrderStatus.PENDING,
    OrderStatus.PAID,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]

_TERMINAL_STATES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    if current in _TERMINAL_STATES:
        return False
    if target == OrderStatus.CANCELLED:
        return True
    return _FORWARD_ORDER.index(target) > _FORWARD_ORDER.index(current)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order goes, captured at checkout and never edited afterwards."""

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """One purchased product.

    ``price`` is the unit price copied from the catalogue when the order was
    placed; later catalogue edits never reach it.
    """

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = String(required=True, max_length=20)

    @property
    def line_total(self) -> str:
        return format_amount(quantize(to_decimal(self.price) * self.quantity))


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    subtotal = String(required=True, max_length=20)
    tax = String(required=True, max_length=20)
    shipping = String(required=True, max_length=20)
    total = String(required=True, max_length=20)
    currency = String(max_length=3, default="usd")
    payment_intent_id = String(required=True, max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, user_id, payment_intent_id, summary, shipping_address, currency):
        """Build a paid order from a priced cart snapshot."""
        if not summary.lines:
            raise ValidationError({"cart": ["Cart is empty"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            status=OrderStatus.PAID.value,
            shipping_address=shipping_address,
            subtotal=format_amount(summary.subtotal),
            tax=format_amount(summary.tax),
            shipping=format_amount(summary.shipping),
            total=format_amount(summary.total),
            currency=currency,
            payment_intent_id=payment_intent_id,
            created_at=now,
            updated_at=now,
        )
        for line in summary.lines:
            order.add_items(
                OrderItem(
                    product_id=line.product_id,
                    product_name=line.name,
                    quantity=line.quantity,
                    price=format_amount(line.unit_price),
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                payment_intent_id=payment_intent_id,
                item_count=len(summary.lines),
                total=order.total,
                currency=currency,
                placed_at=now,
            )
        )
        return order

    def change_status(self, new_status, changed_by=None):
        """Move the order along. Setting the current status again changes nothing."""
        current = OrderStatus(self.status)
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        if target == current:
            return
        if not can_transition(current, target):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=current.value,
                new_status=target.value,
                changed_by=changed_by,
                changed_at=now,
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id, limit: int | None = None, offset: int = 0) -> list[Order]:
        """A customer's orders, newest first."""
        query = self._dao.query.filter(user_id=str(user_id)).order_by("-created_at")
        return query.offset(offset).limit(limit).all().items

    def recent(self, limit: int | None = None, offset: int = 0) -> list[Order]:
        """Newest first. No ``limit`` means every order."""
        return self._dao.query.order_by("-created_at").offset(offset).limit(limit).all().items
