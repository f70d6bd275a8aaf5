"""Domain events for the Payment aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Payment")
class PaymentInitiated:
    """A payment intent was opened with the processor for a user's cart."""

    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    amount = String(required=True, max_length=20)
    amount_cents = Integer(required=True)
    currency = String(required=True, max_length=3)
    initiated_at = DateTime(required=True)


@storefront.event(part_of="Payment")
class PaymentSucceeded:
    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    amount = String(required=True, max_length=20)
    succeeded_at = DateTime(required=True)


@storefront.event(part_of="Payment")
class PaymentFailed:
    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reason = String(max_length=500)
    failed_at = DateTime(required=True)


@storefront.event(part_of="Payment")
class PaymentLinkedToOrder:
    """The payment paid for this order; it cannot pay for another."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
