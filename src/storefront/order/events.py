"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A paid cart became an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    payment_intent_id = String(required=True, max_length=255)
    item_count = Integer(required=True)
    total = String(required=True, max_length=20)
    currency = String(max_length=3)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    changed_by = Identifier()
    changed_at = DateTime(required=True)
