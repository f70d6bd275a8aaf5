"""Domain events for the ProductRequest aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="ProductRequest")
class ProductRequestSubmitted:
    """A customer asked the shop to source something it does not list."""

    __version__ = 1

    request_id = Identifier(required=True)
    user_id = Identifier(required=True)
    quantity = Integer()
    email = String(max_length=254)
    submitted_at = DateTime(required=True)


@storefront.event(part_of="ProductRequest")
class ProductRequestQuoted:
    __version__ = 1

    request_id = Identifier(required=True)
    user_id = Identifier(required=True)
    quoted_price = String(max_length=20)
    responded_at = DateTime(required=True)


@storefront.event(part_of="ProductRequest")
class ProductRequestRejected:
    __version__ = 1

    request_id = Identifier(required=True)
    user_id = Identifier(required=True)
    responded_at = DateTime(required=True)
