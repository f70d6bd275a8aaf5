"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    price: String(required=True, max_length=20)
    category: String(max_length=100)
    stock: Integer()
    created_at: DateTime()


@storefront.event(part_of="Product")
class ProductUpdated:
    """One or more product fields were edited."""

    __version__ = 1

    product_id: Identifier(required=True)
    changed_fields: Text()  # Comma-separated field names
    price: String(max_length=20)
    updated_at: DateTime()


@storefront.event(part_of="Product")
class ProductDeactivated:
    """A product was soft-deleted and no longer appears in listings."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime()
