"""Product aggregate: a catalogue entry with price, stock and a soft-delete flag."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.catalogue.events import ProductCreated, ProductDeactivated, ProductUpdated
from storefront.domain import storefront
from storefront.shared.money import format_amount, to_decimal

_EDITABLE_FIELDS = ("name", "description", "price", "image_url", "category", "stock", "is_active")


def _normalized_price(price):
    try:
        return format_amount(price)
    except ValueError:
        raise ValidationError({"price": [f"Invalid price: {price!r}"]}) from None


@storefront.aggregate
class Product:
    """A sellable item.

    Price is kept as a two-place decimal string. Deleting a product only clears
    ``is_active``: order lines keep referring to it, but customer-facing
    listings never show it again.
    """

    name: String(required=True, max_length=255)
    description: Text()
    price: String(required=True, max_length=20)
    image_url: String(max_length=1000)
    category: String(max_length=100)
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_be_non_negative(self):
        try:
            amount = to_decimal(self.price)
        except ValueError:
            raise ValidationError({"price": [f"Invalid price: {self.price!r}"]}) from None
        if amount < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})

    @classmethod
    def create(cls, name, price, description=None, image_url=None, category=None, stock=0):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=_normalized_price(price),
            image_url=image_url,
            category=category,
            stock=stock if stock is not None else 0,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                category=product.category,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update(self, **changes):
        """Apply a partial edit. Keys set to ``None`` are ignored."""
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be edited"] for field in sorted(unknown)})

        changes = {field: value for field, value in changes.items() if value is not None}
        if "price" in changes:
            changes["price"] = _normalized_price(changes["price"])
        if not changes:
            return

        now = datetime.now(UTC)
        with atomic_change(self):
            for field, value in changes.items():
                setattr(self, field, value)
            self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                changed_fields=",".join(sorted(changes)),
                price=self.price,
                updated_at=now,
            )
        )

    def deactivate(self):
        """Soft delete. Deactivating twice is a no-op."""
        if not self.is_active:
            return
        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=now))


@storefront.repository(part_of=Product)
class ProductRepository:
    def active(self, category: str | None = None, limit: int | None = None, offset: int = 0) -> list[Product]:
        """Customer-facing listing: active products, newest first. No ``limit`` means every row."""
        filters = {"is_active": True}
        if category:
            filters["category"] = category
        query = self._dao.query.filter(**filters).order_by("-created_at")
        # limit() must come last; any later clone falls back to the default page of 100
        return query.offset(offset).limit(limit).all().items

    def everything(self, limit: int | None = None, offset: int = 0) -> list[Product]:
        """Admin listing, inactive products included."""
        return self._dao.query.order_by("-created_at").offset(offset).limit(limit).all().items

    def categories(self) -> list[str]:
        return sorted({p.category for p in self.active() if p.category})

    def low_stock(self, threshold: int) -> list[Product]:
        return [p for p in self.active() if (p.stock or 0) < threshold]
