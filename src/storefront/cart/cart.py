"""Shopping cart aggregate: one per user, at most one line per product.

The cart shares its identity with the user that owns it, so a user's cart is
always ``repo.get(user_id)``. Carts hold product references and quantities
only; prices are resolved from the catalogue when the cart is displayed or
checked out.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(id=str(user_id), created_at=now, updated_at=now)

    @property
    def user_id(self) -> str:
        return str(self.id)

    def find_item(self, item_id) -> CartItem | None:
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def item_for_product(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Add a product; if it is already in the cart, its quantity grows instead."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self.item_for_product(product_id)

        if existing:
            existing.quantity = existing.quantity + quantity
            item = existing
        else:
            item = CartItem(product_id=product_id, quantity=quantity, added_at=now)
            self.add_items(item)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity_added=quantity,
                quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        item = self.find_item(item_id)
        if item is None:
            raise ObjectNotFoundError(f"Cart item {item_id} does not exist")

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        """Remove a line. Removing a line that is not there changes nothing."""
        item = self.find_item(item_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                product_id=str(item.product_id),
            )
        )

    def clear(self):
        """Empty the cart. Clearing an empty cart raises no event."""
        item_count = len(self.items)
        if not item_count:
            return

        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), item_count=item_count))


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_user(self, user_id) -> ShoppingCart | None:
        try:
            return self.get(str(user_id))
        except ObjectNotFoundError:
            return None
