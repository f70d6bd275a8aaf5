"""Cart item management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.is_active:
            raise ObjectNotFoundError(f"Product {command.product_id} is no longer available")

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id) or ShoppingCart.create(command.user_id)
        item = cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

        logger.info(
            "Item added to cart",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            quantity=item.quantity,
        )
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            raise ObjectNotFoundError(f"Cart item {command.item_id} does not exist")
        cart.update_item_quantity(item_id=command.item_id, new_quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            return
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)
