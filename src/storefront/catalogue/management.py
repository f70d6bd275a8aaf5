"""Product administration: create, edit, soft delete."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: String(required=True, max_length=20)
    image_url: String(max_length=1000)
    category: String(max_length=100)
    stock: Integer(min_value=0)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: String(max_length=20)
    image_url: String(max_length=1000)
    category: String(max_length=100)
    stock: Integer(min_value=0)
    is_active: Boolean()


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            image_url=command.image_url,
            category=command.category,
            stock=command.stock,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), price=product.price)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update(
            name=command.name,
            description=command.description,
            price=command.price,
            image_url=command.image_url,
            category=command.category,
            stock=command.stock,
            is_active=command.is_active,
        )
        repo.add(product)
        logger.info("Product updated", product_id=str(product.id))

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)
        logger.info("Product deactivated", product_id=str(product.id))
