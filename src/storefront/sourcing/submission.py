"""Customer-side product requests."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.sourcing.product_request import ProductRequest
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="ProductRequest")
class SubmitProductRequest:
    user_id = Identifier(required=True)
    description = Text(required=True)
    quantity = Integer(min_value=1)
    budget_range = String(max_length=100)
    email = String(required=True, max_length=254)


@storefront.command_handler(part_of=ProductRequest)
class SubmitProductRequestHandler:
    @handle(SubmitProductRequest)
    def submit(self, command):
        request = ProductRequest.submit(
            user_id=command.user_id,
            description=command.description,
            email=command.email,
            quantity=command.quantity,
            budget_range=command.budget_range,
        )
        current_domain.repository_for(ProductRequest).add(request)
        logger.info("Product request submitted", request_id=str(request.id), user_id=str(command.user_id))
        return str(request.id)
