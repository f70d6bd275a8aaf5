"""Admin responses to product requests."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.sourcing.product_request import ProductRequest
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="ProductRequest")
class RespondToProductRequest:
    request_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    admin_response = Text()
    quoted_price = String(max_length=20)
    responded_by = Identifier()


@storefront.command_handler(part_of=ProductRequest)
class RespondToProductRequestHandler:
    @handle(RespondToProductRequest)
    def respond(self, command):
        repo = current_domain.repository_for(ProductRequest)
        request = repo.get(command.request_id)
        request.respond(
            status=command.status,
            admin_response=command.admin_response,
            quoted_price=command.quoted_price,
        )
        repo.add(request)
        logger.info(
            "Product request answered",
            request_id=str(request.id),
            status=request.status,
            responded_by=str(command.responded_by) if command.responded_by else None,
        )
        return request.status
