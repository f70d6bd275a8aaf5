"""Product request routes for customers."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.paging import Page, page_params
from storefront.api.presenters import product_request_response
from storefront.api.schemas import ProductRequestResponse, SubmitProductRequestRequest
from storefront.api.security import Principal, current_principal
from storefront.sourcing.product_request import ProductRequest
from storefront.sourcing.submission import SubmitProductRequest

router = APIRouter(prefix="/api/product-requests", tags=["product-requests"])


@router.post("", status_code=201, response_model=ProductRequestResponse)
async def submit_product_request(
    body: SubmitProductRequestRequest,
    principal: Principal = Depends(current_principal),
) -> ProductRequestResponse:
    request_id = current_domain.process(
        SubmitProductRequest(
            user_id=principal.user_id,
            description=body.description,
            quantity=body.quantity,
            budget_range=body.budget_range,
            email=body.email,
        ),
        asynchronous=False,
    )
    return product_request_response(current_domain.repository_for(ProductRequest).get(request_id))


@router.get("", response_model=list[ProductRequestResponse])
async def list_my_product_requests(
    principal: Principal = Depends(current_principal),
    page: Page = Depends(page_params),
) -> list[ProductRequestResponse]:
    requests = current_domain.repository_for(ProductRequest).for_user(
        principal.user_id, limit=page.limit, offset=page.offset
    )
    return [product_request_response(r) for r in requests]
