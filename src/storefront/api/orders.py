"""Order history routes for the signed-in customer."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.paging import Page, page_params
from storefront.api.presenters import order_response
from storefront.api.schemas import OrderResponse
from storefront.api.security import Principal, current_principal
from storefront.order.order import Order

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=list[OrderResponse])
async def list_my_orders(
    principal: Principal = Depends(current_principal),
    page: Page = Depends(page_params),
) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).for_user(principal.user_id, limit=page.limit, offset=page.offset)
    return [order_response(o) for o in orders]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    """One order. Other customers' orders look exactly like missing ones."""
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.user_id) != principal.user_id and not principal.is_admin:
        raise ObjectNotFoundError(f"Order {order_id} does not exist")
    return order_response(order)
