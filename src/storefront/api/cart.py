"""Shopping cart routes. Every route acts on the caller's own cart."""

from decimal import Decimal

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartItemResponse,
    CartProductSchema,
    CartResponse,
    IdResponse,
    StatusResponse,
    UpdateCartItemRequest,
)
from storefront.api.security import Principal, current_principal
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from storefront.cart.view import cart_lines
from storefront.shared.money import format_amount

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=CartResponse)
async def get_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    lines = cart_lines(principal.user_id)
    return CartResponse(
        items=[
            CartItemResponse(
                id=line.item_id,
                product_id=line.product_id,
                quantity=line.quantity,
                line_total=format_amount(line.line_total),
                product=CartProductSchema(
                    name=line.name,
                    price=format_amount(line.unit_price),
                    image_url=line.image_url,
                    stock=line.stock,
                    is_active=line.is_active,
                ),
            )
            for line in lines
        ],
        item_count=sum(line.quantity for line in lines),
        subtotal=format_amount(sum((line.line_total for line in lines), Decimal("0"))),
    )


@router.post("", status_code=201, response_model=IdResponse)
async def add_to_cart(body: AddToCartRequest, principal: Principal = Depends(current_principal)) -> IdResponse:
    """Add a product; adding one already in the cart raises its quantity."""
    item_id = current_domain.process(
        AddToCart(user_id=principal.user_id, product_id=body.product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return IdResponse(id=item_id)


@router.put("/{item_id}", response_model=StatusResponse)
async def update_cart_item(
    item_id: str,
    body: UpdateCartItemRequest,
    principal: Principal = Depends(current_principal),
) -> StatusResponse:
    current_domain.process(
        UpdateCartItem(user_id=principal.user_id, item_id=item_id, quantity=body.quantity),
        asynchronous=False,
    )
    return StatusResponse(status="updated")


@router.delete("/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str, principal: Principal = Depends(current_principal)) -> StatusResponse:
    current_domain.process(RemoveFromCart(user_id=principal.user_id, item_id=item_id), asynchronous=False)
    return StatusResponse(status="removed")


@router.delete("", response_model=StatusResponse)
async def clear_cart(principal: Principal = Depends(current_principal)) -> StatusResponse:
    current_domain.process(ClearCart(user_id=principal.user_id), asynchronous=False)
    return StatusResponse(status="cleared")
