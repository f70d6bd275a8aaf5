"""Checkout routes: price the cart, open a payment intent, commit the order."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront import config
from storefront.api.presenters import order_response
from storefront.api.schemas import (
    CheckoutSummaryResponse,
    CreateOrderRequest,
    OrderResponse,
    PaymentIntentResponse,
)
from storefront.api.security import Principal, current_principal
from storefront.checkout.payment_intent import StartCheckoutPayment
from storefront.checkout.placement import PlaceOrder
from storefront.checkout.pricing import checkout_snapshot, summarize_cart
from storefront.checkout.verification import confirm_payment, load_owned_payment
from storefront.order.order import Order
from storefront.shared.money import format_amount

router = APIRouter(prefix="/api", tags=["checkout"])


@router.get("/checkout/summary", response_model=CheckoutSummaryResponse)
async def checkout_summary(principal: Principal = Depends(current_principal)) -> CheckoutSummaryResponse:
    summary = summarize_cart(principal.user_id)
    return CheckoutSummaryResponse(
        subtotal=format_amount(summary.subtotal),
        tax=format_amount(summary.tax),
        shipping=format_amount(summary.shipping),
        total=format_amount(summary.total),
        item_count=summary.item_count,
        currency=config.currency(),
    )


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(principal: Principal = Depends(current_principal)) -> PaymentIntentResponse:
    """Open a payment intent for the caller's cart total, tax included."""
    result = current_domain.process(StartCheckoutPayment(user_id=principal.user_id), asynchronous=False)
    return PaymentIntentResponse(**result)


@router.post("/create-order", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, principal: Principal = Depends(current_principal)) -> OrderResponse:
    """Commit the cart as an order once the processor confirms the payment.

    Resubmitting a payment that already produced an order returns that order.
    """
    orders = current_domain.repository_for(Order)
    payment = load_owned_payment(body.payment_intent_id, principal.user_id)
    if payment.order_id is not None:
        return order_response(orders.get(payment.order_id))

    # An empty cart is rejected before the processor is consulted
    checkout_snapshot(principal.user_id)
    confirm_payment(body.payment_intent_id, principal.user_id)

    address = body.shipping_address
    order_id = current_domain.process(
        PlaceOrder(
            user_id=principal.user_id,
            payment_intent_id=body.payment_intent_id,
            name=address.name,
            email=address.email,
            address=address.address,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
        ),
        asynchronous=False,
    )
    return order_response(orders.get(order_id))
