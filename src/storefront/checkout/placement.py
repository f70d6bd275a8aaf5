"""Order commit: turning a paid cart into an order.

Everything happens inside the command's unit of work: the order with its
items is created, the cart is emptied and the payment is linked to the
order. Either all of it is stored or none of it is. A payment can only be
linked once, so replaying the command for the same payment intent returns
the order that was already placed.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront import config
from storefront.cart.cart import ShoppingCart
from storefront.checkout.errors import CartChangedError, PaymentNotConfirmedError
from storefront.checkout.pricing import checkout_snapshot
from storefront.checkout.verification import load_owned_payment
from storefront.domain import storefront
from storefront.order.order import Order, ShippingAddress
from storefront.payments.payment import Payment
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    payment_intent_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        payment = load_owned_payment(command.payment_intent_id, command.user_id)
        order_repo = current_domain.repository_for(Order)

        if payment.order_id is not None:
            logger.info("Order already placed for payment", payment_id=str(payment.id), order_id=str(payment.order_id))
            return str(payment.order_id)

        if not payment.succeeded:
            raise PaymentNotConfirmedError(payment.failure_reason)

        summary = checkout_snapshot(command.user_id)
        if summary.total_cents != payment.amount_cents:
            raise CartChangedError()

        order = Order.place(
            user_id=command.user_id,
            payment_intent_id=command.payment_intent_id,
            summary=summary,
            shipping_address=ShippingAddress(
                name=command.name,
                email=command.email,
                address=command.address,
                city=command.city,
                state=command.state,
                zip_code=command.zip_code,
            ),
            currency=payment.currency or config.currency(),
        )
        order_repo.add(order)

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.get(str(command.user_id))
        cart.clear()
        cart_repo.add(cart)

        payment.link_order(order.id)
        current_domain.repository_for(Payment).add(payment)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total=order.total,
            item_count=len(order.items),
        )
        return str(order.id)
