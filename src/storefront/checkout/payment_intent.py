"""Opening a payment intent for the caller's cart.

The amount is always computed here from the server-side cart; the client
never supplies it.
"""

import hashlib

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront import config
from storefront.cart.cart import ShoppingCart
from storefront.checkout.pricing import checkout_snapshot
from storefront.domain import storefront
from storefront.payments.gateway import get_gateway
from storefront.payments.payment import Payment
from storefront.shared.money import format_amount
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _idempotency_key(user_id, cart: ShoppingCart, amount_cents: int) -> str:
    # Same cart state, same intent; any cart edit yields a fresh one
    stamp = cart.updated_at.isoformat() if cart.updated_at else ""
    digest = hashlib.sha256(f"{user_id}|{stamp}|{amount_cents}".encode()).hexdigest()
    return f"checkout-{digest[:32]}"


@storefront.command(part_of="Payment")
class StartCheckoutPayment:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Payment)
class StartCheckoutPaymentHandler:
    @handle(StartCheckoutPayment)
    def start_checkout_payment(self, command):
        summary = checkout_snapshot(command.user_id)
        cart = current_domain.repository_for(ShoppingCart).get(str(command.user_id))
        currency = config.currency()

        intent = get_gateway().create_payment_intent(
            amount_cents=summary.total_cents,
            currency=currency,
            metadata={"user_id": str(command.user_id)},
            idempotency_key=_idempotency_key(command.user_id, cart, summary.total_cents),
        )

        repo = current_domain.repository_for(Payment)
        try:
            repo.get(intent.intent_id)
        except ObjectNotFoundError:
            payment = Payment.initiate(
                intent_id=intent.intent_id,
                user_id=command.user_id,
                amount=format_amount(summary.total),
                amount_cents=summary.total_cents,
                currency=currency,
            )
            repo.add(payment)

        logger.info(
            "Payment intent created",
            user_id=str(command.user_id),
            payment_id=intent.intent_id,
            amount_cents=summary.total_cents,
        )
        return {
            "client_secret": intent.client_secret,
            "payment_intent_id": intent.intent_id,
            "amount": format_amount(summary.total),
            "currency": currency,
        }
